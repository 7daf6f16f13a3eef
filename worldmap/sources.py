"""
MapSource interface for pluggable world description backends.

The world map only needs one capability from the outside world: "give me
the bytes of the world description". Sources expose it as two async steps,
an existence check followed by a read, which are the only points where a
load can suspend.

Included implementations:
1. FileMapSource - reads a JSON file from disk in a worker thread
2. BytesMapSource - wraps an in-memory blob (tests, embedded maps, network fetches done elsewhere)

Usage pattern:
    source = FileMapSource("maps/world_server.json")
    if await source.exists():
        blob = await source.read_bytes()
"""

import asyncio
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, Union

from .errors import ResourceReadError


class MapSource(ABC):
    """Abstract provider of a world description blob.

    Implementations raise ``ResourceReadError`` from ``read_bytes`` when the
    underlying resource exists but cannot be read.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable identifier used in log lines and errors."""

    @abstractmethod
    async def exists(self) -> bool:
        """Return True if the resource is present."""

    @abstractmethod
    async def read_bytes(self) -> bytes:
        """Return the full content of the resource."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"


class FileMapSource(MapSource):
    """World description stored on the local filesystem.

    All file I/O runs in a thread pool (asyncio.to_thread) so a slow disk
    never blocks the game loop.
    """

    def __init__(self, path: Union[Path, str]):
        self.path = Path(path)

    @property
    def name(self) -> str:
        return str(self.path)

    async def exists(self) -> bool:
        return await asyncio.to_thread(self.path.is_file)

    async def read_bytes(self) -> bytes:
        try:
            return await asyncio.to_thread(self.path.read_bytes)
        except OSError as exc:
            raise ResourceReadError(self.name, exc) from exc


class BytesMapSource(MapSource):
    """World description already held in memory.

    ``data=None`` models an absent resource.
    """

    def __init__(self, data: Optional[Union[bytes, str]], name: str = "<memory>"):
        if isinstance(data, str):
            data = data.encode("utf-8")
        self.data = data
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    async def exists(self) -> bool:
        return self.data is not None

    async def read_bytes(self) -> bytes:
        if self.data is None:
            raise ResourceReadError(self.name, FileNotFoundError(self.name))
        return self.data


SourceLike = Union[MapSource, Path, str, bytes]


def as_source(source: SourceLike) -> MapSource:
    """Coerce paths and raw blobs into a ``MapSource``."""
    if isinstance(source, MapSource):
        return source
    if isinstance(source, bytes):
        return BytesMapSource(source)
    if isinstance(source, (str, Path)):
        return FileMapSource(source)
    raise TypeError(f"Unsupported map source: {type(source).__name__}")
