"""Exception hierarchy for world map loading and queries.

Load-time failures (``MapLoadError`` subclasses) are never raised out of
``WorldMap.load``; they are recorded on the map and delivered through its
failure channel. Query-time failures are raised directly to the caller.
"""

from __future__ import annotations

from typing import Optional


class WorldMapError(Exception):
    """Base class for every error raised by the worldmap package."""


class MapLoadError(WorldMapError):
    """A world description could not be turned into a ready map."""

    def __init__(self, message: str, *, source: Optional[str] = None) -> None:
        self.source = source
        super().__init__(message)


class ResourceNotFoundError(MapLoadError):
    """The backing world description does not exist."""

    def __init__(self, source: str) -> None:
        super().__init__(f"{source} doesn't exist.", source=source)


class ResourceReadError(MapLoadError):
    """The world description exists but reading it failed."""

    def __init__(self, source: str, underlying: Exception) -> None:
        self.underlying = underlying
        super().__init__(f"Error reading {source}: {underlying}", source=source)


class MalformedDescriptionError(MapLoadError):
    """The world description is not valid JSON or misses required fields."""

    def __init__(self, source: str, issues: list[str]) -> None:
        self.issues = issues
        lines = [f"Malformed world description {source}:"]
        lines.extend(f"  - {issue}" for issue in issues)
        super().__init__("\n".join(lines), source=source)


class EmptyStartingAreaSetError(WorldMapError):
    """A spawn position was requested but no checkpoint is a starting area."""

    def __init__(self) -> None:
        super().__init__(
            "No starting areas declared: add at least one checkpoint with s=1 "
            "to the world description."
        )


class MapNotReadyError(WorldMapError):
    """A query was issued before the map reached the READY state."""

    def __init__(self, operation: str, state: str) -> None:
        self.operation = operation
        self.state = state
        super().__init__(f"Cannot call {operation}() while the map is {state}")


class MapAlreadyLoadedError(WorldMapError):
    """``load`` was called on a map that already left the UNLOADED state."""

    def __init__(self, state: str) -> None:
        self.state = state
        super().__init__(f"World map does not support reloading (state is {state})")
