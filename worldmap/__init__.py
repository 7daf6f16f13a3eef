"""
Worldmap - tile world model for a multiplayer game server.

Loads a world description, indexes collisions, partitions the world into
interest-management zones (with door links), and resolves spawn points.

Dependencies are injected: the byte source, the logger and the RNG are all
passed in by the caller.
"""

__version__ = "0.1.0"

from .checkpoint import Checkpoint
from .collision import CollisionIndex
from .config import Config
from .errors import (
    WorldMapError,
    MapLoadError,
    ResourceNotFoundError,
    ResourceReadError,
    MalformedDescriptionError,
    EmptyStartingAreaSetError,
    MapNotReadyError,
    MapAlreadyLoadedError,
)
from .logging_utils import MapLogger, LogLevel
from .schemas import WorldDescription, DoorSpec, CheckpointSpec
from .sources import MapSource, FileMapSource, BytesMapSource
from .world_map import WorldMap, MapState, load_world_map
from .zones import ZoneId, ZonePartition

__all__ = [
    # Main class
    "WorldMap",
    "MapState",
    "load_world_map",
    # Components
    "Checkpoint",
    "CollisionIndex",
    "ZoneId",
    "ZonePartition",
    # Sources
    "MapSource",
    "FileMapSource",
    "BytesMapSource",
    # Schemas
    "WorldDescription",
    "DoorSpec",
    "CheckpointSpec",
    # Errors
    "WorldMapError",
    "MapLoadError",
    "ResourceNotFoundError",
    "ResourceReadError",
    "MalformedDescriptionError",
    "EmptyStartingAreaSetError",
    "MapNotReadyError",
    "MapAlreadyLoadedError",
    # Config / logging
    "Config",
    "MapLogger",
    "LogLevel",
]
