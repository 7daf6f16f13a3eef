"""
World map: load orchestration and the query surface used by the game server.

The map owns three value components built once at load time:
1. CollisionIndex - blocked/free lookup per tile
2. ZonePartition - zone grid, door graph, zone adjacency
3. Checkpoints - named spawn regions, a subset flagged as starting areas

Load lifecycle:
    UNLOADED -> LOADING -> READY   (terminal)
    UNLOADED -> LOADING -> FAILED  (terminal)

The only suspension points are the source's existence check and read.
Everything after the read (parse, grid build, door graph, checkpoints) runs
without awaiting, so no other coroutine can observe a half-built map.
Queries before READY raise ``MapNotReadyError``.

Usage:
    world = WorldMap()
    world.on_ready(lambda: print("map ready"))
    await world.load("maps/world_server.json")
    await world.wait_ready()  # returns the map or raises the load error
    x, y = world.random_starting_position()
"""

from __future__ import annotations

import asyncio
import json
import random
from enum import Enum
from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple

from pydantic import ValidationError

from .checkpoint import Checkpoint
from .collision import CollisionIndex
from .config import Config
from .errors import (
    EmptyStartingAreaSetError,
    MalformedDescriptionError,
    MapAlreadyLoadedError,
    MapLoadError,
    MapNotReadyError,
    ResourceNotFoundError,
    ResourceReadError,
)
from .logging_utils import MapLogger
from .schemas import CheckpointSpec, WorldDescription
from .sources import SourceLike, as_source
from .zones import ZoneId, ZonePartition, ZoneRef


class MapState(str, Enum):
    UNLOADED = "unloaded"
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


def _validation_issues(error: ValidationError) -> List[str]:
    """Flatten a pydantic ValidationError into ``path: message`` lines."""
    issues: List[str] = []
    for err in error.errors(include_url=False):
        loc = ".".join(str(part) for part in err.get("loc", [])) or "root"
        issues.append(f"{loc}: {err.get('msg', 'validation error')}")
    return issues or ["root: document did not match the world description schema"]


class WorldMap:
    """Tile world with collision, zone adjacency and spawn queries.

    All collaborators are injected: ``logger`` receives load diagnostics and
    ``rng`` drives spawn sampling. Zone dimensions default to ``Config``.
    """

    def __init__(
        self,
        *,
        zone_width: Optional[int] = None,
        zone_height: Optional[int] = None,
        logger: Optional[MapLogger] = None,
        rng: Optional[random.Random] = None,
    ):
        self.zone_width = zone_width if zone_width is not None else Config.ZONE_WIDTH
        self.zone_height = zone_height if zone_height is not None else Config.ZONE_HEIGHT
        if self.zone_width <= 0 or self.zone_height <= 0:
            raise ValueError(
                f"Zone dimensions must be positive (got {self.zone_width}x{self.zone_height})"
            )
        self.logger = logger or MapLogger()
        self.rng = rng or random.Random(Config.RANDOM_SEED)

        self.state = MapState.UNLOADED
        self.error: Optional[MapLoadError] = None
        self.source_name: Optional[str] = None

        self.width = 0
        self.height = 0
        self.collisions: List[int] = []
        self.roaming_areas: List[Any] = []
        self.chest_areas: List[Any] = []
        self.static_chests: List[Any] = []
        self.static_entities: Any = {}

        self.collision_index: Optional[CollisionIndex] = None
        self.zones: Optional[ZonePartition] = None
        self.checkpoints: Dict[Any, Checkpoint] = {}
        self.starting_areas: List[Checkpoint] = []

        self._ready_callbacks: List[Callable[[], None]] = []
        self._failure_callbacks: List[Callable[[MapLoadError], None]] = []
        self._waiters: List[asyncio.Future] = []

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def is_loaded(self) -> bool:
        return self.state is MapState.READY

    def on_ready(self, callback: Callable[[], None]) -> None:
        """Register a zero-argument callback run once when the map is READY.

        If the map is already READY the callback runs immediately. Callbacks
        registered on a FAILED map never run.
        """
        if self.state is MapState.READY:
            callback()
        elif self.state is not MapState.FAILED:
            self._ready_callbacks.append(callback)

    def on_failure(self, callback: Callable[[MapLoadError], None]) -> None:
        """Register a callback receiving the load error if loading fails."""
        if self.state is MapState.FAILED:
            callback(self.error)
        elif self.state is not MapState.READY:
            self._failure_callbacks.append(callback)

    async def wait_ready(self) -> "WorldMap":
        """Resolve once loading finishes: return the map or raise the load error."""
        if self.state is MapState.READY:
            return self
        if self.state is MapState.FAILED:
            raise self.error
        waiter = asyncio.get_running_loop().create_future()
        self._waiters.append(waiter)
        return await waiter

    async def load(self, source: SourceLike) -> MapState:
        """Load and index a world description.

        Load errors never propagate from here. They are logged once, stored
        on ``self.error``, and delivered to ``on_failure`` callbacks and
        ``wait_ready`` callers. Returns the terminal state.

        Raises:
            MapAlreadyLoadedError: If ``load`` was already called on this map.
        """
        if self.state is not MapState.UNLOADED:
            raise MapAlreadyLoadedError(self.state.value)

        map_source = as_source(source)
        self.source_name = map_source.name
        self.state = MapState.LOADING
        self.logger.info(f"Loading world map from {map_source.name}")

        try:
            try:
                if not await map_source.exists():
                    raise ResourceNotFoundError(map_source.name)
                blob = await map_source.read_bytes()
            except MapLoadError:
                raise
            except Exception as exc:
                raise ResourceReadError(map_source.name, exc) from exc
            description = self._parse(blob, map_source.name)
            self._init_map(description)
        except MapLoadError as exc:
            self._fail(exc)
            return self.state
        except Exception as exc:
            self._fail(MalformedDescriptionError(map_source.name, [f"root: {exc!r}"]))
            return self.state
        except BaseException as exc:
            # Cancellation still leaves the map terminal before propagating.
            self._fail(ResourceReadError(map_source.name, exc))
            raise

        self._resolve()
        return self.state

    def _parse(self, blob: bytes, name: str) -> WorldDescription:
        try:
            data = json.loads(blob.decode("utf-8"))
        except UnicodeDecodeError as exc:
            raise MalformedDescriptionError(name, [f"root: not valid UTF-8 ({exc.reason})"]) from exc
        except json.JSONDecodeError as exc:
            raise MalformedDescriptionError(
                name, [f"line {exc.lineno} column {exc.colno}: {exc.msg}"]
            ) from exc
        except RecursionError as exc:
            raise MalformedDescriptionError(name, ["root: document is nested too deeply"]) from exc
        except ValueError as exc:
            raise MalformedDescriptionError(name, [f"root: {exc}"]) from exc

        if not isinstance(data, dict):
            raise MalformedDescriptionError(
                name, [f"root: expected a JSON object, got {type(data).__name__}"]
            )
        try:
            return WorldDescription.model_validate(data)
        except ValidationError as exc:
            raise MalformedDescriptionError(name, _validation_issues(exc)) from exc
        except RecursionError as exc:
            raise MalformedDescriptionError(name, ["root: document is nested too deeply"]) from exc

    def _init_map(self, description: WorldDescription) -> None:
        self.width = description.width
        self.height = description.height
        self.collisions = list(description.collisions)
        self.roaming_areas = description.roaming_areas
        self.chest_areas = description.chest_areas
        self.static_chests = description.static_chests
        self.static_entities = description.static_entities

        self.zones = ZonePartition(
            width=self.width,
            height=self.height,
            zone_width=self.zone_width,
            zone_height=self.zone_height,
        )
        self.collision_index = CollisionIndex.build(self.width, self.height, self.collisions)
        self.logger.debug(
            f"Collision grid generated ({self.height}x{self.width}, "
            f"{len(self.collisions)} blocked tiles)"
        )

        self.zones.build_door_graph(description.doors)
        self.logger.debug(
            f"Zone grid {self.group_width}x{self.group_height}, "
            f"{len(description.doors)} doors across {len(self.zones.connected_groups)} zones"
        )

        self._init_checkpoints(description.checkpoints)
        self.logger.debug(
            f"{len(self.checkpoints)} checkpoints, {len(self.starting_areas)} starting areas"
        )

    def _init_checkpoints(self, specs: List[CheckpointSpec]) -> None:
        self.checkpoints = {}
        self.starting_areas = []
        for entry in specs:
            checkpoint = Checkpoint(entry.id, entry.x, entry.y, entry.w, entry.h)
            self.checkpoints[checkpoint.id] = checkpoint
            if entry.is_starting_area:
                self.starting_areas.append(checkpoint)

    def _resolve(self) -> None:
        self.state = MapState.READY
        self.logger.success(f"World map {self.source_name} ready ({self.width}x{self.height})")
        callbacks, self._ready_callbacks = self._ready_callbacks, []
        self._failure_callbacks = []
        for waiter in self._waiters:
            if not waiter.done():
                waiter.set_result(self)
        self._waiters = []
        for callback in callbacks:
            self._run_callback(callback)

    def _run_callback(self, callback: Callable[..., None], *args: Any) -> None:
        """Invoke a lifecycle callback; a failing callback never blocks the others."""
        try:
            callback(*args)
        except Exception as exc:
            self.logger.error(f"Map lifecycle callback {callback!r} failed: {exc!r}")

    def _fail(self, error: MapLoadError) -> None:
        self.state = MapState.FAILED
        self.error = error
        self.logger.error(str(error))
        callbacks, self._failure_callbacks = self._failure_callbacks, []
        self._ready_callbacks = []
        for waiter in self._waiters:
            if not waiter.done():
                waiter.set_exception(error)
        self._waiters = []
        for callback in callbacks:
            self._run_callback(callback, error)

    def _require_ready(self, operation: str) -> None:
        if self.state is not MapState.READY:
            raise MapNotReadyError(operation, self.state.value)

    # ------------------------------------------------------------------
    # Coordinates and collisions
    # ------------------------------------------------------------------

    @property
    def group_width(self) -> int:
        return self.zones.group_width if self.zones else 0

    @property
    def group_height(self) -> int:
        return self.zones.group_height if self.zones else 0

    @property
    def connected_groups(self) -> Dict[ZoneId, List[ZoneId]]:
        return self.zones.connected_groups if self.zones else {}

    @property
    def grid(self) -> List[List[bool]]:
        self._require_ready("grid")
        return self.collision_index.grid

    def tile_index_to_grid_position(self, tile_index: int) -> Tuple[int, int]:
        """Convert a 1-based flat tile index to a 0-based ``(x, y)``."""
        self._require_ready("tile_index_to_grid_position")
        w = self.width
        if tile_index == 0:
            x = 0
        elif tile_index % w == 0:
            x = w - 1
        else:
            x = tile_index % w - 1
        y = (tile_index - 1) // w
        return x, y

    def grid_position_to_tile_index(self, x: int, y: int) -> int:
        self._require_ready("grid_position_to_tile_index")
        return y * self.width + x + 1

    def is_out_of_bounds(self, x: int, y: int) -> bool:
        self._require_ready("is_out_of_bounds")
        return self.collision_index.is_out_of_bounds(x, y)

    def is_colliding(self, x: int, y: int) -> bool:
        self._require_ready("is_colliding")
        return self.collision_index.is_colliding(x, y)

    # ------------------------------------------------------------------
    # Zones
    # ------------------------------------------------------------------

    def zone_id_from_tile_position(self, x: int, y: int) -> ZoneId:
        self._require_ready("zone_id_from_tile_position")
        return self.zones.zone_id_from_tile_position(x, y)

    def adjacent_zones(self, zone: ZoneRef) -> List[ZoneId]:
        self._require_ready("adjacent_zones")
        return self.zones.adjacent_zones(zone)

    def for_each_adjacent_zone(self, zone: Optional[ZoneRef], callback: Callable[[ZoneId], None]) -> None:
        self._require_ready("for_each_adjacent_zone")
        self.zones.for_each_adjacent_zone(zone, callback)

    def iter_zones(self) -> Iterator[ZoneId]:
        self._require_ready("iter_zones")
        return self.zones.iter_zones()

    def for_each_zone(self, callback: Callable[[ZoneId], None]) -> None:
        self._require_ready("for_each_zone")
        self.zones.for_each_zone(callback)

    # ------------------------------------------------------------------
    # Checkpoints and spawning
    # ------------------------------------------------------------------

    def get_checkpoint(self, checkpoint_id: Any) -> Optional[Checkpoint]:
        self._require_ready("get_checkpoint")
        return self.checkpoints.get(checkpoint_id)

    def random_starting_position(self) -> Tuple[int, int]:
        """Pick a starting area uniformly, then a tile uniformly inside it.

        Raises:
            EmptyStartingAreaSetError: If no checkpoint is flagged ``s == 1``.
        """
        self._require_ready("random_starting_position")
        if not self.starting_areas:
            raise EmptyStartingAreaSetError()
        area = self.rng.choice(self.starting_areas)
        return area.random_position(self.rng)


async def load_world_map(source: SourceLike, **kwargs: Any) -> WorldMap:
    """Convenience function to load a map and wait for it.

    Args:
        source: MapSource, path, or raw JSON bytes
        **kwargs: Forwarded to ``WorldMap`` (zone sizes, logger, rng)

    Returns:
        A READY WorldMap

    Raises:
        MapLoadError: If the description is missing, unreadable or malformed
    """
    world = WorldMap(**kwargs)
    await world.load(source)
    return await world.wait_ready()
