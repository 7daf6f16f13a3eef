"""Zone partition and zone adjacency.

The tile grid is cut into fixed-size zones ("groups") used for interest
management: an entity is visible to players whose zone is adjacent to its
own. Adjacency is the 3×3 spatial neighbourhood plus any zone reachable
through a door, so players standing next to a teleport also see what is on
the other side.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, Iterator, List, NamedTuple, Union

from .schemas import DoorSpec


_ZONE_KEY = re.compile(r"(-?\d+)-(-?\d+)")


class ZoneId(NamedTuple):
    """Zone coordinate in the zone grid. ``str()`` gives the ``"gx-gy"`` key."""

    gx: int
    gy: int

    def __str__(self) -> str:
        return f"{self.gx}-{self.gy}"

    @classmethod
    def parse(cls, key: str) -> "ZoneId":
        """Inverse of ``str(zone)``. Accepts negative components (``"-1-0"``)."""
        match = _ZONE_KEY.fullmatch(key.strip())
        if match is None:
            raise ValueError(f"Invalid zone key {key!r}; expected 'gx-gy'")
        return cls(int(match.group(1)), int(match.group(2)))


ZoneRef = Union[ZoneId, str]


def as_zone_id(zone: ZoneRef) -> ZoneId:
    if isinstance(zone, ZoneId):
        return zone
    if isinstance(zone, tuple):
        return ZoneId(*zone)
    return ZoneId.parse(zone)


# Scan order of the 3×3 neighbourhood: row above, own row, row below.
_NEIGHBOURHOOD = [(dx, dy) for dy in (-1, 0, 1) for dx in (-1, 0, 1)]


@dataclass
class ZonePartition:
    """Regular grid of ``zone_width × zone_height`` zones over a tile map.

    ``connected_groups`` maps a source zone to the zones its doors lead to,
    in door declaration order (duplicates kept). Adjacency lists are
    computed lazily and cached; the partition never changes after the door
    graph is built.
    """

    width: int
    height: int
    zone_width: int = 28
    zone_height: int = 12
    connected_groups: Dict[ZoneId, List[ZoneId]] = field(default_factory=dict)
    _adjacency_cache: Dict[ZoneId, List[ZoneId]] = field(default_factory=dict, init=False, repr=False)

    @property
    def group_width(self) -> int:
        return self.width // self.zone_width

    @property
    def group_height(self) -> int:
        return self.height // self.zone_height

    def contains(self, zone: ZoneId) -> bool:
        return 0 <= zone.gx < self.group_width and 0 <= zone.gy < self.group_height

    def zone_id_from_tile_position(self, x: int, y: int) -> ZoneId:
        """Zone holding tile ``(x, y)``; tile 1 is the first tile of zone 0."""
        return ZoneId((x - 1) // self.zone_width, (y - 1) // self.zone_height)

    def build_door_graph(self, doors: Iterable[DoorSpec]) -> None:
        self.connected_groups = {}
        self._adjacency_cache.clear()
        for door in doors:
            source = self.zone_id_from_tile_position(door.x, door.y)
            target = self.zone_id_from_tile_position(door.tx, door.ty)
            self.connected_groups.setdefault(source, []).append(target)

    def adjacent_zones(self, zone: ZoneRef) -> List[ZoneId]:
        """Zones adjacent to ``zone``, including itself.

        Order: the 3×3 neighbourhood in scan order, then door links in
        declaration order. Each zone appears once and every entry lies inside
        the zone grid.
        """
        zone = as_zone_id(zone)
        cached = self._adjacency_cache.get(zone)
        if cached is not None:
            return list(cached)

        candidates = [ZoneId(zone.gx + dx, zone.gy + dy) for dx, dy in _NEIGHBOURHOOD]
        for linked in self.connected_groups.get(zone, []):
            if linked not in candidates:
                candidates.append(linked)

        adjacent = [candidate for candidate in candidates if self.contains(candidate)]
        if self.contains(zone):
            self._adjacency_cache[zone] = adjacent
        return list(adjacent)

    def for_each_adjacent_zone(self, zone: ZoneRef | None, callback: Callable[[ZoneId], None]) -> None:
        if not zone:
            return
        for adjacent in self.adjacent_zones(zone):
            callback(adjacent)

    def iter_zones(self) -> Iterator[ZoneId]:
        for gx in range(self.group_width):
            for gy in range(self.group_height):
                yield ZoneId(gx, gy)

    def for_each_zone(self, callback: Callable[[ZoneId], None]) -> None:
        for zone in self.iter_zones():
            callback(zone)
