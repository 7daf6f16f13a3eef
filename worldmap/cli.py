"""Command-line inspection of world description files.

RUN:
    python -m worldmap examples/worlds/village.json --zone 0-0 --spawn 3
"""

from __future__ import annotations

import argparse
import asyncio
import random
from typing import List, Optional

from .config import Config
from .errors import MapLoadError, WorldMapError
from .logging_utils import MapLogger, log_error, log_info, log_success
from .world_map import WorldMap


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="worldmap", description="Inspect a world map file")
    parser.add_argument(
        "path",
        nargs="?",
        default=Config.MAP_PATH,
        help="World description JSON (defaults to WORLDMAP_MAP_PATH)",
    )
    parser.add_argument("--zone", action="append", default=[], help="Print adjacency for zone 'gx-gy'")
    parser.add_argument("--spawn", type=int, default=0, help="Sample N starting positions")
    parser.add_argument("--seed", type=int, default=Config.RANDOM_SEED, help="Random seed for --spawn")
    parser.add_argument("--debug", action="store_true", help="Show map build steps")
    return parser.parse_args(argv)


def describe(world: WorldMap) -> List[str]:
    lines = [
        f"Size: {world.width}x{world.height} tiles",
        f"Zones: {world.group_width}x{world.group_height} "
        f"({world.zone_width}x{world.zone_height} tiles each)",
        f"Blocked tiles: {len(world.collisions)}",
        f"Door links: {sum(len(links) for links in world.connected_groups.values())}",
        f"Checkpoints: {len(world.checkpoints)} ({len(world.starting_areas)} starting areas)",
    ]
    for checkpoint in world.checkpoints.values():
        flag = " [start]" if checkpoint in world.starting_areas else ""
        lines.append(
            f"  #{checkpoint.id}: ({checkpoint.x}, {checkpoint.y}) "
            f"{checkpoint.w}x{checkpoint.h}{flag}"
        )
    return lines


async def run(args: argparse.Namespace) -> int:
    if not args.path:
        log_error("No world file given and WORLDMAP_MAP_PATH is not set.")
        return 2

    Config.validate()
    logger = MapLogger("DEBUG" if args.debug else Config.LOG_LEVEL)
    rng = random.Random(args.seed)
    world = WorldMap(logger=logger, rng=rng)
    await world.load(args.path)
    try:
        await world.wait_ready()
    except MapLoadError:
        # Already reported by the map's logger.
        return 1

    for line in describe(world):
        log_info(line)

    try:
        for zone in args.zone:
            adjacent = ", ".join(str(z) for z in world.adjacent_zones(zone))
            log_info(f"Adjacent to {zone}: {adjacent}")
        for _ in range(args.spawn):
            x, y = world.random_starting_position()
            log_success(f"Spawn: ({x}, {y})")
    except (WorldMapError, ValueError) as exc:
        log_error(str(exc))
        return 1
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    return asyncio.run(run(parse_args(argv)))
