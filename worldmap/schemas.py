"""Pydantic schemas for world description documents.

A world description is the JSON file exported by the map tooling. Only the
fields the map subsystem needs are modeled strictly; area and entity lists
are passed through untouched so other server subsystems can consume them.

World file structure:
```json
{
  "width": 56,
  "height": 24,
  "collisions": [0, 1, 2],
  "doors": [{"x": 1, "y": 1, "tx": 29, "ty": 13}],
  "checkpoints": [{"id": 1, "x": 2, "y": 2, "w": 4, "h": 3, "s": 1}],
  "roamingAreas": [],
  "chestAreas": [],
  "staticChests": [],
  "staticEntities": {}
}
```
"""

from __future__ import annotations

from typing import Any, List

from pydantic import BaseModel, ConfigDict, Field


class DoorSpec(BaseModel):
    """One-way link from a tile in one zone to a tile in another."""

    model_config = ConfigDict(extra="ignore")

    x: int = Field(..., description="Source tile column")
    y: int = Field(..., description="Source tile row")
    tx: int = Field(..., description="Target tile column")
    ty: int = Field(..., description="Target tile row")


class CheckpointSpec(BaseModel):
    """Rectangular named region; ``s == 1`` marks a player starting area."""

    model_config = ConfigDict(extra="ignore")

    id: int | str = Field(..., description="Unique checkpoint identifier")
    x: int = Field(..., description="Left tile column")
    y: int = Field(..., description="Top tile row")
    w: int = Field(..., gt=0, description="Width in tiles")
    h: int = Field(..., gt=0, description="Height in tiles")
    s: int = Field(0, description="1 if this checkpoint is a starting area")

    @property
    def is_starting_area(self) -> bool:
        return self.s == 1


class WorldDescription(BaseModel):
    """Parsed world file. Unknown top-level keys are ignored."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    width: int = Field(..., gt=0, description="Tile-grid width")
    height: int = Field(..., gt=0, description="Tile-grid height")
    collisions: List[int] = Field(
        ..., description="Blocked tile indices, 0-based row-major",
    )
    doors: List[DoorSpec] = Field(default_factory=list)
    checkpoints: List[CheckpointSpec] = Field(default_factory=list)

    # Passthrough data for spawning/entity subsystems
    roaming_areas: List[Any] = Field(default_factory=list, alias="roamingAreas")
    chest_areas: List[Any] = Field(default_factory=list, alias="chestAreas")
    static_chests: List[Any] = Field(default_factory=list, alias="staticChests")
    static_entities: Any = Field(default_factory=dict, alias="staticEntities")
