"""
Core models and data structures for the Maze Editor.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Tuple


@dataclass(frozen=True)
class EntityKind:
    id: str
    symbol: str
    display_name: str
    is_required: bool = False
    max_count: int = 0  # 0 means unbounded

    @property
    def is_capped(self) -> bool:
        return self.is_required and self.max_count > 0

    def __str__(self) -> str:
        return self.display_name


EMPTY = EntityKind("empty", " ", "Empty")


class PointerButton(Enum):
    PRIMARY = "PRIMARY"
    SECONDARY = "SECONDARY"


class EditFailure(Enum):
    OUT_OF_RANGE = "OUT_OF_RANGE"
    NOT_EDITABLE = "NOT_EDITABLE"
    CAPACITY_EXCEEDED = "CAPACITY_EXCEEDED"
    ALREADY_EMPTY = "ALREADY_EMPTY"


@dataclass(frozen=True)
class LockedRegion:
    x: int
    y: int
    width: int
    height: int

    def contains(self, x: int, y: int) -> bool:
        return (
            self.x <= x < self.x + self.width and self.y <= y < self.y + self.height
        )


Cell = Tuple[int, int]
