"""
Reversible grid edits for undo/redo.

Provides:
- Command ABC for all grid edits
- PlaceCommand / EraseCommand for single cells
- CommandGroup for multi-cell edits that undo as one step

Commands never touch the cell array directly; both directions go through
GridModel.place/erase so counts and notifications behave exactly like a
forward edit.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List

from .models import EMPTY, EntityKind

if TYPE_CHECKING:
    from .grid_model import GridModel


class Command(ABC):
    """Abstract base class for undoable commands."""

    @abstractmethod
    def execute(self, grid: "GridModel") -> bool:
        """
        Apply the edit.

        Returns:
            True if the grid accepted it, False otherwise.
        """

    @abstractmethod
    def undo(self, grid: "GridModel") -> bool:
        """
        Restore the state captured before the edit.

        Returns:
            True if the grid accepted the restore, False otherwise.
        """

    @property
    @abstractmethod
    def description(self) -> str:
        """Human-readable description of this command."""


def _restore(grid: "GridModel", x: int, y: int, kind: EntityKind) -> bool:
    if kind == EMPTY:
        if grid.kind_at(x, y) == EMPTY:
            return True
        return grid.erase(x, y)
    return grid.place(x, y, kind)


@dataclass
class PlaceCommand(Command):
    """Write ``kind`` into one cell, remembering its previous occupant."""

    x: int
    y: int
    kind: EntityKind
    previous: EntityKind

    @classmethod
    def capture(cls, grid: "GridModel", x: int, y: int, kind: EntityKind) -> "PlaceCommand":
        return cls(x, y, kind, grid.kind_at(x, y))

    def execute(self, grid: "GridModel") -> bool:
        return grid.place(self.x, self.y, self.kind)

    def undo(self, grid: "GridModel") -> bool:
        return _restore(grid, self.x, self.y, self.previous)

    @property
    def description(self) -> str:
        return f"Place {self.kind.display_name} at ({self.x}, {self.y})"


@dataclass
class EraseCommand(Command):
    """Clear one cell, remembering what was removed."""

    x: int
    y: int
    previous: EntityKind

    @classmethod
    def capture(cls, grid: "GridModel", x: int, y: int) -> "EraseCommand":
        return cls(x, y, grid.kind_at(x, y))

    def execute(self, grid: "GridModel") -> bool:
        return grid.erase(self.x, self.y)

    def undo(self, grid: "GridModel") -> bool:
        return grid.place(self.x, self.y, self.previous)

    @property
    def description(self) -> str:
        return f"Erase {self.previous.display_name} at ({self.x}, {self.y})"


@dataclass
class CommandGroup(Command):
    """Several commands applied and reverted as a single history entry.

    Execution is all-or-nothing: if a member is rejected, the members that
    already ran are undone in reverse order.
    """

    label: str
    commands: List[Command] = field(default_factory=list)

    def execute(self, grid: "GridModel") -> bool:
        done: List[Command] = []
        for command in self.commands:
            if not command.execute(grid):
                for applied in reversed(done):
                    applied.undo(grid)
                return False
            done.append(command)
        return True

    def undo(self, grid: "GridModel") -> bool:
        ok = True
        for command in reversed(self.commands):
            ok = command.undo(grid) and ok
        return ok

    @property
    def description(self) -> str:
        return f"{self.label} ({len(self.commands)} cells)"

    def __len__(self) -> int:
        return len(self.commands)
