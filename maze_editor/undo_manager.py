"""
Undo and redo management for the Maze Editor.
"""

import logging
from typing import TYPE_CHECKING, Callable, List, Optional

from .commands import Command

if TYPE_CHECKING:
    from .grid_model import GridModel

logger = logging.getLogger(__name__)


class CommandHistory:
    """
    Executes commands against a grid and keeps them on undo/redo stacks.

    Usage:
        history = CommandHistory(grid)
        history.execute(PlaceCommand.capture(grid, 3, 4, WALL))
        history.undo()  # Undo the place
        history.redo()  # Redo the place
    """

    def __init__(self, grid: "GridModel", max_history: int = 100):
        self.grid = grid
        self.max_history = max_history
        self.undo_stack: List[Command] = []
        self.redo_stack: List[Command] = []
        self.on_change: Optional[Callable[[], None]] = None

    def execute(self, command: Command) -> bool:
        """
        Run a command and record it. A rejected command is not recorded and
        leaves the redo stack alone.
        """
        if not command.execute(self.grid):
            return False

        self.undo_stack.append(command)
        self.redo_stack.clear()
        if len(self.undo_stack) > self.max_history:
            self.undo_stack.pop(0)
        self._changed()
        return True

    def undo(self) -> bool:
        if not self.undo_stack:
            return False

        command = self.undo_stack.pop()
        if not command.undo(self.grid):
            logger.warning("Undo failed for %s; keeping it on the stack", command.description)
            self.undo_stack.append(command)
            return False

        self.redo_stack.append(command)
        self._changed()
        return True

    def redo(self) -> bool:
        if not self.redo_stack:
            return False

        command = self.redo_stack.pop()
        if not command.execute(self.grid):
            logger.warning("Redo failed for %s; keeping it on the stack", command.description)
            self.redo_stack.append(command)
            return False

        self.undo_stack.append(command)
        self._changed()
        return True

    def can_undo(self) -> bool:
        return bool(self.undo_stack)

    def can_redo(self) -> bool:
        return bool(self.redo_stack)

    @property
    def undo_description(self) -> Optional[str]:
        return self.undo_stack[-1].description if self.undo_stack else None

    @property
    def redo_description(self) -> Optional[str]:
        return self.redo_stack[-1].description if self.redo_stack else None

    def clear(self):
        self.undo_stack.clear()
        self.redo_stack.clear()
        self._changed()

    def _changed(self):
        if self.on_change is not None:
            self.on_change()
