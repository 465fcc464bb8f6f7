"""
Editing tools for the Maze Editor.

The active tool is one of three states:

    Idle            no tool selected; pointer events are ignored
    Placing(kind)   clicks write ``kind`` into legal cells
    Erasing         clicks clear legal non-empty cells

Legality is recomputed on every pointer move so a click never has to
report a failure. Every edit goes through the command history.
"""

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Optional, Union

from .commands import EraseCommand, PlaceCommand
from .models import EMPTY, Cell, EntityKind, PointerButton

if TYPE_CHECKING:
    from .grid_model import GridModel
    from .undo_manager import CommandHistory

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Idle:
    @property
    def label(self) -> str:
        return "Idle"


@dataclass(frozen=True)
class Placing:
    kind: EntityKind

    @property
    def label(self) -> str:
        return f"Placing: {self.kind.display_name}"


@dataclass(frozen=True)
class Erasing:
    @property
    def label(self) -> str:
        return "Erasing"


ToolState = Union[Idle, Placing, Erasing]


class ToolStateMachine:
    def __init__(self, grid: "GridModel", history: "CommandHistory"):
        self.grid = grid
        self.history = history
        self.state: ToolState = Idle()

        # Transient pointer tracking, reset on every transition
        self.hover: Optional[Cell] = None
        self.legal = False

        # Last placement kind, kept while switching to the eraser
        self.remembered_kind: Optional[EntityKind] = None

        self.on_transition: Optional[Callable[[ToolState], None]] = None

    # ========== Tool selection ==========

    def select_placement_tool(self, kind: EntityKind):
        if kind == EMPTY:
            raise ValueError("Use the erase tool to clear cells")
        self.remembered_kind = kind
        self._transition(Placing(kind))

    def select_erase_tool(self):
        self._transition(Erasing())

    def resume_placement(self) -> bool:
        """Re-enter Placing with the remembered kind, if there is one."""
        if self.remembered_kind is None:
            return False
        self._transition(Placing(self.remembered_kind))
        return True

    def cancel(self):
        self.remembered_kind = None
        self._transition(Idle())

    def _transition(self, state: ToolState):
        self.state = state
        self.hover = None
        self.legal = False
        logger.debug("Tool state -> %s", state.label)
        if self.on_transition is not None:
            self.on_transition(state)

    # ========== Pointer events ==========

    def pointer_moved(self, x: int, y: int):
        if isinstance(self.state, Idle):
            return
        self.hover = (x, y)
        self.legal = self._is_legal(x, y)

    def refresh(self):
        """Re-evaluate legality at the hovered cell after an outside edit."""
        if self.hover is not None:
            self.legal = self._is_legal(*self.hover)

    def pointer_exited(self):
        self.hover = None
        self.legal = False

    def pointer_clicked(self, x: int, y: int, button: PointerButton) -> bool:
        """Handle a click. Returns True if the grid was edited."""
        if isinstance(self.state, Idle):
            return False

        if button is PointerButton.SECONDARY:
            self.cancel()
            return False

        self.pointer_moved(x, y)
        if not self.legal:
            return False

        if isinstance(self.state, Placing):
            kind = self.state.kind
            applied = self.history.execute(PlaceCommand.capture(self.grid, x, y, kind))
            if applied and self.grid.at_capacity(kind):
                logger.debug("%s reached its limit", kind.display_name)
                self.cancel()
                return applied
        else:
            applied = self.history.execute(EraseCommand.capture(self.grid, x, y))

        self.legal = self._is_legal(x, y)
        return applied

    def _is_legal(self, x: int, y: int) -> bool:
        if not self.grid.is_editable(x, y):
            return False

        current = self.grid.kind_at(x, y)
        if isinstance(self.state, Placing):
            kind = self.state.kind
            if self.grid.at_capacity(kind):
                # Only overwrite-in-place is allowed once the limit is reached
                return current == kind
            return current == EMPTY
        if isinstance(self.state, Erasing):
            return current != EMPTY
        return False
