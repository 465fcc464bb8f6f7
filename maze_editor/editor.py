"""
Maze Editor facade.

MapEditor is the single object front-ends talk to. It owns the grid, the
tool state machine and the command history, forwards pointer and palette
actions, and republishes every change to its own subscribers.
"""

import logging
from typing import Dict, Optional

import numpy as np

from . import exporter
from .catalog import EntityCatalog, default_catalog
from .commands import CommandGroup, PlaceCommand
from .config import EditorConfig
from .events import HistoryChanged, Listener, Notifier, ToolChanged
from .grid_model import GridModel
from .models import EMPTY, EntityKind, PointerButton
from .tools import ToolState, ToolStateMachine
from .undo_manager import CommandHistory

logger = logging.getLogger(__name__)


class MapEditor:
    def __init__(
        self,
        config: Optional[EditorConfig] = None,
        catalog: Optional[EntityCatalog] = None,
    ):
        self.config = config or EditorConfig()
        self.catalog = catalog or default_catalog()

        self.grid = GridModel(self.catalog, self.config)
        self.history = CommandHistory(self.grid, self.config.max_history)
        self.tools = ToolStateMachine(self.grid, self.history)
        self.last_saved_path: Optional[str] = None

        self._notifier = Notifier()
        self.grid.subscribe(self._notifier.publish)
        self.tools.on_transition = self._tool_changed
        self.history.on_change = self._history_changed

    # ========== Observers ==========

    def subscribe(self, listener: Listener):
        self._notifier.subscribe(listener)

    def unsubscribe(self, listener: Listener):
        self._notifier.unsubscribe(listener)

    def _tool_changed(self, state: ToolState):
        self._notifier.publish(ToolChanged(state))

    def _history_changed(self):
        self._notifier.publish(
            HistoryChanged(self.history.can_undo(), self.history.can_redo())
        )

    # ========== Read access ==========

    @property
    def width(self) -> int:
        return self.grid.width

    @property
    def height(self) -> int:
        return self.grid.height

    @property
    def state(self) -> ToolState:
        return self.tools.state

    def snapshot(self) -> np.ndarray:
        return self.grid.snapshot()

    def kind_at(self, x: int, y: int) -> EntityKind:
        return self.grid.kind_at(x, y)

    def is_editable(self, x: int, y: int) -> bool:
        return self.grid.is_editable(x, y)

    def count(self, kind: EntityKind) -> int:
        return self.grid.count(kind)

    def counts(self) -> Dict[EntityKind, int]:
        return self.grid.counts()

    def is_valid(self) -> bool:
        return self.grid.is_valid()

    def validation_message(self) -> str:
        return exporter.validation_message(self.grid.missing_required())

    def can_place_more(self, kind: EntityKind) -> bool:
        return not self.grid.at_capacity(kind)

    # ========== Palette ==========

    def select_placement_tool(self, kind: EntityKind):
        self.tools.select_placement_tool(kind)

    def select_erase_tool(self):
        self.tools.select_erase_tool()

    def resume_placement(self) -> bool:
        return self.tools.resume_placement()

    def cancel_selection(self):
        self.tools.cancel()

    # ========== Pointer ==========

    def pointer_moved(self, x: int, y: int):
        self.tools.pointer_moved(x, y)

    def pointer_clicked(
        self, x: int, y: int, button: PointerButton = PointerButton.PRIMARY
    ) -> bool:
        return self.tools.pointer_clicked(x, y, button)

    def pointer_exited(self):
        self.tools.pointer_exited()

    # ========== History ==========

    def can_undo(self) -> bool:
        return self.history.can_undo()

    def can_redo(self) -> bool:
        return self.history.can_redo()

    def undo(self) -> bool:
        undone = self.history.undo()
        self.tools.refresh()
        return undone

    def redo(self) -> bool:
        redone = self.history.redo()
        self.tools.refresh()
        return redone

    # ========== Map actions ==========

    def new_map(self):
        logger.info("Starting a new map")
        self._reset()

    def clear_all(self):
        logger.info("Clearing all entities")
        self._reset()

    def _reset(self):
        self.tools.cancel()
        self.grid.reset()
        self.history.clear()

    def fill_empty(self, kind: Optional[EntityKind] = None) -> int:
        """Fill every empty editable cell with ``kind`` as one undoable step.

        Returns the number of cells filled (0 if nothing was applied).
        """
        if kind is None:
            kind = self.grid.fill_kind

        group = CommandGroup(f"Fill with {kind.display_name}")
        # The locked ghost-house interior stays empty in the export
        for y in range(self.grid.height):
            for x in range(self.grid.width):
                if self.grid.is_editable(x, y) and self.grid.kind_at(x, y) == EMPTY:
                    group.commands.append(PlaceCommand.capture(self.grid, x, y, kind))

        if not group.commands or not self.history.execute(group):
            return 0
        return len(group)

    def save(self, path: Optional[str] = None) -> Optional[str]:
        """Fill empty cells and export to CSV.

        Returns the written path, or None if the map is invalid or the
        file could not be written.
        """
        if not self.is_valid():
            logger.warning("Map not saved. %s", self.validation_message().strip())
            return None

        self.fill_empty()
        try:
            written = exporter.save_csv(
                self.snapshot(),
                path,
                level_dir=self.config.level_dir,
                prefix=self.config.file_prefix,
            )
        except OSError as e:
            logger.error("Error saving map file: %s", e)
            return None

        self.last_saved_path = written
        return written
