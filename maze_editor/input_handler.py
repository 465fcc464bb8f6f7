"""
Input handling logic for the Maze Editor.
Turns typed command lines into pointer events and palette actions.
"""

import shlex
from typing import TYPE_CHECKING, Callable, List, Optional

from .models import EMPTY, EntityKind, PointerButton

if TYPE_CHECKING:
    from .editor import MapEditor


HELP_TEXT = """\
select <sym|id>   pick a placement tool (P B K I C x o)
erase             pick the eraser
resume            go back to the last placement tool
cancel            drop the current tool
move X Y          hover a cell
click X Y         primary click
rclick X Y        secondary click (cancels the tool)
leave             pointer leaves the grid
undo / redo       walk the history
fill              fill empty cells with pac-gums
check             show what is missing
save [PATH]       fill and export to CSV
new / clear       reset the map
quit              leave the editor"""


class InputHandler:
    def __init__(
        self, editor: "MapEditor", prompt: Optional[Callable[[str], str]] = None
    ):
        self.editor = editor
        self.prompt = prompt
        self.status_message = "Type 'help' for commands."
        self.show_help = False

    def handle_line(self, line: str) -> bool:
        """
        Process a single command line.
        Returns False if the editor should exit, True otherwise.
        """
        self.show_help = False
        try:
            parts = shlex.split(line)
        except ValueError as e:
            self.status_message = f"Cannot parse input: {e}"
            return True
        if not parts:
            return True

        cmd, args = parts[0].lower(), parts[1:]

        if cmd in ("q", "quit"):
            return False
        if cmd in ("h", "help", "?"):
            self.show_help = True
            return True

        handler = self._commands().get(cmd)
        if handler is None:
            self.status_message = f"Unknown command: {cmd}"
            return True
        handler(args)
        return True

    def _commands(self):
        return {
            "select": self._select,
            "s": self._select,
            "erase": self._erase,
            "e": self._erase,
            "resume": self._resume,
            "cancel": self._cancel,
            "move": self._move,
            "m": self._move,
            "click": self._click,
            "c": self._click,
            "rclick": self._rclick,
            "leave": self._leave,
            "undo": self._undo,
            "u": self._undo,
            "redo": self._redo,
            "r": self._redo,
            "fill": self._fill,
            "check": self._check,
            "save": self._save,
            "new": self._new,
            "clear": self._clear,
        }

    # ========== Palette ==========

    def _lookup_kind(self, name: str) -> Optional[EntityKind]:
        catalog = self.editor.catalog
        for lookup in (catalog.by_symbol, catalog.get):
            try:
                return lookup(name)
            except KeyError:
                continue
        return None

    def _select(self, args: List[str]):
        if len(args) != 1:
            self.status_message = "Usage: select <symbol|id>"
            return
        kind = self._lookup_kind(args[0])
        if kind is None or kind == EMPTY:
            self.status_message = f"No such entity: {args[0]}"
            return
        self.editor.select_placement_tool(kind)
        if self.editor.can_place_more(kind):
            self.status_message = f"Selected: {kind.display_name}"
        else:
            self.status_message = (
                f"{kind.display_name} is already placed; you can only overwrite it."
            )

    def _erase(self, args: List[str]):
        self.editor.select_erase_tool()
        self.status_message = "Eraser selected."

    def _resume(self, args: List[str]):
        if self.editor.resume_placement():
            self.status_message = f"Resumed: {self.editor.state.label}"
        else:
            self.status_message = "No placement tool to resume."

    def _cancel(self, args: List[str]):
        self.editor.cancel_selection()
        self.status_message = "Tool cancelled."

    # ========== Pointer ==========

    def _parse_cell(self, args: List[str]):
        if len(args) != 2:
            return None
        try:
            return int(args[0]), int(args[1])
        except ValueError:
            return None

    def _move(self, args: List[str]):
        cell = self._parse_cell(args)
        if cell is None:
            self.status_message = "Usage: move X Y"
            return
        self.editor.pointer_moved(*cell)
        if self.editor.tools.hover is None:
            self.status_message = f"Hover {cell[0]},{cell[1]}"
        else:
            verdict = "ok" if self.editor.tools.legal else "blocked"
            self.status_message = f"Hover {cell[0]},{cell[1]}: {verdict}"

    def _click(self, args: List[str], button: PointerButton = PointerButton.PRIMARY):
        cell = self._parse_cell(args)
        if cell is None:
            self.status_message = "Usage: click X Y"
            return
        before = self.editor.state
        edited = self.editor.pointer_clicked(cell[0], cell[1], button)
        if edited:
            self.status_message = f"Edited {cell[0]},{cell[1]}."
        elif self.editor.state != before:
            self.status_message = f"Tool: {self.editor.state.label}"
        else:
            self.status_message = ""

    def _rclick(self, args: List[str]):
        self._click(args, PointerButton.SECONDARY)

    def _leave(self, args: List[str]):
        self.editor.pointer_exited()
        self.status_message = ""

    # ========== History ==========

    def _undo(self, args: List[str]):
        description = self.editor.history.undo_description
        if self.editor.undo():
            self.status_message = f"Undid: {description}"
        else:
            self.status_message = "Nothing to undo."

    def _redo(self, args: List[str]):
        description = self.editor.history.redo_description
        if self.editor.redo():
            self.status_message = f"Redid: {description}"
        else:
            self.status_message = "Nothing to redo."

    # ========== Map ==========

    def _confirm(self, question: str) -> bool:
        if self.prompt is None:
            return True
        return self.prompt(f"{question} (y/n):").strip().lower() == "y"

    def _fill(self, args: List[str]):
        filled = self.editor.fill_empty()
        self.status_message = f"Filled {filled} cells."

    def _check(self, args: List[str]):
        if self.editor.is_valid():
            self.status_message = "Map is valid."
        else:
            self.status_message = self.editor.validation_message().strip()

    def _save(self, args: List[str]):
        if not self.editor.is_valid():
            self.status_message = self.editor.validation_message().strip()
            return
        path = self.editor.save(args[0] if args else None)
        if path is None:
            self.status_message = "Save failed; see log."
        else:
            self.status_message = f"Saved to {path}"

    def _new(self, args: List[str]):
        if self._confirm("Start a new map? Unsaved changes are lost."):
            self.editor.new_map()
            self.status_message = "New map."

    def _clear(self, args: List[str]):
        if self._confirm("Remove every entity from the map?"):
            self.editor.clear_all()
            self.status_message = "Map cleared."
