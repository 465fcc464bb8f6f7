"""
Terminal rendering for the Maze Editor using rich.
Draws a read-only snapshot of the grid plus the counters and status panels.
"""

from typing import TYPE_CHECKING, Dict, Optional

from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .models import EMPTY
from .tools import Erasing, Placing

if TYPE_CHECKING:
    from .editor import MapEditor

KIND_STYLES: Dict[str, str] = {
    "pacman": "bold yellow",
    "blinky": "bold red",
    "pinky": "bold magenta",
    "inky": "bold cyan",
    "clyde": "bold dark_orange",
    "wall": "white on blue",
    "ghost_house_wall": "white on bright_blue",
    "super_pac_gum": "bold white",
    "pac_gum": "white",
}
EMPTY_CELL = "· "
LOCKED_STYLE = "dim"
LEGAL_STYLE = "on green"
ILLEGAL_STYLE = "on red"


def render_grid(editor: "MapEditor") -> Text:
    """Grid with column/row rulers; the hovered cell shows its legality."""
    snap = editor.snapshot()
    height, width = snap.shape
    hover = editor.tools.hover

    text = Text()
    text.append("   " + "".join(f"{x % 10} " for x in range(width)) + "\n", style="dim")
    for y in range(height):
        text.append(f"{y:>2} ", style="dim")
        for x in range(width):
            kind = snap[y, x]
            cell = EMPTY_CELL if kind == EMPTY else kind.symbol + " "
            style = KIND_STYLES.get(kind.id, "")
            if not editor.is_editable(x, y):
                style = f"{style} {LOCKED_STYLE}".strip()
            if hover == (x, y):
                style = LEGAL_STYLE if editor.tools.legal else ILLEGAL_STYLE
            text.append(cell, style=style)
        text.append("\n")
    return text


def render_counters(editor: "MapEditor") -> Table:
    table = Table(title="Entities", show_header=True, header_style="bold")
    table.add_column("Kind")
    table.add_column("Sym", justify="center")
    table.add_column("Count", justify="right")

    for kind in editor.catalog.kinds():
        if kind == EMPTY:
            continue
        count = editor.count(kind)
        if kind.is_capped:
            ok = count == kind.max_count
            value = Text(f"{count}/{kind.max_count}", style="green" if ok else "red")
        else:
            value = Text(str(count))
        table.add_row(kind.display_name, kind.symbol, value)

    if editor.is_valid():
        table.caption = Text("Map is valid", style="bold green")
    else:
        table.caption = Text("Required entities missing", style="bold red")
    return table


def render_status(editor: "MapEditor", message: str = "") -> Panel:
    state = editor.state
    if isinstance(state, Placing):
        tool_style = KIND_STYLES.get(state.kind.id, "bold")
    elif isinstance(state, Erasing):
        tool_style = "bold red"
    else:
        tool_style = "bold"

    line = Text()
    line.append(f"[{state.label}]", style=tool_style)
    line.append(
        f"  undo:{'yes' if editor.can_undo() else 'no'}"
        f"  redo:{'yes' if editor.can_redo() else 'no'}"
    )
    if message:
        line.append(f"  {message}")
    return Panel(line, title="Status", expand=False)


class Renderer:
    """Draws the whole editor screen to a rich console."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def draw(self, editor: "MapEditor", message: str = ""):
        self.console.print(
            Group(
                Panel(render_grid(editor), title="Maze", expand=False),
                render_counters(editor),
                render_status(editor, message),
            )
        )
