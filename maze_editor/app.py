"""
Maze Editor terminal front-end.
Redraws the maze after every command line until the user quits.
"""

import argparse
import logging
from typing import List, Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.text import Text

from .config import EditorConfig
from .editor import MapEditor
from .input_handler import HELP_TEXT, InputHandler
from .renderer import Renderer


class TerminalApp:
    def __init__(self, editor: MapEditor, console: Optional[Console] = None):
        self.editor = editor
        self.console = console or Console()
        self.renderer = Renderer(self.console)
        self.input_handler = InputHandler(editor, prompt=self.console.input)

    def render(self):
        self.console.clear()
        self.renderer.draw(self.editor, self.input_handler.status_message)
        if self.input_handler.show_help:
            self.console.print(Panel(Text(HELP_TEXT), title="Help", expand=False))

    def run(self):
        try:
            while True:
                self.render()
                line = self.console.input("[bold]> [/bold]")
                if not self.input_handler.handle_line(line):
                    break
        except (KeyboardInterrupt, EOFError):
            pass
        finally:
            self.console.print("\nEditor closed.")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="maze-editor", description="Maze map editor")
    p.add_argument("-c", "--config", default="maze_editor.toml")
    p.add_argument("-l", "--level-dir", help="directory for exported CSV maps")
    p.add_argument("-w", "--width", type=int)
    p.add_argument("-H", "--height", type=int)
    p.add_argument("-v", "--verbose", action="store_true")
    return p.parse_args(argv)


def main(argv: Optional[List[str]] = None):
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(message)s",
        handlers=[RichHandler(show_path=False)],
    )

    config = EditorConfig.load_from_toml(args.config)
    overrides = {
        "level_dir": args.level_dir,
        "width": args.width,
        "height": args.height,
    }
    overrides = {k: v for k, v in overrides.items() if v is not None}
    try:
        if overrides:
            config = EditorConfig(**{**config.model_dump(), **overrides})
        editor = MapEditor(config)
    except ValueError as e:
        raise SystemExit(f"Invalid configuration: {e}")

    TerminalApp(editor).run()
