"""
Maze Editor: place Pac-Man style maze entities on a grid, with undo/redo.
"""

from .catalog import EntityCatalog, default_catalog
from .config import ConfigError, EditorConfig
from .editor import MapEditor
from .grid_model import GridModel, OutOfRangeError
from .models import EMPTY, EditFailure, EntityKind, PointerButton
from .tools import Erasing, Idle, Placing
from .undo_manager import CommandHistory

__all__ = [
    "CommandHistory",
    "ConfigError",
    "EMPTY",
    "EditFailure",
    "EditorConfig",
    "EntityCatalog",
    "EntityKind",
    "Erasing",
    "GridModel",
    "Idle",
    "MapEditor",
    "OutOfRangeError",
    "Placing",
    "PointerButton",
    "default_catalog",
]
