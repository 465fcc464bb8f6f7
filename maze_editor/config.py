"""
Configuration settings for the Maze Editor.
"""

import logging
import os
from typing import List, Optional, Tuple

import toml
from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from .models import LockedRegion

logger = logging.getLogger(__name__)

GHOST_HOUSE = ["xx-xx", "x   x", "xxxxx"]


class ConfigError(ValueError):
    """Raised when a configuration cannot be applied to a catalog."""


class EditorConfig(BaseModel):
    """Configuration settings for the editor."""

    # Grid
    width: int = 28
    height: int = 31
    border: bool = True
    border_symbol: str = "x"

    # Locked region (ghost house), stamped row by row from its origin
    locked_origin: Tuple[int, int] = (11, 14)
    locked_stamp: List[str] = GHOST_HOUSE

    # History
    max_history: int = 100

    # Export
    level_dir: str = "levels"
    file_prefix: str = "custom_map_"
    fill_symbol: str = "."

    model_config = ConfigDict(extra="allow")

    @field_validator("width", "height", "max_history")
    @classmethod
    def _positive(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("must be positive")
        return value

    @model_validator(mode="after")
    def _stamp_fits(self) -> "EditorConfig":
        if not self.locked_stamp:
            return self
        widths = {len(row) for row in self.locked_stamp}
        if len(widths) != 1:
            raise ValueError("locked_stamp rows must all have the same length")
        ox, oy = self.locked_origin
        if (
            ox < 0
            or oy < 0
            or ox + widths.pop() > self.width
            or oy + len(self.locked_stamp) > self.height
        ):
            raise ValueError("locked_stamp does not fit inside the grid")
        return self

    @property
    def locked_region(self) -> Optional[LockedRegion]:
        if not self.locked_stamp:
            return None
        ox, oy = self.locked_origin
        return LockedRegion(ox, oy, len(self.locked_stamp[0]), len(self.locked_stamp))

    @classmethod
    def load_from_toml(cls, path: str = "maze_editor.toml") -> "EditorConfig":
        """Load configuration from the ``[editor]`` table of a TOML file."""
        if not os.path.exists(path):
            logger.warning("Config file %s not found. Using defaults.", path)
            return cls()

        try:
            with open(path, "r") as f:
                data = toml.load(f)
            return cls(**data.get("editor", {}))
        except (toml.TomlDecodeError, OSError, ValueError) as e:
            logger.error("Error loading config %s: %s", path, e)
            return cls()
