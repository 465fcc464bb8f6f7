"""
CSV export for finished maps.

The game reads a grid twice the editor's size in each direction: every
logical cell becomes a 2x2 block. Structural kinds fill the whole block,
everything else sits in its top-left corner. Rows are written as
semicolon-separated symbols.
"""

import logging
import os
import re
from typing import Iterable, List, Optional, Sequence, Tuple

import numpy as np

from .models import EMPTY, EntityKind

logger = logging.getLogger(__name__)

SCALE = 2
DELIMITER = ";"
FILE_EXTENSION = ".csv"
MAX_FILE_NUMBER = 999
STRUCTURAL_IDS = frozenset({"wall", "ghost_house_wall"})


def expand_for_csv(
    snapshot: np.ndarray, structural_ids: Iterable[str] = STRUCTURAL_IDS
) -> np.ndarray:
    structural = set(structural_ids)
    height, width = snapshot.shape
    expanded = np.empty((height * SCALE, width * SCALE), dtype=object)
    expanded.fill(EMPTY)

    for y in range(height):
        for x in range(width):
            kind = snapshot[y, x]
            if kind.id in structural:
                expanded[y * SCALE : (y + 1) * SCALE, x * SCALE : (x + 1) * SCALE] = kind
            elif kind != EMPTY:
                expanded[y * SCALE, x * SCALE] = kind
    return expanded


def to_csv_lines(grid: np.ndarray) -> List[str]:
    return [DELIMITER.join(kind.symbol for kind in row) for row in grid]


def next_file_path(level_dir: str, prefix: str = "custom_map_") -> str:
    """First unused ``<prefix>NNN.csv`` path in ``level_dir``."""
    taken = set()
    if os.path.isdir(level_dir):
        taken = {extract_map_number(name, prefix) for name in os.listdir(level_dir)}
    for number in range(1, MAX_FILE_NUMBER + 1):
        if number not in taken:
            path = os.path.join(level_dir, f"{prefix}{number:03d}{FILE_EXTENSION}")
            return os.path.abspath(path)
    raise FileExistsError(f"No free map file name left in {level_dir}")


def extract_map_number(file_name: str, prefix: str = "custom_map_") -> int:
    match = re.fullmatch(re.escape(prefix) + r"(\d+)" + re.escape(FILE_EXTENSION), file_name)
    return int(match.group(1)) if match else -1


def save_csv(
    snapshot: np.ndarray,
    path: Optional[str] = None,
    level_dir: str = "levels",
    prefix: str = "custom_map_",
) -> str:
    """Write the expanded map and return the path written to."""
    if path is None:
        os.makedirs(level_dir, exist_ok=True)
        path = next_file_path(level_dir, prefix)
    else:
        os.makedirs(os.path.dirname(os.path.abspath(path)), exist_ok=True)

    lines = to_csv_lines(expand_for_csv(snapshot))
    with open(path, "w", newline="") as f:
        f.write("\n".join(lines))

    logger.info("Saved %dx%d map to %s", snapshot.shape[1], snapshot.shape[0], path)
    return path


def validation_message(missing: Sequence[Tuple[EntityKind, int]]) -> str:
    """Lines listing each required kind whose count is off, or ''."""
    if not missing:
        return ""
    lines = ["Missing required entities:"]
    for kind, count in missing:
        lines.append(f"- {kind.display_name}: {count}/{kind.max_count}")
    return "\n".join(lines) + "\n"
