"""
Pytest configuration and shared fixtures for Maze Editor tests.
"""

import pytest

from maze_editor.catalog import EntityCatalog, default_catalog
from maze_editor.config import EditorConfig
from maze_editor.editor import MapEditor
from maze_editor.grid_model import GridModel
from maze_editor.models import EntityKind

KIND_A = EntityKind("a", "A", "Alpha", is_required=True, max_count=1)
KIND_B = EntityKind("b", "b", "Beta")


@pytest.fixture
def small_catalog():
    """Catalog with one required kind (A, max 1) and one unbounded kind (B)."""
    return EntityCatalog([KIND_A, KIND_B])


@pytest.fixture
def small_config():
    """5x5 grid with no border, no locked region, filled with B."""
    return EditorConfig(
        width=5, height=5, border=False, locked_stamp=[], fill_symbol="b"
    )


@pytest.fixture
def small_grid(small_catalog, small_config):
    return GridModel(small_catalog, small_config)


@pytest.fixture
def small_editor(small_catalog, small_config):
    return MapEditor(small_config, small_catalog)


@pytest.fixture
def catalog():
    return default_catalog()


@pytest.fixture
def grid(catalog):
    """Reference 28x31 maze with border walls and the ghost house."""
    return GridModel(catalog, EditorConfig())


@pytest.fixture
def editor(tmp_path):
    """Reference editor exporting into a temporary level directory."""
    return MapEditor(EditorConfig(level_dir=str(tmp_path / "levels")))


@pytest.fixture
def events():
    """A list that records every event it is subscribed to."""

    class Recorder(list):
        def __call__(self, event):
            self.append(event)

    return Recorder()


@pytest.fixture
def ghost_house_cells():
    return [(x, y) for y in range(14, 17) for x in range(11, 16)]
