"""
Tests for the MapEditor facade: end-to-end editing scenarios.
"""

import os

from maze_editor.catalog import BLINKY, CLYDE, INKY, PAC_GUM, PACMAN, PINKY, WALL
from maze_editor.events import HistoryChanged, MapReset, ToolChanged
from maze_editor.models import EMPTY, PointerButton
from maze_editor.tools import Idle, Placing

from .conftest import KIND_A, KIND_B

REQUIRED = [PACMAN, BLINKY, PINKY, INKY, CLYDE]


def _place_required(editor):
    for x, kind in enumerate(REQUIRED, start=1):
        editor.select_placement_tool(kind)
        assert editor.pointer_clicked(x, 1)


class TestScenarios:
    """The reference editing walkthroughs on a bare 5x5 grid."""

    def test_place_required_then_idle(self, small_editor):
        """Test placing the only allowed A returns the tool to Idle."""
        small_editor.select_placement_tool(KIND_A)
        assert small_editor.state == Placing(KIND_A)

        small_editor.pointer_moved(2, 2)
        assert small_editor.tools.legal

        assert small_editor.pointer_clicked(2, 2, PointerButton.PRIMARY)
        assert small_editor.kind_at(2, 2) == KIND_A
        assert small_editor.state == Idle()
        assert small_editor.count(KIND_A) == 1
        assert small_editor.is_valid()

    def test_idle_click_is_noop(self, small_editor):
        """Test clicks in Idle leave the grid untouched."""
        small_editor.select_placement_tool(KIND_A)
        small_editor.pointer_clicked(2, 2)
        before = small_editor.snapshot().tolist()

        assert not small_editor.pointer_clicked(0, 0, PointerButton.PRIMARY)
        assert small_editor.snapshot().tolist() == before
        assert small_editor.state == Idle()

    def test_erase_undo_redo(self, small_editor):
        """Test an erase can be undone and redone with counts kept exact."""
        small_editor.select_placement_tool(KIND_B)
        assert small_editor.pointer_clicked(1, 1)
        small_editor.select_erase_tool()
        assert small_editor.pointer_clicked(1, 1)
        assert small_editor.kind_at(1, 1) == EMPTY

        assert small_editor.undo()
        assert small_editor.kind_at(1, 1) == KIND_B
        assert small_editor.count(KIND_B) == 1

        assert small_editor.redo()
        assert small_editor.kind_at(1, 1) == EMPTY
        assert small_editor.count(KIND_B) == 0

    def test_execute_after_undo_clears_redo(self, small_editor):
        """Test a new edit after undo drops the redo stack."""
        small_editor.select_placement_tool(KIND_B)
        small_editor.pointer_clicked(0, 0)
        small_editor.pointer_clicked(1, 0)
        small_editor.undo()
        assert small_editor.can_redo()
        small_editor.pointer_clicked(2, 0)
        assert not small_editor.can_redo()

    def test_undo_restores_validity(self, small_editor):
        """Test undoing the required placement makes the map invalid again."""
        small_editor.select_placement_tool(KIND_A)
        small_editor.pointer_clicked(4, 4)
        assert small_editor.is_valid()
        small_editor.undo()
        assert not small_editor.is_valid()
        assert small_editor.count(KIND_A) == 0


class TestHoverAfterHistory:
    """Undo and redo refresh legality at the hovered cell."""

    def test_undo_refreshes_legality(self, small_editor):
        """Test the hovered cell turns legal once undo empties it."""
        small_editor.select_placement_tool(KIND_B)
        small_editor.pointer_clicked(3, 3)
        assert small_editor.tools.hover == (3, 3)
        assert not small_editor.tools.legal

        assert small_editor.undo()
        assert small_editor.kind_at(3, 3) == EMPTY
        assert small_editor.tools.legal

    def test_redo_refreshes_legality(self, small_editor):
        """Test the hovered cell turns illegal once redo refills it."""
        small_editor.select_placement_tool(KIND_B)
        small_editor.pointer_clicked(3, 3)
        small_editor.undo()

        assert small_editor.redo()
        assert not small_editor.tools.legal

    def test_no_hover_stays_untracked(self, small_editor):
        """Test undo without a hovered cell leaves tracking empty."""
        small_editor.select_placement_tool(KIND_B)
        small_editor.pointer_clicked(3, 3)
        small_editor.pointer_exited()
        small_editor.undo()
        assert small_editor.tools.hover is None
        assert not small_editor.tools.legal


class TestNotifications:
    """The facade republishes grid, tool and history changes."""

    def test_tool_and_history_events(self, small_editor, events):
        """Test tool changes and history changes reach subscribers."""
        small_editor.subscribe(events)
        small_editor.select_placement_tool(KIND_B)
        small_editor.pointer_clicked(0, 0)

        assert events[0] == ToolChanged(Placing(KIND_B))
        assert events[-1] == HistoryChanged(can_undo=True, can_redo=False)

    def test_undo_publishes_grid_events(self, small_editor, events):
        """Test undo publishes the grid events before the history event."""
        small_editor.select_placement_tool(KIND_B)
        small_editor.pointer_clicked(0, 0)
        small_editor.subscribe(events)
        small_editor.undo()
        kinds = [type(e).__name__ for e in events]
        assert kinds == [
            "EntityRemoved",
            "CountChanged",
            "CountChanged",
            "ValidityChanged",
            "HistoryChanged",
        ]

    def test_unsubscribe(self, small_editor, events):
        """Test an unsubscribed listener hears nothing."""
        small_editor.subscribe(events)
        small_editor.unsubscribe(events)
        small_editor.select_erase_tool()
        assert events == []


class TestMapActions:
    """New map, clear all and fill."""

    def test_new_map_resets_everything(self, editor, events):
        """Test a new map resets the grid, history and tool."""
        editor.select_placement_tool(PACMAN)
        editor.pointer_clicked(1, 1)
        editor.select_placement_tool(WALL)
        editor.subscribe(events)

        editor.new_map()
        assert editor.count(PACMAN) == 0
        assert editor.state == Idle()
        assert not editor.can_undo()
        assert not editor.can_redo()
        assert MapReset() in events

    def test_clear_all(self, editor):
        """Test clear all restores the border and drops history."""
        editor.select_erase_tool()
        editor.pointer_clicked(0, 3)
        editor.clear_all()
        assert editor.kind_at(0, 3) == WALL
        assert not editor.can_undo()

    def test_fill_empty_is_one_step(self, editor):
        """Test fill covers every empty editable cell and undoes in one step."""
        empty_editable = sum(
            1
            for y in range(editor.height)
            for x in range(editor.width)
            if editor.is_editable(x, y) and editor.kind_at(x, y) == EMPTY
        )
        filled = editor.fill_empty()
        assert filled == empty_editable
        assert editor.count(PAC_GUM) == filled

        assert editor.undo()
        assert editor.count(PAC_GUM) == 0
        assert not editor.can_undo()

    def test_fill_skips_ghost_house_interior(self, editor, ghost_house_cells):
        """Test the locked ghost-house interior keeps its empty cells."""
        interior = [
            (x, y) for x, y in ghost_house_cells if editor.kind_at(x, y) == EMPTY
        ]
        assert interior == [(12, 15), (13, 15), (14, 15)]

        editor.fill_empty()
        assert all(editor.kind_at(x, y) == EMPTY for x, y in interior)
        assert editor.count(EMPTY) == len(interior)

    def test_fill_uses_configured_symbol(self, small_editor):
        """Test fill defaults to the kind named by fill_symbol."""
        assert small_editor.fill_empty() == 25
        assert small_editor.count(KIND_B) == 25

    def test_fill_on_full_grid(self, small_editor):
        """Test filling a full grid does nothing."""
        small_editor.fill_empty(KIND_B)
        assert small_editor.fill_empty(KIND_B) == 0

    def test_fill_with_capped_kind_fails(self, small_editor):
        """Test a fill that would exceed a limit is rolled back."""
        assert small_editor.fill_empty(KIND_A) == 0
        assert small_editor.count(KIND_A) == 0
        assert not small_editor.can_undo()

    def test_can_place_more(self, small_editor):
        """Test remaining capacity per kind."""
        assert small_editor.can_place_more(KIND_A)
        small_editor.select_placement_tool(KIND_A)
        small_editor.pointer_clicked(0, 0)
        assert not small_editor.can_place_more(KIND_A)
        assert small_editor.can_place_more(KIND_B)


class TestSave:
    """Validation gate and CSV export."""

    def test_invalid_map_not_saved(self, editor):
        """Test an invalid map writes nothing."""
        assert editor.save() is None
        assert not os.path.exists(editor.config.level_dir)
        assert "Pac-Man: 0/1" in editor.validation_message()

    def test_valid_map_saved(self, editor):
        """Test a valid map is filled and written to the next numbered file."""
        _place_required(editor)
        assert editor.is_valid()
        assert editor.validation_message() == ""

        path = editor.save()
        assert path is not None
        assert os.path.basename(path) == "custom_map_001.csv"
        assert editor.last_saved_path == path
        assert editor.count(PAC_GUM) > 0

    def test_save_fill_is_undoable(self, editor, tmp_path):
        """Test the fill done by save can be undone."""
        _place_required(editor)
        editor.save(str(tmp_path / "out.csv"))
        assert editor.undo()
        assert editor.count(PAC_GUM) == 0
        assert editor.count(PACMAN) == 1

    def test_save_failure_returns_none(self, editor, tmp_path):
        """Test a write error is reported as None."""
        _place_required(editor)
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        assert editor.save(str(blocker / "map.csv")) is None
        assert editor.last_saved_path is None
