"""
Grid data model for the Maze Editor.

Owns the cell array, the editable mask and the running per-kind counts.
Every successful mutation publishes, in order: the placement/removal event,
the count of the written kind, the count of the displaced kind (when it
differs) and the freshly recomputed validity.
"""

import logging
from collections import Counter
from typing import Dict, List, Optional, Tuple

import numpy as np

from .catalog import EntityCatalog
from .config import ConfigError, EditorConfig
from .events import (
    CountChanged,
    EntityPlaced,
    EntityRemoved,
    Listener,
    MapReset,
    Notifier,
    ValidityChanged,
)
from .models import EMPTY, EditFailure, EntityKind, LockedRegion

logger = logging.getLogger(__name__)


class OutOfRangeError(IndexError):
    """Raised when a cell is queried outside the grid."""

    def __init__(self, x: int, y: int, width: int, height: int):
        super().__init__(f"Cell ({x}, {y}) is outside the {width}x{height} grid")
        self.x = x
        self.y = y


class GridModel:
    def __init__(self, catalog: EntityCatalog, config: Optional[EditorConfig] = None):
        self.catalog = catalog
        self.config = config or EditorConfig()
        self.width = self.config.width
        self.height = self.config.height
        self.locked_region: Optional[LockedRegion] = self.config.locked_region

        try:
            self.border_kind = (
                catalog.by_symbol(self.config.border_symbol)
                if self.config.border
                else None
            )
            self._stamp = [
                [catalog.by_symbol(ch) for ch in row] for row in self.config.locked_stamp
            ]
            self.fill_kind = catalog.by_symbol(self.config.fill_symbol)
        except KeyError as e:
            raise ConfigError(f"Unknown entity symbol in config: {e}") from e

        # Indexed [y, x]
        self._cells = np.empty((self.height, self.width), dtype=object)
        self._editable = np.ones((self.height, self.width), dtype=bool)
        self._counts: Dict[EntityKind, int] = {}
        self._notifier = Notifier()

        self.reset()

    # ========== Observers ==========

    def subscribe(self, listener: Listener):
        self._notifier.subscribe(listener)

    def unsubscribe(self, listener: Listener):
        self._notifier.unsubscribe(listener)

    # ========== Layout ==========

    def reset(self):
        """Restore the canonical layout: border, locked stamp, fresh counts."""
        self._cells.fill(EMPTY)
        self._editable.fill(True)

        if self.border_kind is not None:
            self._cells[0, :] = self.border_kind
            self._cells[-1, :] = self.border_kind
            self._cells[:, 0] = self.border_kind
            self._cells[:, -1] = self.border_kind

        region = self.locked_region
        if region is not None:
            for dy, row in enumerate(self._stamp):
                for dx, kind in enumerate(row):
                    self._cells[region.y + dy, region.x + dx] = kind
            self._editable[
                region.y : region.y + region.height, region.x : region.x + region.width
            ] = False

        self._recount()
        logger.info("Map reset to %dx%d canonical layout", self.width, self.height)
        self._notifier.publish(MapReset())

    def _recount(self):
        self._counts = {kind: 0 for kind in self.catalog}
        self._counts.update(Counter(self._cells.ravel().tolist()))

    # ========== Queries ==========

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def kind_at(self, x: int, y: int) -> EntityKind:
        if not self.in_bounds(x, y):
            raise OutOfRangeError(x, y, self.width, self.height)
        return self._cells[y, x]

    def is_editable(self, x: int, y: int) -> bool:
        if not self.in_bounds(x, y):
            return False
        return bool(self._editable[y, x])

    def is_locked_area(self, x: int, y: int) -> bool:
        return self.locked_region is not None and self.locked_region.contains(x, y)

    def count(self, kind: EntityKind) -> int:
        return self._counts.get(kind, 0)

    def counts(self) -> Dict[EntityKind, int]:
        return dict(self._counts)

    def is_valid(self) -> bool:
        return all(
            self.count(kind) == kind.max_count for kind in self.catalog.required_kinds()
        )

    def missing_required(self) -> List[Tuple[EntityKind, int]]:
        """Required kinds whose count is off, with their current count."""
        return [
            (kind, self.count(kind))
            for kind in self.catalog.required_kinds()
            if self.count(kind) != kind.max_count
        ]

    def at_capacity(self, kind: EntityKind) -> bool:
        return kind.is_capped and self.count(kind) >= kind.max_count

    def snapshot(self) -> np.ndarray:
        """Read-only copy of the grid, indexed [y, x]."""
        snap = self._cells.copy()
        snap.flags.writeable = False
        return snap

    # ========== Mutations ==========

    def place_failure(self, x: int, y: int, kind: EntityKind) -> Optional[EditFailure]:
        if not self.in_bounds(x, y):
            return EditFailure.OUT_OF_RANGE
        if not self._editable[y, x]:
            return EditFailure.NOT_EDITABLE
        # Overwriting a cell that already holds the kind adds nothing
        if self.at_capacity(kind) and self._cells[y, x] != kind:
            return EditFailure.CAPACITY_EXCEEDED
        return None

    def erase_failure(self, x: int, y: int) -> Optional[EditFailure]:
        if not self.in_bounds(x, y):
            return EditFailure.OUT_OF_RANGE
        if not self._editable[y, x]:
            return EditFailure.NOT_EDITABLE
        if self._cells[y, x] == EMPTY:
            return EditFailure.ALREADY_EMPTY
        return None

    def place(self, x: int, y: int, kind: EntityKind) -> bool:
        failure = self.place_failure(x, y, kind)
        if failure is not None:
            logger.debug("Rejected place of %s at (%d, %d): %s", kind.id, x, y, failure.value)
            return False

        previous = self._cells[y, x]
        self._cells[y, x] = kind
        self._decrement(previous)
        self._increment(kind)

        self._notifier.publish(EntityPlaced(x, y, kind))
        self._notifier.publish(CountChanged(kind, self.count(kind)))
        if previous != kind:
            self._notifier.publish(CountChanged(previous, self.count(previous)))
        self._notifier.publish(ValidityChanged(self.is_valid()))
        return True

    def erase(self, x: int, y: int) -> bool:
        failure = self.erase_failure(x, y)
        if failure is not None:
            logger.debug("Rejected erase at (%d, %d): %s", x, y, failure.value)
            return False

        previous = self._cells[y, x]
        self._cells[y, x] = EMPTY
        self._decrement(previous)
        self._increment(EMPTY)

        self._notifier.publish(EntityRemoved(x, y))
        self._notifier.publish(CountChanged(EMPTY, self.count(EMPTY)))
        self._notifier.publish(CountChanged(previous, self.count(previous)))
        self._notifier.publish(ValidityChanged(self.is_valid()))
        return True

    def _increment(self, kind: EntityKind):
        self._counts[kind] = self._counts.get(kind, 0) + 1

    def _decrement(self, kind: EntityKind):
        count = self._counts.get(kind, 0)
        if count > 0:
            self._counts[kind] = count - 1
