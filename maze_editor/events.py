"""
Change notifications published by the grid and the editor.

Observers subscribe a single callable and receive event values; they are
called synchronously, in subscription order.
"""

from dataclasses import dataclass
from typing import Callable, List, Union

from .models import EntityKind


@dataclass(frozen=True)
class EntityPlaced:
    x: int
    y: int
    kind: EntityKind


@dataclass(frozen=True)
class EntityRemoved:
    x: int
    y: int


@dataclass(frozen=True)
class CountChanged:
    kind: EntityKind
    count: int


@dataclass(frozen=True)
class ValidityChanged:
    is_valid: bool


@dataclass(frozen=True)
class MapReset:
    pass


@dataclass(frozen=True)
class ToolChanged:
    state: object  # tools.ToolState


@dataclass(frozen=True)
class HistoryChanged:
    can_undo: bool
    can_redo: bool


GridEvent = Union[EntityPlaced, EntityRemoved, CountChanged, ValidityChanged, MapReset]
EditorEvent = Union[GridEvent, ToolChanged, HistoryChanged]
Listener = Callable[[EditorEvent], None]


class Notifier:
    def __init__(self):
        self._listeners: List[Listener] = []

    def subscribe(self, listener: Listener):
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: Listener):
        if listener in self._listeners:
            self._listeners.remove(listener)

    def publish(self, event: EditorEvent):
        # Copy so a listener may unsubscribe itself mid-broadcast
        for listener in list(self._listeners):
            listener(event)
