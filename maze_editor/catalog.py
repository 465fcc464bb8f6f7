"""
Entity catalog for the Maze Editor.
Lists every placeable kind, its placement rules and its palette category.
"""

from typing import Dict, Iterator, List, Optional, Sequence

from .models import EMPTY, EntityKind

PACMAN = EntityKind("pacman", "P", "Pac-Man", is_required=True, max_count=1)
BLINKY = EntityKind("blinky", "B", "Blinky", is_required=True, max_count=1)
PINKY = EntityKind("pinky", "K", "Pinky", is_required=True, max_count=1)
INKY = EntityKind("inky", "I", "Inky", is_required=True, max_count=1)
CLYDE = EntityKind("clyde", "C", "Clyde", is_required=True, max_count=1)
WALL = EntityKind("wall", "x", "Wall")
GHOST_HOUSE_WALL = EntityKind("ghost_house_wall", "-", "Ghost House Door")
SUPER_PAC_GUM = EntityKind("super_pac_gum", "o", "Super Pac-Gum")
PAC_GUM = EntityKind("pac_gum", ".", "Pac-Gum")

CATEGORIES = {
    "REQUIRED": ["pacman", "blinky", "pinky", "inky", "clyde"],
    "FREE": ["wall", "super_pac_gum"],
}


class EntityCatalog:
    """Fixed, ordered registry of entity kinds.

    ``EMPTY`` is always present and always first, whether or not it was
    passed in.
    """

    def __init__(
        self,
        kinds: Sequence[EntityKind],
        categories: Optional[Dict[str, List[str]]] = None,
    ):
        ordered = [EMPTY] + [k for k in kinds if k != EMPTY]
        self._kinds = tuple(ordered)
        self._by_id: Dict[str, EntityKind] = {}
        self._by_symbol: Dict[str, EntityKind] = {}
        for kind in self._kinds:
            if kind.id in self._by_id:
                raise ValueError(f"Duplicate entity id: {kind.id!r}")
            if kind.symbol in self._by_symbol:
                raise ValueError(f"Duplicate entity symbol: {kind.symbol!r}")
            if kind.max_count < 0:
                raise ValueError(f"Negative max_count for {kind.id!r}")
            self._by_id[kind.id] = kind
            self._by_symbol[kind.symbol] = kind

        self._categories = {
            name: [self._by_id[i] for i in ids]
            for name, ids in (categories or {}).items()
        }

    def kinds(self) -> Sequence[EntityKind]:
        return self._kinds

    def required_kinds(self) -> List[EntityKind]:
        return [k for k in self._kinds if k.is_capped]

    def is_required(self, kind: EntityKind) -> bool:
        return kind.is_required

    def max_count(self, kind: EntityKind) -> int:
        return kind.max_count

    def get(self, kind_id: str) -> EntityKind:
        return self._by_id[kind_id]

    def by_symbol(self, symbol: str) -> EntityKind:
        return self._by_symbol[symbol]

    def categories(self) -> List[str]:
        return list(self._categories)

    def category(self, name: str) -> List[EntityKind]:
        return list(self._categories.get(name, []))

    def __iter__(self) -> Iterator[EntityKind]:
        return iter(self._kinds)

    def __contains__(self, kind: object) -> bool:
        return kind in self._kinds

    def __len__(self) -> int:
        return len(self._kinds)


def default_catalog() -> EntityCatalog:
    return EntityCatalog(
        [
            PACMAN,
            BLINKY,
            PINKY,
            INKY,
            CLYDE,
            WALL,
            GHOST_HOUSE_WALL,
            SUPER_PAC_GUM,
            PAC_GUM,
        ],
        CATEGORIES,
    )
