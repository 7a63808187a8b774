"""In-memory holder for the trade API reference data."""

from __future__ import annotations

from enum import Enum
from typing import Any, Mapping, Optional

from poe_trade.models import (
    AttributeCategory,
    ItemCategory,
    League,
    StaticEntry,
    StaticItemCategory,
    TradeModel,
)


_DISPLAY_NAMES = {
    "leagues": "Leagues",
    "static": "Static item categories",
    "stats": "Attribute categories",
    "items": "Item categories",
}

_MODELS: dict[str, type[TradeModel]] = {
    "leagues": League,
    "static": StaticItemCategory,
    "stats": AttributeCategory,
    "items": ItemCategory,
}


class ReferenceKind(Enum):
    """Reference collections, valued by their ``data/`` endpoint name."""

    LEAGUES = "leagues"
    STATIC_ITEM_CATEGORIES = "static"
    ATTRIBUTE_CATEGORIES = "stats"
    ITEM_CATEGORIES = "items"

    @property
    def path(self) -> str:
        return f"data/{self.value}"

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self.value]

    @property
    def model(self) -> type[TradeModel]:
        return _MODELS[self.value]


class ReferenceDataStore:
    """Owns the four reference collections and the readiness flag.

    Only the synchronizer writes here. Every write is a plain synchronous
    method so other coroutines never observe a half-applied update.
    """

    def __init__(self) -> None:
        self._data: dict[ReferenceKind, list[Any]] = {}
        self._ready = False

    def set(self, kind: ReferenceKind, data: list[Any]) -> None:
        self._data[kind] = data

    def get(self, kind: ReferenceKind) -> Optional[list[Any]]:
        return self._data.get(kind)

    def commit(self, dataset: Mapping[ReferenceKind, list[Any]]) -> None:
        """Store a complete data set and mark the store ready."""
        self._data = dict(dataset)
        self._ready = all(self._data.get(kind) is not None for kind in ReferenceKind)

    def reset(self) -> None:
        self._data = {}
        self._ready = False

    def is_ready(self) -> bool:
        return self._ready

    @property
    def leagues(self) -> Optional[list[League]]:
        return self.get(ReferenceKind.LEAGUES)

    @property
    def static_item_categories(self) -> Optional[list[StaticItemCategory]]:
        return self.get(ReferenceKind.STATIC_ITEM_CATEGORIES)

    @property
    def attribute_categories(self) -> Optional[list[AttributeCategory]]:
        return self.get(ReferenceKind.ATTRIBUTE_CATEGORIES)

    @property
    def item_categories(self) -> Optional[list[ItemCategory]]:
        return self.get(ReferenceKind.ITEM_CATEGORIES)

    def find_league(self, league_id: str) -> Optional[League]:
        for league in self.leagues or []:
            if league.id == league_id:
                return league
        return None

    def find_static_entry(self, text: str) -> Optional[StaticEntry]:
        """Look up a static entry (currency, fragments, ...) by its display text."""
        wanted = text.strip().lower()
        for category in self.static_item_categories or []:
            for entry in category.entries:
                if entry.text.lower() == wanted:
                    return entry
        return None
