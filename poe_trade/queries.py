"""Protocol selection and request bodies for trade queries."""

from __future__ import annotations

from enum import Enum
from typing import Union

from poe_trade.config import Settings
from poe_trade.errors import QueryBuildError
from poe_trade.models import (
    BulkQueryRequest,
    CurrencyItem,
    Exchange,
    Item,
    MiscFilterSet,
    MiscFilters,
    OptionFilter,
    QueryRequest,
    Rarity,
    RegularItem,
    SearchFilters,
    SearchQuery,
    TypeFilterSet,
    TypeFilters,
)
from poe_trade.store import ReferenceDataStore

DEFAULT_HAVE_CURRENCY = "chaos"


class TradeProtocol(Enum):
    """Request protocol, valued by its POST path segment."""

    SEARCH = "search"
    EXCHANGE = "exchange"

    def post_path(self, league_id: str) -> str:
        return f"{self.value}/{league_id}"

    def base_url(self, settings: Settings) -> str:
        # The shareable site URLs are not the API paths.
        if self is TradeProtocol.EXCHANGE:
            return settings.exchange_base_url
        return settings.search_base_url


def protocol_for(item: Item) -> TradeProtocol:
    """Currency goes through bulk exchange; every other variant is a search."""
    if isinstance(item, CurrencyItem):
        return TradeProtocol.EXCHANGE
    return TradeProtocol.SEARCH


def build_search_request(item: Item) -> QueryRequest:
    query = SearchQuery(type=item.type)
    if isinstance(item, RegularItem):
        if item.rarity is Rarity.UNIQUE:
            query.name = item.name
        filters = SearchFilters(
            type_filters=TypeFilters(
                filters=TypeFilterSet(rarity=OptionFilter(option=item.rarity.value))
            )
        )
        if item.corrupted is not None:
            filters.misc_filters = MiscFilters(
                filters=MiscFilterSet(
                    corrupted=OptionFilter(option=str(item.corrupted).lower())
                )
            )
        query.filters = filters
    return QueryRequest(query=query)


def build_exchange_request(
    item: CurrencyItem, store: ReferenceDataStore
) -> BulkQueryRequest:
    entry = store.find_static_entry(item.name)
    if entry is None:
        raise QueryBuildError(f"No exchange id known for {item.name!r}")
    return BulkQueryRequest(
        exchange=Exchange(want=[entry.id], have=[DEFAULT_HAVE_CURRENCY])
    )


def build_request(
    item: Item, protocol: TradeProtocol, store: ReferenceDataStore
) -> Union[QueryRequest, BulkQueryRequest]:
    if protocol is TradeProtocol.EXCHANGE:
        if not isinstance(item, CurrencyItem):
            raise QueryBuildError(f"{type(item).__name__} cannot be bulk exchanged")
        return build_exchange_request(item, store)
    return build_search_request(item)
