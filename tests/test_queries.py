import pytest

from poe_trade.errors import QueryBuildError
from poe_trade.models import CurrencyItem, QueryResult, Rarity, RegularItem
from poe_trade.queries import (
    TradeProtocol,
    build_exchange_request,
    build_request,
    build_search_request,
    protocol_for,
)


def test_protocol_for_variants() -> None:
    assert protocol_for(CurrencyItem(name="Chaos Orb")) is TradeProtocol.EXCHANGE
    assert protocol_for(RegularItem(name="Chaos Orb")) is TradeProtocol.SEARCH


def test_post_paths_and_site_urls(settings) -> None:
    assert TradeProtocol.EXCHANGE.post_path("Standard") == "exchange/Standard"
    assert TradeProtocol.SEARCH.post_path("Hardcore") == "search/Hardcore"
    assert TradeProtocol.EXCHANGE.base_url(settings) == "https://trade.test/trade/exchange/"
    assert TradeProtocol.SEARCH.base_url(settings) == "https://trade.test/trade/search/"


def test_unique_search_body_is_camel_case_without_nulls() -> None:
    item = RegularItem(name="Kaom's Heart", type="Glorious Plate", rarity=Rarity.UNIQUE)

    assert build_search_request(item).to_wire() == {
        "query": {
            "status": {"option": "online"},
            "name": "Kaom's Heart",
            "type": "Glorious Plate",
            "filters": {"typeFilters": {"filters": {"rarity": {"option": "unique"}}}},
        },
        "sort": {"price": "asc"},
    }


def test_rare_search_body_uses_base_type_only() -> None:
    item = RegularItem(name="Doom Knuckle", type="Titan Gauntlets", rarity=Rarity.RARE, corrupted=True)

    query = build_search_request(item).to_wire()["query"]

    assert "name" not in query
    assert query["type"] == "Titan Gauntlets"
    assert query["filters"]["miscFilters"] == {"filters": {"corrupted": {"option": "true"}}}


def test_exchange_body(ready_store) -> None:
    body = build_exchange_request(CurrencyItem(name="Exalted Orb"), ready_store)
    assert body.to_wire() == {
        "exchange": {"status": {"option": "online"}, "want": ["exalted"], "have": ["chaos"]}
    }


def test_exchange_body_requires_known_currency(ready_store) -> None:
    with pytest.raises(QueryBuildError):
        build_request(CurrencyItem(name="Unknown Shard"), TradeProtocol.EXCHANGE, ready_store)


def test_query_result_is_immutable() -> None:
    result = QueryResult[str](id="abc123", result=["a"], total=1)
    with pytest.raises(ValueError):
        result.total = 2
    copy = result.model_copy(update={"uri": "https://trade.test/x"})
    assert result.uri is None
    assert copy.uri == "https://trade.test/x"
