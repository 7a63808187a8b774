from __future__ import annotations

from typing import Any, Callable

import httpx
import pytest

from poe_trade.config import Settings
from poe_trade.store import ReferenceDataStore, ReferenceKind

API_BASE = "https://trade.test/api/trade/"

REFERENCE_PAYLOADS: dict[str, dict[str, Any]] = {
    "leagues": {
        "result": [
            {"id": "Standard", "text": "Standard"},
            {"id": "Hardcore", "text": "Hardcore"},
            {"id": "Settlers", "text": "Settlers"},
        ]
    },
    "static": {
        "result": [
            {
                "id": "Currency",
                "label": "Currency",
                "entries": [
                    {
                        "id": "exalted",
                        "text": "Exalted Orb",
                        "image": "/image/Art/2DItems/Currency/CurrencyAddModToRare.png",
                    },
                    {"id": "chaos", "text": "Chaos Orb"},
                ],
            }
        ]
    },
    "stats": {
        "result": [
            {
                "label": "Explicit",
                "entries": [
                    {
                        "id": "explicit.stat_3299347043",
                        "text": "+# to maximum Life",
                        "type": "explicit",
                    }
                ],
            }
        ]
    },
    "items": {
        "result": [
            {
                "label": "Armour",
                "entries": [
                    {
                        "name": "Kaom's Heart",
                        "type": "Glorious Plate",
                        "text": "Kaom's Heart Glorious Plate",
                    }
                ],
            }
        ]
    },
}


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        api_base_url=API_BASE,
        search_base_url="https://trade.test/trade/search/",
        exchange_base_url="https://trade.test/trade/exchange/",
        cdn_base_url="https://cdn.test/",
        retry_interval_seconds=0.01,
    )


@pytest.fixture
def make_client() -> Callable[[Callable], httpx.AsyncClient]:
    def factory(handler: Callable) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url=API_BASE)

    return factory


@pytest.fixture
def reference_handler() -> Callable[..., Callable[[httpx.Request], httpx.Response]]:
    """Serve the ``data/`` endpoints, failing the named ones with a 500.

    Requested endpoint names are appended to ``calls`` when given.
    """

    def build(failing: tuple[str, ...] = (), calls: list[str] | None = None):
        def handler(request: httpx.Request) -> httpx.Response:
            name = request.url.path.rsplit("/", 1)[-1]
            if calls is not None:
                calls.append(name)
            if name in failing:
                return httpx.Response(500)
            return httpx.Response(200, json=REFERENCE_PAYLOADS[name])

        return handler

    return build


@pytest.fixture
def reference_data()-> dict[ReferenceKind, list[Any]]:
    return {
        kind: [
            kind.model.model_validate(record)
            for record in REFERENCE_PAYLOADS[kind.value]["result"]
        ]
        for kind in ReferenceKind
    }


@pytest.fixture
def ready_store(reference_data) -> ReferenceDataStore:
    store = ReferenceDataStore()
    store.commit(reference_data)
    return store


@pytest.fixture
def listing_payload() -> Callable[[list[str]], dict[str, Any]]:
    """Build a ``fetch/`` response body for the given listing ids."""

    def build(ids: list[str]) -> dict[str, Any]:
        return {
            "result": [
                {
                    "id": listing_id,
                    "listing": {"price": {"amount": 1, "currency": "chaos"}},
                    "item": {"typeLine": "Exalted Orb"},
                }
                for listing_id in ids
            ]
        }

    return build
