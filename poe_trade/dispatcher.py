"""Submits search and exchange queries to the trade API."""

from __future__ import annotations

import logging
from typing import Optional

import httpx

from poe_trade.config import Settings
from poe_trade.errors import DispatchError, LeagueNotSelectedError, Outcome, QueryBuildError
from poe_trade.models import Item, League, QueryResult
from poe_trade.queries import build_request, protocol_for
from poe_trade.store import ReferenceDataStore

logger = logging.getLogger(__name__)


class QueryDispatcher:
    """Turns an item into a query token and a shareable trade site link."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        store: ReferenceDataStore,
        settings: Settings,
    ) -> None:
        self.client = client
        self.store = store
        self.settings = settings

    async def query(
        self, item: Item, league: Optional[League]
    ) -> Outcome[QueryResult[str]]:
        """Submit ``item`` to the search or exchange endpoint of ``league``.

        Raises:
            LeagueNotSelectedError: if ``league`` is None.
        """
        if league is None:
            raise LeagueNotSelectedError("Select a league before querying")

        protocol = protocol_for(item)
        logger.info("Querying Trade API.")

        try:
            body = build_request(item, protocol, self.store)
        except QueryBuildError as e:
            logger.error(f"Could not build {protocol.value} query: {e}")
            return Outcome.failure(e)

        try:
            response = await self.client.post(
                protocol.post_path(league.id), json=body.to_wire()
            )
        except httpx.HTTPError as e:
            logger.error(f"Trade API {protocol.value} request failed: {e}")
            return Outcome.failure(DispatchError(f"{protocol.value} request failed"))

        if not response.is_success:
            logger.error(f"Trade API {protocol.value} error: {response.status_code}")
            return Outcome.failure(
                DispatchError(f"{protocol.value} returned {response.status_code}")
            )

        try:
            result = QueryResult[str].model_validate(response.json())
        except ValueError as e:
            logger.error(f"Unreadable {protocol.value} response: {e}")
            return Outcome.failure(DispatchError(f"Unreadable {protocol.value} response"))

        if not result.id:
            logger.error(f"Trade API {protocol.value} response has no query id")
            return Outcome.failure(DispatchError(f"{protocol.value} returned no query id"))

        uri = f"{protocol.base_url(self.settings)}{league.id}/{result.id}"
        return Outcome.success(result.model_copy(update={"uri": uri, "item": item}))
