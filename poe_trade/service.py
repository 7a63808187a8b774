"""Trade client service: one instance per host application."""

from __future__ import annotations

import logging
from typing import Optional
from urllib.parse import urljoin

import httpx

from poe_trade.config import Settings, settings as default_settings
from poe_trade.dispatcher import QueryDispatcher
from poe_trade.errors import LeagueNotFoundError, LeagueNotSelectedError, NotReadyError
from poe_trade.listings import ListingFetcher
from poe_trade.models import Item, League, ListingResult, QueryResult, StaticEntry
from poe_trade.store import ReferenceDataStore
from poe_trade.sync import OnReadyCallback, ReferenceDataSynchronizer

logger = logging.getLogger(__name__)


class TradeService:
    """Reference data cache plus query access to the trade API.

    All components share a single ``httpx.AsyncClient``. Pass one in to
    control transport (tests use ``httpx.MockTransport``); a client passed
    in is left open by :meth:`dispose`.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.settings = settings or default_settings
        self._client = client or httpx.AsyncClient(
            base_url=self.settings.api_base_url,
            headers={"User-Agent": self.settings.user_agent},
        )
        self._owns_client = client is None

        self.store = ReferenceDataStore()
        self.synchronizer = ReferenceDataSynchronizer(
            self._client,
            self.store,
            retry_interval=self.settings.retry_interval_seconds,
        )
        self.dispatcher = QueryDispatcher(self._client, self.store, self.settings)
        self.listings = ListingFetcher(self._client, self.dispatcher)

        self.selected_league: Optional[League] = None

    @property
    def is_ready(self) -> bool:
        return self.store.is_ready()

    def on_ready(self, callback: OnReadyCallback) -> None:
        self.synchronizer.on_ready(callback)

    async def initialize(self) -> None:
        await self.synchronizer.initialize()

    async def dispose(self) -> None:
        """Stop retries, drop all reference data and release the transport."""
        await self.synchronizer.reset()
        self.selected_league = None
        if self._owns_client and not self._client.is_closed:
            await self._client.aclose()

    def select_league(self, league_id: str) -> League:
        if not self.is_ready:
            raise NotReadyError("Trade data is not ready yet")
        league = self.store.find_league(league_id)
        if league is None:
            raise LeagueNotFoundError(f"Unknown league {league_id!r}")
        self.selected_league = league
        logger.info(f"Selected league {league.id}")
        return league

    def _require_league(self) -> League:
        if not self.is_ready:
            raise NotReadyError("Trade data is not ready yet")
        if self.selected_league is None:
            raise LeagueNotSelectedError("Select a league before querying")
        return self.selected_league

    async def query(self, item: Item) -> Optional[QueryResult[str]]:
        outcome = await self.dispatcher.query(item, self._require_league())
        return outcome.value if outcome.ok else None

    async def get_listings(self, item: Item) -> Optional[QueryResult[ListingResult]]:
        return await self.listings.get_listings(item, self._require_league())

    def static_image_url(self, entry: StaticEntry) -> Optional[str]:
        if not entry.image:
            return None
        return urljoin(self.settings.cdn_base_url, entry.image.lstrip("/"))


async def init(
    settings: Optional[Settings] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> TradeService:
    """Create a service and run the first synchronization."""
    service = TradeService(settings, client=client)
    await service.initialize()
    return service


async def dispose(service: TradeService) -> None:
    await service.dispose()
