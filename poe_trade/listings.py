"""Fetches listing details for a dispatched query."""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

import httpx

from poe_trade.dispatcher import QueryDispatcher
from poe_trade.errors import FetchError, Outcome
from poe_trade.models import Item, League, ListingResult, QueryResult

logger = logging.getLogger(__name__)

# Two pages of ten caps the result at 20 listings whatever ``total`` says.
LISTINGS_PAGE_SIZE = 10
LISTINGS_PAGE_COUNT = 2


class ListingFetcher:
    def __init__(self, client: httpx.AsyncClient, dispatcher: QueryDispatcher) -> None:
        self.client = client
        self.dispatcher = dispatcher

    async def get_listings(
        self, item: Item, league: Optional[League]
    ) -> Optional[QueryResult[ListingResult]]:
        """Query ``item`` and return the first pages of matching listings.

        Returns None only when the query itself fails. Pages that fail are
        left out, so the result can be empty while ``total`` is not.
        """
        dispatched = await self.dispatcher.query(item, league)
        if not dispatched.ok or dispatched.value is None:
            return None
        query = dispatched.value

        pages = await asyncio.gather(
            *(self.fetch_page(query, page) for page in range(LISTINGS_PAGE_COUNT))
        )

        listings: list[ListingResult] = []
        for page in pages:
            if page.ok and page.value is not None:
                listings.extend(page.value.result)

        return QueryResult[ListingResult](
            id=query.id,
            result=listings,
            total=query.total,
            item=item,
            uri=query.uri,
        )

    async def fetch_page(
        self, query: QueryResult[str], page: int = 0
    ) -> Outcome[QueryResult[ListingResult]]:
        """Fetch one page of listing details.

        The page is requested even when its id slice is empty.
        """
        start = page * LISTINGS_PAGE_SIZE
        ids = query.result[start:start + LISTINGS_PAGE_SIZE]
        logger.info(f"Fetching Trade API Listings from Query {query.id} page {page + 1}.")

        try:
            response = await self.client.get(
                "fetch/" + ",".join(ids), params={"query": query.id}
            )
            if not response.is_success:
                logger.warning(f"Listing page {page + 1} error: {response.status_code}")
                return Outcome.failure(
                    FetchError(f"Listing page {page + 1} returned {response.status_code}")
                )
            result = QueryResult[ListingResult].model_validate(response.json())
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"Could not fetch listing page {page + 1}: {e}")
            return Outcome.failure(FetchError(f"Could not fetch listing page {page + 1}"))

        return Outcome.success(result)
