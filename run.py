#!/usr/bin/env python3
"""Startup script for the trade client.

Usage: run.py [CURRENCY NAME]

Synchronizes reference data (retrying until the API answers), selects the
configured league and, when a currency name is given, prints its cheapest
bulk exchange listings.
"""

import asyncio
import sys
import logging

# Configure logging before imports
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    handlers=[
        logging.StreamHandler(sys.stdout),
        logging.FileHandler("poe-trade.log", encoding="utf-8"),
    ],
)
logger = logging.getLogger("poe_trade")


async def run(currency_name: str | None) -> None:
    from poe_trade import CurrencyItem, League, TradeService

    service = TradeService()
    ready = asyncio.Event()

    async def announce(leagues: list[League]) -> None:
        logger.info(f"Leagues: {', '.join(league.id for league in leagues)}")
        logger.info("Trade client is ready.")
        ready.set()

    service.on_ready(announce)
    try:
        await service.initialize()
        await ready.wait()

        leagues = service.store.leagues or []
        league_id = service.settings.league or (leagues[0].id if leagues else None)
        if league_id is None:
            logger.error("The trade API returned no leagues")
            return
        service.select_league(league_id)

        if currency_name:
            listings = await service.get_listings(CurrencyItem(name=currency_name))
            if listings is None:
                logger.error(f"Query for {currency_name} failed")
                return
            logger.info(f"{len(listings.result)} of {listings.total} listings: {listings.uri}")
            for listing in listings.result:
                price = listing.listing.get("price", {})
                logger.info(f"  {listing.id}: {price.get('amount')} {price.get('currency')}")
    finally:
        await service.dispose()


def main() -> int:
    """Main entry point."""
    logger.info("Starting trade client...")

    from pydantic import ValidationError

    try:
        from poe_trade.config import settings
    except ValidationError as e:
        for error in e.errors():
            logger.error(f"Config error: {'.'.join(map(str, error['loc']))}: {error['msg']}")
        logger.error("Please check your .env file")
        return 1

    logger.info(f"API: {settings.api_base_url}")
    logger.info(f"Retry interval: {settings.retry_interval_seconds:g}s")

    currency_name = " ".join(sys.argv[1:]) or None

    try:
        asyncio.run(run(currency_name))
    except KeyboardInterrupt:
        logger.info("Shutting down...")
    except Exception as e:
        logger.exception(f"Fatal error: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
