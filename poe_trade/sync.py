"""Reference data synchronizer: fetch everything, retry until it all arrives."""

from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import Any, Awaitable, Callable, Optional

import httpx

from poe_trade.errors import FetchError, Outcome
from poe_trade.models import League, QueryResult
from poe_trade.store import ReferenceDataStore, ReferenceKind

logger = logging.getLogger(__name__)

DEFAULT_RETRY_INTERVAL = 60.0

OnReadyCallback = Callable[[list[League]], Awaitable[None]]


class SyncState(Enum):
    """Synchronizer states."""

    IDLE = "idle"
    FETCHING = "fetching"
    READY = "ready"
    FAILED = "failed"


class ReferenceDataSynchronizer:
    """Populates a :class:`ReferenceDataStore` from the ``data/`` endpoints.

    All four collections are fetched concurrently. If any of them fails the
    whole batch is thrown away, the store is reset and a background task
    retries from scratch every ``retry_interval`` seconds until a batch
    succeeds or :meth:`stop` is called.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        store: ReferenceDataStore,
        retry_interval: float = DEFAULT_RETRY_INTERVAL,
    ) -> None:
        self.client = client
        self.store = store
        self.retry_interval = retry_interval

        self.state = SyncState.IDLE

        self._retry_task: Optional[asyncio.Task[None]] = None
        self._batch_task: Optional[asyncio.Task[list[Outcome[list[Any]]]]] = None
        self._generation = 0
        self._stop_event = asyncio.Event()
        self._on_ready: list[OnReadyCallback] = []

    @property
    def is_fetching(self) -> bool:
        return self.state is SyncState.FETCHING

    @property
    def retry_scheduled(self) -> bool:
        return self._retry_task is not None and not self._retry_task.done()

    def on_ready(self, callback: OnReadyCallback) -> None:
        """Register a callback invoked with the leagues once data is ready."""
        self._on_ready.append(callback)

    async def initialize(self) -> None:
        """Run one synchronization, scheduling retries if it fails.

        Does nothing while a batch is in flight or once data is ready.
        """
        if self.state in (SyncState.FETCHING, SyncState.READY):
            logger.debug(f"Synchronization skipped, state is {self.state.value}")
            return

        if not await self._synchronize():
            self._schedule_retry()

    async def fetch(self, kind: ReferenceKind) -> Outcome[list[Any]]:
        """Fetch one reference collection. Never raises for transient errors."""
        logger.info(f"Fetching {kind.display_name}.")
        try:
            response = await self.client.get(kind.path)
            response.raise_for_status()
            envelope = QueryResult[kind.model].model_validate(response.json())
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"Could not fetch {kind.display_name}: {e}")
            return Outcome.failure(FetchError(f"Could not fetch {kind.display_name}"))

        logger.info(f"{len(envelope.result):<3} {kind.display_name} fetched.")
        return Outcome.success(envelope.result)

    async def _fetch_all(self, kinds: list[ReferenceKind]) -> list[Outcome[list[Any]]]:
        return list(await asyncio.gather(*(self.fetch(kind) for kind in kinds)))

    async def _synchronize(self) -> bool:
        """Run one batch. Returns False only when it failed and should be retried."""
        generation = self._generation
        self.state = SyncState.FETCHING
        logger.info("Fetching Path of Exile trade data.")

        kinds = list(ReferenceKind)
        batch = asyncio.create_task(self._fetch_all(kinds))
        self._batch_task = batch
        try:
            outcomes = await batch
        except asyncio.CancelledError:
            if generation == self._generation:
                raise
            outcomes = None
        finally:
            if self._batch_task is batch:
                self._batch_task = None

        # A reset happened while the batch was in flight.
        if outcomes is None or generation != self._generation:
            logger.info("Discarding trade data fetched before reset.")
            return True

        failed = [kind for kind, outcome in zip(kinds, outcomes) if not outcome.ok]
        if failed:
            self.store.reset()
            self.state = SyncState.FAILED
            logger.warning(
                "Trade data incomplete, missing: "
                + ", ".join(kind.display_name for kind in failed)
            )
            return False

        self.store.commit({kind: outcome.value for kind, outcome in zip(kinds, outcomes)})
        self.state = SyncState.READY
        logger.info("Path of Exile trade data fetched.")
        await self._emit_ready()
        return True

    async def _emit_ready(self) -> None:
        leagues = self.store.leagues or []
        for callback in self._on_ready:
            try:
                await callback(leagues)
            except Exception as e:
                logger.error(f"Error in ready callback: {e}", exc_info=True)

    def _schedule_retry(self) -> None:
        if self.retry_scheduled:
            return
        logger.info(f"Retrying every {self.retry_interval:g} seconds.")
        self._stop_event.clear()
        self._retry_task = asyncio.create_task(self._retry_loop())

    async def _retry_loop(self) -> None:
        while not self._stop_event.is_set():
            try:
                await asyncio.wait_for(
                    self._stop_event.wait(),
                    timeout=self.retry_interval,
                )
                break  # Stop event was set
            except asyncio.TimeoutError:
                pass

            if self.state is SyncState.READY:
                break
            if self.is_fetching:
                logger.debug("Synchronization still in flight, deferring retry")
                continue
            if await self._synchronize():
                break

    async def stop(self) -> None:
        """Halt the retry loop, waiting for it to finish."""
        self._stop_event.set()
        task, self._retry_task = self._retry_task, None
        if task is None or task is asyncio.current_task():
            return
        try:
            await asyncio.wait_for(task, timeout=10.0)
        except asyncio.TimeoutError:
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass

    async def reset(self) -> None:
        """Stop retrying, abandon any batch in flight, clear the store and return to idle."""
        self._generation += 1
        self._stop_event.set()

        batch, self._batch_task = self._batch_task, None
        if batch is not None and not batch.done():
            batch.cancel()
            try:
                await batch
            except asyncio.CancelledError:
                pass

        await self.stop()
        self.store.reset()
        self.state = SyncState.IDLE
