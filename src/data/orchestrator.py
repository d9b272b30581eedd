"""Multi-source fetch with caching, source health tracking and a sample-data floor."""
import asyncio
import random
import time
from datetime import datetime
from typing import Awaitable, Callable, List, Optional

from src.config import CACHE_DURATION, HEALTH_RESET_AFTER, SOURCE_MAX_ATTEMPTS
from src.constants import MOCK_SOURCE
from src.data.mock import minute_of_day, synthetic_coins
from src.data.models import CacheEntry, Coin, FetchResult, OrchestratorState
from src.data.relay import ProxyRelay
from src.data.retry import with_retry
from src.data.sources import SourceAdapter, default_sources
from src.data.transport import HttpTransport
from src.utils import setup_logger

logger = setup_logger(__name__)


class FetchOrchestrator:
    """
    Tries each source in priority order and always returns something.

    Not safe for concurrent use: the caller must keep at most one fetch in
    flight (see DashboardController), which is what lets the state below go
    without a lock.
    """

    def __init__(
        self,
        sources: List[SourceAdapter],
        state: Optional[OrchestratorState] = None,
        cache_duration: float = CACHE_DURATION,
        health_reset_after: float = HEALTH_RESET_AFTER,
        max_attempts: int = SOURCE_MAX_ATTEMPTS,
        clock: Callable[[], float] = time.monotonic,
        wall_clock: Callable[[], datetime] = datetime.now,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        rng: Callable[[], float] = random.random,
    ):
        self.sources = list(sources)
        self.state = state or OrchestratorState()
        self.cache_duration = cache_duration
        self.health_reset_after = health_reset_after
        self.max_attempts = max_attempts
        self.clock = clock
        self.wall_clock = wall_clock
        self.sleep = sleep
        self.rng = rng

    @property
    def last_result(self) -> Optional[FetchResult]:
        entry = self.state.cache
        return entry.result if entry else None

    def _cached(self, now: float) -> Optional[FetchResult]:
        entry = self.state.cache
        if entry is None or entry.age(now) >= self.cache_duration:
            return None
        logger.info(f"Using cached data from {entry.result.source} (age: {entry.age(now):.0f}s)")
        return FetchResult(
            coins=entry.result.coins,
            source=entry.result.source,
            fetched_at=entry.result.fetched_at,
            is_fallback=entry.result.is_fallback,
            from_cache=True,
        )

    def _store(self, result: FetchResult, now: float) -> FetchResult:
        self.state.cache = CacheEntry(result=result, stored_at=now)
        return result

    async def _try_source(self, source: SourceAdapter) -> List[Coin]:
        return await with_retry(
            source.fetch,
            max_attempts=self.max_attempts,
            sleep=self.sleep,
            rng=self.rng,
            label=source.name,
        )

    async def fetch(self, force_refresh: bool = False) -> FetchResult:
        """
        Return the latest market snapshot.

        A fresh cache entry is returned without touching the network unless
        force_refresh is set. Sources that already failed are skipped even on
        a forced refresh, until any source succeeds again or the last success
        is older than health_reset_after. Never raises: when every source
        fails, sample data is returned with is_fallback set.
        """
        now = self.clock()
        health = self.state.health

        if not force_refresh:
            cached = self._cached(now)
            if cached is not None:
                return cached

        health.attempts += 1
        if health.failed and health.is_stale(now, self.health_reset_after):
            logger.info(f"No success for {self.health_reset_after:.0f}s, retrying all sources")
            health.reset()

        for source in self.sources:
            if source.name in health.failed:
                logger.info(f"Skipping {source.name} (marked as failed)")
                continue

            logger.info(f"Trying {source.name} API...")
            try:
                coins = await self._try_source(source)
            except Exception as e:
                logger.warning(f"{source.name} API failed after retries: {e}")
                health.failed.add(source.name)
                continue

            logger.info(f"{source.name} API successful ({len(coins)} coins)")
            health.last_success = now
            health.reset()
            result = FetchResult(coins=coins, source=source.name, fetched_at=self.wall_clock())
            return self._store(result, now)

        logger.warning("All APIs failed, using sample data")
        fetched_at = self.wall_clock()
        result = FetchResult(
            coins=synthetic_coins(minute_of_day(fetched_at)),
            source=MOCK_SOURCE,
            fetched_at=fetched_at,
            is_fallback=True,
        )
        self._store(result, now)

        if health.is_stale(now, self.health_reset_after):
            logger.info("Resetting failed APIs list to retry all endpoints")
            health.reset()

        return result

    async def fetch_coins(self, force_refresh: bool = False) -> List[Coin]:
        result = await self.fetch(force_refresh)
        return result.coins


def build_orchestrator(transport: Optional[HttpTransport] = None, **kwargs) -> FetchOrchestrator:
    """Wire the default transport, relay and sources into an orchestrator."""
    relay = ProxyRelay(transport or HttpTransport())
    return FetchOrchestrator(default_sources(relay), **kwargs)
