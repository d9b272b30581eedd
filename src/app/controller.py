"""Dashboard state: single-flight refreshes, soft deadline and notices."""
import asyncio
import threading
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, List, Optional

from src.config import (
    FALLBACK_REFRESH_INTERVAL,
    FETCH_DEADLINE,
    MAX_CONSECUTIVE_ERRORS,
    REFRESH_INTERVAL,
)
from src.constants import NOTICE_DEFAULT, NOTICE_DESTRUCTIVE
from src.data.mock import minute_of_day, synthetic_coins
from src.data.models import Coin
from src.data.orchestrator import FetchOrchestrator
from src.utils import setup_logger

logger = setup_logger(__name__)


@dataclass(frozen=True)
class Notice:
    title: str
    description: str
    variant: str = NOTICE_DEFAULT


class DashboardController:
    """
    Caller side of the orchestrator.

    Keeps at most one refresh in flight and bounds each refresh with a soft
    deadline. An overrun cancels the pipeline task, so a late result can
    never reach the orchestrator's cache or this controller's state. All
    coroutines must run on the same event loop.
    """

    def __init__(
        self,
        orchestrator: FetchOrchestrator,
        deadline: float = FETCH_DEADLINE,
        wall_clock: Callable[[], datetime] = datetime.now,
    ):
        self.orchestrator = orchestrator
        self.deadline = deadline
        self.wall_clock = wall_clock

        self.coins: List[Coin] = []
        self.is_loading = False
        self.is_using_mock_data = False
        self.last_updated: Optional[datetime] = None
        self.error_count = 0
        self.consecutive_errors = 0
        self.notice: Optional[Notice] = None
        self._initial_load_done = False
        self._notice_lock = threading.Lock()

    @property
    def has_error(self) -> bool:
        return self.consecutive_errors > MAX_CONSECUTIVE_ERRORS

    @property
    def refresh_interval(self) -> int:
        """Seconds until the next automatic refresh; slower while showing sample data."""
        return FALLBACK_REFRESH_INTERVAL if self.is_using_mock_data else REFRESH_INTERVAL

    def take_notice(self) -> Optional[Notice]:
        """Pop the pending notice so it is shown once, to the client whose refresh raised it."""
        with self._notice_lock:
            notice, self.notice = self.notice, None
        return notice

    def _notify(self, show: bool, title: str, description: str, variant: str = NOTICE_DEFAULT) -> None:
        if show and self._initial_load_done:
            self.notice = Notice(title, description, variant)

    async def refresh(self, force: bool = False, show_notice: bool = True) -> bool:
        """
        Run one fetch unless another is still in flight.

        Returns:
            False when skipped because a refresh is already running
        """
        if self.is_loading:
            logger.info("Fetch already in progress, skipping")
            return False

        self.is_loading = True
        self.notice = None
        try:
            result = await asyncio.wait_for(self.orchestrator.fetch(force), self.deadline)
        except asyncio.TimeoutError:
            logger.warning(f"Fetch operation timed out after {self.deadline:.0f}s, resetting loading state")
            self._record_error()
            self.notice = Notice(
                "Loading timeout",
                "Data fetch took too long. Please try again.",
                NOTICE_DESTRUCTIVE,
            )
            self._keep_or_fallback(show_notice=False)
            return True
        except Exception as e:
            logger.error(f"Error refreshing dashboard data: {e}")
            self._record_error()
            self._keep_or_fallback(show_notice)
            return True
        finally:
            self.is_loading = False

        self.coins = list(result.coins)
        self.is_using_mock_data = result.is_fallback
        self.last_updated = result.fetched_at
        if self.is_using_mock_data:
            self._notify(show_notice, "Using sample data", "External APIs are unavailable. Showing sample data.")
        else:
            self._notify(show_notice, "Data refreshed", "Cryptocurrency prices have been updated")
        self._initial_load_done = True
        self.consecutive_errors = 0
        return True

    def _record_error(self) -> None:
        self.consecutive_errors += 1
        self.error_count += 1

    def _keep_or_fallback(self, show_notice: bool) -> None:
        """After a failed refresh: keep what is on screen, or show sample data if nothing is."""
        if self.coins:
            logger.info("Using existing data due to fetch error")
            self._notify(
                show_notice,
                "Update error",
                "There was an error refreshing the data. Using existing data.",
                NOTICE_DESTRUCTIVE,
            )
            return

        logger.info("No existing data, using sample data")
        now = self.wall_clock()
        self.coins = synthetic_coins(minute_of_day(now))
        self.is_using_mock_data = True
        self.last_updated = now
        self._notify(
            show_notice,
            "Data unavailable",
            "Unable to fetch live data. Showing sample data instead.",
            NOTICE_DESTRUCTIVE,
        )
