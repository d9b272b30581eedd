"""Event loop in a background thread, so synchronous Dash callbacks can await coroutines."""
import asyncio
import threading
from typing import Any, Awaitable, Optional

from src.utils import setup_logger

logger = setup_logger(__name__)


class BackgroundLoop:
    """
    One asyncio loop running in a daemon thread.

    Every coroutine submitted here runs on the same loop, so state touched
    only from those coroutines needs no locking.
    """

    def __init__(self):
        self.loop = asyncio.new_event_loop()
        self._thread: Optional[threading.Thread] = None

    def start(self) -> "BackgroundLoop":
        if self._thread is None:
            self._thread = threading.Thread(target=self._run, name="fetch-loop", daemon=True)
            self._thread.start()
        return self

    def _run(self) -> None:
        asyncio.set_event_loop(self.loop)
        self.loop.run_forever()

    def run(self, coro: Awaitable[Any], timeout: Optional[float] = None) -> Any:
        """Run coro on the background loop and block until it finishes."""
        if self._thread is None:
            self.start()
        future = asyncio.run_coroutine_threadsafe(coro, self.loop)
        return future.result(timeout)

    def stop(self) -> None:
        if self._thread is None:
            return
        self.loop.call_soon_threadsafe(self.loop.stop)
        self._thread.join(timeout=5)
        self._thread = None
        self.loop.close()
        logger.info("Background fetch loop stopped")
