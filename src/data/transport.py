"""Single HTTP GET with a hard deadline, on aiohttp."""
import asyncio
import json
from dataclasses import dataclass
from typing import Any, Optional

import aiohttp

from src.config import REQUEST_TIMEOUT
from src.data.errors import FetchTimeout, NetworkError, ParseError
from src.utils import setup_logger

logger = setup_logger(__name__)


@dataclass(frozen=True)
class HttpResponse:
    """Fully-read response. The connection is released before this is returned."""
    url: str
    status: int
    body: bytes

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    def json(self) -> Any:
        try:
            return json.loads(self.body.decode("utf-8"))
        except (UnicodeDecodeError, ValueError) as e:
            raise ParseError(f"{self.url}: invalid JSON body ({e})") from e


class HttpTransport:
    """
    Timeout-bounded GET requests over one lazily created aiohttp session.

    The deadline covers connecting, sending and reading the whole body. When
    it fires the in-flight request task is cancelled, which aborts the
    underlying connection.
    """

    def __init__(self, session: Optional[aiohttp.ClientSession] = None):
        self._session = session
        self._owns_session = session is None

    async def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession()
            self._owns_session = True
        return self._session

    async def _request(self, url: str, **options) -> HttpResponse:
        session = await self._get_session()
        async with session.get(url, **options) as r:
            body = await r.read()
            return HttpResponse(url=url, status=r.status, body=body)

    async def call(self, url: str, timeout: float = REQUEST_TIMEOUT, **options) -> HttpResponse:
        """
        Perform one GET.

        Raises:
            FetchTimeout: the deadline elapsed first
            NetworkError: the transport failed
        """
        try:
            response = await asyncio.wait_for(self._request(url, **options), timeout)
        except asyncio.TimeoutError as e:
            logger.debug(f"{url}: timeout after {timeout:.1f}s")
            raise FetchTimeout(url, timeout) from e
        except aiohttp.ClientError as e:
            raise NetworkError(url, f"{type(e).__name__}: {e}") from e
        except OSError as e:
            raise NetworkError(url, str(e)) from e

        logger.debug(f"{url}: HTTP {response.status} ({len(response.body)} bytes)")
        return response

    async def close(self) -> None:
        if self._owns_session and self._session is not None and not self._session.closed:
            await self._session.close()
        self._session = None
