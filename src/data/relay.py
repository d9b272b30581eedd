"""CORS relay fallback: direct call first, then public relays in order."""
from typing import List, Optional
from urllib.parse import quote

from src.config import CORS_PROXIES, REQUEST_TIMEOUT
from src.data.errors import AllRelaysFailed, FetchError
from src.data.transport import HttpResponse, HttpTransport
from src.utils import setup_logger

logger = setup_logger(__name__)

# Characters encodeURIComponent leaves alone
_URI_COMPONENT_SAFE = "-_.!~*'()"


def relay_url(prefix: str, target_url: str) -> str:
    """Build the URL to request through one relay prefix ("" means direct)."""
    if not prefix:
        return target_url
    return prefix + quote(target_url, safe=_URI_COMPONENT_SAFE)


class ProxyRelay:
    """Tries each relay prefix until one answers with a 2xx status."""

    def __init__(self, transport: HttpTransport, prefixes: Optional[List[str]] = None):
        self.transport = transport
        self.prefixes = list(CORS_PROXIES if prefixes is None else prefixes)

    async def fetch(self, target_url: str, timeout: float = REQUEST_TIMEOUT) -> HttpResponse:
        """
        Fetch target_url through the first relay that works.

        Failures of individual relays (timeout, network error, non-2xx) are
        logged and skipped.

        Raises:
            AllRelaysFailed: no relay produced a 2xx response
        """
        attempted = []
        for prefix in self.prefixes:
            url = relay_url(prefix, target_url)
            label = prefix or "direct"
            attempted.append(url)
            try:
                response = await self.transport.call(url, timeout=timeout)
            except FetchError as e:
                logger.info(f"Relay {label} failed ({e}), trying next...")
                continue

            if response.ok:
                logger.info(f"Relay {label} succeeded for {target_url}")
                return response

            logger.info(f"Relay {label} returned HTTP {response.status}, trying next...")

        raise AllRelaysFailed(target_url, attempted)
