"""Error types raised along the fetch pipeline."""
from typing import List, Optional


class FetchError(Exception):
    """Base class for every failure the fetch pipeline raises."""


class FetchTimeout(FetchError):
    """A single HTTP call exceeded its deadline and was cancelled."""

    def __init__(self, url: str, timeout: float):
        super().__init__(f"{url}: timed out after {timeout:.1f}s")
        self.url = url
        self.timeout = timeout


class NetworkError(FetchError):
    """Transport-level failure (DNS, connection refused, reset, ...)."""

    def __init__(self, url: str, reason: str):
        super().__init__(f"{url}: {reason}")
        self.url = url
        self.reason = reason


class AllRelaysFailed(FetchError):
    """Every relay prefix failed for one target URL."""

    def __init__(self, target_url: str, attempted: List[str]):
        super().__init__(f"{target_url}: all {len(attempted)} relays failed")
        self.target_url = target_url
        self.attempted = attempted


class SourceUnavailable(FetchError):
    """A source adapter could not produce a payload."""

    def __init__(self, source: str, reason: str, status: Optional[int] = None):
        super().__init__(f"{source}: {reason}")
        self.source = source
        self.reason = reason
        self.status = status


class ParseError(FetchError):
    """A response body did not match the shape expected for normalization."""
