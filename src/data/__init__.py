"""Data fetching, normalization, and transformation modules."""
from src.data.errors import (
    AllRelaysFailed,
    FetchError,
    FetchTimeout,
    NetworkError,
    ParseError,
    SourceUnavailable,
)
from src.data.mock import minute_of_day, synthetic_coins
from src.data.models import CacheEntry, Coin, FetchResult, OrchestratorState, SourceHealth
from src.data.orchestrator import FetchOrchestrator, build_orchestrator
from src.data.relay import ProxyRelay, relay_url
from src.data.retry import backoff_delay, with_retry
from src.data.sources import (
    CoinGeckoSource,
    CoinLoreSource,
    CoinPaprikaSource,
    CoinRankingSource,
    SourceAdapter,
    default_sources,
)
from src.data.transformer import coins_to_frame, filter_coins, frame_to_records, sort_frame
from src.data.transport import HttpResponse, HttpTransport

__all__ = [
    "AllRelaysFailed",
    "FetchError",
    "FetchTimeout",
    "NetworkError",
    "ParseError",
    "SourceUnavailable",
    "minute_of_day",
    "synthetic_coins",
    "CacheEntry",
    "Coin",
    "FetchResult",
    "OrchestratorState",
    "SourceHealth",
    "FetchOrchestrator",
    "build_orchestrator",
    "ProxyRelay",
    "relay_url",
    "backoff_delay",
    "with_retry",
    "CoinGeckoSource",
    "CoinLoreSource",
    "CoinPaprikaSource",
    "CoinRankingSource",
    "SourceAdapter",
    "default_sources",
    "coins_to_frame",
    "filter_coins",
    "frame_to_records",
    "sort_frame",
    "HttpResponse",
    "HttpTransport",
]
