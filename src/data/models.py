"""Data structures shared by the fetch pipeline and the dashboard."""
from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Dict, List, Optional, Set


@dataclass(frozen=True)
class Coin:
    """One row of the market table, in the shape every source is normalized to."""
    id: str
    symbol: str
    name: str
    image: str
    current_price: float
    market_cap: float
    market_cap_rank: int
    price_change_percentage_24h: float
    total_volume: float

    def to_dict(self) -> Dict:
        return asdict(self)


@dataclass(frozen=True)
class FetchResult:
    """Ordered coins plus where they came from."""
    coins: List[Coin]
    source: str
    fetched_at: datetime
    is_fallback: bool = False
    from_cache: bool = False


@dataclass
class CacheEntry:
    result: FetchResult
    stored_at: float  # Monotonic seconds

    def age(self, now: float) -> float:
        return now - self.stored_at


@dataclass
class SourceHealth:
    """Sources to skip until the next reset, and when anything last worked."""
    failed: Set[str] = field(default_factory=set)
    last_success: Optional[float] = None
    attempts: int = 0

    def is_stale(self, now: float, threshold: float) -> bool:
        if self.last_success is None:
            return True
        return now - self.last_success > threshold

    def reset(self) -> None:
        self.failed.clear()


@dataclass
class OrchestratorState:
    """Everything a FetchOrchestrator mutates. One orchestrator owns one state."""
    cache: Optional[CacheEntry] = None
    health: SourceHealth = field(default_factory=SourceHealth)
