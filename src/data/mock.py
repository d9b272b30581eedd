"""Deterministic sample data used when every live source is down."""
from datetime import datetime
from typing import List, Optional

from src.constants import (
    CHANGE_JITTER,
    PRICE_JITTER,
    REFERENCE_ASSETS,
    STABLE_ASSETS,
    STABLE_PRICE_JITTER,
)
from src.data.models import Coin


def minute_of_day(now: Optional[datetime] = None) -> int:
    """Minutes since local midnight."""
    now = now or datetime.now()
    return now.hour * 60 + now.minute


def synthetic_coins(clock_minute_of_day: int) -> List[Coin]:
    """
    Build the five reference coins with a small, reproducible wobble.

    The same minute always yields the same prices. Price moves at most 1%
    around its base (0.1% for stablecoins) and the 24h change at most 15%;
    market cap, rank and volume never change.

    Args:
        clock_minute_of_day: hour * 60 + minute

    Returns:
        Coins ordered by rank
    """
    factor = (clock_minute_of_day % 60) / 60

    coins = []
    for coin_id, symbol, name, image, base_price, market_cap, rank, base_change, volume in REFERENCE_ASSETS:
        jitter = STABLE_PRICE_JITTER if coin_id in STABLE_ASSETS else PRICE_JITTER
        price_variation = (factor - 0.5) * 2 * jitter
        change_variation = (factor - 0.5) * CHANGE_JITTER
        coins.append(Coin(
            id=coin_id,
            symbol=symbol,
            name=name,
            image=image,
            current_price=base_price * (1 + price_variation),
            market_cap=float(market_cap),
            market_cap_rank=rank,
            price_change_percentage_24h=base_change * (1 + change_variation),
            total_volume=float(volume),
        ))
    return coins
