import asyncio
import json
from datetime import datetime
from typing import Dict, List

import pytest

from src.data.models import Coin
from src.data.transport import HttpResponse

FIXED_NOW = datetime(2024, 5, 1, 13, 7, 0)


def make_response(url: str, status: int = 200, payload=None) -> HttpResponse:
    body = json.dumps(payload if payload is not None else []).encode("utf-8")
    return HttpResponse(url=url, status=status, body=body)


def make_coin(rank: int, coin_id: str = None, name: str = None, symbol: str = None, price: float = 10.0) -> Coin:
    coin_id = coin_id or f"coin-{rank}"
    return Coin(
        id=coin_id,
        symbol=symbol or f"c{rank}",
        name=name or f"Coin {rank}",
        image=f"https://img.example/{coin_id}.png",
        current_price=price,
        market_cap=1_000_000.0 / rank,
        market_cap_rank=rank,
        price_change_percentage_24h=1.5,
        total_volume=5000.0,
    )


class FakeTransport:
    """Returns (or raises) a queued outcome per URL and records every call."""

    def __init__(self, outcomes: Dict[str, object]):
        self.outcomes = outcomes
        self.calls: List[str] = []

    async def call(self, url: str, timeout: float = 5.0, **options) -> HttpResponse:
        self.calls.append(url)
        outcome = self.outcomes.get(url)
        if outcome is None:
            raise AssertionError(f"unexpected url {url}")
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


class FakeSource:
    """Stand-in adapter: pops one outcome per fetch; the last outcome repeats."""

    def __init__(self, name: str, *outcomes):
        self.name = name
        self.outcomes = list(outcomes)
        self.calls = 0

    async def fetch(self) -> List[Coin]:
        self.calls += 1
        outcome = self.outcomes.pop(0) if len(self.outcomes) > 1 else self.outcomes[0]
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class SleepRecorder:
    def __init__(self):
        self.delays: List[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


class ImmediateRunner:
    """Runs each coroutine to completion on a fresh loop, like BackgroundLoop.run."""

    def run(self, coro, timeout=None):
        return asyncio.run(coro)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def sleeper():
    return SleepRecorder()
