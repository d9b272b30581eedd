"""Source adapters: one per upstream price API, each normalizing into Coin."""
import math
from typing import Any, Dict, List, Optional

from src.config import API_ENDPOINTS, COIN_ICON_URL, MARKET_LIMIT, REQUEST_TIMEOUT
from src.data.errors import AllRelaysFailed, ParseError, SourceUnavailable
from src.data.models import Coin
from src.data.relay import ProxyRelay
from src.utils import setup_logger

logger = setup_logger(__name__)


def _field(row: Dict, key: str, source: str) -> Any:
    if not isinstance(row, dict) or key not in row or row[key] is None:
        raise ParseError(f"{source}: missing field '{key}'")
    return row[key]


def _to_float(value: Any, key: str, source: str, signed: bool = False) -> float:
    """Coerce a number or numeric string. Negative values are rejected unless signed."""
    if isinstance(value, bool):
        raise ParseError(f"{source}: field '{key}' is not numeric: {value!r}")
    try:
        number = float(value)
    except (TypeError, ValueError) as e:
        raise ParseError(f"{source}: field '{key}' is not numeric: {value!r}") from e
    if not math.isfinite(number):
        raise ParseError(f"{source}: field '{key}' is not finite: {value!r}")
    if not signed and number < 0:
        raise ParseError(f"{source}: field '{key}' is negative: {value!r}")
    return number


def _to_rank(value: Any, source: str) -> int:
    number = _to_float(value, "rank", source)
    if number != int(number) or number < 1:
        raise ParseError(f"{source}: invalid rank {value!r}")
    return int(number)


def _icon_url(symbol: str) -> str:
    return COIN_ICON_URL.format(symbol=symbol)


class SourceAdapter:
    """
    Base class for an upstream price API.

    Subclasses set `name` and implement `normalize`; the default `url` comes
    from API_ENDPOINTS.
    """
    name = ""

    def __init__(self, relay: ProxyRelay, url: Optional[str] = None,
                 timeout: float = REQUEST_TIMEOUT, limit: int = MARKET_LIMIT):
        self.relay = relay
        self.url = url or API_ENDPOINTS[self.name]
        self.timeout = timeout
        self.limit = limit

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.url!r})"

    async def fetch_raw(self) -> Any:
        """
        Fetch and decode this source's JSON payload.

        Raises:
            SourceUnavailable: every relay failed, or the status was not 2xx
            ParseError: the body was not JSON
        """
        try:
            response = await self.relay.fetch(self.url, timeout=self.timeout)
        except AllRelaysFailed as e:
            raise SourceUnavailable(self.name, str(e)) from e

        if not response.ok:
            raise SourceUnavailable(self.name, f"HTTP {response.status}", status=response.status)

        return response.json()

    def normalize(self, payload: Any) -> List[Coin]:
        raise NotImplementedError

    async def fetch(self) -> List[Coin]:
        coins = self.normalize(await self.fetch_raw())
        logger.info(f"{self.name}: normalized {len(coins)} coin(s)")
        return coins

    def _rows(self, payload: Any) -> List[Dict]:
        if not isinstance(payload, list):
            raise ParseError(f"{self.name}: expected a list, got {type(payload).__name__}")
        return payload

    def _finish(self, coins: List[Coin]) -> List[Coin]:
        """Order by rank, reject duplicate ranks, apply the size cap."""
        if not coins:
            raise ParseError(f"{self.name}: empty result")
        coins = sorted(coins, key=lambda c: c.market_cap_rank)
        ranks = [c.market_cap_rank for c in coins]
        if len(set(ranks)) != len(ranks):
            raise ParseError(f"{self.name}: duplicate ranks in response")
        return coins[:self.limit]


class CoinGeckoSource(SourceAdapter):
    """Primary source. Already in the canonical shape; only types are checked."""
    name = "coingecko"

    def normalize(self, payload: Any) -> List[Coin]:
        coins = []
        for row in self._rows(payload):
            coins.append(Coin(
                id=str(_field(row, "id", self.name)),
                symbol=str(_field(row, "symbol", self.name)).lower(),
                name=str(_field(row, "name", self.name)),
                image=str(_field(row, "image", self.name)),
                current_price=_to_float(_field(row, "current_price", self.name), "current_price", self.name),
                market_cap=_to_float(_field(row, "market_cap", self.name), "market_cap", self.name),
                market_cap_rank=_to_rank(_field(row, "market_cap_rank", self.name), self.name),
                price_change_percentage_24h=_to_float(
                    _field(row, "price_change_percentage_24h", self.name),
                    "price_change_percentage_24h", self.name, signed=True,
                ),
                total_volume=_to_float(_field(row, "total_volume", self.name), "total_volume", self.name),
            ))
        return self._finish(coins)


class CoinPaprikaSource(SourceAdapter):
    """
    Secondary source. Has no rank field, so rank follows response order.

    Accepts both the flat `price_usd` style fields and the nested
    `quotes.USD` block.
    """
    name = "coinpaprika"

    _FLAT_KEYS = {
        "price": "price_usd",
        "market_cap": "market_cap_usd",
        "percent_change_24h": "percent_change_24h",
        "volume_24h": "volume_24h_usd",
    }

    def _quote(self, row: Dict, key: str) -> Any:
        quotes = row.get("quotes") if isinstance(row, dict) else None
        if isinstance(quotes, dict) and isinstance(quotes.get("USD"), dict):
            return _field(quotes["USD"], key, self.name)
        return _field(row, self._FLAT_KEYS[key], self.name)

    def normalize(self, payload: Any) -> List[Coin]:
        coins = []
        for index, row in enumerate(self._rows(payload)):
            symbol = str(_field(row, "symbol", self.name)).lower()
            coins.append(Coin(
                id=str(_field(row, "id", self.name)),
                symbol=symbol,
                name=str(_field(row, "name", self.name)),
                image=_icon_url(symbol),
                current_price=_to_float(self._quote(row, "price"), "price_usd", self.name),
                market_cap=_to_float(self._quote(row, "market_cap"), "market_cap_usd", self.name),
                market_cap_rank=index + 1,
                price_change_percentage_24h=_to_float(
                    self._quote(row, "percent_change_24h"), "percent_change_24h", self.name, signed=True,
                ),
                total_volume=_to_float(self._quote(row, "volume_24h"), "volume_24h_usd", self.name),
            ))
        return self._finish(coins)


class CoinLoreSource(SourceAdapter):
    """Tertiary source. Rows live under `data`; prices are strings."""
    name = "coinlore"

    def normalize(self, payload: Any) -> List[Coin]:
        if not isinstance(payload, dict):
            raise ParseError(f"{self.name}: expected an object, got {type(payload).__name__}")
        coins = []
        for row in self._rows(_field(payload, "data", self.name)):
            symbol = str(_field(row, "symbol", self.name)).lower()
            coins.append(Coin(
                id=str(_field(row, "id", self.name)),
                symbol=symbol,
                name=str(_field(row, "name", self.name)),
                image=_icon_url(symbol),
                current_price=_to_float(_field(row, "price_usd", self.name), "price_usd", self.name),
                market_cap=_to_float(_field(row, "market_cap_usd", self.name), "market_cap_usd", self.name),
                market_cap_rank=_to_rank(_field(row, "rank", self.name), self.name),
                price_change_percentage_24h=_to_float(
                    _field(row, "percent_change_24h", self.name), "percent_change_24h", self.name, signed=True,
                ),
                total_volume=_to_float(_field(row, "volume24", self.name), "volume24", self.name),
            ))
        return self._finish(coins)


class CoinRankingSource(SourceAdapter):
    """Quaternary source. Rows live under `data.coins`; volume may be absent."""
    name = "coinranking"

    def _volume(self, row: Dict) -> float:
        for key in ("24hVolume", "volume"):
            if row.get(key) is not None:
                return _to_float(row[key], key, self.name)
        return 0.0

    def normalize(self, payload: Any) -> List[Coin]:
        data = _field(payload, "data", self.name)
        coins = []
        for row in self._rows(_field(data, "coins", self.name)):
            coins.append(Coin(
                id=str(_field(row, "uuid", self.name)),
                symbol=str(_field(row, "symbol", self.name)).lower(),
                name=str(_field(row, "name", self.name)),
                image=str(_field(row, "iconUrl", self.name)),
                current_price=_to_float(_field(row, "price", self.name), "price", self.name),
                market_cap=_to_float(_field(row, "marketCap", self.name), "marketCap", self.name),
                market_cap_rank=_to_rank(_field(row, "rank", self.name), self.name),
                price_change_percentage_24h=_to_float(
                    _field(row, "change", self.name), "change", self.name, signed=True,
                ),
                total_volume=self._volume(row),
            ))
        return self._finish(coins)


SOURCE_CLASSES = [CoinGeckoSource, CoinPaprikaSource, CoinLoreSource, CoinRankingSource]


def default_sources(relay: ProxyRelay) -> List[SourceAdapter]:
    """Adapters in priority order."""
    return [cls(relay) for cls in SOURCE_CLASSES]
