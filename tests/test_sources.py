import json

import pytest

from conftest import make_response
from src.data.errors import AllRelaysFailed, ParseError, SourceUnavailable
from src.data.sources import (
    CoinGeckoSource,
    CoinLoreSource,
    CoinPaprikaSource,
    CoinRankingSource,
    default_sources,
)

COINGECKO_PAYLOAD = [
    {
        "id": "ethereum", "symbol": "eth", "name": "Ethereum",
        "image": "https://assets.coingecko.com/coins/images/279/large/ethereum.png",
        "current_price": 3456.78, "market_cap": 415678901234, "market_cap_rank": 2,
        "price_change_percentage_24h": -1.23, "total_volume": 18765432109,
    },
    {
        "id": "bitcoin", "symbol": "BTC", "name": "Bitcoin",
        "image": "https://assets.coingecko.com/coins/images/1/large/bitcoin.png",
        "current_price": 65432.12, "market_cap": 1278654321098, "market_cap_rank": 1,
        "price_change_percentage_24h": 2.35, "total_volume": 32456789012,
    },
]

COINPAPRIKA_PAYLOAD = [
    {
        "id": "btc-bitcoin", "name": "Bitcoin", "symbol": "BTC",
        "price_usd": "65000.5", "market_cap_usd": "1280000000000",
        "percent_change_24h": "1.1", "volume_24h_usd": "30000000000",
    },
    {
        "id": "eth-ethereum", "name": "Ethereum", "symbol": "ETH",
        "quotes": {"USD": {"price": 3400, "market_cap": 410000000000,
                           "percent_change_24h": -0.5, "volume_24h": 15000000000}},
    },
]

COINLORE_PAYLOAD = {
    "data": [
        {"id": "80", "symbol": "ETH", "name": "Ethereum", "rank": 2,
         "price_usd": "3400.10", "percent_change_24h": "-0.50",
         "market_cap_usd": "410000000000.00", "volume24": 15000000000.5},
        {"id": "90", "symbol": "BTC", "name": "Bitcoin", "rank": 1,
         "price_usd": "65000.00", "percent_change_24h": "1.10",
         "market_cap_usd": "1280000000000.00", "volume24": 30000000000},
    ],
    "info": {"coins_num": 2},
}

COINRANKING_PAYLOAD = {
    "status": "success",
    "data": {
        "coins": [
            {"uuid": "Qwsogvtv82FCd", "symbol": "BTC", "name": "Bitcoin",
             "iconUrl": "https://cdn.coinranking.com/btc.svg", "price": "65000.12",
             "marketCap": "1280000000000", "rank": 1, "change": "-0.42",
             "24hVolume": "31000000000"},
            {"uuid": "razxDUgYGNAdQ", "symbol": "ETH", "name": "Ethereum",
             "iconUrl": "https://cdn.coinranking.com/eth.svg", "price": "3400.5",
             "marketCap": "410000000000", "rank": 2, "change": "1.2"},
        ]
    },
}


class FakeRelay:
    def __init__(self, outcome):
        self.outcome = outcome
        self.urls = []

    async def fetch(self, target_url, timeout=5.0):
        self.urls.append(target_url)
        if isinstance(self.outcome, Exception):
            raise self.outcome
        return self.outcome


def relay_with(payload, status=200):
    return FakeRelay(make_response("https://api.example", status, payload))


def test_coingecko_orders_by_rank_and_keeps_fields():
    coins = CoinGeckoSource(relay_with([])).normalize(COINGECKO_PAYLOAD)

    assert [c.id for c in coins] == ["bitcoin", "ethereum"]
    assert [c.market_cap_rank for c in coins] == [1, 2]
    assert coins[0].symbol == "btc"
    assert coins[1].price_change_percentage_24h == -1.23
    assert coins[0].image.endswith("bitcoin.png")


def test_coinpaprika_ranks_by_response_order_and_reads_both_shapes():
    coins = CoinPaprikaSource(relay_with([])).normalize(COINPAPRIKA_PAYLOAD)

    assert [(c.id, c.market_cap_rank) for c in coins] == [("btc-bitcoin", 1), ("eth-ethereum", 2)]
    assert coins[0].current_price == 65000.5
    assert coins[1].current_price == 3400.0
    assert coins[1].price_change_percentage_24h == -0.5
    assert coins[1].symbol == "eth"
    assert coins[1].image == "https://coinicons-api.vercel.app/api/icon/eth"


def test_coinlore_parses_strings_and_native_rank():
    coins = CoinLoreSource(relay_with([])).normalize(COINLORE_PAYLOAD)

    assert [c.id for c in coins] == ["90", "80"]
    assert coins[0].current_price == 65000.0
    assert coins[1].market_cap == 410000000000.0
    assert coins[1].total_volume == 15000000000.5
    assert coins[1].price_change_percentage_24h == -0.5


def test_coinranking_uses_24h_volume_and_defaults_missing_volume():
    coins = CoinRankingSource(relay_with([])).normalize(COINRANKING_PAYLOAD)

    assert coins[0].id == "Qwsogvtv82FCd"
    assert coins[0].total_volume == 31000000000.0
    assert coins[1].total_volume == 0.0
    assert coins[0].image == "https://cdn.coinranking.com/btc.svg"
    assert coins[0].price_change_percentage_24h == -0.42


def test_coinranking_falls_back_to_volume_key():
    payload = json.loads(json.dumps(COINRANKING_PAYLOAD))
    payload["data"]["coins"][1]["volume"] = "123.5"

    coins = CoinRankingSource(relay_with([])).normalize(payload)

    assert coins[1].total_volume == 123.5


def test_unparsable_number_fails_instead_of_defaulting():
    payload = json.loads(json.dumps(COINLORE_PAYLOAD))
    payload["data"][0]["price_usd"] = "n/a"

    with pytest.raises(ParseError):
        CoinLoreSource(relay_with([])).normalize(payload)


def test_missing_field_fails_source():
    payload = [dict(COINGECKO_PAYLOAD[0])]
    del payload[0]["total_volume"]

    with pytest.raises(ParseError):
        CoinGeckoSource(relay_with([])).normalize(payload)


def test_negative_price_rejected():
    payload = [dict(COINGECKO_PAYLOAD[0], current_price=-1)]

    with pytest.raises(ParseError):
        CoinGeckoSource(relay_with([])).normalize(payload)


def test_duplicate_ranks_rejected():
    payload = [dict(row, rank=1) for row in COINLORE_PAYLOAD["data"]]

    with pytest.raises(ParseError):
        CoinLoreSource(relay_with([])).normalize({"data": payload})


def test_wrong_top_level_shape_rejected():
    with pytest.raises(ParseError):
        CoinLoreSource(relay_with([])).normalize([{"id": "90"}])
    with pytest.raises(ParseError):
        CoinRankingSource(relay_with([])).normalize({"data": []})


def test_result_capped_at_limit():
    coins = CoinGeckoSource(relay_with([]), limit=1).normalize(COINGECKO_PAYLOAD)

    assert [c.market_cap_rank for c in coins] == [1]


@pytest.mark.asyncio
async def test_fetch_goes_through_relay_with_source_url():
    relay = relay_with(COINGECKO_PAYLOAD)
    source = CoinGeckoSource(relay)

    coins = await source.fetch()

    assert relay.urls == [source.url]
    assert "api.coingecko.com" in source.url
    assert len(coins) == 2


@pytest.mark.asyncio
async def test_relay_failure_becomes_source_unavailable():
    source = CoinPaprikaSource(FakeRelay(AllRelaysFailed("https://api.example", ["https://api.example"])))

    with pytest.raises(SourceUnavailable) as excinfo:
        await source.fetch_raw()

    assert excinfo.value.source == "coinpaprika"


@pytest.mark.asyncio
async def test_error_status_becomes_source_unavailable():
    source = CoinLoreSource(relay_with({}, status=503))

    with pytest.raises(SourceUnavailable) as excinfo:
        await source.fetch_raw()

    assert excinfo.value.status == 503


def test_default_sources_priority_order():
    names = [s.name for s in default_sources(relay_with([]))]

    assert names == ["coingecko", "coinpaprika", "coinlore", "coinranking"]
