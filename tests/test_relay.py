import pytest

from conftest import FakeTransport, make_response
from src.config import CORS_PROXIES
from src.data.errors import AllRelaysFailed, FetchTimeout, NetworkError
from src.data.relay import ProxyRelay, relay_url

TARGET = "https://api.example/v1/tickers?limit=20"


def test_relay_url_direct_keeps_target():
    assert relay_url("", TARGET) == TARGET


def test_relay_url_percent_encodes_target():
    assert relay_url("https://relay/?url=", "https://x.com/a?b=1&c=2") == (
        "https://relay/?url=https%3A%2F%2Fx.com%2Fa%3Fb%3D1%26c%3D2"
    )


def test_default_relays_start_with_direct_call():
    assert CORS_PROXIES[0] == ""
    assert ProxyRelay(FakeTransport({})).prefixes == CORS_PROXIES


@pytest.mark.asyncio
async def test_relays_tried_in_order_until_one_succeeds():
    url_a = relay_url("A", TARGET)
    url_b = relay_url("B", TARGET)
    b_response = make_response(url_b, 200, [{"id": "b"}])
    transport = FakeTransport({
        TARGET: NetworkError(TARGET, "refused"),
        url_a: make_response(url_a, 500),
        url_b: b_response,
    })

    response = await ProxyRelay(transport, ["", "A", "B"]).fetch(TARGET, timeout=1.0)

    assert transport.calls == [TARGET, url_a, url_b]
    assert response is b_response


@pytest.mark.asyncio
async def test_direct_success_skips_relays():
    transport = FakeTransport({TARGET: make_response(TARGET, 200)})

    await ProxyRelay(transport, ["", "A", "B"]).fetch(TARGET)

    assert transport.calls == [TARGET]


@pytest.mark.asyncio
async def test_all_relays_failing_raises():
    url_a = relay_url("A", TARGET)
    transport = FakeTransport({
        TARGET: FetchTimeout(TARGET, 1.0),
        url_a: make_response(url_a, 403),
    })

    with pytest.raises(AllRelaysFailed) as excinfo:
        await ProxyRelay(transport, ["", "A"]).fetch(TARGET)

    assert excinfo.value.attempted == [TARGET, url_a]
    assert excinfo.value.target_url == TARGET
