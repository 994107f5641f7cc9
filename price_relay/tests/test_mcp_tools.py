from __future__ import annotations

import asyncio

import httpx
import pytest

from price_relay.mcp_server import CryptoTools, build_mcp_server, serve, tool_error_text
from price_relay.services.errors import (
    EmptyResult,
    InvalidArgument,
    NotFound,
    UpstreamError,
    UpstreamUnreachable,
)
from price_relay.tests.stubs import SEARCH_SOL, TOP_FIVE


@pytest.fixture()
def tools(gateway):
    return CryptoTools(gateway)


@pytest.mark.asyncio
async def test_get_crypto_price_text(tools, upstream):
    upstream.json("/simple/price", {"bitcoin": {"usd": 67000}})

    assert await tools.get_crypto_price("bitcoin") == "bitcoin: 67000 USD"


@pytest.mark.asyncio
async def test_get_crypto_price_not_found_text(tools, upstream):
    upstream.json("/simple/price", {})

    assert await tools.get_crypto_price("nope", "usd") == "Cryptocurrency 'nope' not found."


@pytest.mark.asyncio
async def test_get_crypto_price_status_text(tools, upstream):
    upstream.status("/simple/price", 429)

    assert await tools.get_crypto_price("bitcoin") == "API error: 429 Too Many Requests"


@pytest.mark.asyncio
async def test_list_top_cryptos_lines(tools, upstream):
    upstream.json("/coins/markets", TOP_FIVE[:2])

    text = await tools.list_top_cryptos(2)

    assert text.splitlines() == ["Bitcoin (btc): $67000", "Ethereum (eth): $3500.5"]


@pytest.mark.asyncio
async def test_list_top_cryptos_empty_text(tools, upstream):
    upstream.json("/coins/markets", [])

    assert await tools.list_top_cryptos(5) == "No cryptocurrency data available."


@pytest.mark.asyncio
async def test_list_top_cryptos_unreachable_text(tools, upstream):
    upstream.fail("/coins/markets", httpx.ConnectError("refused"))

    text = await tools.list_top_cryptos()

    assert text.startswith("Error fetching top cryptocurrencies: Unable to reach CoinGecko")


@pytest.mark.asyncio
async def test_search_cryptos_lines(tools, upstream):
    upstream.json("/search", SEARCH_SOL)
    upstream.json("/simple/price", {"solana": {"usd": 150.25}})

    text = await tools.search_cryptos("sol", 2)

    assert text.splitlines() == ["Solana (SOL) [#5]: $150.25", "Bridged SOL (BSOL) [#n/a]: $n/a"]


@pytest.mark.asyncio
async def test_unexpected_error_becomes_text(tools, monkeypatch):
    async def boom(*args, **kwargs):
        raise ZeroDivisionError("division by zero")

    monkeypatch.setattr(tools._gateway, "get_price", boom)

    assert await tools.get_crypto_price("bitcoin") == "Error fetching price: division by zero"


@pytest.mark.parametrize(
    "exc,expected",
    [
        (InvalidArgument("limit must be a positive integer"), "Invalid request: limit must be a positive integer"),
        (NotFound("Cryptocurrency 'x' not found"), "Cryptocurrency 'x' not found."),
        (EmptyResult("No cryptocurrency data available"), "No cryptocurrency data available."),
        (UpstreamError(500, "Internal Server Error"), "API error: 500 Internal Server Error"),
        (UpstreamUnreachable("Unable to reach CoinGecko"), "Error fetching price: Unable to reach CoinGecko"),
    ],
)
def test_tool_error_text(exc, expected):
    assert tool_error_text(exc, "fetching price") == expected


@pytest.mark.asyncio
async def test_server_registers_tools(gateway, settings):
    mcp = build_mcp_server(gateway, settings)

    listed = {t.name: t for t in await mcp.list_tools()}

    assert set(listed) == {"getCryptoPrice", "listTopCryptos", "searchCryptos"}
    schema = listed["getCryptoPrice"].inputSchema
    assert schema["required"] == ["id"]
    assert schema["properties"]["currency"]["default"] == "usd"
    assert listed["listTopCryptos"].inputSchema["properties"]["limit"]["default"] == 10


class _RecordingGateway:
    def __init__(self) -> None:
        self.closed_in = None

    async def close(self) -> None:
        self.closed_in = asyncio.get_running_loop()


class _FakeServer:
    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.ran_in = None

    async def run_stdio_async(self) -> None:
        self.ran_in = asyncio.get_running_loop()
        if self.fail:
            raise ConnectionResetError("client went away")


@pytest.mark.asyncio
async def test_serve_closes_gateway_on_the_serving_loop():
    gateway, server = _RecordingGateway(), _FakeServer()

    await serve(server, gateway, "stdio")

    assert gateway.closed_in is server.ran_in
    assert gateway.closed_in is asyncio.get_running_loop()


@pytest.mark.asyncio
async def test_serve_closes_gateway_when_server_fails():
    gateway, server = _RecordingGateway(), _FakeServer(fail=True)

    with pytest.raises(ConnectionResetError):
        await serve(server, gateway, "stdio")

    assert gateway.closed_in is server.ran_in
