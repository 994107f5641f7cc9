from __future__ import annotations

import pytest
import pytest_asyncio

from price_relay.config.settings import Settings
from price_relay.services.coingecko import CoinGeckoClient
from price_relay.services.gateway import PriceGateway
from price_relay.tests.stubs import BASE_URL, StubUpstream


@pytest.fixture()
def upstream() -> StubUpstream:
    return StubUpstream()


@pytest.fixture()
def settings() -> Settings:
    return Settings(
        COINGECKO_BASE_URL=BASE_URL,
        COINGECKO_API_KEY=None,
        UPSTREAM_TIMEOUT_SECONDS=2.0,
        MAX_LIST_LIMIT=250,
        HTTP_HOST="127.0.0.1",
        HTTP_PORT=3000,
        MCP_TRANSPORT="stdio",
        MCP_HOST="127.0.0.1",
        MCP_PORT=7010,
        LOG_LEVEL="DEBUG",
    )


@pytest_asyncio.fixture
async def client(upstream):
    c = CoinGeckoClient(base_url=BASE_URL, transport=upstream.transport)
    try:
        yield c
    finally:
        await c.close()


@pytest_asyncio.fixture
async def gateway(upstream, settings):
    g = PriceGateway.from_settings(settings, transport=upstream.transport)
    try:
        yield g
    finally:
        await g.close()
