#!/usr/bin/env python3
"""
mcp_server.py
CryptoPrice MCP server.
Exposes: getCryptoPrice, listTopCryptos, searchCryptos
Run: price-relay-mcp [--transport stdio|sse|streamable-http]
"""
from __future__ import annotations

import argparse
import asyncio
import logging
from typing import Annotated, Optional

from mcp.server.fastmcp import FastMCP
from pydantic import Field

from price_relay.config.settings import MCP_TRANSPORTS, Settings, get_settings
from price_relay.services.errors import (
    EmptyResult,
    InvalidArgument,
    NotFound,
    UpstreamError,
)
from price_relay.services.gateway import DEFAULT_CURRENCY, DEFAULT_LIMIT, PriceGateway
from price_relay.utils.formatting import format_number
from price_relay.utils.logger import setup_logger

logger = logging.getLogger("price_relay.mcp")

SERVER_NAME = "CryptoPrice"


def tool_error_text(exc: Exception, action: str) -> str:
    """Render any failure as the sentence returned inside a successful tool result."""
    if isinstance(exc, UpstreamError):
        return str(exc)
    if isinstance(exc, (NotFound, EmptyResult)):
        return f"{exc}."
    if isinstance(exc, InvalidArgument):
        return f"Invalid request: {exc}"
    return f"Error {action}: {exc}"


class CryptoTools:
    """Tool bodies. Each returns one text payload and never raises."""

    def __init__(self, gateway: PriceGateway) -> None:
        self._gateway = gateway

    async def get_crypto_price(self, id: str, currency: str = DEFAULT_CURRENCY) -> str:
        try:
            quote = await self._gateway.get_price(id, currency)
        except Exception as exc:
            return self._failed(exc, "fetching price")
        return quote.formatted

    async def list_top_cryptos(self, limit: int = DEFAULT_LIMIT) -> str:
        try:
            coins = await self._gateway.list_top(limit)
        except Exception as exc:
            return self._failed(exc, "fetching top cryptocurrencies")
        return "\n".join(f"{c.name} ({c.symbol}): ${format_number(c.current_price)}" for c in coins)

    async def search_cryptos(self, query: str, limit: int = DEFAULT_LIMIT) -> str:
        try:
            hits = await self._gateway.search(query, limit)
        except Exception as exc:
            return self._failed(exc, "searching cryptocurrencies")
        lines = []
        for h in hits:
            rank = f"#{h.market_cap_rank}" if h.market_cap_rank is not None else "#n/a"
            lines.append(f"{h.name} ({h.symbol.upper()}) [{rank}]: ${format_number(h.price)}")
        return "\n".join(lines)

    @staticmethod
    def _failed(exc: Exception, action: str) -> str:
        if isinstance(exc, (InvalidArgument, NotFound, EmptyResult, UpstreamError)):
            logger.info("tool call failed: %s", exc)
        else:
            logger.exception("tool call failed while %s", action)
        return tool_error_text(exc, action)


def build_mcp_server(gateway: PriceGateway, settings: Optional[Settings] = None) -> FastMCP:
    settings = settings or get_settings()
    mcp = FastMCP(name=SERVER_NAME, host=settings.MCP_HOST, port=settings.MCP_PORT)
    tools = CryptoTools(gateway)

    @mcp.tool(name="getCryptoPrice", description="Get the current price of a cryptocurrency")
    async def get_crypto_price(
        id: Annotated[str, Field(description="Cryptocurrency ID (e.g., bitcoin, ethereum)")],
        currency: Annotated[str, Field(description="Currency to display the price in (e.g., usd, eur)")] = DEFAULT_CURRENCY,
    ) -> str:
        return await tools.get_crypto_price(id, currency)

    @mcp.tool(name="listTopCryptos", description="List the top cryptocurrencies by market cap")
    async def list_top_cryptos(
        limit: Annotated[int, Field(description="Number of top cryptocurrencies to return")] = DEFAULT_LIMIT,
    ) -> str:
        return await tools.list_top_cryptos(limit)

    @mcp.tool(name="searchCryptos", description="Search cryptocurrencies by name or symbol, with USD prices")
    async def search_cryptos(
        query: Annotated[str, Field(description="Name or symbol to search for (e.g., sol, doge)")],
        limit: Annotated[int, Field(description="Maximum number of results")] = DEFAULT_LIMIT,
    ) -> str:
        return await tools.search_cryptos(query, limit)

    return mcp


async def serve(mcp: FastMCP, gateway: PriceGateway, transport: str) -> None:
    """Run the server and close the gateway on the same event loop."""
    runner = {
        "stdio": "run_stdio_async",
        "sse": "run_sse_async",
        "streamable-http": "run_streamable_http_async",
    }[transport]
    try:
        await getattr(mcp, runner)()
    finally:
        await gateway.close()
        logger.info("%s MCP server stopped", SERVER_NAME)


def main() -> None:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="CryptoPrice MCP server")
    parser.add_argument("--transport", choices=MCP_TRANSPORTS, default=settings.MCP_TRANSPORT)
    args = parser.parse_args()

    setup_logger(settings.LOG_LEVEL)
    gateway = PriceGateway.from_settings(settings)
    mcp = build_mcp_server(gateway, settings)

    logger.info("Starting %s MCP server (transport=%s)", SERVER_NAME, args.transport)
    asyncio.run(serve(mcp, gateway, args.transport))


if __name__ == "__main__":
    main()
