"""Domain-level price operations shared by the MCP tools and the HTTP API."""

from __future__ import annotations

import logging

from price_relay.config.settings import Settings
from price_relay.schemas.market import MarketSummary, PriceQuote, SearchHit
from price_relay.services.coingecko import CoinGeckoClient
from price_relay.services.errors import EmptyResult, InvalidArgument, NotFound

logger = logging.getLogger("price_relay.gateway")

DEFAULT_CURRENCY = "usd"
DEFAULT_LIMIT = 10
# CoinGecko caps per_page at 250
MAX_LIMIT = 250


class PriceGateway:
    def __init__(self, client: CoinGeckoClient, *, max_limit: int = MAX_LIMIT) -> None:
        self._client = client
        self._max_limit = max_limit

    @classmethod
    def from_settings(cls, settings: Settings, transport=None) -> "PriceGateway":
        return cls(
            CoinGeckoClient.from_settings(settings, transport=transport),
            max_limit=settings.MAX_LIST_LIMIT,
        )

    async def close(self) -> None:
        await self._client.close()

    def _clamp(self, limit: int) -> int:
        if isinstance(limit, bool) or not isinstance(limit, int) or limit < 1:
            raise InvalidArgument("limit must be a positive integer")
        if limit > self._max_limit:
            logger.info("limit %s clamped to %s", limit, self._max_limit)
            return self._max_limit
        return limit

    async def get_price(self, coin: str, currency: str = DEFAULT_CURRENCY) -> PriceQuote:
        quotes = await self._client.fetch_simple_price([coin], currency)
        # the client strips whitespace; look the coin up the same way
        key = coin.strip()
        quote = quotes.get(key)
        if quote is None:
            raise NotFound(f"Cryptocurrency '{key}' not found")
        return quote

    async def list_top(self, limit: int = DEFAULT_LIMIT) -> list[MarketSummary]:
        limit = self._clamp(limit)
        coins = await self._client.fetch_markets(DEFAULT_CURRENCY, limit, 1)
        if not coins:
            raise EmptyResult("No cryptocurrency data available")
        return coins[:limit]

    async def search(self, query: str, limit: int = DEFAULT_LIMIT) -> list[SearchHit]:
        """
        Search by name/symbol, then price every surviving hit with one
        simple/price call in USD.

        Transport and status errors from the pricing call fail the whole
        search. A pricing payload with no usable quotes leaves every price
        as None.
        """
        limit = self._clamp(limit)
        candidates = (await self._client.search_coins(query))[:limit]
        if not candidates:
            raise NotFound(f"No cryptocurrencies found matching '{query.strip()}'")

        try:
            quotes = await self._client.fetch_simple_price([c.id for c in candidates], DEFAULT_CURRENCY)
        except NotFound:
            logger.warning("price enrichment returned no quotes for query %r", query)
            quotes = {}

        hits = []
        for candidate in candidates:
            quote = quotes.get(candidate.id)
            hits.append(
                SearchHit(
                    **candidate.model_dump(),
                    price=quote.amount if quote is not None else None,
                )
            )
        return hits
