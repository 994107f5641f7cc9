"""Helpers for interacting with the public CoinGecko API."""

from __future__ import annotations

import logging
from typing import Any, Iterable, Optional

import httpx
from pydantic import TypeAdapter

from price_relay.config.settings import Settings
from price_relay.schemas.market import (
    MarketCoinPayload,
    MarketSummary,
    PriceQuote,
    SearchCandidate,
    SearchPayload,
    SimplePricePayload,
)
from price_relay.services.decoding import Malformed, decode_payload
from price_relay.services.errors import (
    EmptyResult,
    InvalidArgument,
    NotFound,
    UpstreamError,
    UpstreamUnreachable,
)

logger = logging.getLogger("price_relay.coingecko")

DEFAULT_BASE_URL = "https://api.coingecko.com/api/v3"

_SIMPLE_PRICE = TypeAdapter(SimplePricePayload)
_MARKETS = TypeAdapter(list[MarketCoinPayload])
_SEARCH = TypeAdapter(SearchPayload)


def _require_text(value: Optional[str], field: str) -> str:
    if value is None or not str(value).strip():
        raise InvalidArgument(f"{field} must be a non-empty string")
    return str(value).strip()


def _require_positive(value: int, field: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise InvalidArgument(f"{field} must be a positive integer")
    return value


def _amount_for(quotes: dict[str, Any], currency: str) -> Any:
    # CoinGecko keys its quotes in lowercase whatever case vs_currencies used
    wanted = currency.lower()
    return next((v for k, v in quotes.items() if k.lower() == wanted), None)


class CoinGeckoClient:
    """
    One GET per call, outcome classified before returning:
    transport failure -> UpstreamUnreachable, non-2xx -> UpstreamError,
    shape mismatch -> NotFound/EmptyResult, otherwise the decoded value.
    No retries and no caching.
    """

    def __init__(
        self,
        *,
        base_url: str = DEFAULT_BASE_URL,
        api_key: Optional[str] = None,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        headers = {"accept": "application/json"}
        if api_key:
            headers["x-cg-demo-api-key"] = api_key
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            headers=headers,
            timeout=httpx.Timeout(timeout),
            transport=transport,
        )

    @classmethod
    def from_settings(
        cls, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None
    ) -> "CoinGeckoClient":
        return cls(
            base_url=settings.COINGECKO_BASE_URL,
            api_key=settings.COINGECKO_API_KEY,
            timeout=settings.UPSTREAM_TIMEOUT_SECONDS,
            transport=transport,
        )

    async def close(self) -> None:
        await self._client.aclose()

    async def _get(self, path: str, params: dict[str, Any]) -> Any:
        try:
            response = await self._client.get(path, params=params)
        except httpx.TimeoutException as exc:
            logger.warning("GET %s timed out: %s", path, exc)
            raise UpstreamUnreachable(f"CoinGecko did not respond in time ({exc.__class__.__name__})", timed_out=True) from exc
        except httpx.TransportError as exc:
            logger.warning("GET %s failed: %s", path, exc)
            raise UpstreamUnreachable(f"Unable to reach CoinGecko: {exc}") from exc

        logger.debug("GET %s -> %s", path, response.status_code)
        if not response.is_success:
            logger.warning("GET %s -> %s %s", path, response.status_code, response.reason_phrase)
            raise UpstreamError(response.status_code, response.reason_phrase)

        try:
            return response.json()
        except ValueError:
            # undecodable body goes through the same Malformed branch as a bad shape
            return None

    async def fetch_simple_price(self, coin_ids: Iterable[str], currency: str = "usd") -> dict[str, PriceQuote]:
        ids = list(dict.fromkeys(_require_text(c, "coin id") for c in coin_ids))
        if not ids:
            raise InvalidArgument("at least one coin id is required")
        currency = _require_text(currency, "currency")

        raw = await self._get("/simple/price", {"ids": ",".join(ids), "vs_currencies": currency})
        decoded = decode_payload(raw, _SIMPLE_PRICE)
        if isinstance(decoded, Malformed):
            logger.warning("simple/price payload malformed: %s", decoded.reason)
            raise NotFound(f"No price data returned for {', '.join(ids)}")

        return {
            coin_id: PriceQuote(coin=coin_id, currency=currency, amount=_amount_for(quotes, currency))
            for coin_id, quotes in decoded.value.items()
        }

    async def fetch_markets(self, currency: str = "usd", per_page: int = 10, page: int = 1) -> list[MarketSummary]:
        currency = _require_text(currency, "currency")
        per_page = _require_positive(per_page, "per_page")
        page = _require_positive(page, "page")

        params = {
            "vs_currency": currency,
            "order": "market_cap_desc",
            "per_page": per_page,
            "page": page,
            "sparkline": "false",
        }
        raw = await self._get("/coins/markets", params)
        decoded = decode_payload(raw, _MARKETS)
        if isinstance(decoded, Malformed):
            logger.warning("coins/markets payload malformed: %s", decoded.reason)
            raise EmptyResult("No cryptocurrency data available")

        return [
            MarketSummary(
                id=coin.id,
                name=coin.name,
                symbol=coin.symbol,
                current_price=coin.current_price,
                market_cap=coin.market_cap,
                price_change_percentage_24h=coin.price_change_percentage_24h,
            )
            for coin in decoded.value
        ]

    async def search_coins(self, query: str) -> list[SearchCandidate]:
        query = _require_text(query, "query")

        raw = await self._get("/search", {"query": query})
        decoded = decode_payload(raw, _SEARCH)
        if isinstance(decoded, Malformed):
            logger.warning("search payload malformed: %s", decoded.reason)
            raise NotFound(f"No cryptocurrencies found matching '{query}'")

        return [
            SearchCandidate(
                id=coin.id,
                name=coin.name,
                symbol=coin.symbol,
                market_cap_rank=coin.market_cap_rank,
                thumbnail_url=coin.thumb,
            )
            for coin in decoded.value.coins
        ]
