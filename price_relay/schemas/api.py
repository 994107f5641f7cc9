"""Pydantic models for the JSON bodies served under /api."""

from __future__ import annotations

from typing import Optional, Union

from pydantic import BaseModel

from price_relay.schemas.market import MarketSummary, PriceQuote, SearchHit
from price_relay.utils.formatting import format_number


class CryptoPriceResponse(BaseModel):
    id: str
    currency: str
    price: Optional[Union[int, float]] = None
    formatted: str

    @classmethod
    def from_quote(cls, quote: PriceQuote) -> "CryptoPriceResponse":
        return cls(
            id=quote.coin,
            currency=quote.display_currency,
            price=quote.amount,
            formatted=quote.formatted,
        )


class TopCrypto(BaseModel):
    id: str
    name: str
    symbol: str
    price: Optional[Union[int, float]] = None
    market_cap: Optional[Union[int, float]] = None
    price_change_24h: Optional[Union[int, float]] = None
    formatted: str

    @classmethod
    def from_summary(cls, coin: MarketSummary) -> "TopCrypto":
        symbol = coin.symbol.upper()
        return cls(
            id=coin.id,
            name=coin.name,
            symbol=symbol,
            price=coin.current_price,
            market_cap=coin.market_cap,
            price_change_24h=coin.price_change_percentage_24h,
            formatted=f"{coin.name} ({symbol}): ${format_number(coin.current_price)}",
        )


class TopCryptosResponse(BaseModel):
    cryptos: list[TopCrypto]
    count: int


class SearchResult(BaseModel):
    id: str
    name: str
    symbol: str
    market_cap_rank: Optional[int] = None
    price: Optional[Union[int, float]] = None
    thumb: Optional[str] = None
    formatted: str

    @classmethod
    def from_hit(cls, hit: SearchHit) -> "SearchResult":
        symbol = hit.symbol.upper()
        return cls(
            id=hit.id,
            name=hit.name,
            symbol=symbol,
            market_cap_rank=hit.market_cap_rank,
            price=hit.price,
            thumb=hit.thumbnail_url,
            formatted=f"{hit.name} ({symbol}): ${format_number(hit.price)}",
        )


class SearchResponse(BaseModel):
    results: list[SearchResult]
    count: int


class HealthResponse(BaseModel):
    status: str = "healthy"
    server: str
    version: str
    timestamp: str
