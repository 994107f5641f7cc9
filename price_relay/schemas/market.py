"""Pydantic models for upstream payloads and provider-agnostic results."""

from __future__ import annotations

from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from price_relay.utils.formatting import format_number


# ----------------------------
# Upstream payload shapes
# ----------------------------
class MarketCoinPayload(BaseModel):
    """One row of CoinGecko /coins/markets."""

    model_config = ConfigDict(extra="ignore")

    id: str
    name: str
    symbol: str
    current_price: Optional[Union[int, float]] = None
    market_cap: Optional[Union[int, float]] = None
    price_change_percentage_24h: Optional[Union[int, float]] = None


class SearchCoinPayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    name: str
    symbol: str
    market_cap_rank: Optional[int] = None
    thumb: Optional[str] = None


class SearchPayload(BaseModel):
    """CoinGecko /search body; only the coin candidates are used."""

    model_config = ConfigDict(extra="ignore")

    coins: list[SearchCoinPayload]


# id -> (currency -> price); a null price is kept as "no quote"
SimplePricePayload = dict[str, dict[str, Optional[Union[int, float]]]]


# ----------------------------
# Results
# ----------------------------
class PriceQuote(BaseModel):
    coin: str
    currency: str
    amount: Optional[Union[int, float]] = None

    @property
    def display_currency(self) -> str:
        return self.currency.upper()

    @property
    def formatted(self) -> str:
        return f"{self.coin}: {format_number(self.amount)} {self.display_currency}"


class MarketSummary(BaseModel):
    id: str
    name: str
    symbol: str
    current_price: Optional[Union[int, float]] = None
    market_cap: Optional[Union[int, float]] = None
    price_change_percentage_24h: Optional[Union[int, float]] = None


class SearchCandidate(BaseModel):
    id: str
    name: str
    symbol: str
    market_cap_rank: Optional[int] = None
    thumbnail_url: Optional[str] = None


class SearchHit(SearchCandidate):
    price: Optional[Union[int, float]] = Field(default=None, description="USD price from the enrichment lookup")
