from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Request

from price_relay.schemas.api import (
    CryptoPriceResponse,
    SearchResponse,
    SearchResult,
    TopCrypto,
    TopCryptosResponse,
)
from price_relay.services.gateway import DEFAULT_CURRENCY, DEFAULT_LIMIT, PriceGateway


router = APIRouter(prefix="/api", tags=["crypto"])


def get_gateway(request: Request) -> PriceGateway:
    return request.app.state.gateway


@router.get("/crypto/{coin_id}", response_model=CryptoPriceResponse)
async def get_crypto_price(
    coin_id: str,
    currency: str = Query(DEFAULT_CURRENCY),
    gateway: PriceGateway = Depends(get_gateway),
):
    """
    Spot price of one coin.
    Example: /api/crypto/bitcoin?currency=eur
    """
    quote = await gateway.get_price(coin_id, currency)
    return CryptoPriceResponse.from_quote(quote)


@router.get("/top-cryptos", response_model=TopCryptosResponse)
async def get_top_cryptos(
    limit: int = Query(DEFAULT_LIMIT),
    gateway: PriceGateway = Depends(get_gateway),
):
    coins = await gateway.list_top(limit)
    cryptos = [TopCrypto.from_summary(c) for c in coins]
    return TopCryptosResponse(cryptos=cryptos, count=len(cryptos))


@router.get("/search", response_model=SearchResponse)
async def search_cryptos(
    query: str = Query(""),
    limit: int = Query(DEFAULT_LIMIT),
    gateway: PriceGateway = Depends(get_gateway),
):
    """
    Name/symbol search with USD prices.
    Example: /api/search?query=sol&limit=5
    """
    hits = await gateway.search(query, limit)
    results = [SearchResult.from_hit(h) for h in hits]
    return SearchResponse(results=results, count=len(results))
