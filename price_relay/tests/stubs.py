from __future__ import annotations

from typing import Any, Callable

import httpx

BASE_URL = "https://stub.coingecko.test/api/v3"


class StubUpstream:
    """Canned CoinGecko responses keyed by path; records every request."""

    def __init__(self) -> None:
        self.routes: dict[str, Callable[[httpx.Request], httpx.Response]] = {}
        self.requests: list[httpx.Request] = []

    def json(self, path: str, payload: Any, status_code: int = 200) -> None:
        self.routes[path] = lambda request: httpx.Response(status_code, json=payload)

    def status(self, path: str, status_code: int) -> None:
        self.routes[path] = lambda request: httpx.Response(status_code, text="")

    def raw(self, path: str, body: str) -> None:
        self.routes[path] = lambda request: httpx.Response(200, text=body)

    def fail(self, path: str, exc: Exception) -> None:
        def _raise(request: httpx.Request) -> httpx.Response:
            raise exc

        self.routes[path] = _raise

    def paths(self) -> list[str]:
        return [r.url.path.replace("/api/v3", "", 1) for r in self.requests]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path.replace("/api/v3", "", 1)
        route = self.routes.get(path)
        if route is None:
            return httpx.Response(404, text="no stub route")
        return route(request)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


def market_row(coin_id: str, name: str, symbol: str, price: float, cap: float) -> dict[str, Any]:
    return {
        "id": coin_id,
        "name": name,
        "symbol": symbol,
        "current_price": price,
        "market_cap": cap,
        "price_change_percentage_24h": 1.5,
        "total_volume": 1000,
    }


TOP_FIVE = [
    market_row("bitcoin", "Bitcoin", "btc", 67000, 1_300_000_000_000),
    market_row("ethereum", "Ethereum", "eth", 3500.5, 420_000_000_000),
    market_row("tether", "Tether", "usdt", 1.0, 110_000_000_000),
    market_row("binancecoin", "BNB", "bnb", 590, 87_000_000_000),
    market_row("solana", "Solana", "sol", 150.25, 70_000_000_000),
]

SEARCH_SOL = {
    "coins": [
        {"id": "solana", "name": "Solana", "symbol": "SOL", "market_cap_rank": 5, "thumb": "https://img.test/sol.png"},
        {"id": "solana-bridged", "name": "Bridged SOL", "symbol": "BSOL", "market_cap_rank": None, "thumb": "https://img.test/bsol.png"},
        {"id": "solanium", "name": "Solanium", "symbol": "SLIM", "market_cap_rank": 900, "thumb": None},
    ],
    "exchanges": [],
    "categories": [],
}
