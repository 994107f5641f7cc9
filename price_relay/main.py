# price_relay/main.py
from __future__ import annotations

import argparse
import logging
from typing import Optional

import uvicorn
from fastapi import FastAPI

from price_relay.api.crypto import router as crypto_router
from price_relay.api.errors import install_error_handlers
from price_relay.api.health import router as health_router
from price_relay.config.settings import Settings, get_settings
from price_relay.services.gateway import PriceGateway
from price_relay.utils.logger import setup_logger

logger = logging.getLogger("price_relay.main")


def create_app(
    settings: Optional[Settings] = None,
    gateway: Optional[PriceGateway] = None,
) -> FastAPI:
    settings = settings or get_settings()

    app = FastAPI(title="CryptoPrice API")
    # one gateway per process, handed to routes through app.state
    app.state.gateway = gateway or PriceGateway.from_settings(settings)

    # Routers
    app.include_router(health_router)
    app.include_router(crypto_router)
    install_error_handlers(app)

    @app.get("/")
    def root() -> dict[str, str]:
        return {"message": "CryptoPrice API: see /api/health, /api/crypto/{id}, /api/top-cryptos, /api/search"}

    @app.on_event("shutdown")
    async def on_shutdown() -> None:
        await app.state.gateway.close()

    return app


def main() -> None:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="CryptoPrice HTTP JSON API")
    parser.add_argument("--host", default=settings.HTTP_HOST)
    parser.add_argument("--port", type=int, default=settings.HTTP_PORT)
    args = parser.parse_args()

    setup_logger(settings.LOG_LEVEL)
    logger.info("CryptoPrice web server on http://%s:%s", args.host, args.port)
    logger.info("endpoints: /api/crypto/{id}?currency=usd /api/top-cryptos?limit=10 /api/search?query= /api/health")
    uvicorn.run(create_app(settings), host=args.host, port=args.port, log_level=settings.LOG_LEVEL.lower())


if __name__ == "__main__":
    main()
