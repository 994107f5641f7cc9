# price_relay/api/health.py
from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter

from price_relay.schemas.api import HealthResponse

router = APIRouter(prefix="/api", tags=["health"])

SERVER_NAME = "CryptoPrice MCP Web Server"
SERVER_VERSION = "1.0.0"


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


@router.get("/health", response_model=HealthResponse)
def health() -> HealthResponse:
    # liveness only; the upstream is not probed
    return HealthResponse(server=SERVER_NAME, version=SERVER_VERSION, timestamp=_now_iso())
