# price_relay/config/settings.py
from __future__ import annotations

import os
from dataclasses import dataclass


MCP_TRANSPORTS = ("stdio", "sse", "streamable-http")


def parse_int(value: str | None, default: int) -> int:
    if value is None or value.strip() == "":
        return default
    return int(value)


def parse_float(value: str | None, default: float) -> float:
    if value is None or value.strip() == "":
        return default
    return float(value)


def parse_choice(value: str | None, default: str, choices: tuple[str, ...]) -> str:
    if not value:
        return default
    v = value.strip().lower()
    if v not in choices:
        raise ValueError(f"Unsupported value '{value}', expected one of {', '.join(choices)}")
    return v


@dataclass(frozen=True)
class Settings:
    COINGECKO_BASE_URL: str
    COINGECKO_API_KEY: str | None
    UPSTREAM_TIMEOUT_SECONDS: float
    MAX_LIST_LIMIT: int
    HTTP_HOST: str
    HTTP_PORT: int
    MCP_TRANSPORT: str
    MCP_HOST: str
    MCP_PORT: int
    LOG_LEVEL: str

    @staticmethod
    def from_env() -> "Settings":
        return Settings(
            COINGECKO_BASE_URL=os.getenv("COINGECKO_BASE_URL", "https://api.coingecko.com/api/v3").rstrip("/"),
            COINGECKO_API_KEY=os.getenv("COINGECKO_API_KEY") or None,
            UPSTREAM_TIMEOUT_SECONDS=parse_float(os.getenv("UPSTREAM_TIMEOUT_SECONDS"), 10.0),
            MAX_LIST_LIMIT=parse_int(os.getenv("MAX_LIST_LIMIT"), 250),
            HTTP_HOST=os.getenv("HTTP_HOST", "127.0.0.1"),
            HTTP_PORT=parse_int(os.getenv("HTTP_PORT"), 3000),
            MCP_TRANSPORT=parse_choice(os.getenv("MCP_TRANSPORT"), "stdio", MCP_TRANSPORTS),
            MCP_HOST=os.getenv("MCP_HOST", "127.0.0.1"),
            MCP_PORT=parse_int(os.getenv("MCP_PORT"), 7010),
            LOG_LEVEL=os.getenv("LOG_LEVEL", "INFO").upper(),
        )


_settings: Settings | None = None


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings.from_env()
    return _settings
