"""Failure taxonomy shared by the market data client, the gateway and both façades."""

from __future__ import annotations


class PriceRelayError(RuntimeError):
    """Base class for every classified failure."""


class InvalidArgument(PriceRelayError):
    """Caller input rejected before any upstream call."""


class UpstreamUnreachable(PriceRelayError):
    def __init__(self, message: str, *, timed_out: bool = False):
        super().__init__(message)
        self.timed_out = timed_out


class UpstreamError(PriceRelayError):
    def __init__(self, status_code: int, reason: str):
        super().__init__(f"API error: {status_code} {reason}".rstrip())
        self.status_code = status_code
        self.reason = reason


class NotFound(PriceRelayError):
    """Well-formed upstream response that lacks the requested entity."""


class EmptyResult(PriceRelayError):
    """Well-formed upstream response with zero rows where at least one was expected."""
