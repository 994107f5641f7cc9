"""Typed decode step applied to every upstream body before any field access."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeVar, Union

from pydantic import TypeAdapter, ValidationError

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True)
class Malformed:
    reason: str


Decoded = Union[Ok[T], Malformed]


def decode_payload(raw: Any, adapter: TypeAdapter[T]) -> Decoded[T]:
    try:
        return Ok(adapter.validate_python(raw))
    except ValidationError as exc:
        return Malformed(reason=f"{exc.error_count()} validation error(s): {exc.errors()[0]['msg']}")
