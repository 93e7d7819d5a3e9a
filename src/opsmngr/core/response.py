"""Response wrapper and the destinations OpsManagerClient.do can decode into."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, BinaryIO, Generic, Optional, TypeVar, Union

import httpx

T = TypeVar("T")


@dataclass(frozen=True)
class ByteSink:
    """Copy the raw body into writer (gzip/binary requests)."""

    writer: BinaryIO


@dataclass(frozen=True)
class TypedValue(Generic[T]):
    """Decode the JSON body into type; an empty body leaves default in place."""

    type: Any
    default: Optional[T] = None


Destination = Union[ByteSink, TypedValue]


@dataclass
class APIResponse(Generic[T]):
    raw: httpx.Response
    value: Optional[T] = None

    @property
    def status_code(self) -> int:
        return self.raw.status_code

    @property
    def headers(self) -> httpx.Headers:
        return self.raw.headers


__all__ = ["ByteSink", "TypedValue", "Destination", "APIResponse"]
