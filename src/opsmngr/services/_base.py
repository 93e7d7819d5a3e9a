"""
What a service needs from a client: build requests and execute them.
"""

from __future__ import annotations

from typing import Any, Optional, Protocol

import httpx

from opsmngr.core.context import Context
from opsmngr.core.errors import ArgumentError
from opsmngr.core.response import APIResponse, Destination


class RequestDoer(Protocol):
    def new_request(self, method: str, url: str, body: Any = None) -> httpx.Request: ...

    def new_gzip_request(self, method: str, url: str) -> httpx.Request: ...

    async def do(
        self,
        ctx: Context,
        request: httpx.Request,
        destination: Optional[Destination] = None,
    ) -> APIResponse: ...


class Service:
    def __init__(self, client: RequestDoer):
        self.client = client


def require(arg: str, value: str) -> None:
    if not value:
        raise ArgumentError(arg, "it must be set")
