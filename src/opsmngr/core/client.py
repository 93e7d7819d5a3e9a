from __future__ import annotations

import json
import logging
import platform
import ssl
import time
from functools import lru_cache
from typing import Any, Callable, Optional, Union

import httpx
from pydantic import BaseModel, TypeAdapter, ValidationError

from .._version import __version__
from .context import Context
from .errors import (
    BodyEncodingError,
    ConfigurationError,
    CopyError,
    DecodeError,
    InvalidURLError,
    TransportError,
    check_response,
)
from .observability import log_event
from .response import APIResponse, ByteSink, Destination, TypedValue

CLOUD_URL = "https://cloud.mongodb.com/"
API_PUBLIC_V1_PATH = "api/public/v1.0/"
DEFAULT_BASE_URL = CLOUD_URL + API_PUBLIC_V1_PATH
DEFAULT_USER_AGENT = (
    f"python-ops-manager/{__version__} "
    f"({platform.system().lower()}; {platform.machine()})"
)
DEFAULT_TIMEOUT_SECONDS = 10.0

JSON_MEDIA_TYPE = "application/json"
GZIP_MEDIA_TYPE = "application/gzip"

RequestCompletionCallback = Callable[[httpx.Request, httpx.Response], None]
ClientOption = Callable[["OpsManagerClient"], None]


# --- Client options ---------------------------------------------------------- #


def set_base_url(base_url: str) -> ClientOption:
    """Point the client at another Ops Manager; keep the trailing slash."""

    def option(client: "OpsManagerClient") -> None:
        try:
            url = httpx.URL(base_url)
        except httpx.InvalidURL as exc:
            raise ConfigurationError(f"invalid base URL {base_url!r}: {exc}") from exc
        if not url.is_absolute_url:
            raise ConfigurationError(f"base URL must be absolute, got {base_url!r}")
        client.base_url = url

    return option


def set_user_agent(user_agent: str) -> ClientOption:
    """Prefix user_agent to the default user agent."""

    def option(client: "OpsManagerClient") -> None:
        client.user_agent = f"{user_agent} {client.user_agent}"

    return option


def set_digest_auth(public_key: str, private_key: str) -> ClientOption:
    def option(client: "OpsManagerClient") -> None:
        if not public_key or not private_key:
            raise ConfigurationError("public and private API keys must both be set")
        client.auth = httpx.DigestAuth(public_key, private_key)

    return option


def set_request_completion_callback(callback: RequestCompletionCallback) -> ClientOption:
    def option(client: "OpsManagerClient") -> None:
        client.on_request_completed(callback)

    return option


def _require_default_transport(client: "OpsManagerClient") -> None:
    if client.transport is not None:
        raise ConfigurationError(
            "TLS options configure the default transport; set TLS on the "
            f"supplied {type(client.transport).__name__} instead"
        )


def skip_verify() -> ClientOption:
    """Disable TLS certificate verification."""

    def option(client: "OpsManagerClient") -> None:
        _require_default_transport(client)
        client.verify = False

    return option


def ca_validate(ca_pem: str) -> ClientOption:
    """Trust only the certificate authorities in the PEM bundle ca_pem."""

    def option(client: "OpsManagerClient") -> None:
        _require_default_transport(client)
        if not ca_pem or not ca_pem.strip():
            raise ConfigurationError("CA bundle is empty")
        try:
            context = ssl.create_default_context(cadata=ca_pem)
        except (ssl.SSLError, ValueError) as exc:
            raise ConfigurationError(f"invalid CA bundle: {exc}") from exc
        client.verify = context

    return option


# --- Client ------------------------------------------------------------------ #


class OpsManagerClient:
    """
    Shared HTTP client for the Ops Manager public API.
    - Builds JSON and gzip requests against a base URL
    - Executes them under a Context and decodes into a Destination
    - Raises typed errors; never retries
    """

    def __init__(
        self,
        *options: ClientOption,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        logger: Optional[logging.Logger] = None,
    ):
        self.transport: Optional[httpx.AsyncBaseTransport] = transport
        self.verify: Union[bool, ssl.SSLContext] = True
        self.base_url = httpx.URL(DEFAULT_BASE_URL)
        self.user_agent = DEFAULT_USER_AGENT
        self.auth: Optional[httpx.Auth] = None
        self.timeout_seconds = timeout_seconds
        self.log = logger or logging.getLogger("opsmngr.client")
        self._on_request_completed: Optional[RequestCompletionCallback] = None

        for option in options:
            option(self)

        if self.transport is None:
            self.transport = httpx.AsyncHTTPTransport(verify=self.verify)
        self.http = httpx.AsyncClient(
            transport=self.transport,
            auth=self.auth,
            timeout=timeout_seconds,
            follow_redirects=True,
        )

    async def aclose(self) -> None:
        await self.http.aclose()

    async def __aenter__(self) -> "OpsManagerClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    def on_request_completed(self, callback: Optional[RequestCompletionCallback]) -> None:
        self._on_request_completed = callback

    # --- Request builders ---

    def _resolve(self, url: str) -> httpx.URL:
        if not self.base_url.path.endswith("/"):
            raise ConfigurationError(
                f"base URL must have a trailing slash, but {str(self.base_url)!r} does not"
            )
        try:
            return self.base_url.join(url)
        except httpx.InvalidURL as exc:
            raise InvalidURLError(f"invalid URL {url!r}: {exc}") from exc

    def _headers(self, accept: str) -> dict:
        headers = {"Accept": accept}
        if self.user_agent:
            headers["User-Agent"] = self.user_agent
        return headers

    def new_request(self, method: str, url: str, body: Any = None) -> httpx.Request:
        """
        Build a JSON request. url is resolved against base_url, so it should
        not start with a slash. body, when given, is sent as compact JSON.
        """
        resolved = self._resolve(url)
        headers = self._headers(JSON_MEDIA_TYPE)

        content: Optional[bytes] = None
        if body is not None:
            content = _encode_body(body)
            headers["Content-Type"] = JSON_MEDIA_TYPE

        return self.http.build_request(
            method.upper(), resolved, content=content, headers=headers
        )

    def new_gzip_request(self, method: str, url: str) -> httpx.Request:
        """Build a bodiless request for an endpoint that returns a gzip archive."""
        resolved = self._resolve(url)
        return self.http.build_request(
            method.upper(), resolved, headers=self._headers(GZIP_MEDIA_TYPE)
        )

    # --- Execution ---

    async def do(
        self,
        ctx: Context,
        request: httpx.Request,
        destination: Optional[Destination] = None,
    ) -> APIResponse:
        """
        Send request under ctx and decode the body into destination.

        - ctx finishing first raises its ContextError
        - transport failures raise TransportError (ctx's error if ctx is done)
        - non-2xx raises APIError carrying the raw response
        - TypedValue: JSON decode, empty body keeps the default
        - ByteSink: raw body copied into the writer
        """
        if ctx is None:
            raise ValueError("context must be non-nil")

        start = time.perf_counter()
        try:
            response = await self._send(ctx, request)
        except Exception as exc:
            self._log_call(request, start, status="exception", error_type=type(exc).__name__)
            raise

        try:
            if self._on_request_completed is not None:
                self._on_request_completed(request, response)
            result = await self._handle(response, destination)
        finally:
            await response.aclose()
            self._log_call(request, start, status=response.status_code)
        return result

    async def _send(self, ctx: Context, request: httpx.Request) -> httpx.Response:
        try:
            return await ctx.run(self.http.send(request, stream=True))
        except httpx.HTTPError as exc:
            # the context's error tells the caller more than the raw failure
            if ctx.done():
                raise ctx.err() from exc
            raise TransportError(
                f"transport error calling {request.method} {request.url}: {exc}"
            ) from exc

    async def _handle(
        self, response: httpx.Response, destination: Optional[Destination]
    ) -> APIResponse:
        result = APIResponse(raw=response)

        if not 200 <= response.status_code <= 299:
            await self._read(response)
            error = check_response(response)
            if error is not None:
                raise error

        if destination is None:
            return result

        if isinstance(destination, ByteSink):
            try:
                async for chunk in response.aiter_bytes():
                    destination.writer.write(chunk)
            except (OSError, httpx.HTTPError) as exc:
                raise CopyError(
                    f"copying body of {response.request.method} "
                    f"{response.request.url}: {exc}"
                ) from exc
            return result

        if isinstance(destination, TypedValue):
            result.value = destination.default
            body = await self._read(response)
            if not body.strip():
                return result
            try:
                result.value = _adapter(destination.type).validate_json(body)
            except ValidationError as exc:
                raise DecodeError(
                    f"response from {response.request.method} {response.request.url} "
                    f"did not match {getattr(destination.type, '__name__', destination.type)}: {exc}"
                ) from exc
            return result

        raise TypeError(f"unsupported destination {type(destination).__name__}")

    async def _read(self, response: httpx.Response) -> bytes:
        try:
            return await response.aread()
        except httpx.HTTPError as exc:
            raise TransportError(
                f"reading body of {response.request.method} {response.request.url}: {exc}"
            ) from exc

    def _log_call(self, request: httpx.Request, start: float, **fields: Any) -> None:
        status = fields.get("status")
        failed = status == "exception" or (isinstance(status, int) and status >= 400)
        log_event(
            "op_call",
            self.log,
            level=logging.WARNING if failed else logging.INFO,
            method=request.method,
            endpoint=request.url.path,
            duration_ms=int((time.perf_counter() - start) * 1000),
            **fields,
        )


@lru_cache(maxsize=128)
def _adapter(tp: Any) -> TypeAdapter:
    return TypeAdapter(tp)


def _encode_body(body: Any) -> bytes:
    if isinstance(body, BaseModel):
        body = body.model_dump(mode="json", by_alias=True, exclude_none=True)
    try:
        return json.dumps(
            body, separators=(",", ":"), ensure_ascii=False, allow_nan=False
        ).encode("utf-8")
    except (TypeError, ValueError) as exc:
        raise BodyEncodingError(f"cannot encode request body: {exc}") from exc


__all__ = [
    "CLOUD_URL",
    "API_PUBLIC_V1_PATH",
    "DEFAULT_BASE_URL",
    "DEFAULT_USER_AGENT",
    "JSON_MEDIA_TYPE",
    "GZIP_MEDIA_TYPE",
    "ClientOption",
    "RequestCompletionCallback",
    "OpsManagerClient",
    "set_base_url",
    "set_user_agent",
    "set_digest_auth",
    "set_request_completion_callback",
    "skip_verify",
    "ca_validate",
]
