"""Error taxonomy and the HTTP status classifier."""

from __future__ import annotations

from typing import Any, List, Optional

import httpx
from pydantic import BaseModel, ConfigDict, Field, ValidationError


class OpsManagerError(Exception):
    """Base error for client failures."""


class ConfigurationError(OpsManagerError, ValueError):
    """Raised when the client cannot be built or cannot resolve a URL."""


class ArgumentError(OpsManagerError, ValueError):
    def __init__(self, arg: str, reason: str):
        super().__init__(f"{arg} is invalid because {reason}")
        self.arg = arg
        self.reason = reason


class EncodingError(OpsManagerError):
    """Base for failures turning Python values into a request."""


class InvalidURLError(EncodingError):
    pass


class QueryEncodingError(EncodingError):
    pass


class BodyEncodingError(EncodingError):
    pass


class TransportError(OpsManagerError):
    """Network-level failure; the httpx error is chained as __cause__."""


class ContextError(OpsManagerError):
    pass


class RequestCanceledError(ContextError):
    pass


class DeadlineExceededError(ContextError):
    pass


class DecodeError(OpsManagerError):
    pass


class CopyError(OpsManagerError):
    pass


class ErrorResponse(BaseModel):
    """Error envelope returned by Ops Manager on non-2xx responses."""

    detail: str = ""
    error: int = 0
    error_code: str = Field(default="", alias="errorCode")
    reason: str = ""
    parameters: List[Any] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class APIError(OpsManagerError):
    def __init__(
        self,
        *,
        status_code: int,
        method: str,
        url: str,
        error_code: str = "",
        detail: str = "",
        reason: str = "",
        parameters: Optional[List[Any]] = None,
        response: Optional[httpx.Response] = None,
    ):
        message = f"{method} {url}: {status_code}"
        if error_code:
            message += f" ({error_code})"
        if detail:
            message += f" {detail}"
        super().__init__(message)
        self.status_code = status_code
        self.method = method
        self.url = url
        self.error_code = error_code
        self.detail = detail
        self.reason = reason
        self.parameters = parameters if parameters is not None else []
        self.response = response


def check_response(response: httpx.Response) -> Optional[APIError]:
    """
    Classify a response whose body has already been read.

    Returns None for 2xx. Anything else yields an APIError built from the
    server's error envelope, or from the status line alone when the body is
    empty or not an error envelope.
    """
    if 200 <= response.status_code <= 299:
        return None

    request = response.request
    reason = response.reason_phrase
    envelope: Optional[ErrorResponse] = None
    if response.content:
        try:
            envelope = ErrorResponse.model_validate_json(response.content)
        except ValidationError:
            envelope = None

    if envelope is None:
        return APIError(
            status_code=response.status_code,
            method=request.method,
            url=str(request.url),
            detail=reason,
            reason=reason,
            response=response,
        )

    return APIError(
        status_code=response.status_code,
        method=request.method,
        url=str(request.url),
        error_code=envelope.error_code,
        detail=envelope.detail or reason,
        reason=envelope.reason or reason,
        parameters=envelope.parameters,
        response=response,
    )


__all__ = [
    "OpsManagerError",
    "ConfigurationError",
    "ArgumentError",
    "EncodingError",
    "InvalidURLError",
    "QueryEncodingError",
    "BodyEncodingError",
    "TransportError",
    "ContextError",
    "RequestCanceledError",
    "DeadlineExceededError",
    "DecodeError",
    "CopyError",
    "ErrorResponse",
    "APIError",
    "check_response",
]
