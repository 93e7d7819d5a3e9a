"""Shared request/response pipeline for the Ops Manager API."""

from .client import (
    DEFAULT_BASE_URL,
    DEFAULT_USER_AGENT,
    ClientOption,
    OpsManagerClient,
    RequestCompletionCallback,
    ca_validate,
    set_base_url,
    set_digest_auth,
    set_request_completion_callback,
    set_user_agent,
    skip_verify,
)
from .config import create_client_from_env, load_env_config
from .context import Context
from .errors import (
    APIError,
    ArgumentError,
    BodyEncodingError,
    ConfigurationError,
    ContextError,
    CopyError,
    DeadlineExceededError,
    DecodeError,
    EncodingError,
    InvalidURLError,
    OpsManagerError,
    QueryEncodingError,
    RequestCanceledError,
    TransportError,
    check_response,
)
from .models import Link, ListResponse
from .query import ListOptions, QueryOptions, set_query_params
from .response import APIResponse, ByteSink, Destination, TypedValue

__all__ = [
    # Client
    "OpsManagerClient",
    "ClientOption",
    "RequestCompletionCallback",
    "DEFAULT_BASE_URL",
    "DEFAULT_USER_AGENT",
    "set_base_url",
    "set_user_agent",
    "set_digest_auth",
    "set_request_completion_callback",
    "skip_verify",
    "ca_validate",
    "Context",
    # Responses
    "APIResponse",
    "ByteSink",
    "TypedValue",
    "Destination",
    "Link",
    "ListResponse",
    # Query options
    "QueryOptions",
    "ListOptions",
    "set_query_params",
    # Config helpers
    "create_client_from_env",
    "load_env_config",
    # Errors
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
    "APIError",
    "DecodeError",
    "CopyError",
    "check_response",
]
