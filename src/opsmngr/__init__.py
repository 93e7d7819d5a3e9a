"""opsmngr package exports."""

from ._version import __version__
from .core import (
    DEFAULT_BASE_URL,
    APIError,
    APIResponse,
    ArgumentError,
    BodyEncodingError,
    ByteSink,
    ConfigurationError,
    Context,
    ContextError,
    CopyError,
    DeadlineExceededError,
    DecodeError,
    EncodingError,
    InvalidURLError,
    Link,
    ListOptions,
    ListResponse,
    OpsManagerClient,
    OpsManagerError,
    QueryEncodingError,
    QueryOptions,
    RequestCanceledError,
    TransportError,
    TypedValue,
    ca_validate,
    check_response,
    create_client_from_env,
    set_base_url,
    set_digest_auth,
    set_query_params,
    set_request_completion_callback,
    set_user_agent,
    skip_verify,
)
from .core.logging import setup_logging
from .core.models import Agent, Agents, AgentType, Organization, Organizations
from .services import Services

__all__ = [
    "__version__",
    # Client
    "OpsManagerClient",
    "DEFAULT_BASE_URL",
    "Context",
    "Services",
    "set_base_url",
    "set_user_agent",
    "set_digest_auth",
    "set_request_completion_callback",
    "skip_verify",
    "ca_validate",
    "create_client_from_env",
    "setup_logging",
    # Responses and models
    "APIResponse",
    "ByteSink",
    "TypedValue",
    "Link",
    "ListResponse",
    "Agent",
    "Agents",
    "AgentType",
    "Organization",
    "Organizations",
    # Query options
    "QueryOptions",
    "ListOptions",
    "set_query_params",
    # Exceptions
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
