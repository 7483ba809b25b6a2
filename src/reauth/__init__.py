from .adapters import AiohttpTransport, HttpxTransport, RequestsTransport
from .classifier import FailureKind, classify, is_retryable_auth_failure
from .endpoint import (
    AuthRequired,
    CachePolicy,
    ContentType,
    Endpoint,
    HTTPMethod,
    Scheme,
    TaskType,
)
from .env import load_refresh_config_from_env, logging_enabled_from_env
from .errors import (
    BadUrl,
    DataNotFound,
    DecodingFailed,
    EncodingFailed,
    ErrorKind,
    Forbidden,
    InternalServerError,
    InvalidResponse,
    MaxRetriesExceeded,
    NetworkError,
    NotFound,
    ReAuthFailed,
    RequestError,
    TransportError,
    Unauthorized,
    UnexpectedStatusCode,
    UnknownError,
    error_for_status,
)
from .executor import RequestExecutor
from .logger import NetworkLogger
from .networkable import Networkable
from .refresh import RefreshState, TokenRefreshService
from .service import NetworkService
from .transport import Transport, TransportResponse, WireRequest
from .types import AuthConfig, Credential, RefreshConfig, TimeoutConfig

__all__ = [
    "Endpoint",
    "AuthRequired",
    "HTTPMethod",
    "Scheme",
    "ContentType",
    "CachePolicy",
    "TaskType",
    "AuthConfig",
    "RefreshConfig",
    "TimeoutConfig",
    "Credential",
    "Transport",
    "WireRequest",
    "TransportResponse",
    "HttpxTransport",
    "AiohttpTransport",
    "RequestsTransport",
    "RequestExecutor",
    "FailureKind",
    "classify",
    "is_retryable_auth_failure",
    "TokenRefreshService",
    "RefreshState",
    "NetworkService",
    "Networkable",
    "NetworkLogger",
    "load_refresh_config_from_env",
    "logging_enabled_from_env",
    "ErrorKind",
    "NetworkError",
    "BadUrl",
    "InvalidResponse",
    "RequestError",
    "TransportError",
    "UnexpectedStatusCode",
    "Unauthorized",
    "Forbidden",
    "NotFound",
    "InternalServerError",
    "DataNotFound",
    "DecodingFailed",
    "EncodingFailed",
    "ReAuthFailed",
    "MaxRetriesExceeded",
    "UnknownError",
    "error_for_status",
]
