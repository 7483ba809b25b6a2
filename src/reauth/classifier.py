from enum import Enum

from .endpoint import Endpoint
from .errors import NetworkError

AUTH_EXPIRED_STATUS = 403


class FailureKind(str, Enum):
    RETRYABLE_AUTH = "retryable_auth"
    TERMINAL = "terminal"


def classify(error: BaseException, endpoint: Endpoint) -> FailureKind:
    """Decide whether a failed request may be retried after re-authentication.

    Only an HTTP 403 on an endpoint that declares a refresh configuration is
    retryable. Transport, decoding and URL errors, and every other status,
    are terminal.
    """
    if not isinstance(error, NetworkError):
        return FailureKind.TERMINAL
    if error.status_code == AUTH_EXPIRED_STATUS and endpoint.refresh_config is not None:
        return FailureKind.RETRYABLE_AUTH
    return FailureKind.TERMINAL


def is_retryable_auth_failure(error: BaseException, endpoint: Endpoint) -> bool:
    return classify(error, endpoint) is FailureKind.RETRYABLE_AUTH
