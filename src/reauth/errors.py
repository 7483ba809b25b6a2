from enum import Enum


class ErrorKind(str, Enum):
    BAD_URL = "bad_url"
    INVALID_RESPONSE = "invalid_response"
    REQUEST_ERROR = "request_error"
    TRANSPORT_ERROR = "transport_error"
    UNEXPECTED_STATUS_CODE = "unexpected_status_code"
    DATA_NOT_FOUND = "data_not_found"
    DECODING_FAILED = "decoding_failed"
    ENCODING_FAILED = "encoding_failed"
    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    INTERNAL_SERVER_ERROR = "internal_server_error"
    REAUTH_FAILED = "reauth_failed"
    MAX_RETRIES_EXCEEDED = "max_retries_exceeded"
    UNKNOWN = "unknown"


class NetworkError(Exception):
    """Base for every failure surfaced by reauth.

    Each subclass carries a fixed ``kind`` tag so callers can switch on it
    without isinstance chains, plus an optional ``detail``.
    """

    kind: ErrorKind = ErrorKind.UNKNOWN
    message: str = "An unknown error occurred."

    def __init__(self, detail=None):
        self.detail = detail
        text = self.message if detail is None else f"{self.message} ({detail})"
        super().__init__(text)

    @property
    def status_code(self) -> int | None:
        return None


class BadUrl(NetworkError):
    kind = ErrorKind.BAD_URL
    message = "The request URL is invalid."


class InvalidResponse(NetworkError):
    kind = ErrorKind.INVALID_RESPONSE
    message = "Invalid response."


class RequestError(NetworkError):
    kind = ErrorKind.REQUEST_ERROR
    message = "Request error."


class TransportError(NetworkError):
    kind = ErrorKind.TRANSPORT_ERROR
    message = "Transport error."


class UnexpectedStatusCode(NetworkError):
    kind = ErrorKind.UNEXPECTED_STATUS_CODE

    def __init__(self, code: int, body: bytes = b""):
        self.code = code
        self.body = body
        self.detail = code
        Exception.__init__(self, self._describe(code))

    @property
    def status_code(self) -> int | None:
        return self.code

    @staticmethod
    def _describe(code: int) -> str:
        return f"Unexpected status code: {code}."


class Unauthorized(UnexpectedStatusCode):
    kind = ErrorKind.UNAUTHORIZED

    @staticmethod
    def _describe(code: int) -> str:
        return "Unauthorized access."


class Forbidden(UnexpectedStatusCode):
    kind = ErrorKind.FORBIDDEN

    @staticmethod
    def _describe(code: int) -> str:
        return "Forbidden access."


class NotFound(UnexpectedStatusCode):
    kind = ErrorKind.NOT_FOUND

    @staticmethod
    def _describe(code: int) -> str:
        return "Resource not found."


class InternalServerError(UnexpectedStatusCode):
    kind = ErrorKind.INTERNAL_SERVER_ERROR

    @staticmethod
    def _describe(code: int) -> str:
        return "Internal server error."


class DataNotFound(NetworkError):
    kind = ErrorKind.DATA_NOT_FOUND
    message = "Data not found in the response."


class DecodingFailed(NetworkError):
    kind = ErrorKind.DECODING_FAILED
    message = "Failed to decode response."


class EncodingFailed(NetworkError):
    kind = ErrorKind.ENCODING_FAILED
    message = "Failed to encode request."


class ReAuthFailed(NetworkError):
    kind = ErrorKind.REAUTH_FAILED
    message = "Re-authentication failed."


class MaxRetriesExceeded(NetworkError):
    kind = ErrorKind.MAX_RETRIES_EXCEEDED
    message = "Max retries exceeded."


class UnknownError(NetworkError):
    kind = ErrorKind.UNKNOWN


_STATUS_ERRORS: dict[int, type[UnexpectedStatusCode]] = {
    401: Unauthorized,
    403: Forbidden,
    404: NotFound,
    500: InternalServerError,
}


def error_for_status(code: int, body: bytes = b"") -> UnexpectedStatusCode:
    """Return the most specific status error for a non-2xx code.

    All results are ``UnexpectedStatusCode`` instances, so callers that only
    care about "the status was not 2xx" can catch the base class.
    """
    return _STATUS_ERRORS.get(code, UnexpectedStatusCode)(code, body)
