import contextlib
import json
import logging
import uuid
from collections.abc import Mapping
from typing import Any

from .env import logging_enabled_from_env
from .transport import TransportResponse, WireRequest

logger = logging.getLogger("reauth")

_KEYS = (
    "DURATION",
    "URL",
    "METHOD",
    "REQUEST HEADERS",
    "BODY",
    "STATUS CODE",
    "RESPONSE HEADERS",
    "RESPONSE",
    "ERROR",
)
_KEY_WIDTH = 1 + max(len(k) for k in _KEYS)
_EMPTY = "-"


def _value(value: Any) -> str:
    if value is None:
        return _EMPTY
    if isinstance(value, Mapping):
        if not value:
            return _EMPTY
        pad = " " * (_KEY_WIDTH + 3)
        return f"\n{pad}".join(f"{k}: {v}" for k, v in value.items())
    text = str(value)
    return text or _EMPTY


def _row(key: str, value: Any) -> str:
    return f"\n{key.rjust(_KEY_WIDTH)} | {_value(value)}"


def _fenced(text: str) -> str:
    # Short id brackets the payload so multi-line bodies are easy to find in interleaved logs.
    tag = uuid.uuid4().hex[:8]
    return f">> {tag}\n{text}\n<< {tag}"


def _render_body(data: bytes) -> str:
    try:
        return json.dumps(json.loads(data), indent=2, ensure_ascii=False)
    except (TypeError, ValueError, RecursionError):
        return data.decode("utf-8", errors="replace")


class NetworkLogger:
    """Pretty-prints one block per request on the ``reauth`` logger.

    Purely observational: formatting or handler errors are suppressed so the
    request path never depends on logging. Successful requests log at DEBUG,
    failures at WARNING. ``enabled`` is process-wide.
    """

    enabled: bool = logging_enabled_from_env()

    @classmethod
    def format(
        cls,
        request: WireRequest | None = None,
        response: TransportResponse | None = None,
        error: BaseException | None = None,
        duration: float | None = None,
    ) -> str:
        message = "Request started...\n\n"
        message += "SUCCESS" if error is None else "FAILURE"
        if duration is not None:
            message += _row("DURATION", f"{duration * 1000:.2f}ms")
        message += _row("URL", request.url if request else None)
        message += _row("METHOD", request.method if request else None)
        message += _row("REQUEST HEADERS", request.headers if request else None)
        if request is not None and request.body:
            message += _row("BODY", _fenced(request.body.decode("utf-8", errors="replace")))
        if response is not None:
            message += _row("STATUS CODE", response.status_code)
            message += _row("RESPONSE HEADERS", response.headers)
            if response.body:
                message += _row("RESPONSE", _fenced(_render_body(response.body)))
        if error is not None:
            message += _row("ERROR", f"{type(error).__name__}: {error}")
        message += "\n\nRequest completed.\n"
        return message

    @classmethod
    def log(
        cls,
        request: WireRequest | None = None,
        response: TransportResponse | None = None,
        error: BaseException | None = None,
        duration: float | None = None,
    ) -> None:
        if not cls.enabled:
            return
        level = logging.DEBUG if error is None else logging.WARNING
        with contextlib.suppress(Exception):
            if logger.isEnabledFor(level):
                logger.log(level, cls.format(request, response, error, duration))
