import json
import math
import time
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from .errors import DecodingFailed

if TYPE_CHECKING:
    from .endpoint import Endpoint

DEFAULT_MAX_ATTEMPTS = 3
DEFAULT_RETRY_DELAY = 4.0
DEFAULT_TOKEN_PATH = "/oauth/token"


@dataclass(frozen=True)
class AuthConfig:
    header: str = "Authorization"
    scheme: str = "Bearer"

    def header_value(self, token: str) -> str:
        return f"{self.scheme} {token}".strip()


@dataclass(frozen=True)
class TimeoutConfig:
    connect: float = 10.0
    read: float = 30.0
    write: float = 30.0
    pool: float = 30.0


@dataclass(frozen=True)
class RefreshConfig:
    """How and how often to fetch a new credential after a 403.

    ``refresh_endpoint`` may be left unset; re-authentication then fails with
    ``BadUrl`` on first use. ``auth_config`` is optional: when given, the
    retried request carries the new token in that header.
    """

    refresh_endpoint: "Endpoint | None" = None
    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    retry_delay: float = DEFAULT_RETRY_DELAY
    auth_config: AuthConfig | None = None

    def __post_init__(self):
        if isinstance(self.max_attempts, bool) or not isinstance(self.max_attempts, int):
            raise TypeError("max_attempts must be an int")
        if self.max_attempts < 1:
            raise ValueError(f"max_attempts must be >= 1, got {self.max_attempts}")
        if not math.isfinite(self.retry_delay) or self.retry_delay < 0:
            raise ValueError(f"retry_delay must be a finite number >= 0, got {self.retry_delay}")

    @classmethod
    def for_host(
        cls,
        auth_host: str,
        basic_credentials: str,
        path: str = DEFAULT_TOKEN_PATH,
        scheme: str | None = None,
        **kwargs,
    ) -> "RefreshConfig":
        """Build a config whose refresh endpoint is a client-credentials token request.

        Args:
            auth_host (str): token server host, e.g. "auth.example.com"
            basic_credentials (str): base64 "client:secret" for the Basic header
            path (str): token path on the host
            scheme (str | None): URL scheme, https unless given
            kwargs: forwarded to RefreshConfig (max_attempts, retry_delay, auth_config)
        """
        from .endpoint import ContentType, Endpoint, HTTPMethod, Scheme  # noqa: PLC0415

        endpoint = Endpoint(
            base_url=auth_host,
            path=path,
            scheme=scheme or Scheme.HTTPS,
            method=HTTPMethod.POST,
            headers={"Authorization": f"Basic {basic_credentials}"},
            body=b"grant_type=client_credentials",
            content_type=ContentType.FORM_URLENCODED,
        )
        return cls(refresh_endpoint=endpoint, **kwargs)


def _coerce_expires_in(value: Any) -> int | None:
    # Servers disagree on whether expires_in is a number or a numeric string.
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


@dataclass(frozen=True)
class Credential:
    token: str | None
    expires_in: int | None = None
    obtained_at: float = field(default_factory=time.time, compare=False)

    @property
    def expires_at(self) -> float | None:
        if self.expires_in is None:
            return None
        return self.obtained_at + self.expires_in

    def is_expired(self, now: float | None = None) -> bool:
        expires_at = self.expires_at
        if expires_at is None:
            return False
        return (time.time() if now is None else now) >= expires_at

    @classmethod
    def from_json(cls, data: bytes | str) -> "Credential":
        """Decode a token response body.

        A missing ``access_token`` decodes to ``token=None`` rather than
        raising; only malformed JSON or a wrong token type raise DecodingFailed.
        """
        try:
            payload = json.loads(data)
        except (TypeError, ValueError, RecursionError) as e:
            raise DecodingFailed(str(e)) from e
        if not isinstance(payload, dict):
            raise DecodingFailed(f"expected a JSON object, got {type(payload).__name__}")
        token = payload.get("access_token")
        if token is not None and not isinstance(token, str):
            raise DecodingFailed(f"access_token must be a string, got {type(token).__name__}")
        return cls(token=token, expires_in=_coerce_expires_in(payload.get("expires_in")))
