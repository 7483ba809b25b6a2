import os

from .endpoint import Endpoint
from .types import DEFAULT_TOKEN_PATH, AuthConfig, RefreshConfig

DEFAULT_PREFIX = "REAUTH_"
_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}


def _parse_env_file(env_path: str) -> dict[str, str]:
    """Parse a simple .env file into a dict without modifying os.environ.

    Supports basic KEY=VALUE pairs, ignoring comments and blank lines.
    Surrounding single/double quotes are stripped if present.
    """
    values: dict[str, str] = {}
    try:
        with open(env_path) as f:
            for raw_line in f:
                line = raw_line.strip()
                if not line or line.startswith("#"):
                    continue
                if "=" not in line:
                    continue
                key, val = line.split("=", 1)
                key = key.strip()
                if key.startswith("export "):
                    key = key[len("export ") :].strip()
                val = val.strip().strip('"').strip("'")
                if key:
                    values[key] = val
    except FileNotFoundError:
        # A missing file just means nothing to merge
        pass
    return values


def _env_map(env_path: str | None) -> dict[str, str]:
    # actual environment takes precedence over .env file
    file_env = _parse_env_file(env_path) if env_path else {}
    return {**file_env, **os.environ}


def _parse_bool(name: str, raw: str) -> bool:
    val = raw.strip().lower()
    if val in _TRUTHY:
        return True
    if val in _FALSY:
        return False
    raise ValueError(f"{name} must be a boolean flag, got {raw!r}")


def logging_enabled_from_env(
    name: str = f"{DEFAULT_PREFIX}LOG_REQUESTS",
    env_path: str | None = None,
    default: bool = True,
) -> bool:
    """Read the request-logging switch; unset or unparsable values fall back to ``default``."""
    raw = _env_map(env_path).get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return _parse_bool(name, raw)
    except ValueError:
        return default


def load_refresh_config_from_env(
    prefix: str = DEFAULT_PREFIX,
    env_path: str | None = None,
    refresh_endpoint: Endpoint | None = None,
    **kwargs,
) -> RefreshConfig:
    """Create a RefreshConfig from environment variables.

    Recognised variables (shown with the default prefix):
    - REAUTH_MAX_ATTEMPTS: int, default 3
    - REAUTH_RETRY_DELAY: float seconds, default 4.0
    - REAUTH_AUTH_HOST / REAUTH_AUTH_BASIC / REAUTH_AUTH_PATH: build a
        client-credentials refresh endpoint when no ``refresh_endpoint`` is passed
    - REAUTH_AUTH_HEADER / REAUTH_AUTH_SCHEME: inject the new token on retry

    If 'env_path' is provided, variables from the .env file augment lookups
    (without mutating the process environment); real environment values win.
    Explicit kwargs (max_attempts, retry_delay, auth_config) override both.

    Raises:
        ValueError: if a numeric variable cannot be parsed or is out of range
    """
    env = _env_map(env_path)

    def _get(suffix: str) -> str | None:
        val = env.get(f"{prefix}{suffix}")
        return val.strip() if val and val.strip() else None

    options = {}
    raw = _get("MAX_ATTEMPTS")
    if raw is not None:
        try:
            options["max_attempts"] = int(raw)
        except ValueError as e:
            raise ValueError(f"{prefix}MAX_ATTEMPTS must be an integer, got {raw!r}") from e
    raw = _get("RETRY_DELAY")
    if raw is not None:
        try:
            options["retry_delay"] = float(raw)
        except ValueError as e:
            raise ValueError(f"{prefix}RETRY_DELAY must be a number, got {raw!r}") from e
    header, scheme = _get("AUTH_HEADER"), _get("AUTH_SCHEME")
    if header is not None or scheme is not None:
        options["auth_config"] = AuthConfig(
            header=header or "Authorization", scheme=scheme or "Bearer"
        )
    options.update(kwargs)

    if refresh_endpoint is None:
        host, basic = _get("AUTH_HOST"), _get("AUTH_BASIC")
        if host and basic:
            return RefreshConfig.for_host(
                host, basic, path=_get("AUTH_PATH") or DEFAULT_TOKEN_PATH, **options
            )
    return RefreshConfig(refresh_endpoint=refresh_endpoint, **options)
