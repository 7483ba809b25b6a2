import asyncio
import contextlib
import logging
from collections.abc import Awaitable, Callable
from enum import Enum

from .errors import BadUrl, MaxRetriesExceeded, NetworkError, ReAuthFailed
from .executor import RequestExecutor
from .types import Credential, RefreshConfig


class RefreshState(str, Enum):
    IDLE = "idle"
    ATTEMPTING = "attempting"
    SUCCEEDED = "succeeded"
    EXHAUSTED = "exhausted"


class TokenRefreshService:
    """Fetches a new credential with a bounded number of attempts.

    - At most ``configuration.max_attempts`` requests to the refresh endpoint.
    - A constant ``retry_delay`` between attempts, none after the last one.
    - The first attempt that decodes a token wins; no further attempts run.
    - A missing refresh endpoint fails with BadUrl before any attempt.

    ``reauthenticate`` is serialized per instance, so the stored credential
    has a single writer. Cancellation propagates untouched and leaves the
    previous credential in place.
    """

    def __init__(
        self,
        executor: RequestExecutor,
        configuration: RefreshConfig,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.executor = executor
        self.configuration = configuration
        self._sleep = sleep
        self._lock = asyncio.Lock()
        self._credential: Credential | None = None
        self.state = RefreshState.IDLE
        self.attempts = 0
        self._logger = logging.getLogger("reauth")

    @property
    def credential(self) -> Credential | None:
        return self._credential

    @property
    def token(self) -> str | None:
        return self._credential.token if self._credential else None

    async def reauthenticate(self) -> Credential:
        """Run one refresh sequence.

        Raises:
            BadUrl: no refresh endpoint is configured
            MaxRetriesExceeded: every attempt failed
        """
        async with self._lock:
            return await self._run_attempts()

    async def _run_attempts(self) -> Credential:
        endpoint = self.configuration.refresh_endpoint
        if endpoint is None:
            raise BadUrl("no refresh endpoint configured")
        max_attempts = self.configuration.max_attempts
        self.attempts = 0

        for attempt in range(1, max_attempts + 1):
            self.state = RefreshState.ATTEMPTING
            self.attempts = attempt
            try:
                data = await self.executor.execute(endpoint)
                credential = Credential.from_json(data)
                if credential.token is None:
                    raise ReAuthFailed("refresh response has no access_token")
            except NetworkError as e:
                with contextlib.suppress(Exception):
                    self._logger.warning(
                        f"refresh attempt {attempt}/{max_attempts} failed: {e}"
                    )
                if attempt == max_attempts:
                    self.state = RefreshState.EXHAUSTED
                    raise MaxRetriesExceeded() from e
            else:
                self._credential = credential
                self.state = RefreshState.SUCCEEDED
                return credential
            await self._sleep(self.configuration.retry_delay)

        # range() is never empty: RefreshConfig rejects max_attempts < 1
        raise MaxRetriesExceeded()
