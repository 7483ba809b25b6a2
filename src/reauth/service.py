import asyncio
import contextlib
import logging
import os
from collections.abc import Awaitable, Callable
from pathlib import Path
from typing import Union

from .adapters import HttpxTransport
from .classifier import is_retryable_auth_failure
from .endpoint import Endpoint
from .errors import BadUrl, MaxRetriesExceeded, NetworkError
from .executor import RequestExecutor
from .logger import NetworkLogger
from .refresh import TokenRefreshService
from .transport import Transport
from .types import Credential, RefreshConfig, TimeoutConfig

RefreshServiceFactory = Callable[[RequestExecutor, RefreshConfig], TokenRefreshService]


class NetworkService:
    """Executes endpoints and recovers once from an expired authorization.

    A 403 on an endpoint with ``auth_required`` triggers one refresh sequence
    and then exactly one re-issue of the original request. Each failing call
    gets its own TokenRefreshService, so concurrent 403s never share (or wait
    on) another call's refresh.

    Passing ``log_requests`` turns request dumps on or off for the whole
    process, since ``NetworkLogger.enabled`` is a class attribute.

    Use as an async context manager to close a transport created here:

        async with NetworkService() as service:
            data = await service.request_with_reauth(endpoint)
    """

    def __init__(
        self,
        transport: Union[Transport, None] = None,
        log_level: Union[int, None] = None,
        log_requests: Union[bool, None] = None,
        timeout_config: Union[TimeoutConfig, None] = None,
        refresh_service_factory: Union[RefreshServiceFactory, None] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        """Initialize a NetworkService.

        Args:
            transport (Transport | None): transport to send through; an httpx
                transport owned by this service is created when omitted
            log_level (int | None): level for the "reauth" logger
            log_requests (bool | None): sets the process-wide
                ``NetworkLogger.enabled`` switch, so it affects every service
                and executor, not only this instance
            timeout_config (TimeoutConfig | None): used only for the owned transport
            refresh_service_factory (callable | None): builds the per-call refresher
            sleep (callable): awaited between refresh attempts
        """
        self._own_transport = transport is None
        self.transport = transport or HttpxTransport(timeout_config=timeout_config)
        self.executor = RequestExecutor(self.transport)
        self._sleep = sleep
        self._refresh_service_factory = refresh_service_factory or self._default_refresher
        self.last_credential: Credential | None = None
        self._logger = logging.getLogger("reauth")
        if log_level is not None:
            with contextlib.suppress(Exception):
                self._logger.setLevel(log_level)
        if log_requests is not None:
            NetworkLogger.enabled = log_requests

    def _default_refresher(
        self, executor: RequestExecutor, configuration: RefreshConfig
    ) -> TokenRefreshService:
        return TokenRefreshService(executor, configuration, sleep=self._sleep)

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.aclose()
        return False

    async def aclose(self) -> None:
        if self._own_transport:
            await self.transport.aclose()

    # ------------------------ retry protocol ------------------------
    async def request_with_reauth(self, endpoint: Endpoint) -> bytes:
        """Execute ``endpoint``, re-authenticating once on an expired authorization.

        Raises:
            NetworkError: the original failure when it is not a retryable 403
            MaxRetriesExceeded: the refresh sequence ran out of attempts
            BadUrl: the refresh configuration has no refresh endpoint
            NetworkError: whatever the single re-issued request raised
        """
        try:
            return await self.executor.execute(endpoint)
        except NetworkError as e:
            if not is_retryable_auth_failure(e, endpoint):
                raise

        configuration = endpoint.refresh_config
        with contextlib.suppress(Exception):
            self._logger.info(f"403 on url={endpoint.url}; re-authenticating")
        refresher = self._refresh_service_factory(self.executor, configuration)
        try:
            credential = await refresher.reauthenticate()
        except (MaxRetriesExceeded, BadUrl):
            raise
        except NetworkError as e:
            raise MaxRetriesExceeded() from e
        self.last_credential = credential

        retry_endpoint = endpoint
        auth = configuration.auth_config
        if auth is not None and credential.token:
            retry_endpoint = endpoint.with_headers(
                {auth.header: auth.header_value(credential.token)}
            )
        # Exactly one re-issue; a second 403 is returned to the caller as-is.
        return await self.executor.execute(retry_endpoint)

    async def request_data(self, endpoint: Endpoint) -> bytes:
        return await self.request_with_reauth(endpoint)

    # ------------------------ other task types ------------------------
    async def upload_data(self, endpoint: Endpoint, data: bytes) -> bytes:
        return await self.executor.upload(endpoint, data)

    async def download_data(
        self, endpoint: Endpoint, directory: Union[str, os.PathLike, None] = None
    ) -> Path:
        return await self.executor.download(endpoint, directory)
