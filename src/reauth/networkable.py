import contextlib
from pathlib import Path

from .endpoint import Endpoint
from .service import NetworkService


class Networkable:
    """Mixin for API datasource classes.

    Set ``network_service`` on the instance (or class) to share one service
    and its connection pool; otherwise every call opens and closes its own.

        class UsersAPI(Networkable):
            async def me(self) -> bytes:
                return await self.get_data(ME_ENDPOINT)
    """

    network_service: NetworkService | None = None

    @contextlib.asynccontextmanager
    async def _service(self):
        if self.network_service is not None:
            yield self.network_service
            return
        async with NetworkService() as service:
            yield service

    async def get_data(self, endpoint: Endpoint) -> bytes:
        async with self._service() as service:
            return await service.request_with_reauth(endpoint)

    async def download_data(self, endpoint: Endpoint, directory=None) -> Path:
        async with self._service() as service:
            return await service.download_data(endpoint, directory)

    async def upload_data(self, endpoint: Endpoint, data: bytes) -> bytes:
        async with self._service() as service:
            return await service.upload_data(endpoint, data)
