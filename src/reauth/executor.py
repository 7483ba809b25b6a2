import asyncio
import json
import os
import tempfile
import time
from pathlib import Path

from .endpoint import Endpoint
from .errors import (
    BadUrl,
    DataNotFound,
    EncodingFailed,
    InvalidResponse,
    NetworkError,
    UnknownError,
    error_for_status,
)
from .logger import NetworkLogger
from .transport import Transport, TransportResponse, WireRequest

CONTENT_TYPE_HEADER = "Content-Type"
CACHE_CONTROL_HEADER = "Cache-Control"


def _has_header(headers: dict[str, str], name: str) -> bool:
    lname = name.lower()
    return any(k.lower() == lname for k in headers)


class RequestExecutor:
    """Turns an Endpoint into one transport call and one outcome.

    Never retries. Any non-2xx status becomes an ``UnexpectedStatusCode``
    (or one of its subclasses); 403 gets no special treatment here.
    """

    def __init__(self, transport: Transport, network_logger: type[NetworkLogger] = NetworkLogger):
        self.transport = transport
        self.network_logger = network_logger

    def build_request(self, endpoint: Endpoint, body: bytes | None = None) -> WireRequest:
        """Assemble the wire request.

        Body precedence: ``body`` argument, then ``endpoint.body``, then
        ``endpoint.body_parameters`` serialized as JSON.

        Raises:
            BadUrl: if the endpoint does not resolve to a URL
            EncodingFailed: if body_parameters are not JSON serializable
        """
        url = endpoint.url
        if url is None:
            raise BadUrl(f"{endpoint.scheme_value}://{endpoint.base_url}{endpoint.path or ''}")

        headers = {k: str(v) for k, v in (endpoint.headers or {}).items()}
        if endpoint.content_type is not None:
            headers = {k: v for k, v in headers.items() if k.lower() != "content-type"}
            headers[CONTENT_TYPE_HEADER] = endpoint.content_type.value
        if endpoint.cache_policy.value and not _has_header(headers, CACHE_CONTROL_HEADER):
            headers[CACHE_CONTROL_HEADER] = endpoint.cache_policy.value

        if body is None:
            body = endpoint.body
        if body is None and endpoint.body_parameters is not None:
            try:
                body = json.dumps(endpoint.body_parameters).encode("utf-8")
            except (TypeError, ValueError) as e:
                raise EncodingFailed(str(e)) from e

        return WireRequest(method=endpoint.method.value, url=url, headers=headers, body=body)

    async def execute(self, endpoint: Endpoint) -> bytes:
        response = await self._perform(self.build_request(endpoint))
        return response.body

    async def upload(self, endpoint: Endpoint, data: bytes) -> bytes:
        response = await self._perform(self.build_request(endpoint, body=data))
        return response.body

    async def download(
        self, endpoint: Endpoint, directory: str | os.PathLike | None = None
    ) -> Path:
        """Execute and store the body in a new file; returns its path.

        The caller owns the file and is responsible for removing it.
        """
        data = await self.execute(endpoint)
        if not data:
            raise DataNotFound(endpoint.url)
        suffix = Path(endpoint.path or "").suffix
        return await asyncio.to_thread(_write_temp, data, suffix, directory)

    async def _perform(self, request: WireRequest) -> TransportResponse:
        start = time.perf_counter()

        def _log(response=None, error=None):
            self.network_logger.log(
                request=request,
                response=response,
                error=error,
                duration=time.perf_counter() - start,
            )

        try:
            response = await self.transport.send(request)
        except NetworkError as e:
            _log(error=e)
            raise
        except Exception as e:
            err = UnknownError(f"{type(e).__name__}: {e}")
            _log(error=err)
            raise err from e

        if not isinstance(response.status_code, int):
            err = InvalidResponse(request.url)
            _log(response, err)
            raise err
        if not 200 <= response.status_code <= 299:  # noqa: PLR2004
            err = error_for_status(response.status_code, response.body)
            _log(response, err)
            raise err

        _log(response)
        return response


def _write_temp(data: bytes, suffix: str, directory) -> Path:
    with tempfile.NamedTemporaryFile(
        prefix="reauth-", suffix=suffix, dir=directory, delete=False
    ) as f:
        f.write(data)
    return Path(f.name)
