import asyncio
import contextlib

from .errors import BadUrl, TransportError
from .transport import TransportResponse, WireRequest
from .types import TimeoutConfig


# ---------- httpx (async) ----------
class HttpxTransport:
    """Transport over ``httpx.AsyncClient``.

    Pass ``client`` to share an existing client (it is then left open on
    ``aclose``); otherwise one is created on first use and owned here.
    """

    def __init__(self, client=None, timeout_config: TimeoutConfig | None = None):
        self.client = client
        self.timeout_config = timeout_config or TimeoutConfig()
        self._internal_client = None

    def _get_client(self):
        if self.client is not None:
            return self.client
        if self._internal_client is None:
            import httpx  # noqa: PLC0415

            tc = self.timeout_config
            self._internal_client = httpx.AsyncClient(
                timeout=httpx.Timeout(
                    connect=tc.connect, read=tc.read, write=tc.write, pool=tc.pool
                )
            )
        return self._internal_client

    async def send(self, request: WireRequest) -> TransportResponse:
        import httpx  # noqa: PLC0415

        client = self._get_client()
        try:
            resp = await client.request(
                request.method, request.url, headers=request.headers, content=request.body
            )
        except httpx.InvalidURL as e:
            raise BadUrl(request.url) from e
        except httpx.RequestError as e:
            raise TransportError(f"{type(e).__name__}: {e}") from e
        return TransportResponse(
            status_code=getattr(resp, "status_code", None),
            headers=dict(resp.headers),
            body=resp.content,
        )

    async def aclose(self) -> None:
        if self._internal_client is not None:
            with contextlib.suppress(Exception):
                await self._internal_client.aclose()
            self._internal_client = None


# ---------- aiohttp (async) ----------
class AiohttpTransport:
    def __init__(self, session=None, timeout_config: TimeoutConfig | None = None):
        self.session = session
        self.timeout_config = timeout_config or TimeoutConfig()
        self._own_session = False

    def _get_session(self):
        if self.session is None:
            import aiohttp  # noqa: PLC0415

            tc = self.timeout_config
            self.session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(sock_connect=tc.connect, sock_read=tc.read)
            )
            self._own_session = True
        return self.session

    async def send(self, request: WireRequest) -> TransportResponse:
        import aiohttp  # noqa: PLC0415

        session = self._get_session()
        resp = None
        try:
            resp = await session.request(
                request.method, request.url, headers=request.headers, data=request.body
            )
            body = await resp.read()
        except aiohttp.InvalidURL as e:
            raise BadUrl(request.url) from e
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise TransportError(f"{type(e).__name__}: {e}") from e
        finally:
            # Release connection back to the pool
            if resp is not None:
                with contextlib.suppress(Exception):
                    await resp.release()
        return TransportResponse(
            status_code=getattr(resp, "status", None),
            headers=dict(getattr(resp, "headers", {}) or {}),
            body=body or b"",
        )

    async def aclose(self) -> None:
        if self._own_session and self.session is not None:
            await self.session.close()
            self.session = None
            self._own_session = False


# ---------- requests (sync, run off the event loop) ----------
class RequestsTransport:
    """Transport over a blocking ``requests.Session``.

    Each send runs in a worker thread so the event loop keeps serving other
    tasks. Cancelling the caller abandons the result; the thread finishes on
    its own.
    """

    def __init__(self, session=None, timeout_config: TimeoutConfig | None = None):
        self.session = session
        self.timeout_config = timeout_config or TimeoutConfig()
        self._own_session = False

    def _get_session(self):
        if self.session is None:
            import requests  # noqa: PLC0415

            self.session = requests.Session()
            self._own_session = True
        return self.session

    def _send_sync(self, request: WireRequest) -> TransportResponse:
        import requests  # noqa: PLC0415

        sess = self._get_session()
        tc = self.timeout_config
        try:
            resp = sess.request(
                request.method,
                request.url,
                headers=request.headers,
                data=request.body,
                timeout=(tc.connect, tc.read),
            )
        except (requests.exceptions.InvalidURL, requests.exceptions.MissingSchema) as e:
            raise BadUrl(request.url) from e
        except requests.RequestException as e:
            raise TransportError(f"{type(e).__name__}: {e}") from e
        return TransportResponse(
            status_code=getattr(resp, "status_code", None),
            headers=dict(getattr(resp, "headers", {}) or {}),
            body=resp.content or b"",
        )

    async def send(self, request: WireRequest) -> TransportResponse:
        # Created on the loop thread so concurrent sends share one session.
        self._get_session()
        return await asyncio.to_thread(self._send_sync, request)

    async def aclose(self) -> None:
        if self._own_session and self.session is not None:
            with contextlib.suppress(Exception):
                self.session.close()
            self.session = None
            self._own_session = False
