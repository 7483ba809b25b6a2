from unittest.mock import AsyncMock

import aiohttp
import pytest

from reauth import AiohttpTransport, TransportError, WireRequest


class FakeResponse:
    def __init__(self, status=200, headers=None, body=b""):
        self.status = status
        self.headers = headers or {}
        self._body = body
        self.closed = False

    async def read(self):
        return self._body

    async def release(self):
        self.closed = True


@pytest.mark.asyncio
async def test_aiohttp_send_reads_and_releases():
    session = AsyncMock()
    fake = FakeResponse(200, {"Content-Type": "application/json"}, b'{"a": 1}')
    session.request.return_value = fake

    transport = AiohttpTransport(session=session)
    resp = await transport.send(WireRequest("GET", "https://example.com", {"X-Auth": "T"}))
    assert resp.status_code == 200  # noqa: PLR2004
    assert resp.body == b'{"a": 1}'
    assert resp.headers["Content-Type"] == "application/json"
    assert fake.closed
    args, kwargs = session.request.call_args
    assert args == ("GET", "https://example.com")
    assert kwargs["headers"]["X-Auth"] == "T"


@pytest.mark.asyncio
async def test_aiohttp_client_error_becomes_transport_error():
    session = AsyncMock()
    session.request.side_effect = aiohttp.ClientConnectionError("down")
    with pytest.raises(TransportError):
        await AiohttpTransport(session=session).send(WireRequest("GET", "https://example.com"))


@pytest.mark.asyncio
async def test_aiohttp_shared_session_not_closed():
    session = AsyncMock()
    await AiohttpTransport(session=session).aclose()
    session.close.assert_not_called()
