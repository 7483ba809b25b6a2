import asyncio

from unittest.mock import MagicMock

import pytest
import requests

from reauth import RequestsTransport, TimeoutConfig, TransportError, WireRequest


@pytest.mark.asyncio
async def test_requests_send_runs_session_request():
    sess = MagicMock()
    resp = MagicMock()
    resp.status_code = 200
    resp.headers = {"ETag": "abc"}
    resp.content = b"ok"
    sess.request.return_value = resp

    transport = RequestsTransport(session=sess, timeout_config=TimeoutConfig(connect=1, read=2))
    out = await transport.send(WireRequest("PUT", "https://example.com", {"X-Auth": "T"}, b"b"))
    assert out.status_code == 200  # noqa: PLR2004
    assert out.body == b"ok"
    assert out.headers == {"ETag": "abc"}
    args, kwargs = sess.request.call_args
    assert args == ("PUT", "https://example.com")
    assert kwargs["headers"]["X-Auth"] == "T"
    assert kwargs["data"] == b"b"
    assert kwargs["timeout"] == (1, 2)


@pytest.mark.asyncio
async def test_requests_exception_becomes_transport_error():
    sess = MagicMock()
    sess.request.side_effect = requests.ConnectionError("down")
    with pytest.raises(TransportError):
        await RequestsTransport(session=sess).send(WireRequest("GET", "https://example.com"))


@pytest.mark.asyncio
async def test_requests_shared_session_not_closed():
    sess = MagicMock()
    await RequestsTransport(session=sess).aclose()
    sess.close.assert_not_called()


@pytest.mark.asyncio
async def test_requests_concurrent_sends_share_one_owned_session(monkeypatch):
    created = []

    class FakeSession:
        def __init__(self):
            self.closed = False
            created.append(self)

        def request(self, method, url, **kwargs):
            resp = MagicMock()
            resp.status_code = 200
            resp.headers = {}
            resp.content = b"ok"
            return resp

        def close(self):
            self.closed = True

    monkeypatch.setattr(requests, "Session", FakeSession)
    transport = RequestsTransport()
    results = await asyncio.gather(
        *(transport.send(WireRequest("GET", "https://example.com")) for _ in range(4))
    )
    assert [r.body for r in results] == [b"ok"] * 4
    await transport.aclose()
    assert len(created) == 1
    assert created[0].closed is True
