import pytest

from reauth import Endpoint, HTTPMethod, NetworkLogger, TransportResponse

API_URL = "https://api.example.com/v1/me"
TOKEN_URL = "https://auth.example.com/oauth/token"


class ScriptedTransport:
    """Replays canned responses per URL; the last entry repeats forever."""

    def __init__(self, routes):
        self.routes = {url: list(items) for url, items in routes.items()}
        self.requests = []
        self.closed = False

    async def send(self, request):
        self.requests.append(request)
        queue = self.routes[request.url]
        item = queue.pop(0) if len(queue) > 1 else queue[0]
        if isinstance(item, BaseException):
            raise item
        return item

    def calls(self, url):
        return [r for r in self.requests if r.url == url]

    async def aclose(self):
        self.closed = True


def response(status=200, body=b"", headers=None):
    return TransportResponse(status_code=status, headers=headers or {}, body=body)


@pytest.fixture
def scripted():
    return ScriptedTransport


@pytest.fixture
def resp():
    return response


@pytest.fixture
def api_endpoint():
    return Endpoint(base_url="api.example.com", path="/v1/me")


@pytest.fixture
def token_endpoint():
    return Endpoint(base_url="auth.example.com", path="/oauth/token", method=HTTPMethod.POST)


@pytest.fixture
def sleeps():
    recorded = []

    async def _sleep(delay):
        recorded.append(delay)

    _sleep.recorded = recorded
    return _sleep


@pytest.fixture(autouse=True)
def _restore_logger_flag():
    saved = NetworkLogger.enabled
    yield
    NetworkLogger.enabled = saved
