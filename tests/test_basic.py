import pytest

from reauth import AuthRequired, Endpoint, NetworkService, RefreshConfig


def test_construct_endpoint():
    Endpoint(base_url="api.example.com", path="/v1/me")
    Endpoint(
        base_url="api.example.com",
        path="/v1/me",
        auth_required=AuthRequired(RefreshConfig(max_attempts=1, retry_delay=0)),
    )


@pytest.mark.asyncio
async def test_construct_service():
    async with NetworkService() as service:
        assert service.last_credential is None
