from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable


@dataclass(frozen=True)
class WireRequest:
    method: str
    url: str
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes | None = None


@dataclass(frozen=True)
class TransportResponse:
    # status_code is None when the peer did not produce a usable status line.
    status_code: int | None
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes = b""


@runtime_checkable
class Transport(Protocol):
    """Anything that can execute a WireRequest.

    Implementations raise ``reauth.errors.TransportError`` for connectivity,
    timeout and protocol failures and return a TransportResponse for every
    response that arrived, whatever its status.
    """

    async def send(self, request: WireRequest) -> TransportResponse: ...

    async def aclose(self) -> None: ...
