import dataclasses
import uuid
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union
from urllib.parse import quote, urlencode, urlunsplit

from .types import RefreshConfig


class HTTPMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"
    HEAD = "HEAD"


class Scheme(str, Enum):
    HTTP = "http"
    HTTPS = "https"


class ContentType(str, Enum):
    JSON = "application/json"
    XML = "application/xml"
    FORM_URLENCODED = "application/x-www-form-urlencoded"


class CachePolicy(str, Enum):
    # Values are the Cache-Control directive sent, empty for none.
    USE_PROTOCOL = ""
    RELOAD_IGNORING_CACHE = "no-cache"
    RETURN_CACHE_ELSE_LOAD = "max-stale"


class TaskType(str, Enum):
    DATA = "data"
    DOWNLOAD = "download"
    UPLOAD = "upload"


@dataclass(frozen=True)
class AuthRequired:
    configuration: RefreshConfig


QueryItems = Union[Mapping[str, Any], Sequence[tuple[str, Any]]]

# Characters that are never part of a bare host[:port].
_HOST_FORBIDDEN = set("/?#@ \t\r\n")


@dataclass(frozen=True)
class Endpoint:
    """Immutable description of one HTTP request.

    ``base_url`` is the host (optionally ``host:port``), not a full URL; the
    scheme comes from ``scheme``. When both ``body`` and ``body_parameters``
    are set, the raw ``body`` wins.
    """

    base_url: str
    path: str | None = None
    scheme: Union[Scheme, str] = Scheme.HTTPS
    method: HTTPMethod = HTTPMethod.GET
    query_items: QueryItems | None = None
    headers: Mapping[str, str] | None = None
    body: bytes | None = None
    body_parameters: Mapping[str, Any] | None = None
    cache_policy: CachePolicy = CachePolicy.RELOAD_IGNORING_CACHE
    task_type: TaskType = TaskType.DATA
    content_type: ContentType | None = ContentType.JSON
    auth_required: AuthRequired | None = None
    id: uuid.UUID = field(default_factory=uuid.uuid4)

    @property
    def scheme_value(self) -> str:
        return self.scheme.value if isinstance(self.scheme, Scheme) else str(self.scheme)

    @property
    def refresh_config(self) -> RefreshConfig | None:
        return self.auth_required.configuration if self.auth_required else None

    @property
    def url(self) -> str | None:
        host = (self.base_url or "").strip()
        scheme = self.scheme_value.strip()
        if not host or not scheme or any(c in _HOST_FORBIDDEN for c in host):
            return None
        path = self.path or ""
        if path and not path.startswith("/"):
            path = "/" + path
        query = ""
        if self.query_items:
            items = (
                self.query_items.items()
                if isinstance(self.query_items, Mapping)
                else self.query_items
            )
            query = urlencode([(k, "" if v is None else v) for k, v in items])
        return urlunsplit((scheme, host, quote(path, safe="/%:@!$&'()*+,;=-._~"), query, ""))

    def with_headers(self, headers: Mapping[str, str]) -> "Endpoint":
        """Return a copy with ``headers`` merged over the existing ones (same id)."""
        merged = {**(self.headers or {}), **headers}
        return dataclasses.replace(self, headers=merged)
