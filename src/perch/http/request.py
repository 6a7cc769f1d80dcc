"""Immutable HTTP request.

Frozen metadata with async body access. Routers never mutate a request;
they hand the matched handler a copy with captured params merged in.
"""

from __future__ import annotations

import json
from collections.abc import AsyncGenerator, Mapping
from dataclasses import dataclass, field, replace
from typing import Any
from urllib.parse import urlsplit

from perch._internal.asgi import Receive, Scope
from perch.http.cookies import parse_cookies
from perch.http.headers import Headers
from perch.http.query import QueryParams


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable HTTP request.

    ``params`` holds the segments captured by the path and host routers.
    Body is read asynchronously via ``.body()``, ``.text()``, ``.json()``.
    """

    method: str
    path: str
    host: str
    headers: Headers
    query: QueryParams
    params: dict[str, str]
    http_version: str
    server: tuple[str, int] | None
    client: tuple[str, int] | None
    cookies: Mapping[str, str]

    # Private: ASGI receive callable for body streaming
    _receive: Receive | None = None

    # Private: body cache shared between copies made by with_params()
    _cache: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    def with_params(self, params: Mapping[str, str]) -> Request:
        """Return a copy with *params* merged over the current ones."""
        if not params:
            return self
        return replace(self, params={**self.params, **params})

    # -- Computed properties --

    @property
    def content_type(self) -> str | None:
        """The media type from Content-Type, without parameters."""
        value = self.headers.get("content-type")
        if value is None:
            return None
        return value.partition(";")[0].strip().lower()

    @property
    def content_length(self) -> int | None:
        value = self.headers.get("content-length")
        if value is None:
            return None
        try:
            return int(value)
        except ValueError:
            return None

    @property
    def url(self) -> str:
        """Request path plus query string."""
        if self.query.raw:
            return f"{self.path}?{self.query.raw.decode('latin-1')}"
        return self.path

    # -- Async body access --

    async def body(self) -> bytes:
        """Read the full request body. Cached after the first read."""
        if "_body" in self._cache:
            return self._cache["_body"]
        chunks = [chunk async for chunk in self.stream()]
        result = b"".join(chunks)
        self._cache["_body"] = result
        return result

    async def stream(self) -> AsyncGenerator[bytes]:
        """Stream the request body in chunks."""
        if self._receive is None:
            return
        while True:
            message = await self._receive()
            body = message.get("body", b"")
            if body:
                yield body
            if not message.get("more_body", False):
                break

    async def text(self) -> str:
        raw = await self.body()
        return raw.decode("utf-8")

    async def json(self) -> Any:
        raw = await self.body()
        return json.loads(raw)

    # -- Factories --

    @classmethod
    def from_asgi(cls, scope: Scope, receive: Receive | None = None) -> Request:
        """Create a Request from an ASGI HTTP scope and receive callable.

        The host comes from the ``Host`` header, falling back to the
        scope's ``server`` address.
        """
        headers = Headers(tuple(scope.get("headers", ())))
        server = scope.get("server")
        client = scope.get("client")
        host = headers.get("host")
        if host is None:
            host = server[0] if server else ""
        return cls(
            method=scope["method"].upper(),
            path=scope["path"],
            host=host,
            headers=headers,
            query=QueryParams(scope.get("query_string", b"")),
            params={},
            http_version=scope.get("http_version", "1.1"),
            server=tuple(server) if server else None,
            client=tuple(client) if client else None,
            cookies=parse_cookies(headers.get("cookie", "")),
            _receive=receive,
        )

    @classmethod
    def build(
        cls,
        method: str,
        url: str,
        *,
        headers: Mapping[str, str] | None = None,
    ) -> Request:
        """Build a body-less request from a URL, for tests and tooling.

        Absolute URLs (``http://www.example.com/a?b=c``) set the host;
        a host in the URL overrides the ``Host`` header.
        """
        parts = urlsplit(url)
        hdrs = Headers.from_pairs(headers)
        host = parts.netloc or hdrs.get("host") or ""
        return cls(
            method=method.upper(),
            path=parts.path or "/",
            host=host,
            headers=hdrs,
            query=QueryParams(parts.query.encode("latin-1")),
            params={},
            http_version="1.1",
            server=None,
            client=None,
            cookies=parse_cookies(hdrs.get("cookie", "")),
        )
