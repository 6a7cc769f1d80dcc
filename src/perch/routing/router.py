"""Path router — segment-trie matching with per-method dispatch.

Routes are registered during setup. After that the router is only read,
so one instance can serve any number of concurrent requests.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any
from urllib.parse import quote

from perch._internal.invoke import invoke
from perch._internal.types import Handler
from perch.errors import ConfigurationError, MethodNotAllowed, NotFound
from perch.http.request import Request
from perch.http.response import Redirect
from perch.routing.dispatch import Dispatch, Disposition
from perch.routing.pattern import Pattern, compile_path, join_path, split_path
from perch.routing.trie import SegmentTrie

logger = logging.getLogger("perch.routing")

# Method key for "any method not registered explicitly"
ANY_METHOD = "*"

# Sub-delimiters plus ":" and "@" stay literal in a path segment (RFC 3986 pchar)
_SEGMENT_SAFE = "!$&'()*+,;=:@"


class Router:
    """Dispatches request paths to handlers registered per HTTP method.

    Usage::

        router = Router()
        router.register("/", "GET", home)
        router.register("/items/<id>", "GET", show_item, "DELETE", delete_item)
        router.register("/files/*", "*", serve_files)

        result = router.match("GET", "/items/42")
        result.handler, result.params   # show_item, {"id": "42"}

    A router is itself a handler: calling it with a ``Request`` dispatches
    and invokes the matched handler.
    """

    __slots__ = ("_trie",)

    def __init__(self) -> None:
        self._trie = SegmentTrie()

    # -- Registration --

    def register(self, template: str, *method_handlers: Any) -> Router:
        """Register handlers for *template* as ``method, handler`` pairs.

        ``"*"`` registers a handler for every method without its own.
        Registering the same (template, method) again replaces the handler.
        Raises ``ConfigurationError`` on a malformed template or pair list.
        """
        if not method_handlers or len(method_handlers) % 2:
            msg = (
                f"Router.register({template!r}, ...) needs one or more "
                "method, handler pairs."
            )
            raise ConfigurationError(msg)

        pairs: list[tuple[str, Handler]] = []
        for method, handler in zip(method_handlers[::2], method_handlers[1::2], strict=True):
            if not isinstance(method, str) or not method:
                msg = f"Router.register({template!r}, ...): method must be a string, got {method!r}."
                raise ConfigurationError(msg)
            if not callable(handler):
                msg = f"Router.register({template!r}, ...): handler for {method} is not callable."
                raise ConfigurationError(msg)
            pairs.append((method.upper(), handler))

        pattern = self._trie.insert(compile_path(template))
        for method, handler in pairs:
            pattern.handlers[method] = handler
            logger.debug("route %s %s -> %r", method, template, handler)
        return self

    def route(
        self, template: str, methods: tuple[str, ...] = ("GET",)
    ) -> Callable[[Handler], Handler]:
        """Decorator form of :meth:`register`.

        Usage::

            @router.route("/users/<name>", methods=("GET", "POST"))
            def user(request):
                ...
        """

        def decorator(handler: Handler) -> Handler:
            pairs: list[Any] = []
            for method in methods:
                pairs.extend((method, handler))
            self.register(template, *pairs)
            return handler

        return decorator

    @property
    def routes(self) -> tuple[Pattern, ...]:
        """Registered patterns in registration order."""
        return tuple(self._trie)

    # -- Dispatch --

    def dispatch(
        self,
        segments: tuple[str, ...],
        method: str,
        trailing_slash: bool = False,
    ) -> Dispatch:
        """Resolve split path *segments* and *method* to a ``Dispatch``.

        Never raises. Literal segments win over captures, captures over
        wildcards. A path without a trailing slash that only matches a
        slash-terminated pattern redirects to the slash form; the
        redirect location is the percent-encoded path.
        """
        found = self._trie.lookup(segments, trailing_slash)
        if found is None:
            return Dispatch(Disposition.NOT_FOUND)

        pattern = found.terminals.get(trailing_slash)
        if pattern is None:
            # Only "/d" -> "/d/" redirects; "/a/" never falls back to "/a"
            canonical = found.terminals[True]
            return Dispatch(
                Disposition.REDIRECT,
                pattern=canonical,
                location=join_path([quote(s, safe=_SEGMENT_SAFE) for s in segments], True),
            )

        params = pattern.bind(found.values)
        handler = _resolve_method(pattern, method)
        if handler is None:
            return Dispatch(
                Disposition.METHOD_NOT_ALLOWED,
                params=params,
                pattern=pattern,
                allowed=_allowed_methods(pattern),
            )
        return Dispatch(Disposition.MATCH, handler=handler, params=params, pattern=pattern)

    def match(self, method: str, path: str) -> Dispatch:
        """Split *path* and dispatch it. Convenience over :meth:`dispatch`."""
        segments, trailing_slash = split_path(path)
        return self.dispatch(segments, method.upper(), trailing_slash)

    async def __call__(self, request: Request) -> Any:
        """Serve *request*: invoke the matched handler or signal the failure."""
        result = self.match(request.method, request.path)

        if result.disposition is Disposition.MATCH:
            return await invoke(result.handler, request.with_params(result.params))

        if result.disposition is Disposition.REDIRECT:
            location = result.location or "/"
            if request.query.raw:
                location = f"{location}?{request.query.raw.decode('latin-1')}"
            return Redirect(location, status=301)

        if result.disposition is Disposition.METHOD_NOT_ALLOWED:
            raise MethodNotAllowed(result.allowed)

        raise NotFound()


def _resolve_method(pattern: Pattern, method: str) -> Handler | None:
    """Exact method, then GET for HEAD, then the any-method handler."""
    handlers = pattern.handlers
    handler = handlers.get(method)
    if handler is None and method == "HEAD":
        handler = handlers.get("GET")
    if handler is None:
        handler = handlers.get(ANY_METHOD)
    return handler


def _allowed_methods(pattern: Pattern) -> frozenset[str]:
    allowed = set(pattern.handlers) - {ANY_METHOD}
    if "GET" in allowed:
        allowed.add("HEAD")
    return frozenset(allowed)
