"""Host router — virtual-host dispatch on the request's host name.

Host labels are matched most-significant first (``com``, then
``example``, then ``www``). There is no method dimension and no 404: an
unmatched host goes to the default handler.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from perch._internal.invoke import invoke
from perch._internal.types import Handler
from perch.errors import ConfigurationError
from perch.http.request import Request
from perch.routing.dispatch import Dispatch, Disposition
from perch.routing.pattern import Pattern, compile_host, split_host
from perch.routing.router import ANY_METHOD
from perch.routing.trie import SegmentTrie

logger = logging.getLogger("perch.routing")


class HostRouter:
    """Dispatches requests to handlers by host name.

    Usage::

        hosts = HostRouter(default_handler=main_site)
        hosts.register("www.example.com", www_router)
        hosts.register("<user>.example.com", user_site)

        hosts.dispatch("alice.example.com").params   # {"user": "alice"}
    """

    __slots__ = ("_default", "_trie")

    def __init__(self, default_handler: Handler) -> None:
        if not callable(default_handler):
            msg = "HostRouter needs a callable default handler."
            raise ConfigurationError(msg)
        self._default = default_handler
        self._trie = SegmentTrie()

    @property
    def default_handler(self) -> Handler:
        return self._default

    def register(self, template: str, handler: Handler) -> HostRouter:
        """Register *handler* for hosts matching *template*.

        A ``<name>`` label captures one host label; a left-most ``*``
        matches any number of leading labels.
        """
        if not callable(handler):
            msg = f"HostRouter.register({template!r}, ...): handler is not callable."
            raise ConfigurationError(msg)
        pattern = self._trie.insert(compile_host(template))
        pattern.handlers[ANY_METHOD] = handler
        logger.debug("host %s -> %r", template, handler)
        return self

    def route(self, template: str) -> Callable[[Handler], Handler]:
        """Decorator form of :meth:`register`."""

        def decorator(handler: Handler) -> Handler:
            self.register(template, handler)
            return handler

        return decorator

    @property
    def routes(self) -> tuple[Pattern, ...]:
        """Registered host patterns in registration order."""
        return tuple(self._trie)

    def dispatch(self, host: str) -> Dispatch:
        """Resolve *host* to a handler. Always a ``MATCH``."""
        found = self._trie.lookup(split_host(host))
        if found is None:
            return Dispatch(Disposition.MATCH, handler=self._default)
        pattern = found.terminals[False]
        return Dispatch(
            Disposition.MATCH,
            handler=pattern.handlers[ANY_METHOD],
            params=pattern.bind(found.values),
            pattern=pattern,
        )

    async def __call__(self, request: Request) -> Any:
        result = self.dispatch(request.host)
        return await invoke(result.handler, request.with_params(result.params))
