"""Perch ASGI application.

Wraps one root handler (usually a ``Router`` or a ``HostRouter``) and
turns its results and errors into ASGI responses.
"""

from __future__ import annotations

from perch._internal.asgi import Receive, Scope, Send
from perch._internal.invoke import invoke
from perch._internal.types import ErrorResponder, Handler
from perch.config import AppConfig
from perch.errors import ConfigurationError, HTTPError
from perch.http.request import Request
from perch.http.response import Response
from perch.server.errors import (
    default_error_responder,
    handle_http_error,
    handle_internal_error,
)
from perch.server.negotiation import negotiate
from perch.server.sender import send_response


class App:
    """ASGI callable serving a root handler.

    Usage::

        router = Router()
        router.register("/", "GET", home)

        app = App(router, error_responder=render_error)
        app.run()

    The error responder is called as ``responder(request, status, message)``
    for every ``HTTPError`` (404 and 405 from the router included) and for
    unexpected failures when not in debug mode.
    """

    __slots__ = ("config", "error_responder", "handler")

    def __init__(
        self,
        handler: Handler,
        config: AppConfig | None = None,
        error_responder: ErrorResponder | None = None,
    ) -> None:
        if not callable(handler):
            msg = "App needs a callable root handler."
            raise ConfigurationError(msg)
        self.handler = handler
        self.config = config or AppConfig()
        self.error_responder = error_responder or default_error_responder

    async def handle(self, request: Request) -> Response:
        """Run *request* through the root handler and return the Response."""
        try:
            return negotiate(await invoke(self.handler, request))
        except HTTPError as exc:
            return await handle_http_error(exc, request, self.error_responder)
        except Exception as exc:
            return await handle_internal_error(
                exc, request, self.error_responder, self.config.debug
            )

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point."""
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return
        if scope["type"] != "http":
            return

        request = Request.from_asgi(scope, receive)
        response = await self.handle(request)
        await send_response(response, send, head=request.method == "HEAD")

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        while True:
            message = await receive()
            if message["type"] == "lifespan.startup":
                await send({"type": "lifespan.startup.complete"})
            elif message["type"] == "lifespan.shutdown":
                await send({"type": "lifespan.shutdown.complete"})
                return

    def run(self, host: str | None = None, port: int | None = None) -> None:
        """Start a server for this app (requires the ``server`` extra)."""
        from perch.server.dev import run_dev_server

        run_dev_server(
            self,
            host or self.config.host,
            port or self.config.port,
            workers=self.config.workers,
            reload=self.config.reload,
            log_level=self.config.log_level,
        )
