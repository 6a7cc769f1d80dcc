"""Error handling for perch requests.

Turns HTTPError exceptions and unexpected failures into Responses through
the app's error responder.
"""

import logging
import traceback

from perch._internal.invoke import invoke
from perch._internal.types import ErrorResponder
from perch.errors import HTTPError
from perch.http.request import Request
from perch.http.response import Response
from perch.server.negotiation import negotiate

logger = logging.getLogger("perch.server")


def default_error_responder(request: Request, status: int, message: str) -> Response:  # noqa: ARG001
    """Plain-text error body: the message on one line."""
    return Response(body=f"{message}\n", status=status)


async def handle_http_error(
    exc: HTTPError,
    request: Request,
    responder: ErrorResponder,
) -> Response:
    """Render *exc* with *responder* and attach the exception's headers."""
    logger.debug("%d %s %s: %s", exc.status, request.method, request.path, exc.detail)

    result = await invoke(responder, request, exc.status, exc.detail or str(exc.status))
    response = negotiate(result)
    # Keep the error status unless the responder chose its own
    if response.status == 200:
        response = response.with_status(exc.status)
    for name, value in exc.headers:
        response = response.with_header(name, value)
    return response


async def handle_internal_error(
    exc: Exception,
    request: Request,
    responder: ErrorResponder,
    debug: bool,
) -> Response:
    """Handle unexpected exceptions as 500 errors."""
    logger.exception("500 %s %s", request.method, request.path)

    if debug:
        body = "".join(traceback.format_exception(exc))
        return Response(body=body, status=500)
    result = await invoke(responder, request, 500, "Internal Server Error")
    response = negotiate(result)
    return response.with_status(500)
