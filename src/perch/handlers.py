"""Ready-made handlers: redirect and not-found.

Both are plain handlers, so they can be registered on a ``Router`` or
used as a ``HostRouter`` default like any other.
"""

from urllib.parse import urlsplit

from perch._internal.types import Handler
from perch.errors import NotFound
from perch.http.request import Request
from perch.http.response import Redirect


def resolve_location(request: Request, url: str) -> str:
    """Make a relative redirect target absolute against the request path.

    ``"b"`` requested from ``/a/x`` becomes ``/a/b``. Targets with a
    scheme or a leading ``/`` are returned unchanged.
    """
    if not url or url.startswith("/") or urlsplit(url).scheme:
        return url or "/"
    directory = request.path.rpartition("/")[0]
    return f"{directory}/{url}"


def redirect(url: str, permanent: bool = False) -> Handler:
    """Handler that redirects every request to *url* (301 when permanent)."""
    status = 301 if permanent else 302

    def redirect_handler(request: Request) -> Redirect:
        return Redirect(resolve_location(request, url), status=status)

    return redirect_handler


def _not_found_handler(request: Request) -> None:
    raise NotFound()


def not_found() -> Handler:
    """Handler that responds 404 through the app's error responder."""
    return _not_found_handler
