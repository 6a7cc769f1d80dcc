"""Maps handler return values to Response objects.

isinstance-based dispatch, no magic.
"""

from typing import Any

from perch.http.response import Redirect, Response


def negotiate(value: Any) -> Response:
    """Convert a handler's return value to a Response.

    - ``Response``  -> as-is
    - ``Redirect``  -> 301/302 with a Location header
    - ``str``       -> text/plain body
    - ``bytes``     -> application/octet-stream body
    - ``None``      -> 204 No Content
    """
    if isinstance(value, Response):
        return value
    if isinstance(value, Redirect):
        return value.to_response()
    if isinstance(value, str):
        return Response(body=value)
    if isinstance(value, bytes):
        return Response(body=value, content_type="application/octet-stream")
    if value is None:
        return Response(status=204)
    msg = (
        f"Handler returned {type(value).__name__}, which perch cannot turn "
        "into a response. Return str, bytes, Response, Redirect, or None."
    )
    raise TypeError(msg)
