"""Shared type aliases used across perch modules."""

from collections.abc import Callable
from typing import Any, TypeAlias

# Request handler: called with a Request, returns a response value.
# Routers are handlers too, so they nest.
Handler: TypeAlias = Callable[..., Any]

# Error responder: (request, status, message) -> Response
ErrorResponder: TypeAlias = Callable[..., Any]
