"""Perch — HTTP request routing by path, method, and host.

Basic usage::

    from perch import App, HostRouter, Router

    router = Router()
    router.register("/", "GET", home)
    router.register("/users/<name>", "GET", show_user, "*", user_fallback)
    router.register("/docs/", "GET", docs)        # "/docs" redirects here

    hosts = HostRouter(default_handler=router)
    hosts.register("<tenant>.example.com", tenant_site)

    app = App(hosts)
    app.run()
"""

__version__ = "0.1.0"
__all__ = [
    "App",
    "AppConfig",
    "ConfigurationError",
    "Dispatch",
    "Disposition",
    "HTTPError",
    "HostRouter",
    "MethodNotAllowed",
    "NotFound",
    "PerchError",
    "Redirect",
    "Request",
    "Response",
    "Router",
    "not_found",
    "redirect",
]


def __getattr__(name: str) -> object:
    """Lazy imports for the public API.

    Keeps ``import perch`` fast while providing a flat top-level namespace.
    """
    if name == "App":
        from perch.app import App

        return App

    if name == "AppConfig":
        from perch.config import AppConfig

        return AppConfig

    if name == "Request":
        from perch.http.request import Request

        return Request

    if name in ("Response", "Redirect"):
        from perch.http import response as _resp

        return getattr(_resp, name)

    if name in ("Router", "HostRouter", "Dispatch", "Disposition"):
        from perch import routing as _routing

        return getattr(_routing, name)

    if name in ("redirect", "not_found"):
        from perch import handlers as _handlers

        return getattr(_handlers, name)

    if name in ("PerchError", "ConfigurationError", "HTTPError", "MethodNotAllowed", "NotFound"):
        from perch import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
