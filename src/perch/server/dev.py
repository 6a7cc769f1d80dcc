"""Development server.

Starts a pounce ASGI server with a live perch App object.
"""

from typing import Any


def run_dev_server(
    app: Any,
    host: str,
    port: int,
    *,
    workers: int = 1,
    reload: bool = False,
    log_level: str = "info",
    app_path: str | None = None,
) -> None:
    """Serve *app* with pounce until interrupted.

    Args:
        app: ASGI callable (perch App instance).
        host: Bind host address.
        port: Bind port number.
        workers: Worker count.
        reload: Restart on source changes.
        log_level: Server log level (debug, info, warning, error, critical).
        app_path: Optional ``"module:attribute"`` import string naming an
            App, which pounce re-imports on each reload.
    """
    try:
        from pounce.config import ServerConfig
        from pounce.server import Server
    except ImportError as exc:
        msg = "Serving requires pounce. Install it with: pip install perch[server]"
        raise RuntimeError(msg) from exc

    config = ServerConfig(
        host=host,
        port=port,
        workers=workers,
        reload=reload,
        log_level=log_level,
    )
    server = Server(config, app, app_path=app_path)
    server.run()
