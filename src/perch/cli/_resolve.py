"""Import-string resolution — ``"module:attribute"`` to an app or router.

Shared by every ``perch`` subcommand.
"""

import importlib

from perch.app import App
from perch.routing.host import HostRouter
from perch.routing.router import Router

Target = App | Router | HostRouter


def import_attribute(import_string: str) -> object:
    """Import the object an import string names, without calling it.

    When the attribute is omitted it defaults to ``app`` (``"myapp"``
    resolves ``myapp.app``).

    Raises:
        ModuleNotFoundError: If the module cannot be imported.
        AttributeError: If the attribute does not exist on the module.
    """
    module_path, _, attr_name = import_string.partition(":")
    module = importlib.import_module(module_path)
    return getattr(module, attr_name or "app")


def resolve_target(import_string: str) -> Target:
    """Resolve an import string to an ``App``, ``Router`` or ``HostRouter``.

    Factory functions are called.

    Raises:
        ModuleNotFoundError: If the module cannot be imported.
        AttributeError: If the attribute does not exist on the module.
        TypeError: If the resolved object is not an app or router.
    """
    obj = import_attribute(import_string)

    if callable(obj) and not isinstance(obj, Target):
        try:
            obj = obj()
        except Exception as exc:
            msg = f"Factory function {import_string!r} raised an error: {exc}"
            raise TypeError(msg) from exc

    if not isinstance(obj, Target):
        msg = f"{import_string!r} resolved to {type(obj).__name__}, not a perch App or router"
        raise TypeError(msg)
    return obj


def as_app(target: Target) -> App:
    return target if isinstance(target, App) else App(target)
