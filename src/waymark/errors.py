"""Waymark exception hierarchy.

Shared across the path compiler, route declarations, and the Router so
every module raises and catches the same types.

A request that matches no route is not an error: ``Router.dispatch``
returns ``None`` and the embedding adapter decides what "not found" means.
"""


class WaymarkError(Exception):
    """Base for all waymark-specific errors."""


class ConfigurationError(WaymarkError):
    """Raised when a route table is declared incorrectly.

    Always raised eagerly, while paths, entries, and routers are being
    built, never while a request is being dispatched.
    """
