"""Waymark — typed route definitions and first-match dispatch.

Declare paths with a small DSL, bind them to handlers, wrap them in
before/after middleware, and dispatch already-parsed requests. No
sockets, no server: the embedding adapter owns the transport.

Basic usage::

    from waymark import Method, Router, integer, root, route
    from waymark.http.request import SimpleRequestBuilder
    from waymark.http.response import Response

    def show_user(request):
        return Response.ok(f"user {request.params['id']}")

    router = Router(
        route(Method.GET, root / "user" / integer("id"), show_user),
        builder=SimpleRequestBuilder(),
    )

    router.dispatch("GET", "/user/22")  # Response(status=200, body='user 22', ...)
    router.dispatch("GET", "/nope")     # None
"""

from importlib import import_module

__version__ = "0.1.0"

# Public name -> module that defines it
_LAZY_IMPORTS: dict[str, str] = {
    "CompiledRoute": "waymark.routing.compiler",
    "ConfigurationError": "waymark.errors",
    "Method": "waymark.routing.method",
    "Middleware": "waymark.routing.route",
    "ParamInt": "waymark.routing.params",
    "ParamPaths": "waymark.routing.params",
    "ParamStr": "waymark.routing.params",
    "Params": "waymark.routing.params",
    "Path": "waymark.routing.path",
    "Query": "waymark.routing.query",
    "RequestBuilder": "waymark.routing.builder",
    "RouteEntry": "waymark.routing.route",
    "RouteInfo": "waymark.routing.route",
    "RouteMatch": "waymark.routing.router",
    "Router": "waymark.routing.router",
    "RouterConfig": "waymark.config",
    "WaymarkError": "waymark.errors",
    "after": "waymark.routing.route",
    "before": "waymark.routing.route",
    "compile_path": "waymark.routing.compiler",
    "integer": "waymark.routing.path",
    "param": "waymark.routing.path",
    "root": "waymark.routing.path",
    "route": "waymark.routing.route",
    "tail": "waymark.routing.path",
    "verbs": "waymark.routing.method",
}

__all__ = sorted(_LAZY_IMPORTS)


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import waymark`` fast while providing a clean top-level API.
    """
    module_name = _LAZY_IMPORTS.get(name)
    if module_name is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)
    return getattr(import_module(module_name), name)
