"""Routing — path DSL, compiled matchers, and first-match dispatch.

Routes are declared once at startup and compiled into immutable
matchers; the Router only ever reads them.
"""

from waymark.routing.builder import RequestBuilder
from waymark.routing.compiler import CompiledRoute, compile_path
from waymark.routing.method import Method, verbs
from waymark.routing.params import Param, ParamInt, ParamPaths, Params, ParamStr
from waymark.routing.path import IntParam, Literal, Path, StrParam, TailParam, integer, param, root, tail
from waymark.routing.query import Query
from waymark.routing.route import Middleware, RouteEntry, RouteInfo, after, before, route
from waymark.routing.router import RouteMatch, Router

__all__ = [
    "CompiledRoute",
    "IntParam",
    "Literal",
    "Method",
    "Middleware",
    "Param",
    "ParamInt",
    "ParamPaths",
    "ParamStr",
    "Params",
    "Path",
    "Query",
    "RequestBuilder",
    "RouteEntry",
    "RouteInfo",
    "RouteMatch",
    "Router",
    "StrParam",
    "TailParam",
    "after",
    "before",
    "compile_path",
    "integer",
    "param",
    "root",
    "route",
    "tail",
    "verbs",
]
