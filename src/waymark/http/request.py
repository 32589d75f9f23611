"""Immutable HTTP request and a builder that produces it.

The request is honest about what it is: received data that doesn't
change. Before-middleware that wants to add something (an authenticated
user, a parsed body) returns a copy made with ``dataclasses.replace``
or ``.with_auth()``.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from typing import Any

from waymark.http.headers import Headers
from waymark.routing.compiler import CompiledRoute
from waymark.routing.method import Method
from waymark.routing.params import Params
from waymark.routing.query import Query
from waymark.routing.route import RouteInfo


@dataclass(frozen=True, slots=True)
class RequestExtra:
    """Caller-supplied data the router does not interpret.

    Passed as ``extra`` to ``Router.dispatch``; ``SimpleRequestBuilder``
    copies it onto the request.
    """

    body: str | bytes | None = None
    headers: Mapping[str, str] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable request for a matched route."""

    method: Method
    target: str
    path: str
    params: Params
    query: Query
    route: CompiledRoute
    headers: Headers = field(default_factory=Headers)
    body: str | bytes | None = None
    auth: Any = None

    @property
    def verb(self) -> str:
        return self.method.verb

    def with_auth(self, auth: Any) -> Request:
        """Return a copy carrying *auth* (whatever the auth middleware decides)."""
        return replace(self, auth=auth)


class SimpleRequestBuilder:
    """Builds ``Request`` values from ``RequestExtra`` payloads."""

    __slots__ = ()

    def build(self, info: RouteInfo, extra: RequestExtra | None) -> Request:
        return Request(
            method=info.method,
            target=info.target,
            path=info.path,
            params=info.params,
            query=info.query,
            route=info.route,
            headers=Headers(extra.headers) if extra is not None else Headers(),
            body=extra.body if extra is not None else None,
        )
