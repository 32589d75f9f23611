"""HTTP response with chainable .with_*() transformation API.

Each transformation returns a new Response. Immutable by convention,
built incrementally by design. The router itself treats responses as
opaque values; this type is one ready-made choice for applications
that do not bring their own.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, replace
from typing import Any


@dataclass(frozen=True, slots=True)
class Response:
    """An HTTP response built through immutable transformations.

    ``body`` is any value; after-middleware may render it (e.g. a dict
    into JSON text) and return a new Response.
    """

    status: int = 200
    body: Any = None
    content_type: str | None = None
    headers: tuple[tuple[str, str], ...] = ()

    # -- Constructors --

    @classmethod
    def ok(cls, body: Any = None, content_type: str | None = None) -> Response:
        return cls(200, body, content_type)

    @classmethod
    def bad_request(cls, body: Any = None) -> Response:
        return cls(400, body)

    @classmethod
    def unauthorized(cls, body: Any = None) -> Response:
        return cls(401, body)

    @classmethod
    def not_found(cls, body: Any = None) -> Response:
        return cls(404, body)

    @classmethod
    def method_not_allowed(cls, allowed: frozenset[str] | set[str]) -> Response:
        """405 with an ``Allow`` header listing *allowed*."""
        return cls(405, headers=(("Allow", ", ".join(sorted(allowed))),))

    @classmethod
    def server_error(cls, body: Any = None) -> Response:
        return cls(500, body)

    # -- Chainable transformations --

    def with_status(self, status: int) -> Response:
        """Return a new Response with a different status code."""
        return replace(self, status=status)

    def with_body(self, body: Any) -> Response:
        """Return a new Response with a different body."""
        return replace(self, body=body)

    def with_header(self, name: str, value: str) -> Response:
        """Return a new Response with an additional header."""
        return replace(self, headers=(*self.headers, (name, value)))

    def with_headers(self, headers: Mapping[str, str]) -> Response:
        """Return a new Response with additional headers."""
        new = tuple(headers.items())
        return replace(self, headers=(*self.headers, *new))

    def with_content_type(self, content_type: str) -> Response:
        """Return a new Response with a different content type."""
        return replace(self, content_type=content_type)

    # -- Inspection --

    @property
    def is_success(self) -> bool:
        return 200 <= self.status < 300

    def header(self, name: str) -> str | None:
        """First value of header *name* (case-insensitive), or ``None``."""
        key = name.lower()
        for hname, hvalue in self.headers:
            if hname.lower() == key:
                return hvalue
        return None
