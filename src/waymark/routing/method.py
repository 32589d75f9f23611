"""HTTP methods and verb sets."""

from collections.abc import Iterable
from enum import StrEnum


class Method(StrEnum):
    """HTTP request method.

    ``ALL`` is the wildcard: a route declared with it accepts every
    method, and a lookup made with it accepts every route.
    """

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    PATCH = "PATCH"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"
    CONNECT = "CONNECT"
    TRACE = "TRACE"
    ALL = "*"

    @property
    def verb(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: "str | Method") -> "Method":
        """Return the Method for *value*, case-insensitively.

        Raises ``ValueError`` for anything that is not a known verb.
        """
        if isinstance(value, Method):
            return value
        text = value.strip().upper()
        if text in ("ALL", "ANY"):
            return cls.ALL
        try:
            return cls(text)
        except ValueError:
            msg = f"Unknown HTTP method: {value!r}"
            raise ValueError(msg) from None


def verbs(*methods: "str | Method") -> frozenset[Method]:
    """Build a verb set: ``verbs(Method.GET, "post")``."""
    return frozenset(Method.parse(m) for m in methods)


def as_verbs(methods: "str | Method | Iterable[str | Method]") -> frozenset[Method]:
    """Normalize a single method or an iterable of methods to a verb set."""
    if isinstance(methods, str):
        return verbs(methods)
    return verbs(*methods)


def accepts(allowed: frozenset[Method], method: Method) -> bool:
    """True if a route with verb set *allowed* should serve *method*."""
    return method is Method.ALL or Method.ALL in allowed or method in allowed
