"""Route entries and middleware — frozen values composed left to right.

A ``RouteEntry`` binds a verb set and a compiled path to a handler. A
``Middleware`` carries before/after steps but no handler. Both compose
with ``then``, which concatenates before-chains and after-chains in
reading order::

    auth = before(check_token)
    json = after(render_json, when=DataResponse)

    home = auth.then(validation).then(route(Method.GET, root, index)).then(json)

Composition never mutates an operand; every call returns a new value.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, replace
from typing import Any, overload

from waymark._internal.types import AfterStep, BeforeStep, Handler
from waymark.errors import ConfigurationError
from waymark.routing.compiler import CompiledRoute, as_compiled
from waymark.routing.method import Method, accepts, as_verbs
from waymark.routing.params import Params
from waymark.routing.path import Path, Segment
from waymark.routing.query import Query


@dataclass(frozen=True, slots=True)
class RouteInfo:
    """Everything the router learned about one matched request.

    Handed to the ``RequestBuilder`` so it can assemble a concrete request.
    ``target`` is the target exactly as received; ``path`` has the query
    string and fragment removed.
    """

    method: Method
    target: str
    path: str
    params: Params
    query: Query
    route: CompiledRoute
    name: str | None = None


@dataclass(frozen=True, slots=True)
class _OnlyFor:
    """After step that only runs for responses of the given type(s)."""

    step: AfterStep
    types: type | tuple[type, ...]

    def __call__(self, request: Any, response: Any) -> Any:
        if isinstance(response, self.types):
            return self.step(request, response)
        return response


def _after_step(step: AfterStep, when: type | tuple[type, ...] | None) -> AfterStep:
    _check_callable(step, "after-middleware")
    if when is None:
        return step
    return _OnlyFor(step, when)


def _check_callable(step: object, what: str) -> None:
    if not callable(step):
        msg = f"{what} must be callable, got {type(step).__name__}."
        raise ConfigurationError(msg)


def _as_handler(handler: object) -> Handler:
    """Accept a plain callable or a controller exposing ``dispatch(request)``."""
    if callable(handler):
        return handler
    dispatch = getattr(handler, "dispatch", None)
    if callable(dispatch):
        return dispatch
    msg = (
        f"Route handler must be callable or expose dispatch(request), "
        f"got {type(handler).__name__}."
    )
    raise ConfigurationError(msg)


@dataclass(frozen=True, slots=True)
class Middleware:
    """Before and after steps waiting to be attached to a route."""

    before: tuple[BeforeStep, ...] = ()
    after: tuple[AfterStep, ...] = ()

    @overload
    def then(self, other: Middleware) -> Middleware: ...
    @overload
    def then(self, other: RouteEntry) -> RouteEntry: ...

    def then(self, other: Middleware | RouteEntry) -> Middleware | RouteEntry:
        """Compose with *other*; this value's steps run first."""
        if isinstance(other, Middleware):
            return Middleware(self.before + other.before, self.after + other.after)
        if isinstance(other, RouteEntry):
            return replace(other, before=self.before + other.before, after=self.after + other.after)
        msg = f"Cannot compose Middleware with {type(other).__name__}."
        raise ConfigurationError(msg)

    def attach_before(self, step: BeforeStep) -> Middleware:
        _check_callable(step, "before-middleware")
        return replace(self, before=(*self.before, step))

    def attach_after(self, step: AfterStep, *, when: type | tuple[type, ...] | None = None) -> Middleware:
        return replace(self, after=(*self.after, _after_step(step, when)))


@dataclass(frozen=True, slots=True)
class RouteEntry:
    """A compiled route bound to a verb set, a handler, and middleware.

    Created once during setup and read-only afterwards.
    """

    methods: frozenset[Method]
    route: CompiledRoute
    handler: Handler
    before: tuple[BeforeStep, ...] = ()
    after: tuple[AfterStep, ...] = ()
    name: str | None = None

    @property
    def path(self) -> Path:
        return self.route.path

    @property
    def pattern(self) -> str:
        return self.route.pattern

    def compile(self) -> CompiledRoute:
        return self.route

    def accepts(self, method: Method) -> bool:
        return accepts(self.methods, method)

    def __truediv__(self, other: str | Segment | Path) -> Path:
        """Extend this entry's path, e.g. ``route(Method.POST, user / integer("id"))``."""
        return self.path / other

    def then(self, other: Middleware) -> RouteEntry:
        """Attach *other*'s steps after this entry's own."""
        if isinstance(other, Middleware):
            return replace(self, before=self.before + other.before, after=self.after + other.after)
        if isinstance(other, RouteEntry):
            msg = (
                f"Cannot compose route {self.route} with route {other.route}: "
                "an entry has exactly one handler."
            )
            raise ConfigurationError(msg)
        msg = f"Cannot compose RouteEntry with {type(other).__name__}."
        raise ConfigurationError(msg)

    def attach_before(self, step: BeforeStep) -> RouteEntry:
        _check_callable(step, "before-middleware")
        return replace(self, before=(*self.before, step))

    def attach_after(self, step: AfterStep, *, when: type | tuple[type, ...] | None = None) -> RouteEntry:
        return replace(self, after=(*self.after, _after_step(step, when)))

    def with_name(self, name: str) -> RouteEntry:
        if not name:
            msg = "Route names cannot be empty."
            raise ConfigurationError(msg)
        return replace(self, name=name)

    def __str__(self) -> str:
        verbs = ",".join(sorted(m.verb for m in self.methods))
        return f"{verbs} {self.route}"


type PathLike = Path | CompiledRoute | RouteEntry
type Methods = str | Method | Iterable[str | Method]


@overload
def route(methods: Methods, path: PathLike, handler: None = None) -> Callable[[Any], RouteEntry]: ...
@overload
def route(methods: Methods, path: PathLike, handler: object) -> RouteEntry: ...


def route(methods: Methods, path: PathLike, handler: object = None) -> Any:
    """Declare a route.

    *path* may be a ``Path``, a ``CompiledRoute``, or another entry whose
    path is reused. Without *handler*, returns a decorator::

        user = route(Method.GET, root / "user" / integer("id"), show_user)

        @route(verbs(Method.GET, Method.POST), root / "login")
        def login(request): ...

    ``login`` is then the ``RouteEntry``, ready for ``Router(...)``.

    Raises ``ConfigurationError`` for an unknown or empty verb set, a
    malformed path, or a handler that cannot be called.
    """
    try:
        verb_set = as_verbs(methods)
    except ValueError as exc:
        raise ConfigurationError(str(exc)) from exc
    if not verb_set:
        msg = "A route needs at least one method."
        raise ConfigurationError(msg)

    compiled = path.route if isinstance(path, RouteEntry) else as_compiled(path)

    if handler is None:

        def decorator(fn: object) -> RouteEntry:
            return RouteEntry(methods=verb_set, route=compiled, handler=_as_handler(fn))

        return decorator

    return RouteEntry(methods=verb_set, route=compiled, handler=_as_handler(handler))


def before(step: BeforeStep) -> Middleware:
    """Wrap a before step.

    The step receives the current request and returns either a request
    (continue, possibly modified) or a response (stop: the remaining
    before steps and the handler are skipped, after steps still run).
    A result counts as a request when it is an instance of the class of
    the request the step received.
    """
    _check_callable(step, "before-middleware")
    return Middleware(before=(step,))


def after(step: AfterStep, *, when: type | tuple[type, ...] | None = None) -> Middleware:
    """Wrap an after step: ``(request, response) -> response``.

    With *when*, the step only sees responses that are instances of
    *when*; every other response passes through untouched.
    """
    return Middleware(after=(_after_step(step, when),))
