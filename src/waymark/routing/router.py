"""Router — ordered route table with first-match dispatch.

Entries are tried in declaration order; the first entry whose path
matches and whose verb set accepts the method wins. There is no
specificity scoring: overlapping routes are resolved by the order the
caller gives them.

The Router is immutable after construction and keeps no per-request
state, so one instance can serve concurrent dispatches without locking.
"""

import logging
from collections.abc import Generator, Iterable, Iterator
from dataclasses import dataclass
from typing import Any

from waymark._internal.drive import drive, drive_async
from waymark.config import RouterConfig
from waymark.errors import ConfigurationError
from waymark.routing.builder import RequestBuilder
from waymark.routing.compiler import CompiledRoute, split_target
from waymark.routing.method import Method
from waymark.routing.params import Params
from waymark.routing.query import Query
from waymark.routing.route import Middleware, RouteEntry, RouteInfo

logger = logging.getLogger("waymark.routing")


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful route lookup."""

    entry: RouteEntry
    params: Params

    @property
    def route(self) -> CompiledRoute:
        return self.entry.route


def _pipeline(entry: RouteEntry, request: Any) -> Generator[Any, Any, Any]:
    """Before steps, then the handler, then after steps.

    Yields each step's raw result; the driver sends back the resolved
    value. A before step that returns something other than a request
    short-circuits: the handler is skipped and its result becomes the
    response the after steps see. After steps always receive the request
    the builder produced, not one rewritten by a before step.
    """
    original = request
    request_type = type(request)

    for step in entry.before:
        outcome = yield step(request)
        if isinstance(outcome, request_type):
            request = outcome
            continue
        if outcome is None:
            msg = f"Before-middleware {step!r} on {entry} returned None instead of a request or response."
            raise TypeError(msg)
        logger.debug("%s short-circuited by %r", entry, step)
        response = outcome
        break
    else:
        response = yield entry.handler(request)

    for step in entry.after:
        response = yield step(original, response)

    return response


class Router[Req, Resp, Extra]:
    """Ordered, immutable collection of route entries.

    Usage::

        router = Router(home, user_show, user_save, builder=SimpleRequestBuilder())
        response = router.dispatch("GET", "/user/22", RequestExtra(headers={...}))
        if response is None:
            ...  # the adapter decides what "not found" looks like
    """

    __slots__ = ("_builder", "_config", "_entries", "_names")

    def __init__(
        self,
        *entries: RouteEntry,
        builder: RequestBuilder[Req, Extra],
        config: RouterConfig | None = None,
    ) -> None:
        if not entries:
            msg = "A Router needs at least one route."
            raise ConfigurationError(msg)
        for entry in entries:
            if isinstance(entry, Middleware):
                msg = (
                    "Middleware cannot be registered on its own; attach it to a route "
                    "with before(...).then(route(...))."
                )
                raise ConfigurationError(msg)
            if not isinstance(entry, RouteEntry):
                msg = f"Expected RouteEntry, got {type(entry).__name__}."
                raise ConfigurationError(msg)
        if builder is None or not isinstance(builder, RequestBuilder):
            msg = "A Router needs a RequestBuilder with a build(info, extra) method."
            raise ConfigurationError(msg)

        names: dict[str, RouteEntry] = {}
        for entry in entries:
            if entry.name is None:
                continue
            if entry.name in names:
                msg = f"Duplicate route name {entry.name!r}."
                raise ConfigurationError(msg)
            names[entry.name] = entry

        self._entries: tuple[RouteEntry, ...] = tuple(entries)
        self._names = names
        self._builder = builder
        self._config = config or RouterConfig()
        logger.debug("router built with %d routes", len(self._entries))

    @classmethod
    def from_entries(
        cls,
        entries: Iterable[RouteEntry],
        builder: RequestBuilder[Req, Extra],
        config: RouterConfig | None = None,
    ) -> "Router[Req, Resp, Extra]":
        """Build a router from a list of entries, order preserved."""
        return cls(*entries, builder=builder, config=config)

    # -- Introspection --

    @property
    def routes(self) -> tuple[RouteEntry, ...]:
        return self._entries

    @property
    def config(self) -> RouterConfig:
        return self._config

    def __iter__(self) -> Iterator[RouteEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def url_for(self, name: str, **values: Any) -> str:
        """Build the path of the route named *name*.

        Raises ``KeyError`` for an unknown name and ``ConfigurationError``
        for missing or ill-typed parameter values.
        """
        return self._names[name].route.format(**values)

    # -- Matching --

    def match(self, method: str | Method, target: str) -> RouteMatch | None:
        """Find the first entry serving *method* on *target*.

        A path match with a rejected method does not end the search; a
        later entry with the same path may still accept the method.

        Raises ``ValueError`` if *method* is not a known HTTP method.
        """
        path, _ = split_target(target)
        return self._find(Method.parse(method), self._normalize(path), target)

    def allowed_methods(self, target: str) -> frozenset[Method]:
        """Every verb declared by entries whose path matches *target*.

        Empty when no path matches. Lets an adapter tell "no such
        resource" apart from "method not allowed".
        """
        path, _ = split_target(target)
        path = self._normalize(path)
        allowed: set[Method] = set()
        for entry in self._entries:
            if entry.route.matches(path):
                allowed.update(entry.methods)
        return frozenset(allowed)

    def _normalize(self, path: str) -> str:
        if self._config.ignore_trailing_slash and len(path) > 1:
            return path.rstrip("/") or "/"
        return path

    def _find(self, method: Method, path: str, target: str) -> RouteMatch | None:
        unquote_params = self._config.unquote_params
        for entry in self._entries:
            params = entry.route.match(path, unquote_params=unquote_params)
            if params is None:
                continue
            if not entry.accepts(method):
                logger.debug("%s %s: path matches %s but method is not accepted", method, target, entry)
                continue
            return RouteMatch(entry=entry, params=params)
        logger.debug("no route matches %s %s", method, target)
        return None

    # -- Dispatch --

    def dispatch(self, method: str | Method, target: str, extra: Extra | None = None) -> Resp | None:
        """Run the matching route's pipeline and return its response.

        Returns ``None`` when no entry serves (*method*, *target*). A method
        string outside ``Method`` (e.g. ``"PROPFIND"``) is not a miss: it
        raises ``ValueError``, so adapters accepting arbitrary verbs should
        check ``Method.parse`` first and answer 501 or 405 themselves.
        Exceptions raised by handlers or middleware propagate unchanged.

        Steps may be sync or async. When one returns an awaitable, the
        rest of the pipeline finishes in an event loop started for this
        call; from code already running in a loop, use ``dispatch_async``.
        """
        pipeline = self._prepare(method, target, extra)
        if pipeline is None:
            return None
        return drive(pipeline)

    async def dispatch_async(
        self, method: str | Method, target: str, extra: Extra | None = None
    ) -> Resp | None:
        """Like ``dispatch``, awaiting each async step before the next runs."""
        pipeline = self._prepare(method, target, extra)
        if pipeline is None:
            return None
        return await drive_async(pipeline)

    def _prepare(self, method: str | Method, target: str, extra: Extra | None) -> Generator[Any, Any, Any] | None:
        verb = Method.parse(method)
        path, query_string = split_target(target)
        path = self._normalize(path)

        found = self._find(verb, path, target)
        if found is None:
            return None

        cfg = self._config
        query = Query(query_string, keep_blank_values=cfg.keep_blank_query_values) if cfg.parse_query else Query()
        info = RouteInfo(
            method=verb,
            target=target,
            path=path,
            params=found.params,
            query=query,
            route=found.route,
            name=found.entry.name,
        )
        request = self._builder.build(info, extra)
        return _pipeline(found.entry, request)
