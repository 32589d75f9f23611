"""RequestBuilder protocol — how the Router turns a match into a request.

The core never knows what a request looks like. The embedding
application passes a builder to the Router explicitly; no base class
required, the Router checks the shape, not the lineage::

    class MyBuilder:
        def build(self, info: RouteInfo, extra: MyExtra | None) -> MyRequest:
            return MyRequest(
                method=info.method,
                path=info.path,
                params=info.params,
                headers=extra.headers if extra else {},
            )
"""

from typing import Protocol, runtime_checkable

from waymark.routing.route import RouteInfo


@runtime_checkable
class RequestBuilder[Req, Extra](Protocol):
    """Assemble a concrete request from match results and caller data.

    *extra* is whatever the caller handed to ``dispatch`` (headers, body,
    connection details), or ``None`` when nothing was passed.
    """

    def build(self, info: RouteInfo, extra: Extra | None) -> Req: ...
