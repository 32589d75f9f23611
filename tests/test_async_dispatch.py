"""Tests for async handlers and middleware — sequencing and both dispatch entry points."""

import anyio
import pytest

from waymark.http.request import Request, RequestExtra, SimpleRequestBuilder
from waymark.http.response import Response
from waymark.routing.method import Method
from waymark.routing.path import integer, root
from waymark.routing.route import after, before, route
from waymark.routing.router import Router


def _router(*entries) -> Router:
    return Router(*entries, builder=SimpleRequestBuilder())


async def _async_handler(request: Request) -> Response:
    await anyio.sleep(0)
    return Response(200, f"user {request.params['id']}")


def _recording_chain(order: list[str]):
    async def slow_before(request: Request) -> Request:
        order.append("before:start")
        await anyio.sleep(0.01)
        order.append("before:end")
        return request

    def sync_before(request: Request) -> Request:
        order.append("sync-before")
        return request

    async def handler(request: Request) -> Response:
        order.append("handler")
        return Response(200, "OK")

    async def slow_after(request: Request, response: Response) -> Response:
        await anyio.sleep(0.01)
        order.append("after")
        return response.with_header("X-After", "1")

    return (
        before(slow_before)
        .then(before(sync_before))
        .then(route(Method.GET, root, handler))
        .then(after(slow_after))
    )


@pytest.mark.anyio
async def test_async_handler() -> None:
    router = _router(route(Method.GET, root / "user" / integer("id"), _async_handler))
    resp = await router.dispatch_async(Method.GET, "/user/7")
    assert resp.body == "user 7"


@pytest.mark.anyio
async def test_async_no_match() -> None:
    router = _router(route(Method.GET, root, _async_handler))
    assert await router.dispatch_async(Method.GET, "/missing") is None


@pytest.mark.anyio
async def test_steps_sequenced_in_order() -> None:
    order: list[str] = []
    router = _router(_recording_chain(order))
    resp = await router.dispatch_async(Method.GET, "/")
    assert order == ["before:start", "before:end", "sync-before", "handler", "after"]
    assert resp.header("X-After") == "1"


@pytest.mark.anyio
async def test_async_short_circuit() -> None:
    handled = []

    async def deny(request: Request) -> Response:
        await anyio.sleep(0)
        if "Authorization" not in request.headers:
            return Response.unauthorized()
        return request

    router = _router(before(deny).then(route(Method.GET, root, lambda r: handled.append(r) or Response())))
    assert (await router.dispatch_async(Method.GET, "/")).status == 401
    assert handled == []

    resp = await router.dispatch_async(Method.GET, "/", RequestExtra(headers={"Authorization": "x"}))
    assert resp.status == 200
    assert len(handled) == 1


@pytest.mark.anyio
async def test_sync_dispatch_inside_loop_rejects_awaitables() -> None:
    router = _router(route(Method.GET, root / "user" / integer("id"), _async_handler))
    with pytest.raises(RuntimeError, match="dispatch_async"):
        router.dispatch(Method.GET, "/user/1")


@pytest.mark.anyio
async def test_sync_steps_fine_inside_loop() -> None:
    router = _router(route(Method.GET, root, lambda r: Response(200, "sync")))
    assert router.dispatch(Method.GET, "/").body == "sync"


@pytest.mark.anyio
async def test_async_error_propagates() -> None:
    async def boom(request: Request) -> Response:
        await anyio.sleep(0)
        raise LookupError("gone")

    router = _router(route(Method.GET, root, boom))
    with pytest.raises(LookupError, match="gone"):
        await router.dispatch_async(Method.GET, "/")


class TestSyncDispatchOfAsyncSteps:
    def test_async_handler_from_sync_code(self) -> None:
        router = _router(route(Method.GET, root / "user" / integer("id"), _async_handler))
        assert router.dispatch(Method.GET, "/user/3").body == "user 3"

    def test_mixed_chain_from_sync_code(self) -> None:
        order: list[str] = []
        router = _router(_recording_chain(order))
        resp = router.dispatch(Method.GET, "/")
        assert order == ["before:start", "before:end", "sync-before", "handler", "after"]
        assert resp.status == 200

    def test_equal_results_sync_and_async(self) -> None:
        router = _router(route(Method.GET, root / "user" / integer("id"), _async_handler))
        sync_resp = router.dispatch(Method.GET, "/user/4")
        async_resp = anyio.run(router.dispatch_async, Method.GET, "/user/4")
        assert sync_resp == async_resp
