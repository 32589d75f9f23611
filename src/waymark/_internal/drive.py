"""Pipeline drivers — run one dispatch pipeline sync or async.

The dispatch pipeline is written once, as a generator that yields the raw
result of every user step (before-middleware, handler, after-middleware)
and receives the resolved value back. A driver decides how an awaitable
result gets resolved, so the sync/async check lives in exactly one place.

Usage::

    from waymark._internal.drive import drive, drive_async

    response = drive(pipeline)               # plain call sites
    response = await drive_async(pipeline)   # inside an event loop
"""

import asyncio
import inspect
from collections.abc import Generator
from typing import Any

import anyio

type Pipeline = Generator[Any, Any, Any]


def drive(pipeline: Pipeline) -> Any:
    """Run *pipeline* to completion from synchronous code.

    Synchronous steps resolve inline with no event loop involved. At the
    first awaitable result, the remainder of the pipeline is finished
    inside a single ``anyio.run`` loop, so later steps still run strictly
    after the awaited one.

    Raises ``RuntimeError`` when an awaitable shows up while the calling
    thread already runs an event loop; use ``drive_async`` there.
    """
    try:
        value = next(pipeline)
        while not inspect.isawaitable(value):
            value = pipeline.send(value)
    except StopIteration as stop:
        return stop.value

    if _loop_running():
        if inspect.iscoroutine(value):
            value.close()
        pipeline.close()
        msg = (
            "A route step returned an awaitable while an event loop is running. "
            "Use Router.dispatch_async() from async code."
        )
        raise RuntimeError(msg)

    return anyio.run(_finish, pipeline, value)


async def drive_async(pipeline: Pipeline) -> Any:
    """Run *pipeline* to completion, awaiting every awaitable step result."""
    try:
        value = next(pipeline)
    except StopIteration as stop:
        return stop.value
    return await _finish(pipeline, value)


async def _finish(pipeline: Pipeline, value: Any) -> Any:
    while True:
        if inspect.isawaitable(value):
            value = await value
        try:
            value = pipeline.send(value)
        except StopIteration as stop:
            return stop.value


def _loop_running() -> bool:
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return False
    return True
