"""Race an in-flight request against a caller's cancellation event."""

import asyncio
from collections.abc import Coroutine
from typing import Any, TypeVar

import httpx

from datalayer.domain.exceptions import OperationCancelledError

R = TypeVar("R")


async def run_cancellable(
    request: Coroutine[Any, Any, R],
    cancel_event: asyncio.Event | None,
    *,
    method: str,
    url: str,
) -> R:
    """Await ``request`` unless ``cancel_event`` fires first.

    When the event wins, the request task is cancelled and awaited so no
    work is left running, then ``OperationCancelledError`` is raised.
    Anything already sent is not rolled back.
    """
    if cancel_event is None:
        return await request
    if cancel_event.is_set():
        request.close()
        raise OperationCancelledError(method, url)

    request_task = asyncio.ensure_future(request)
    cancel_task = asyncio.ensure_future(cancel_event.wait())
    try:
        done, _ = await asyncio.wait(
            {request_task, cancel_task}, return_when=asyncio.FIRST_COMPLETED
        )
    except asyncio.CancelledError:
        request_task.cancel()
        cancel_task.cancel()
        for task in (request_task, cancel_task):
            try:
                await task
            except (asyncio.CancelledError, httpx.HTTPError):
                pass
        raise

    if request_task in done:
        cancel_task.cancel()
        return request_task.result()

    request_task.cancel()
    try:
        await request_task
    except (asyncio.CancelledError, httpx.HTTPError):
        pass
    raise OperationCancelledError(method, url)
