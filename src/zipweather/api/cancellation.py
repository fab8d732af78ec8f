"""
zipweather.api.cancellation

Tie the lifetime of a request's pipeline to the inbound HTTP request.

Responsibilities:
- Cancel in-flight outbound calls when the client disconnects.
- Enforce an overall per-request deadline (classified as `UpstreamError`).
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

import anyio
from starlette.requests import Request

from zipweather.domain.errors import UpstreamError

T = TypeVar("T")


class ClientDisconnected(Exception):
    """The caller went away before the pipeline finished; nothing is left to answer."""


async def run_bound_to_request(
    request: Request,
    func: Callable[..., Awaitable[T]],
    *args: Any,
    timeout: float,
) -> T:
    """
    Run `func(*args)` in a task group next to a listener for `http.disconnect`.

    Whichever side finishes first cancels the group. The deadline wraps both, so a
    slow provider call is cancelled in place and the spans around it are closed on
    the way out.
    """

    outcome: dict[str, Any] = {}

    try:
        with anyio.fail_after(timeout):
            async with anyio.create_task_group() as tg:

                async def run_work() -> None:
                    try:
                        outcome["result"] = await func(*args)
                    except Exception as e:
                        # Kept out of the task group so it is not wrapped in an ExceptionGroup.
                        outcome["error"] = e
                    finally:
                        tg.cancel_scope.cancel()

                async def listen_for_disconnect() -> None:
                    # Same loop as Starlette's StreamingResponse.listen_for_disconnect.
                    while True:
                        message = await request.receive()
                        if message["type"] == "http.disconnect":
                            outcome["disconnected"] = True
                            tg.cancel_scope.cancel()
                            return

                tg.start_soon(run_work)
                tg.start_soon(listen_for_disconnect)
    except TimeoutError as e:
        raise UpstreamError("request deadline exceeded") from e

    if "error" in outcome:
        raise outcome["error"]
    if "result" not in outcome:
        raise ClientDisconnected()
    return outcome["result"]


# --- Module Notes -----------------------------------------------------------
# anyio cancel scopes are used end to end here: Starlette's own receive plumbing
# (BaseHTTPMiddleware, Request.is_disconnected) lives in anyio scopes too.
