"""
zipweather.api.errors

Rendering of classified pipeline failures.

Responsibilities:
- Map every `PipelineError` to its status and a `{"error", "message"}` body.
- Log 4xx outcomes as warnings and 5xx outcomes as errors.
"""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, Response

from zipweather.api.cancellation import ClientDisconnected
from zipweather.domain.errors import PipelineError
from zipweather.domain.models import ErrorBody
from zipweather.observability.logging import get_logger

log = get_logger(__name__)

# Non-standard "client closed request"; never seen by the (departed) caller.
CLIENT_CLOSED_REQUEST = 499


async def pipeline_error_handler(_: Request, exc: PipelineError) -> Response:
    if exc.status_code >= 500:
        log.error("request_failed", error=exc.code, message=exc.message)
    else:
        log.warning("request_rejected", error=exc.code, message=exc.message)
    body = ErrorBody(error=exc.code, message=exc.message)
    return JSONResponse(status_code=exc.status_code, content=body.model_dump())


async def client_disconnected_handler(_: Request, __: Exception) -> Response:
    log.info("client_disconnected")
    return Response(status_code=CLIENT_CLOSED_REQUEST)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(PipelineError, pipeline_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(ClientDisconnected, client_disconnected_handler)


# --- Module Notes -----------------------------------------------------------
# 499 follows the nginx convention for "client closed request"; no client reads it.
