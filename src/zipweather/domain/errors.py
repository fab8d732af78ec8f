"""
zipweather.domain.errors

Pipeline error taxonomy.

Responsibilities:
- Classify every failure once, where it happens, into a small fixed set.
- Carry the external HTTP status and a caller-safe message.
- Bound provider error text before it can reach a caller.
"""

from __future__ import annotations

import re

from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_404_NOT_FOUND,
    HTTP_422_UNPROCESSABLE_CONTENT,
    HTTP_500_INTERNAL_SERVER_ERROR,
)

INVALID_ZIPCODE_MESSAGE = "invalid zipcode"
ZIPCODE_NOT_FOUND_MESSAGE = "can not find zipcode"

_QUERY_RE = re.compile(r"\?\S*")


class PipelineError(Exception):
    """
    Base for classified failures.
    Subclasses fix `code` and `status_code`; the API layer renders them uniformly.
    """

    code: str = "pipeline_error"
    status_code: int = HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidInput(PipelineError):
    code = "invalid_input"
    status_code = HTTP_422_UNPROCESSABLE_CONTENT


class BadRequest(InvalidInput):
    # Unparseable request body (entry service only).
    code = "bad_request"
    status_code = HTTP_400_BAD_REQUEST


class NotFound(PipelineError):
    code = "not_found"
    status_code = HTTP_404_NOT_FOUND


class UpstreamError(PipelineError):
    code = "upstream_error"
    status_code = HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, *, detail: str | None = None) -> None:
        super().__init__(message if not detail else f"{message}: {detail}")
        self.detail = detail


def bound_detail(exc: BaseException | str, *, limit: int) -> str:
    """
    Caller-safe rendering of an upstream failure.

    Query strings are dropped (they can carry provider API keys) and the text
    is capped at `limit` characters.
    """

    text = exc if isinstance(exc, str) else (str(exc) or type(exc).__name__)
    text = _QUERY_RE.sub("?…", text).strip()
    if len(text) > limit:
        text = text[: max(limit - 1, 0)] + "…"
    return text


# --- Module Notes -----------------------------------------------------------
# 422 is used for a malformed postal code in both services; 400 is reserved for
# request bodies that are not valid JSON for the entry request shape.
