import logging
import time
from typing import Awaitable, Callable
from uuid import uuid4
from fastapi import Request, Response

from src.common.exceptions import unexpected_exception_handler

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


def generate_request_id() -> str:
    return f"req-{uuid4().hex}"


async def request_logging_middleware(
    request: Request, call_next: Callable[[Request], Awaitable[Response]]
) -> Response:
    request_id = request.headers.get(REQUEST_ID_HEADER) or generate_request_id()
    request.state.request_id = request_id

    logger.info(
        "Incoming request %s %s (request_id=%s)",
        request.method,
        request.url.path,
        request_id,
    )
    start_time = time.perf_counter()

    try:
        response = await call_next(request)
    except Exception as exc:
        # Handled here so the error response still carries the request id
        response = unexpected_exception_handler(request, exc)

    duration_ms = (time.perf_counter() - start_time) * 1000
    response.headers[REQUEST_ID_HEADER] = request_id
    logger.info(
        "%s %s completed with %d in %.1fms (request_id=%s)",
        request.method,
        request.url.path,
        response.status_code,
        duration_ms,
        request_id,
    )
    return response
