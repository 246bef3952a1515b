"""AWS Lambda entry point.

API Gateway events are translated into ASGI requests by Mangum, so the same
FastAPI app serves both local runs (``uvicorn src.main:app``) and Lambda.
"""

import logging
from typing import Any
from mangum import Mangum

from src.main import app

logger = logging.getLogger(__name__)

asgi_handler = Mangum(app, lifespan="auto")


def handler(event: dict[str, Any], context: Any) -> dict[str, Any]:
    # REST APIs (payload v1) and HTTP APIs (payload v2) place these differently
    http_context = event.get("requestContext", {}).get("http", {})
    logger.info(
        "Lambda invocation %s %s (aws_request_id=%s)",
        event.get("httpMethod") or http_context.get("method"),
        event.get("path") or event.get("rawPath"),
        getattr(context, "aws_request_id", None),
    )
    return asgi_handler(event, context)
