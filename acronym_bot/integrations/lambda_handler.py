"""AWS Lambda entrypoint for API Gateway proxy integrations.

Handles both the REST API (v1) and HTTP API (v2) event shapes. The router is
built once per execution environment and reused across invocations.
"""

import asyncio
import base64
import binascii
import functools
import logging

from acronym_bot.core.logging_config import setup_logging
from acronym_bot.services.request_router import (
    MALFORMED_BODY,
    TEXT_PLAIN,
    RequestRouter,
    RouterResponse,
    build_request_router,
)

logger = logging.getLogger(__name__)


@functools.lru_cache(maxsize=1)
def get_request_router() -> RequestRouter:
    setup_logging()
    return build_request_router()


def _raw_body(event: dict) -> bytes:
    body = event.get("body") or ""
    if event.get("isBase64Encoded"):
        return base64.b64decode(body)
    return body.encode("utf-8")


def _http_method(event: dict) -> str:
    request_context = event.get("requestContext") or {}
    return (
        request_context.get("httpMethod")
        or (request_context.get("http") or {}).get("method")
        or event.get("httpMethod")
        or ""
    )


def lambda_handler(event: dict, context) -> dict:
    request_router = get_request_router()
    try:
        raw_body = _raw_body(event)
    except binascii.Error as e:
        logger.warning(f"Rejected request with an undecodable base64 body: {e}")
        return RouterResponse(400, MALFORMED_BODY, dict(TEXT_PLAIN)).as_lambda_response()

    response = asyncio.run(
        request_router.handle(_http_method(event), event.get("headers") or {}, raw_body)
    )
    return response.as_lambda_response()
