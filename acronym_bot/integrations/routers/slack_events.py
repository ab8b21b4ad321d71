# Endpoint for Slack event subscriptions (URL verification and app mentions)

import logging

from fastapi import APIRouter, Depends, Request, Response

from acronym_bot.services.request_router import RequestRouter

# Get a logger instance for this module
logger = logging.getLogger(__name__)

router = APIRouter()


def get_request_router(request: Request) -> RequestRouter:
    return request.app.state.request_router


@router.post("/events")
async def slack_events_endpoint(request: Request, request_router: RequestRouter = Depends(get_request_router)):
    """Endpoint for Slack event subscriptions."""
    # Signature verification needs the body exactly as Slack sent it
    body_bytes = await request.body()
    result = await request_router.handle(request.method, request.headers, body_bytes)
    logger.debug(f"Slack events endpoint responding {result.status_code}")
    return Response(content=result.body, status_code=result.status_code, headers=result.headers)
