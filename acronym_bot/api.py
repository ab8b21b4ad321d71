# FastAPI application factory

from typing import Optional

from fastapi import FastAPI

from acronym_bot import __version__
from acronym_bot.config import Settings
from acronym_bot.integrations.routers import slack_events
from acronym_bot.services.acronyms import AcronymTable
from acronym_bot.services.request_router import build_request_router


def create_app(
    settings: Optional[Settings] = None,
    acronyms: Optional[AcronymTable] = None,
    dispatcher=None,
) -> FastAPI:
    app = FastAPI(title="Acronym Bot", version=__version__)
    app.state.request_router = build_request_router(settings, acronyms, dispatcher)

    app.include_router(slack_events.router, prefix="/slack", tags=["slack_events"])

    @app.get("/")
    async def root():
        return {"message": "Acronym Bot is running!"}

    return app
