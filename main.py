# acronym-bot/main.py

import logging
import os

import uvicorn

from acronym_bot.api import create_app
from acronym_bot.config import load_settings
from acronym_bot.core.logging_config import setup_logging

# --- Initialize Logging ---
setup_logging()
logger = logging.getLogger(__name__)

settings = load_settings()
settings.validate()
logger.info(f"Starting Acronym Bot with settings: {settings.describe()}")

app = create_app(settings)

if __name__ == "__main__":
    uvicorn.run(app, host=os.getenv("HOST", "0.0.0.0"), port=int(os.getenv("PORT", 8000)))
