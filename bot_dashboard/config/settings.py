# bot_dashboard/config/settings.py
import os
import logging
from dotenv import load_dotenv
from typing import Optional

# Load environment variables from .env file
load_dotenv()

logger = logging.getLogger(__name__)


def _env_number(name: str, default, cast):
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return cast(raw)
    except ValueError:
        logger.error(f"Invalid {name} value {raw!r}, using default {default}.")
        return default


class Settings:
    """Application settings loaded from environment variables."""

    def __init__(self):
        # Bot token for the Discord connection; without it the dashboard serves demo data
        self.DISCORD_BOT_TOKEN: Optional[str] = os.getenv("DISCORD_BOT_TOKEN") or None
        self.DISCORD_CONNECT_TIMEOUT: float = _env_number("DISCORD_CONNECT_TIMEOUT", 10.0, float)

        self.HTTP_HOST: str = os.getenv("HTTP_HOST", "0.0.0.0")
        self.HTTP_PORT: int = _env_number("HTTP_PORT", 8000, int)

        # Logging level
        self.LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

        if not self.DISCORD_BOT_TOKEN:
            logger.warning("DISCORD_BOT_TOKEN environment variable is not set. Dashboard will use demo data.")

        logger.info("Settings loaded.")
        logger.info(f"HTTP bind: {self.HTTP_HOST}:{self.HTTP_PORT}")
        logger.info(f"Discord connect timeout: {self.DISCORD_CONNECT_TIMEOUT}s")
        logger.info(f"Log Level: {self.LOG_LEVEL}")


# Single instance of settings to be imported by other modules
settings = Settings()
