"""
Dashboard Configuration

Loads the backend API location and Flask settings from environment
variables (a local .env file is honoured via python-dotenv).
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "http://localhost:5000"
DEFAULT_TIMEOUT = 30  # seconds
DEFAULT_PORT = 5001


def _int_from_env(name: str, default: int) -> int:
    """Read a positive integer from the environment, falling back on bad input."""
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning(f"Invalid {name} '{raw}', defaulting to {default}")
        return default
    if value <= 0:
        logger.warning(f"Non-positive {name} '{raw}', defaulting to {default}")
        return default
    return value


@dataclass
class DashboardConfig:
    """
    Configuration for the dashboard process.

    Loaded from environment variables with sensible defaults.
    """
    api_url: str = DEFAULT_API_URL
    api_token: str = ""
    request_timeout: int = DEFAULT_TIMEOUT

    secret_key: Optional[str] = None
    port: int = DEFAULT_PORT
    debug: bool = True
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "DashboardConfig":
        """
        Load configuration from environment variables.

        Environment variables:
        - GRADAPP_API_URL: Backend API base URL
        - GRADAPP_API_TOKEN: Optional bearer token forwarded to the backend
        - GRADAPP_API_TIMEOUT: Request timeout in seconds
        - FLASK_SECRET_KEY: Session signing key
        - FLASK_PORT / FLASK_DEBUG: Development server settings
        - LOG_LEVEL: Root log level
        """
        api_url = os.getenv("GRADAPP_API_URL", DEFAULT_API_URL).rstrip("/")

        return cls(
            api_url=api_url or DEFAULT_API_URL,
            api_token=os.getenv("GRADAPP_API_TOKEN", ""),
            request_timeout=_int_from_env("GRADAPP_API_TIMEOUT", DEFAULT_TIMEOUT),
            secret_key=os.getenv("FLASK_SECRET_KEY") or None,
            port=_int_from_env("FLASK_PORT", DEFAULT_PORT),
            debug=os.getenv("FLASK_DEBUG", "true").lower() == "true",
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )
