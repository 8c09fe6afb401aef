"""Runtime settings and logging setup."""

import logging
import os
import sys

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from propstack_mcp.exceptions import ConfigurationError

API_KEY_ENV = "PROPSTACK_API_KEY"

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


class Settings(BaseModel):
    """Process-wide settings, built once at startup and passed explicitly."""

    api_key: str = Field(..., repr=False)
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from the environment (and a local .env file, if any)."""
        load_dotenv()

        api_key = (os.getenv(API_KEY_ENV) or "").strip()
        if not api_key:
            raise ConfigurationError(f"{API_KEY_ENV} environment variable is required")

        return cls(api_key=api_key, log_level=os.getenv("LOG_LEVEL", "INFO"))


def setup_logging(level: str = "INFO") -> None:
    """Route all logging to stderr; stdout is reserved for MCP protocol messages."""
    log_level = getattr(logging, level.upper(), None)
    if not isinstance(log_level, int):
        log_level = logging.INFO

    logging.basicConfig(
        level=log_level,
        format=LOG_FORMAT,
        stream=sys.stderr,
        force=True,
    )

    # httpx logs full request URLs at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
