import os
from dotenv import load_dotenv
from pathlib import Path
from enum import Enum

from utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_API_URL = "http://127.0.0.1:11235"


class CrawlProtocol(Enum):
    """Supported upstream crawl protocols."""
    DEFERRED = "deferred"
    IMMEDIATE = "immediate"


def _first_env(*names: str) -> str | None:
    for name in names:
        value = os.getenv(name)
        if value:
            return value
    return None


def _number_env(name: str, default: str, cast):
    """Read a numeric variable; a malformed value is logged and returned as None."""
    raw = os.getenv(name, default)
    try:
        return cast(raw)
    except ValueError:
        logger.error(f"{name} must be a number, got '{raw}'")
        return None


class Config:
    """Configuration management for the crawl bridge."""

    def __init__(self):
        """Initialize configuration with environment variables."""
        # Load environment variables from .env file if it exists
        env_path = Path(__file__).parent.parent / '.env'
        if env_path.exists():
            load_dotenv(dotenv_path=env_path)

        # Upstream service
        self.API_URL = (_first_env('CRAWL4AI_API_URL', 'API_URL') or DEFAULT_API_URL).rstrip('/')
        # Empty tokens count as unset so the Authorization header is never sent blank
        self.AUTH_TOKEN = _first_env('CRAWL4AI_AUTH_TOKEN', 'AUTH_TOKEN')

        # Protocol selection
        self.PROTOCOL = os.getenv('CRAWL4AI_PROTOCOL', CrawlProtocol.DEFERRED.value).strip().lower()

        # Polling and transport
        self.MAX_POLL_ATTEMPTS = _number_env('CRAWL4AI_MAX_POLL_ATTEMPTS', '30', int)
        self.POLL_INTERVAL_MS = _number_env('CRAWL4AI_POLL_INTERVAL_MS', '2000', int)
        self.HTTP_TIMEOUT_S = _number_env('CRAWL4AI_HTTP_TIMEOUT_S', '120', float)

    @property
    def poll_interval_s(self) -> float:
        return self.POLL_INTERVAL_MS / 1000.0

    @property
    def protocol(self) -> CrawlProtocol:
        return CrawlProtocol(self.PROTOCOL)

    def validate(self) -> bool:
        """
        Validate that the configuration is usable.

        Returns:
            bool: True if configuration is valid, False otherwise
        """
        valid_protocols = [p.value for p in CrawlProtocol]
        if self.PROTOCOL not in valid_protocols:
            logger.error(
                f"Unknown CRAWL4AI_PROTOCOL '{self.PROTOCOL}'. Must be one of: {', '.join(valid_protocols)}"
            )
            return False
        # Unparseable numbers were already logged while reading the environment
        if None in (self.MAX_POLL_ATTEMPTS, self.POLL_INTERVAL_MS, self.HTTP_TIMEOUT_S):
            return False
        if self.MAX_POLL_ATTEMPTS < 1:
            logger.error(f"CRAWL4AI_MAX_POLL_ATTEMPTS must be at least 1, got {self.MAX_POLL_ATTEMPTS}")
            return False
        if self.POLL_INTERVAL_MS < 0:
            logger.error(f"CRAWL4AI_POLL_INTERVAL_MS must not be negative, got {self.POLL_INTERVAL_MS}")
            return False
        if self.HTTP_TIMEOUT_S <= 0:
            logger.error(f"CRAWL4AI_HTTP_TIMEOUT_S must be positive, got {self.HTTP_TIMEOUT_S}")
            return False

        return True

    def get_service_info(self) -> str:
        """
        Get a one-line description of the configured upstream.

        Returns:
            str: Formatted string with upstream information
        """
        auth = "bearer token" if self.AUTH_TOKEN else "no auth"
        return f"Crawl4AI at {self.API_URL} ({self.PROTOCOL} protocol, {auth})"
