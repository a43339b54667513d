"""
Runn MCP Server Configuration

Connection settings for the Runn REST API, read from the environment
(main.py loads a .env file first).
"""

import os
from dataclasses import dataclass, field

DEFAULT_API_URL = "https://api.runn.io"
DEFAULT_API_VERSION = "1.0.0"


@dataclass
class RunnConfig:
    """Configuration for the Runn API client."""

    # Credentials
    api_key: str = field(default_factory=lambda: os.getenv("RUNN_API_KEY", ""))

    # Endpoint
    base_url: str = DEFAULT_API_URL
    api_version: str = DEFAULT_API_VERSION  # Sent as the Accept-Version header

    # Fetching
    page_size: int = 100
    max_pages: int = 10
    max_retries: int = 3
    timeout: float = 30.0  # seconds

    # Logging
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))

    @classmethod
    def from_env(cls) -> "RunnConfig":
        """Create config from environment variables."""
        return cls(
            api_key=os.getenv("RUNN_API_KEY", ""),
            base_url=os.getenv("RUNN_API_URL", DEFAULT_API_URL),
            api_version=os.getenv("RUNN_API_VERSION", DEFAULT_API_VERSION),
            page_size=int(os.getenv("RUNN_PAGE_SIZE", "100")),
            max_pages=int(os.getenv("RUNN_MAX_PAGES", "10")),
            max_retries=int(os.getenv("RUNN_MAX_RETRIES", "3")),
            timeout=float(os.getenv("RUNN_TIMEOUT", "30")),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )

    def validate(self) -> None:
        """Raise ValueError if the configuration can't be used."""
        if not self.api_key:
            raise ValueError("RUNN_API_KEY is not set")
        if self.page_size <= 0:
            raise ValueError("RUNN_PAGE_SIZE must be positive")
        if self.max_pages <= 0:
            raise ValueError("RUNN_MAX_PAGES must be positive")
        if self.max_retries < 0:
            raise ValueError("RUNN_MAX_RETRIES must not be negative")
