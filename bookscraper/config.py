"""Configuration management."""
import os
from dataclasses import dataclass
from typing import Optional
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

DEFAULT_OUTPUT_PATH = "books.json"
DEFAULT_DELAY_SECONDS = 5.0


class ConfigError(ValueError):
    """Raised when a required configuration value is missing."""


@dataclass
class Config:
    """Application configuration."""

    # Listing page to scrape
    books_url: str

    # API
    google_books_api_key: Optional[str] = None

    # Output
    output_path: str = DEFAULT_OUTPUT_PATH

    # Pause between rows while enriching
    delay_seconds: float = DEFAULT_DELAY_SECONDS

    @classmethod
    def from_env(cls) -> "Config":
        """
        Build configuration from the process environment.

        Returns:
            Config with BOOKS_URL and optional GOOGLE_BOOKS_API_KEY

        Raises:
            ConfigError: If BOOKS_URL is unset or blank
        """
        books_url = (os.getenv("BOOKS_URL") or "").strip()
        if not books_url:
            raise ConfigError("BOOKS_URL must be set in the environment or .env file")

        return cls(
            books_url=books_url,
            google_books_api_key=os.getenv("GOOGLE_BOOKS_API_KEY") or None,
        )
