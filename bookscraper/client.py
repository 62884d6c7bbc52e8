"""HTTP clients for Goodreads pages and the Google Books API."""
import requests
from typing import Optional, Dict, Any
from urllib.parse import urljoin
import logging

logger = logging.getLogger(__name__)

HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/124.0.0.0 Safari/537.36"
    )
}


class PageClient:
    """Fetches listing and detail pages as raw HTML bytes."""

    BASE_URL = "https://www.goodreads.com"

    def __init__(self, base_url: Optional[str] = None, timeout: Optional[float] = None):
        """
        Initialize page client.

        Args:
            base_url: Origin that relative detail links are resolved against
            timeout: Request timeout in seconds (None waits indefinitely)
        """
        self.base_url = base_url or self.BASE_URL
        self.timeout = timeout

        # Create session for connection pooling
        self.session = requests.Session()
        self.session.headers.update(HEADERS)

    def fetch(self, url: str) -> bytes:
        """
        GET a page.

        Args:
            url: Absolute URL, or a path relative to the base origin

        Returns:
            Response body as bytes

        Raises:
            requests.RequestException: On transport errors or non-2xx status
        """
        full_url = urljoin(self.base_url, url)
        logger.debug(f"GET {full_url}")

        response = self.session.get(full_url, timeout=self.timeout)
        response.raise_for_status()
        return response.content

    def close(self):
        """Close the session."""
        self.session.close()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()


class GoogleBooksClient:
    """Client for the Google Books volumes search. No retries."""

    BASE_URL = "https://www.googleapis.com/books/v1/volumes"

    def __init__(self, api_key: Optional[str] = None, timeout: Optional[float] = None):
        """
        Initialize Google Books API client.

        Args:
            api_key: Optional API key (increases rate limits)
            timeout: Request timeout in seconds (None waits indefinitely)
        """
        self.api_key = api_key
        self.timeout = timeout

        self.session = requests.Session()
        self.session.headers.update(HEADERS)

    def search_title(self, title: str) -> Dict[str, Any]:
        """
        Search volumes by exact title.

        Args:
            title: Book title

        Returns:
            Decoded API response JSON

        Raises:
            requests.RequestException: On transport errors or non-2xx status
            ValueError: If the body is not valid JSON
        """
        params = {"q": f"intitle:{title}"}

        if self.api_key:
            params["key"] = self.api_key

        logger.debug(f"Searching Google Books: {params['q']}")
        response = self.session.get(self.BASE_URL, params=params, timeout=self.timeout)
        response.raise_for_status()
        return response.json()

    def close(self):
        """Close the session."""
        self.session.close()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
