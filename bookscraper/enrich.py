"""Enrich scraped books with a cover image and first-publication date."""
import logging
from typing import Optional

import requests

from bookscraper.client import GoogleBooksClient, PageClient
from bookscraper.models import Book, Enrichment
from bookscraper.parse import PayloadError, parse_publication_date, parse_thumbnail

logger = logging.getLogger(__name__)


class EnrichmentError(Exception):
    """A lookup for one book failed; the book must be discarded."""

    def __init__(self, title: str, reason: str):
        super().__init__(f"Failed to enrich '{title}': {reason}")
        self.title = title
        self.reason = reason


class Enricher:
    """Looks up one book at a time against Google Books and its detail page."""

    def __init__(self, books_client: GoogleBooksClient, page_client: PageClient):
        self.books_client = books_client
        self.page_client = page_client

    def lookup(self, title: str, detail_ref: str) -> Enrichment:
        """
        Fetch image and publication date for one book.

        An empty search result or a missing/unparsable date is not an error;
        the field is left empty.

        Args:
            title: Book title used as the exact-title search term
            detail_ref: Detail page URL or path relative to the site origin

        Returns:
            Enrichment with image and publication_date

        Raises:
            EnrichmentError: On any transport error, HTTP error status or
                unexpected payload from either call
        """
        try:
            image = parse_thumbnail(self.books_client.search_title(title))
            publication_date = parse_publication_date(self.page_client.fetch(detail_ref))
        except (requests.RequestException, PayloadError, ValueError) as e:
            raise EnrichmentError(title, str(e)) from e

        return Enrichment(image=image, publication_date=publication_date)

    def enrich(self, book: Book, detail_ref: Optional[str]) -> Book:
        """
        Fill in a book's image and publication date in place.

        Books without a title or detail link are returned untouched.

        Args:
            book: Record produced by the field extractor
            detail_ref: The row's detail-page link, if any

        Returns:
            The same Book instance

        Raises:
            EnrichmentError: If a lookup failed
        """
        if not book.title or not detail_ref:
            logger.debug(f"Skipping enrichment for {book.title!r}: no title or detail link")
            return book

        enrichment = self.lookup(book.title, detail_ref)
        book.image = enrichment.image
        book.publication_date = enrichment.publication_date
        return book
