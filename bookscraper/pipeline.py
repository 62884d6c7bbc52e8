"""Scrape a Goodreads listing into books.json, optionally enriching each book."""
import json
import logging
from pathlib import Path
from typing import List, Optional, Union

from bs4 import Tag
from tqdm import tqdm
from tqdm.contrib.logging import logging_redirect_tqdm

from bookscraper.client import GoogleBooksClient, PageClient
from bookscraper.config import Config
from bookscraper.enrich import Enricher, EnrichmentError
from bookscraper.models import Book
from bookscraper.parse import detail_link, parse_book_row, select_book_rows
from bookscraper.rate_limit import RateLimiter

logger = logging.getLogger(__name__)


def _fetch_rows(config: Config, page_client: PageClient) -> List[Tag]:
    """Fetch the listing page and return its book rows."""
    rows = select_book_rows(page_client.fetch(config.books_url))
    logger.info(f"Found {len(rows)} books on listing page")
    return rows


def scrape_books(config: Config, page_client: PageClient) -> List[Book]:
    """
    Extract every book on the listing page, without enrichment.

    Args:
        config: Application configuration
        page_client: Client used to fetch the listing

    Returns:
        Books in document order
    """
    return [parse_book_row(row) for row in _fetch_rows(config, page_client)]


def scrape_and_enrich_books(
    config: Config,
    page_client: PageClient,
    enricher: Enricher,
    rate_limiter: RateLimiter,
    show_progress: bool = True
) -> List[Book]:
    """
    Extract and enrich every book on the listing page, one row at a time.

    Books whose enrichment fails are logged and left out. The rate limiter
    pauses after every row, whatever its outcome.

    Args:
        config: Application configuration
        page_client: Client used to fetch the listing
        enricher: Per-book lookup service
        rate_limiter: Throttle applied once per row
        show_progress: Display a progress bar

    Returns:
        Successfully enriched books in document order
    """
    rows = _fetch_rows(config, page_client)

    books: List[Book] = []
    failed = 0

    # Console log lines go through tqdm.write while the bar is live
    with logging_redirect_tqdm(), \
            tqdm(total=len(rows), unit="book", desc="Enriching", disable=not show_progress) as progress:
        for row in rows:
            with rate_limiter.slot():
                book = parse_book_row(row)
                try:
                    books.append(enricher.enrich(book, detail_link(row)))
                except EnrichmentError as e:
                    failed += 1
                    logger.error(str(e))
                progress.update(1)

    logger.info(f"Enriched {len(books)} books, discarded {failed}")
    return books


def write_books(books: List[Book], path: Union[str, Path]) -> None:
    """
    Write books as a pretty-printed JSON array, replacing any existing file.

    Args:
        books: Records to write
        path: Output file path
    """
    data = [book.to_dict() for book in books]
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)
    logger.info(f"✅ Saved {len(books)} books to {path}")


def run(
    config: Config,
    enrich: bool = True,
    rate_limiter: Optional[RateLimiter] = None
) -> List[Book]:
    """
    Run the whole pipeline and write the output file.

    Args:
        config: Application configuration
        enrich: Look up image and publication date for each book
        rate_limiter: Throttle for enrichment (defaults to config.delay_seconds)

    Returns:
        The books written
    """
    with PageClient() as page_client:
        if not enrich:
            books = scrape_books(config, page_client)
        else:
            with GoogleBooksClient(api_key=config.google_books_api_key) as books_client:
                books = scrape_and_enrich_books(
                    config,
                    page_client,
                    Enricher(books_client, page_client),
                    rate_limiter or RateLimiter(config.delay_seconds),
                )

    write_books(books, config.output_path)
    return books
