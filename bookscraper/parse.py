"""Parse Goodreads pages and Google Books API responses."""
import math
import re
from datetime import datetime
from typing import Any, List, Optional, Tuple, Union

from bs4 import BeautifulSoup, Tag

from bookscraper.models import Book

BOOK_ROW_SELECTOR = "tr[itemtype='http://schema.org/Book']"
TITLE_SELECTOR = ".bookTitle span"
AUTHOR_SELECTOR = ".authorName span"
RATING_SELECTOR = ".minirating"
DETAIL_LINK_SELECTOR = "a.bookTitle"
PUBLICATION_INFO_SELECTOR = "[data-testid='publicationInfo']"

# The em-dash between rating and count, as it appears depending on how the
# page bytes were decoded: clean UTF-8, cp1252 mojibake, latin-1 mojibake.
RATING_SEPARATORS = ("—", "â€”", "â\u0080\u0094")

RATING_PATTERN = re.compile(
    r"(\d+\.\d+) avg rating\s*(?:"
    + "|".join(re.escape(sep) for sep in RATING_SEPARATORS)
    + r")\s*(\d+(?:,\d+)*) ratings"
)
PUBLISHED_PATTERN = re.compile(r"First published (.+)")
PUBLISHED_DATE_FORMAT = "%B %d, %Y"


class PayloadError(ValueError):
    """Raised when an API response does not have the expected shape."""


def _text(parent: Tag, selector: str) -> Optional[str]:
    """Trimmed text of the first match, or None if nothing matches."""
    node = parent.select_one(selector)
    return node.get_text().strip() if node else None


def parse_rating_summary(text: Optional[str]) -> Tuple[Optional[int], Optional[int]]:
    """
    Parse a "4.25 avg rating — 1,234 ratings" summary.

    Args:
        text: Text content of the rating summary element

    Returns:
        (rating on a 0-100 scale, ratings count), or (None, None) if the
        text is missing or does not match
    """
    if not text:
        return None, None

    match = RATING_PATTERN.search(text)
    if not match:
        return None, None

    # Half-up rounding of the 0-5 scale mapped onto 0-100
    rating = int(math.floor(float(match.group(1)) * 20 + 0.5))
    ratings_count = int(match.group(2).replace(",", ""))
    return rating, ratings_count


def parse_book_row(row: Tag) -> Book:
    """
    Extract a book record from one listing row.

    Missing markup degrades to None fields; this never raises.

    Args:
        row: A book row element from the listing page

    Returns:
        Book with title, author, rating and ratings count filled in
    """
    rating, ratings_count = parse_rating_summary(_text(row, RATING_SELECTOR))

    return Book(
        title=_text(row, TITLE_SELECTOR),
        author=_text(row, AUTHOR_SELECTOR),
        rating=rating,
        ratings_count=ratings_count,
    )


def detail_link(row: Tag) -> Optional[str]:
    """Return the row's detail-page href, or None if absent."""
    link = row.select_one(DETAIL_LINK_SELECTOR)
    if link is None:
        return None
    href = link.get("href")
    return href or None


def select_book_rows(html: Union[str, bytes]) -> List[Tag]:
    """
    Parse a listing page and return its book rows in document order.

    Args:
        html: Listing page markup (raw bytes let BeautifulSoup detect the encoding)

    Returns:
        List of row elements (empty if none found)
    """
    soup = BeautifulSoup(html, "html.parser")
    return soup.select(BOOK_ROW_SELECTOR)


def parse_publication_date(html: Union[str, bytes]) -> str:
    """
    Extract the first-publication date from a book detail page.

    Args:
        html: Detail page markup

    Returns:
        Date as YYYY-MM-DD, or "" if the info is absent or unparsable
    """
    soup = BeautifulSoup(html, "html.parser")
    text = _text(soup, PUBLICATION_INFO_SELECTOR)
    if not text:
        return ""

    match = PUBLISHED_PATTERN.search(text)
    if not match:
        return ""

    try:
        published = datetime.strptime(match.group(1).strip(), PUBLISHED_DATE_FORMAT)
    except ValueError:
        return ""
    return published.strftime("%Y-%m-%d")


def parse_thumbnail(response_json: Any) -> str:
    """
    Pick the first result's thumbnail from a Google Books volumes response.

    Args:
        response_json: Decoded API response

    Returns:
        Thumbnail URL, or "" if there are no results or no image

    Raises:
        PayloadError: If the response is not shaped like a volumes listing
    """
    if not isinstance(response_json, dict):
        raise PayloadError(f"expected a JSON object, got {type(response_json).__name__}")

    items = response_json.get("items", [])
    if not isinstance(items, list) or not all(isinstance(item, dict) for item in items):
        raise PayloadError("'items' is not a list of objects")

    if not items:
        return ""

    volume_info = items[0].get("volumeInfo")
    if volume_info is None:
        volume_info = {}
    if not isinstance(volume_info, dict):
        raise PayloadError("'volumeInfo' is not an object")

    image_links = volume_info.get("imageLinks")
    if image_links is None:
        image_links = {}
    if not isinstance(image_links, dict):
        raise PayloadError("'imageLinks' is not an object")

    thumbnail = image_links.get("thumbnail")
    if thumbnail is None:
        return ""
    if not isinstance(thumbnail, str):
        raise PayloadError("'thumbnail' is not a string")
    return thumbnail
