"""Data models for scraped books."""
from dataclasses import dataclass
from typing import Optional, Dict, Any


@dataclass
class Book:
    """One row of the listing page, optionally enriched."""
    title: Optional[str]
    author: Optional[str]
    rating: Optional[int] = None
    ratings_count: Optional[int] = None
    image: str = ""
    publication_date: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """
        Serialize to the JSON shape written to disk.

        Returns:
            Dict with camelCase keys in output order
        """
        return {
            "title": self.title,
            "author": self.author,
            "image": self.image,
            "publicationDate": self.publication_date,
            "rating": self.rating,
            "ratingsCount": self.ratings_count,
        }


@dataclass
class Enrichment:
    """Fields fetched from external services for one book."""
    image: str = ""
    publication_date: str = ""
