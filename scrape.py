#!/usr/bin/env python3
"""Goodreads listing scraper - writes enriched books to books.json."""
import sys
from bookscraper.config import Config, ConfigError
from bookscraper.pipeline import run
import logging

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def main():
    """Main entry point."""
    try:
        config = Config.from_env()
    except ConfigError as e:
        logger.error(f"❌ Configuration error: {e}")
        sys.exit(1)

    logger.info(f"Scraping {config.books_url}")

    try:
        run(config, enrich=True)

    except KeyboardInterrupt:
        logger.info("\n⚠️  Interrupted by user")
        sys.exit(0)
    except Exception as e:
        logger.error(f"❌ Error: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
