"""Entry point for the Calibre catalog browser."""

import logging

from catalog.config import load_config
from catalog.resource import BookResource
from catalog.storage.database import get_connection

logger = logging.getLogger(__name__)


def main() -> None:
    """Open the configured library and log its latest books."""
    config = load_config()
    logging.basicConfig(
        level=config.logging.level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    conn = get_connection(config.library.database_path)
    try:
        resource = BookResource(conn)
        for book in resource.load_latest(config.browsing.latest_count):
            author = book.author.name if book.author else "Unknown"
            logger.info("%s: %s (%s)", book.id, book.title, author)
    finally:
        conn.close()


if __name__ == "__main__":
    main()
