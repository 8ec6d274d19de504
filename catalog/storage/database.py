"""SQLite connection management for the Calibre catalog database."""

import logging
import sqlite3
from pathlib import Path

logger = logging.getLogger(__name__)


def get_connection(db_path: str | Path, read_only: bool = True) -> sqlite3.Connection:
    """Open a connection to the catalog database.

    The catalog is owned by Calibre, so by default the file is opened in
    read-only URI mode and must already exist.

    Args:
        db_path: Path to the ``metadata.db`` file.
        read_only: Open the database with ``mode=ro``.

    Returns:
        A sqlite3 Connection with row_factory set to Row.

    Raises:
        FileNotFoundError: If read_only is set and db_path does not exist.
    """
    path = Path(db_path)
    if read_only:
        if not path.exists():
            raise FileNotFoundError(f"Catalog database not found: {path}")
        conn = sqlite3.connect(f"{path.resolve().as_uri()}?mode=ro", uri=True)
    else:
        conn = sqlite3.connect(str(path))
    conn.row_factory = sqlite3.Row
    logger.debug("Opened catalog database %s (read_only=%s)", path, read_only)
    return conn
