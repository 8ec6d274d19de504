"""Conversion of catalog rows into Book entities."""

import sqlite3
from collections.abc import Mapping
from typing import Any

from bs4 import BeautifulSoup

from catalog.models import Author, Book, Series


def strip_markup(text: str | None) -> str:
    """Remove HTML tags from a Calibre comment, keeping its text.

    Args:
        text: Stored comment, possibly HTML.

    Returns:
        Plain text, empty string for a missing comment.
    """
    if not text:
        return ""
    return BeautifulSoup(text, "lxml").get_text().strip()


def row_to_book(row: Mapping[str, Any] | sqlite3.Row) -> Book:
    """Convert a row rendered from the base book query to a Book.

    The author is attached whenever the row carries an author id; the
    series only when the book has a series link.
    """
    data = dict(row)

    author = None
    if data.get("author_id") is not None:
        author = Author(
            id=data["author_id"],
            name=data["author_name"],
            sort=data.get("author_sort_name"),
        )

    series = None
    if data.get("serie_id"):
        series = Series(
            id=data["serie_id"],
            name=data["serie_name"],
            sort=data.get("serie_sort"),
            index=data["series_index"] if data.get("series_index") is not None else 1.0,
        )

    return Book(
        id=data["id"],
        title=data["title"],
        sort=data.get("sort"),
        author_sort=data.get("author_sort"),
        timestamp=data.get("timestamp"),
        pubdate=data.get("pubdate"),
        path=data.get("path") or "",
        uuid=data.get("uuid"),
        has_cover=bool(data.get("has_cover")),
        comment=strip_markup(data.get("comment")),
        rating=data.get("rating"),
        author=author,
        series=series,
    )
