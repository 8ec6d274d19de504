"""Shared fixtures: a small Calibre-style catalog database."""

import sqlite3
from collections.abc import Iterator
from pathlib import Path

import pytest

from catalog.resource import BookResource
from catalog.storage.database import get_connection

SCHEMA = """
CREATE TABLE books (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    title TEXT NOT NULL DEFAULT 'Unknown',
    sort TEXT,
    timestamp TIMESTAMP,
    pubdate TIMESTAMP,
    series_index REAL NOT NULL DEFAULT 1.0,
    author_sort TEXT,
    isbn TEXT DEFAULT '',
    lccn TEXT DEFAULT '',
    path TEXT NOT NULL DEFAULT '',
    flags INTEGER NOT NULL DEFAULT 1,
    uuid TEXT,
    has_cover BOOL DEFAULT 0,
    last_modified TIMESTAMP
);
CREATE TABLE authors (id INTEGER PRIMARY KEY, name TEXT NOT NULL, sort TEXT, link TEXT DEFAULT '');
CREATE TABLE series (id INTEGER PRIMARY KEY, name TEXT NOT NULL, sort TEXT);
CREATE TABLE tags (id INTEGER PRIMARY KEY, name TEXT NOT NULL);
CREATE TABLE ratings (id INTEGER PRIMARY KEY, rating INTEGER);
CREATE TABLE comments (id INTEGER PRIMARY KEY, book INTEGER NOT NULL, text TEXT NOT NULL);
CREATE TABLE books_authors_link (id INTEGER PRIMARY KEY, book INTEGER NOT NULL, author INTEGER NOT NULL);
CREATE TABLE books_series_link (id INTEGER PRIMARY KEY, book INTEGER NOT NULL, series INTEGER NOT NULL);
CREATE TABLE books_tags_link (id INTEGER PRIMARY KEY, book INTEGER NOT NULL, tag INTEGER NOT NULL);
CREATE TABLE books_ratings_link (id INTEGER PRIMARY KEY, book INTEGER NOT NULL, rating INTEGER NOT NULL);
"""

AUTHORS = [
    (1, "Isaac Asimov", "Asimov, Isaac"),
    (2, "Frank Herbert", "Herbert, Frank"),
    (3, "Ursula K. Le Guin", "Le Guin, Ursula K."),
]

SERIES = [
    (1, "Foundation", "Foundation"),
    (2, "Dune", "Dune"),
]

TAGS = [(1, "Science Fiction"), (2, "Classic"), (3, "Time Travel")]

RATINGS = [(1, 10), (2, 8)]

# id, title, timestamp, author id, series id, series index, tag ids, rating id, comment
BOOKS = [
    (1, "Foundation", "2020-01-01 10:00:00+00:00", 1, 1, 1.0, [1, 2], 1,
     "<p>The <b>first</b> book of the trilogy.</p>"),
    (2, "Foundation and Empire", "2020-02-01 10:00:00+00:00", 1, 1, 2.0, [1], None, None),
    (3, "Second Foundation", "2020-03-01 10:00:00+00:00", 1, 1, 3.0, [1], None, None),
    (4, "Dune", "2020-04-01 10:00:00+00:00", 2, 2, 1.0, [1, 2], 2,
     "<div>Spice &amp; sand</div>"),
    (5, "Dune Messiah", "2020-05-01 10:00:00+00:00", 2, 2, 2.0, [1], None, None),
    (6, "The Left Hand of Darkness", "2020-06-01 10:00:00+00:00", 3, None, 1.0, [1, 2],
     None, "Plain comment"),
    (7, "The End of Eternity", "2020-07-01 10:00:00+00:00", 1, None, 1.0, [1, 3], None, None),
    (8, "100% Pure_Fiction", "2020-08-01 10:00:00+00:00", 1, None, 1.0, [], None, None),
]

# Co-authors, linked after the primary author of each book
EXTRA_AUTHOR_LINKS = [(8, 2), (1, 3)]


def build_catalog(db_path: Path) -> None:
    """Write the sample catalog to db_path."""
    authors = {author_id: (name, sort) for author_id, name, sort in AUTHORS}
    conn = sqlite3.connect(str(db_path))
    try:
        conn.executescript(SCHEMA)
        conn.executemany("INSERT INTO authors (id, name, sort) VALUES (?, ?, ?)", AUTHORS)
        conn.executemany("INSERT INTO series (id, name, sort) VALUES (?, ?, ?)", SERIES)
        conn.executemany("INSERT INTO tags (id, name) VALUES (?, ?)", TAGS)
        conn.executemany("INSERT INTO ratings (id, rating) VALUES (?, ?)", RATINGS)
        for (book_id, title, timestamp, author_id, series_id, index, tag_ids,
             rating_id, comment) in BOOKS:
            author_name, author_sort = authors[author_id]
            conn.execute(
                """
                INSERT INTO books (
                    id, title, sort, timestamp, pubdate, series_index,
                    author_sort, path, uuid, has_cover
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    book_id,
                    title,
                    title,
                    timestamp,
                    timestamp,
                    index,
                    author_sort,
                    f"{author_name}/{title} ({book_id})",
                    f"uuid-{book_id}",
                    1 if book_id % 2 else 0,
                ),
            )
            conn.execute(
                "INSERT INTO books_authors_link (book, author) VALUES (?, ?)",
                (book_id, author_id),
            )
            if series_id is not None:
                conn.execute(
                    "INSERT INTO books_series_link (book, series) VALUES (?, ?)",
                    (book_id, series_id),
                )
            for tag_id in tag_ids:
                conn.execute(
                    "INSERT INTO books_tags_link (book, tag) VALUES (?, ?)",
                    (book_id, tag_id),
                )
            if rating_id is not None:
                conn.execute(
                    "INSERT INTO books_ratings_link (book, rating) VALUES (?, ?)",
                    (book_id, rating_id),
                )
            if comment is not None:
                conn.execute(
                    "INSERT INTO comments (book, text) VALUES (?, ?)",
                    (book_id, comment),
                )
        conn.executemany(
            "INSERT INTO books_authors_link (book, author) VALUES (?, ?)",
            EXTRA_AUTHOR_LINKS,
        )
        conn.commit()
    finally:
        conn.close()


@pytest.fixture
def catalog_db(tmp_path: Path) -> Path:
    db_path = tmp_path / "metadata.db"
    build_catalog(db_path)
    return db_path


@pytest.fixture
def connection(catalog_db: Path) -> Iterator[sqlite3.Connection]:
    conn = get_connection(catalog_db)
    yield conn
    conn.close()


@pytest.fixture
def resource(connection: sqlite3.Connection) -> BookResource:
    return BookResource(connection)
