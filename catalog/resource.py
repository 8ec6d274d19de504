"""Book list and lookup queries against the Calibre catalog."""

import logging
import sqlite3
from collections.abc import Iterable

from catalog.exceptions import BookNotFoundError, InvalidArgumentError
from catalog.models import Book, BookPage, PageWindow
from catalog.query.builder import (
    TAG_INNER_JOINS,
    TAG_LEFT_JOINS,
    BookQuery,
    base_query,
    keyword_pattern,
    render_count,
    render_select,
)
from catalog.query.hydration import row_to_book
from catalog.query.options import FilterOptions

logger = logging.getLogger(__name__)

SERIES_ORDER: tuple[str, ...] = ("serie.name", "main.series_index", "main.title")


class BookResource:
    """Loads books from the catalog database.

    A resource carries a connection and a set of FilterOptions applied to
    every query it runs. Options are never changed in place:
    ``exclude_book`` and ``exclude_series`` return a new resource, so the
    original keeps returning unfiltered results.

    Args:
        connection: Open catalog connection (see ``storage.get_connection``).
        options: Filters applied to each query. Defaults to no filtering.
    """

    def __init__(
        self, connection: sqlite3.Connection, options: FilterOptions | None = None
    ) -> None:
        self._connection = connection
        self._options = options if options is not None else FilterOptions()

    @property
    def options(self) -> FilterOptions:
        return self._options

    def exclude_book(self, book_id: int) -> "BookResource":
        """Return a resource whose queries omit the given book."""
        return BookResource(self._connection, self._options.exclude_book(book_id))

    def exclude_series(self, series_id: int) -> "BookResource":
        """Return a resource whose queries omit books of the given series.

        Books that belong to no series are still returned.
        """
        return BookResource(self._connection, self._options.exclude_series(series_id))

    def load_by_id(self, book_id: int, options: FilterOptions | None = None) -> Book:
        """Load a single book.

        Args:
            book_id: Catalog id of the book.
            options: Filters overriding the resource's own.

        Returns:
            The hydrated Book.

        Raises:
            BookNotFoundError: If no book matches.
            InvalidArgumentError: If options carry a page window.
        """
        query = base_query(self._unpaged(options)).where("main.id = ?", book_id)
        books = self._fetch(query, PageWindow(limit=1))
        if not books:
            logger.info("Book %s not found", book_id)
            raise BookNotFoundError(book_id)
        return books[0]

    def load_latest(self, count: int, options: FilterOptions | None = None) -> list[Book]:
        """Load the most recently added books, newest first.

        Raises:
            InvalidArgumentError: If count is lower than 1, or if options carry
                a page window.
        """
        if count < 1:
            raise InvalidArgumentError(f"Book count must be >= 1, got {count}")
        query = base_query(self._unpaged(options)).ordered("main.timestamp DESC")
        return self._fetch(query, PageWindow(limit=count))

    def load_by_series(
        self, series_id: int, options: FilterOptions | None = None
    ) -> list[Book]:
        """Load the books of a series, in reading order.

        Raises:
            InvalidArgumentError: If options carry a page window.
        """
        query = (
            base_query(self._unpaged(options))
            .where("serie.id = ?", series_id)
            .ordered(*SERIES_ORDER)
        )
        return self._fetch(query)

    def load_by_author(
        self, author_id: int, options: FilterOptions | None = None
    ) -> list[Book]:
        """Load the books of an author, grouped by series.

        Books co-written with others are included; the attached Author is
        still the book's first-listed author.

        Raises:
            InvalidArgumentError: If options carry a page window.
        """
        query = (
            base_query(self._unpaged(options))
            .where(
                "main.id IN (SELECT book FROM books_authors_link WHERE author = ?)",
                author_id,
            )
            .ordered(*SERIES_ORDER)
        )
        return self._fetch(query)

    def load_by_tag(
        self,
        tag_id: int,
        page: PageWindow | None = None,
        options: FilterOptions | None = None,
    ) -> BookPage:
        """Load the books carrying a tag.

        Args:
            tag_id: Catalog id of the tag.
            page: Window to return. When given, ``total`` is populated.
            options: Filters overriding the resource's own.

        Returns:
            A BookPage ordered by series, series index, author and title.
        """
        options = self._resolve(options, page)
        query = (
            base_query(options)
            .join(*TAG_INNER_JOINS)
            .where("tag.id = ?", tag_id)
            .ordered("serie.name", "main.series_index", "main.author_sort", "main.title")
        )
        return self._paginate(query, options.page)

    def load_by_keywords(
        self,
        keywords: Iterable[str],
        page: PageWindow | None = None,
        options: FilterOptions | None = None,
    ) -> BookPage:
        """Load the books whose path contains every keyword.

        Keywords are matched as literal substrings of the book path. Each
        book appears once even when several tags join to it.

        Args:
            keywords: Non-empty collection of keywords.
            page: Window to return. When given, ``total`` is populated.
            options: Filters overriding the resource's own.

        Returns:
            A BookPage ordered by series, series index, author and title.

        Raises:
            InvalidArgumentError: If keywords is empty.
        """
        if isinstance(keywords, str):
            keywords = [keywords]
        terms = [keyword for keyword in keywords if keyword]
        if not terms:
            raise InvalidArgumentError("At least one keyword is required")

        options = self._resolve(options, page)
        query = base_query(options).join(*TAG_LEFT_JOINS)
        for term in terms:
            query = query.where("main.path LIKE ? ESCAPE '\\'", keyword_pattern(term))
        query = query.grouped("main.id").ordered(
            "serie.name", "main.series_index", "author.name", "main.title"
        )
        return self._paginate(query, options.page)

    def _resolve(
        self, options: FilterOptions | None, page: PageWindow | None = None
    ) -> FilterOptions:
        resolved = options if options is not None else self._options
        if page is not None:
            resolved = resolved.paged(page)
        return resolved

    def _unpaged(self, options: FilterOptions | None) -> FilterOptions:
        resolved = self._resolve(options)
        if resolved.page is not None:
            raise InvalidArgumentError("This query does not support a page window")
        return resolved

    def _paginate(self, query: BookQuery, window: PageWindow | None) -> BookPage:
        if window is None:
            return BookPage(books=self._fetch(query))
        # Count before windowing, from the same query value
        total = self._count(query)
        return BookPage(books=self._fetch(query, window), total=total, window=window)

    def _count(self, query: BookQuery) -> int:
        sql, params = render_count(query)
        logger.debug("Counting books: %s %s", sql, params)
        total = self._connection.execute(sql, params).fetchone()[0]
        logger.debug("Counted %d matching books", total)
        return int(total)

    def _fetch(self, query: BookQuery, window: PageWindow | None = None) -> list[Book]:
        sql, params = render_select(query, window)
        logger.debug("Loading books: %s %s", sql, params)
        rows = self._connection.execute(sql, params).fetchall()
        return [row_to_book(row) for row in rows]
