"""SQL composition for book list queries.

A ``BookQuery`` holds the join, predicate, grouping and ordering parts of a
query over the fixed Calibre schema. It is immutable: every helper returns a
new value. The same value is rendered twice for paginated listings, once by
``render_count`` and once by ``render_select``, so the total and the page are
always computed from the same filters.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict

from catalog.models.page import PageWindow
from catalog.query.options import FilterOptions

BASE_COLUMNS: tuple[str, ...] = (
    "main.*",
    "com.text AS comment",
    "rating.rating AS rating",
    "author.id AS author_id",
    "author.name AS author_name",
    "author.sort AS author_sort_name",
    "serie.id AS serie_id",
    "serie.name AS serie_name",
    "serie.sort AS serie_sort",
)

# books ⟕ comments ⟕ authors ⟕ series ⟕ ratings
# Only the first-listed author is joined so each book yields one row.
BASE_JOINS: tuple[str, ...] = (
    "LEFT JOIN comments com ON com.book = main.id",
    "LEFT JOIN books_authors_link bal ON bal.id = ("
    "SELECT MIN(fal.id) FROM books_authors_link fal WHERE fal.book = main.id)",
    "LEFT JOIN authors author ON author.id = bal.author",
    "LEFT JOIN books_series_link bsl ON bsl.book = main.id",
    "LEFT JOIN series serie ON serie.id = bsl.series",
    "LEFT JOIN books_ratings_link brl ON brl.book = main.id",
    "LEFT JOIN ratings rating ON rating.id = brl.rating",
)

TAG_INNER_JOINS: tuple[str, ...] = (
    "INNER JOIN books_tags_link btl ON btl.book = main.id",
    "INNER JOIN tags tag ON tag.id = btl.tag",
)

TAG_LEFT_JOINS: tuple[str, ...] = (
    "LEFT JOIN books_tags_link btl ON btl.book = main.id",
    "LEFT JOIN tags tag ON tag.id = btl.tag",
)

LIKE_ESCAPE = "\\"


class BookQuery(BaseModel):
    """Immutable description of a book list query."""

    model_config = ConfigDict(frozen=True)

    columns: tuple[str, ...] = BASE_COLUMNS
    joins: tuple[str, ...] = BASE_JOINS
    conditions: tuple[str, ...] = ()
    params: tuple[Any, ...] = ()
    group_by: str | None = None
    order_by: tuple[str, ...] = ()

    def join(self, *clauses: str) -> "BookQuery":
        return self.model_copy(update={"joins": self.joins + clauses})

    def where(self, condition: str, *params: Any) -> "BookQuery":
        """Add a predicate, AND-combined with the existing ones.

        Args:
            condition: SQL condition using ``?`` placeholders.
            *params: Values bound to the placeholders, in order.
        """
        return self.model_copy(
            update={
                "conditions": self.conditions + (condition,),
                "params": self.params + params,
            }
        )

    def grouped(self, column: str) -> "BookQuery":
        return self.model_copy(update={"group_by": column})

    def ordered(self, *columns: str) -> "BookQuery":
        return self.model_copy(update={"order_by": self.order_by + columns})


def base_query(options: FilterOptions | None = None) -> BookQuery:
    """Build the base join with the exclusions from ``options`` applied."""
    query = BookQuery()
    if options is None:
        return query
    if options.exclude_book_id is not None:
        query = query.where("main.id != ?", options.exclude_book_id)
    if options.exclude_series_id is not None:
        # Books outside any series are never excluded
        query = query.where(
            "serie.id IS NULL OR serie.id != ?", options.exclude_series_id
        )
    return query


def keyword_pattern(keyword: str) -> str:
    """Turn a keyword into a LIKE pattern matching it as a literal substring."""
    escaped = (
        keyword.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )
    return f"%{escaped}%"


def _render_from_where(query: BookQuery) -> str:
    parts = ["FROM books main", *query.joins]
    if query.conditions:
        parts.append("WHERE " + " AND ".join(f"({c})" for c in query.conditions))
    return " ".join(parts)


def render_select(
    query: BookQuery, window: PageWindow | None = None
) -> tuple[str, tuple[Any, ...]]:
    """Render the row query, with ordering and an optional window.

    Args:
        query: The query to render.
        window: Offset/limit to apply after ordering.

    Returns:
        The SQL string and its positional parameters.
    """
    sql = f"SELECT {', '.join(query.columns)} {_render_from_where(query)}"
    params = query.params
    if query.group_by:
        sql += f" GROUP BY {query.group_by}"
    if query.order_by:
        sql += " ORDER BY " + ", ".join(query.order_by)
    if window is not None:
        sql += " LIMIT ? OFFSET ?"
        params = params + (window.limit, window.offset)
    return sql, params


def render_count(query: BookQuery) -> tuple[str, tuple[Any, ...]]:
    """Render a query counting the rows ``render_select`` would return unwindowed.

    Column list, grouping and ordering are dropped. A grouped query counts
    distinct values of the grouping column instead of raw join rows.
    """
    if query.group_by:
        count = f"COUNT(DISTINCT {query.group_by})"
    else:
        count = "COUNT(*)"
    return f"SELECT {count} {_render_from_where(query)}", query.params
