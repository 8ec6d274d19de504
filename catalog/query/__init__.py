"""Query composition and row hydration for the catalog."""

from catalog.query.builder import (
    BookQuery,
    base_query,
    keyword_pattern,
    render_count,
    render_select,
)
from catalog.query.hydration import row_to_book, strip_markup
from catalog.query.options import FilterOptions

__all__ = [
    "BookQuery",
    "FilterOptions",
    "base_query",
    "keyword_pattern",
    "render_count",
    "render_select",
    "row_to_book",
    "strip_markup",
]
