"""Data models for the Calibre catalog."""

from catalog.models.author import Author
from catalog.models.book import Book
from catalog.models.page import BookPage, PageWindow
from catalog.models.series import Series

__all__ = [
    "Author",
    "Book",
    "BookPage",
    "PageWindow",
    "Series",
]
