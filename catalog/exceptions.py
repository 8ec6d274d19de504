"""Exceptions raised by the catalog data layer."""


class CatalogError(Exception):
    """Base class for catalog errors."""


class BookNotFoundError(CatalogError, LookupError):
    """Raised when a single-book lookup matches no row."""

    def __init__(self, book_id: int) -> None:
        super().__init__(f"Book with id {book_id} not found")
        self.book_id = book_id


class InvalidArgumentError(CatalogError, ValueError):
    """Raised when a query input is structurally invalid."""
