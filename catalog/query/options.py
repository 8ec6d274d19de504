"""Per-call filter options for catalog queries."""

from pydantic import BaseModel, ConfigDict

from catalog.models.page import PageWindow


class FilterOptions(BaseModel):
    """Exclusions and page window applied to a single query.

    Options are immutable; the ``exclude_*`` and ``paged`` helpers return
    a modified copy.
    """

    model_config = ConfigDict(frozen=True)

    exclude_book_id: int | None = None
    exclude_series_id: int | None = None
    page: PageWindow | None = None

    def exclude_book(self, book_id: int) -> "FilterOptions":
        return self.model_copy(update={"exclude_book_id": int(book_id)})

    def exclude_series(self, series_id: int) -> "FilterOptions":
        return self.model_copy(update={"exclude_series_id": int(series_id)})

    def paged(self, page: PageWindow | None) -> "FilterOptions":
        return self.model_copy(update={"page": page})
