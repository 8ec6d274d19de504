"""Pagination data models."""

import math

from pydantic import BaseModel, ConfigDict, Field

from catalog.models.book import Book


class PageWindow(BaseModel):
    """An offset/limit pair bounding a result sequence."""

    model_config = ConfigDict(frozen=True)

    offset: int = Field(default=0, ge=0)
    limit: int = Field(ge=1)

    @classmethod
    def for_page(cls, number: int, size: int) -> "PageWindow":
        """Build the window for a 1-based page number.

        Args:
            number: Page number, starting at 1.
            size: Number of books per page.

        Returns:
            The matching PageWindow.
        """
        if number < 1:
            raise ValueError(f"Page number must be >= 1, got {number}")
        return cls(offset=(number - 1) * size, limit=size)


class BookPage(BaseModel):
    """Books returned by a list query.

    ``total`` is only set when a page window was requested; it is the number
    of matching books before the window was applied.
    """

    books: list[Book] = Field(default_factory=list)
    total: int | None = None
    window: PageWindow | None = None

    @property
    def page_count(self) -> int | None:
        if self.total is None or self.window is None:
            return None
        return math.ceil(self.total / self.window.limit)
