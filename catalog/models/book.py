"""Book data model."""

from datetime import datetime

from pydantic import BaseModel

from catalog.models.author import Author
from catalog.models.series import Series


class Book(BaseModel):
    """A book read from the catalog, with its author and series."""

    id: int
    title: str
    sort: str | None = None
    author_sort: str | None = None
    timestamp: datetime | None = None
    pubdate: datetime | None = None
    path: str = ""
    uuid: str | None = None
    has_cover: bool = False
    comment: str = ""  # Plain text, markup already stripped
    rating: int | None = None  # 0-10, two points per star
    author: Author | None = None
    series: Series | None = None
