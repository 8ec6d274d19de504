"""Series data model."""

from pydantic import BaseModel


class Series(BaseModel):
    """A series a book belongs to, with the book's position in it."""

    id: int
    name: str
    sort: str | None = None
    index: float = 1.0
