"""Author data model."""

from pydantic import BaseModel


class Author(BaseModel):
    id: int
    name: str
    sort: str | None = None
