"""Book Pydantic schemas (request DTOs and response models)."""


from pydantic import Field

from graphql_qbe.schemas.common import CamelModel

class BookCreate(CamelModel):
    title: str | None = Field(default=None, max_length=255)
    author: str | None = Field(default=None, max_length=255)
    published_year: int | None = None

class BookOut(CamelModel):
    id: int
    title: str | None = None
    author: str | None = None
    published_year: int | None = None
