from pydantic import BaseModel, ConfigDict, Field

from nextpage_api.domain import BookId


class Book(BaseModel):
    id: BookId = Field(description="Stable identifier of the book", examples=["book-123"])
    title: str = Field(description="Title of the book", examples=["Dune"])
    author: str = Field(
        default="Unknown Author", description="Primary author", examples=["Frank Herbert"]
    )
    cover_url: str = Field(
        default="",
        description="URL to the cover image of the book",
        examples=["https://example.com/dune.jpg"],
    )
    description: str = ""
    isbn: str = ""
    publication_year: int | None = Field(default=None, examples=[1965])
    genres: list[str] = Field(default_factory=list, examples=[["Science Fiction"]])
    reading_level: str | None = Field(default=None, examples=["intermediate"])

    model_config = ConfigDict(from_attributes=True, frozen=True)


class BookSearchResults(BaseModel):
    items: list[Book]
    query: str
    start_index: int
