from pydantic import BaseModel, Field

from nextpage_api.domain import BookId, ReadingStatusValue
from nextpage_api.schemas.book import Book


class ReadingStatusUpdate(BaseModel):
    book: Book = Field(description="Book to track; it is added to the catalog if unknown")
    status: ReadingStatusValue = Field(
        description="New status; 'none' removes the book from the user's library",
        examples=["want_to_read"],
    )


class ReadingStatusRead(BaseModel):
    book_id: BookId
    status: ReadingStatusValue


class BookActionRequest(BaseModel):
    book: Book


class BookActionResponse(BaseModel):
    book_id: BookId


class RatingUpdate(BaseModel):
    rating: int = Field(ge=1, le=5, description="Star rating from 1 to 5", examples=[4])


class RatingRead(BaseModel):
    book_id: BookId
    rating: int | None = Field(default=None, ge=1, le=5)
