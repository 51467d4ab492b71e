from pydantic import BaseModel, Field

from nextpage_api.domain import BookId, CategoryFilter
from nextpage_api.schemas.book import Book


class RecommendationsRequest(BaseModel):
    recent_books: list[Book] = Field(
        default_factory=list,
        description="Books the caller recently read or rated, used as recommendation seeds",
    )
    exclude_ids: list[BookId] = Field(
        default_factory=list,
        description="Book identifiers that must never be recommended",
        examples=[["book-123"]],
    )
    filter: CategoryFilter | None = Field(
        default=None, description="Restrict results to fiction or non-fiction"
    )


class RecommendationsResponse(BaseModel):
    recommendations: list[Book] = Field(description="Ranked list of recommended books")
