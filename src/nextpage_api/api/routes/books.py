from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status

from nextpage_api.clients.google_books import CatalogError
from nextpage_api.dependencies.books import get_book_service
from nextpage_api.domain import BookId
from nextpage_api.schemas.book import Book, BookSearchResults
from nextpage_api.services.book_service import BookService

router = APIRouter(prefix="/books", tags=["books"])


@router.get("/search", response_model=BookSearchResults)
async def search_books(
    svc: Annotated[BookService, Depends(get_book_service)],
    q: str = Query(..., min_length=1, description="Free-text catalog query"),
    start_index: int = Query(0, ge=0, description="Offset into the catalog results"),
) -> BookSearchResults:
    """Search the external book catalog."""
    try:
        return await svc.search(q, start_index=start_index)
    except CatalogError as exc:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Book catalog is unavailable",
        ) from exc


@router.get("/{book_id}", response_model=Book)
def get_book_by_id(
    book_id: BookId,
    svc: Annotated[BookService, Depends(get_book_service)],
) -> Book:
    """Retrieve a stored book's metadata."""
    book = svc.get_book(book_id)
    if not book:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Book with id {book_id} not found",
        )
    return book
