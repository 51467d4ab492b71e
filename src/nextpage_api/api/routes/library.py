from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from nextpage_api.dependencies.books import get_book_service
from nextpage_api.dependencies.library import get_library_service
from nextpage_api.dependencies.users import get_current_user
from nextpage_api.domain import BookId
from nextpage_api.schemas.book import Book
from nextpage_api.schemas.library import (
    BookActionRequest,
    BookActionResponse,
    RatingRead,
    RatingUpdate,
    ReadingStatusRead,
    ReadingStatusUpdate,
)
from nextpage_api.schemas.user import UserRead
from nextpage_api.services.book_service import BookService
from nextpage_api.services.library_service import LibraryService

router = APIRouter(prefix="/me", tags=["library"])


def _require_book(book_id: BookId, books: BookService) -> None:
    if books.get_book(book_id) is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Book with id {book_id} not found",
        )


@router.get("/reading-list", response_model=list[Book])
def read_my_reading_list(
    user: Annotated[UserRead, Depends(get_current_user)],
    svc: Annotated[LibraryService, Depends(get_library_service)],
) -> list[Book]:
    return svc.reading_list(user.id)


@router.get("/history", response_model=list[Book])
def read_my_history(
    user: Annotated[UserRead, Depends(get_current_user)],
    svc: Annotated[LibraryService, Depends(get_library_service)],
) -> list[Book]:
    return svc.reading_history(user.id)


@router.put("/books/status", response_model=ReadingStatusRead)
def update_my_reading_status(
    payload: ReadingStatusUpdate,
    user: Annotated[UserRead, Depends(get_current_user)],
    svc: Annotated[LibraryService, Depends(get_library_service)],
) -> ReadingStatusRead:
    """Track a book as want-to-read or read; 'none' removes it."""
    book_id = svc.update_status(user.id, payload.book, payload.status)
    return ReadingStatusRead(book_id=book_id, status=payload.status)


@router.get("/books/{book_id}/rating", response_model=RatingRead)
def read_my_rating(
    book_id: BookId,
    user: Annotated[UserRead, Depends(get_current_user)],
    svc: Annotated[LibraryService, Depends(get_library_service)],
) -> RatingRead:
    return RatingRead(book_id=book_id, rating=svc.get_rating(user.id, book_id))


@router.put(
    "/books/{book_id}/rating",
    response_model=RatingRead,
    responses={404: {"description": "Book not found"}},
)
def rate_book(
    book_id: BookId,
    payload: RatingUpdate,
    user: Annotated[UserRead, Depends(get_current_user)],
    svc: Annotated[LibraryService, Depends(get_library_service)],
    books: Annotated[BookService, Depends(get_book_service)],
) -> RatingRead:
    _require_book(book_id, books)
    rating = svc.rate(user.id, book_id, payload.rating)
    return RatingRead(book_id=book_id, rating=rating)


@router.delete("/books/{book_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_my_book(
    book_id: BookId,
    user: Annotated[UserRead, Depends(get_current_user)],
    svc: Annotated[LibraryService, Depends(get_library_service)],
) -> None:
    svc.remove(user.id, book_id)


@router.post(
    "/recommendations/dismissed",
    response_model=BookActionResponse,
    status_code=status.HTTP_201_CREATED,
)
def dismiss_recommendation(
    payload: BookActionRequest,
    user: Annotated[UserRead, Depends(get_current_user)],
    svc: Annotated[LibraryService, Depends(get_library_service)],
) -> BookActionResponse:
    return BookActionResponse(book_id=svc.dismiss(user.id, payload.book))


@router.post(
    "/books/feedback",
    response_model=BookActionResponse,
    status_code=status.HTTP_201_CREATED,
)
def add_negative_feedback(
    payload: BookActionRequest,
    user: Annotated[UserRead, Depends(get_current_user)],
    svc: Annotated[LibraryService, Depends(get_library_service)],
) -> BookActionResponse:
    return BookActionResponse(book_id=svc.add_negative_feedback(user.id, payload.book))
