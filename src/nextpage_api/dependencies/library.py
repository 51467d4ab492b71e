from typing import Annotated

from fastapi import Depends
from sqlalchemy.orm import Session

from nextpage_api.dependencies.books import get_book_service
from nextpage_api.dependencies.users import get_db_session
from nextpage_api.repositories.library_repository import LibraryRepository
from nextpage_api.services.book_service import BookService
from nextpage_api.services.library_service import LibraryService


def get_library_repository(
    session: Annotated[Session, Depends(get_db_session)],
) -> LibraryRepository:
    return LibraryRepository(session=session)


def get_library_service(
    repo: Annotated[LibraryRepository, Depends(get_library_repository)],
    books: Annotated[BookService, Depends(get_book_service)],
) -> LibraryService:
    return LibraryService(repo=repo, books=books)
