from typing import Annotated

import httpx
from fastapi import Depends, Request
from sqlalchemy.orm import Session

from nextpage_api.clients.google_books import GoogleBooksClient
from nextpage_api.config import settings
from nextpage_api.dependencies.users import get_db_session
from nextpage_api.repositories.books_repository import BooksRepository
from nextpage_api.services.book_service import BookService


def get_http_client(request: Request) -> httpx.AsyncClient:
    return request.app.state.http_client


def get_catalog_client(
    client: Annotated[httpx.AsyncClient, Depends(get_http_client)],
) -> GoogleBooksClient:
    return GoogleBooksClient(
        client=client,
        base_url=settings.google_books_base_url,
        api_key=settings.google_books_api_key,
        timeout=settings.google_books_timeout_seconds,
    )


def get_books_repository(session: Annotated[Session, Depends(get_db_session)]) -> BooksRepository:
    return BooksRepository(session=session)


def get_book_service(
    repo: Annotated[BooksRepository, Depends(get_books_repository)],
    catalog: Annotated[GoogleBooksClient, Depends(get_catalog_client)],
) -> BookService:
    return BookService(repo=repo, catalog=catalog)
