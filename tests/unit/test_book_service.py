from typing import cast
from unittest.mock import AsyncMock, MagicMock, create_autospec

import pytest
from pydantic import ValidationError

from nextpage_api.clients.google_books import GoogleBooksClient
from nextpage_api.domain import BookId
from nextpage_api.models import Book as BookModel
from nextpage_api.repositories.books_repository import BooksRepository
from nextpage_api.schemas.book import Book
from nextpage_api.services.book_service import BookService


def make_repo() -> MagicMock:
    return cast(MagicMock, create_autospec(BooksRepository, instance=True, spec_set=True))


def make_model(book_id: str = "1", isbn: str = "") -> BookModel:
    return BookModel(
        id=book_id,
        title="Dune",
        author="Frank Herbert",
        cover_url="",
        description="A science fiction epic on Arrakis.",
        isbn=isbn,
        publication_year=1965,
        genres=["Science Fiction"],
    )


def test_get_book_returns_schema():
    repo = make_repo()
    repo.get_by_id.return_value = make_model(book_id="1")

    result = BookService(repo).get_book(BookId("1"))

    assert result is not None
    assert result.id == "1"
    assert result.genres == ["Science Fiction"]
    repo.get_by_id.assert_called_once_with("1")


def test_get_book_returns_none():
    repo = make_repo()
    repo.get_by_id.return_value = None

    assert BookService(repo).get_book(BookId("999")) is None


def test_service_validation_rejects_invalid_book_id():
    svc = BookService(make_repo())

    with pytest.raises(ValidationError):
        svc.get_book(book_id=BookId(""))


def test_ensure_book_exists_keeps_known_book():
    repo = make_repo()
    repo.get_by_id.return_value = make_model(book_id="1")

    book_id = BookService(repo).ensure_book_exists(Book(id="1", title="Dune"))

    assert book_id == "1"
    repo.add.assert_not_called()


def test_ensure_book_exists_reuses_book_with_same_isbn():
    repo = make_repo()
    repo.get_by_id.return_value = None
    repo.get_by_isbn.return_value = make_model(book_id="stored", isbn="9780441013593")

    book_id = BookService(repo).ensure_book_exists(
        Book(id="new", title="Dune", isbn="9780441013593")
    )

    assert book_id == "stored"
    repo.add.assert_not_called()


def test_ensure_book_exists_inserts_new_book():
    repo = make_repo()
    repo.get_by_id.return_value = None
    repo.add.return_value = make_model(book_id="new")
    book = Book(id="new", title="Dune")

    book_id = BookService(repo).ensure_book_exists(book)

    assert book_id == "new"
    repo.get_by_isbn.assert_not_called()
    repo.add.assert_called_once_with(book)


@pytest.mark.asyncio
async def test_search_delegates_to_catalog():
    catalog = create_autospec(GoogleBooksClient, instance=True)
    catalog.search_books = AsyncMock(return_value=[Book(id="v1", title="Dune")])

    result = await BookService(make_repo(), catalog=catalog).search("dune", start_index=40)

    assert [book.id for book in result.items] == ["v1"]
    assert result.query == "dune"
    assert result.start_index == 40
    catalog.search_books.assert_awaited_once_with("dune", start_index=40)
