from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from nextpage_api.repositories.books_repository import BooksRepository
from nextpage_api.schemas.book import Book


def test_search_books(client: TestClient, fake_catalog) -> None:
    fake_catalog.books = [Book(id="1", title="Dune"), Book(id="2", title="Emma")]

    response = client.get("/books/search", params={"q": "dune"})

    assert response.status_code == 200
    payload = response.json()
    assert payload["query"] == "dune"
    assert [book["id"] for book in payload["items"]] == ["1"]


def test_search_requires_query(client: TestClient) -> None:
    assert client.get("/books/search").status_code == 422


def test_search_catalog_failure_is_bad_gateway(
    client: TestClient, fake_catalog
) -> None:
    fake_catalog.fail = True

    response = client.get("/books/search", params={"q": "dune"})

    assert response.status_code == 502


def test_get_book_by_id(client: TestClient, db_session: Session) -> None:
    BooksRepository(db_session).add(
        Book(id="b1", title="Dune", author="Frank Herbert", publication_year=1965)
    )

    response = client.get("/books/b1")

    assert response.status_code == 200
    assert response.json()["author"] == "Frank Herbert"
    assert client.get("/books/missing").status_code == 404
