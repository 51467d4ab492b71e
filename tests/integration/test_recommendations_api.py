from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from nextpage_api.models import BookSimilarity
from nextpage_api.repositories.books_repository import BooksRepository
from nextpage_api.schemas.book import Book


def catalog_book(book_id: str, genres: list[str], **fields) -> Book:
    return Book(id=book_id, title=f"Book {book_id}", genres=genres, **fields)


def test_requires_authentication(client: TestClient) -> None:
    response = client.get("/me/recommendations")

    assert response.status_code == 401


def test_user_without_history_or_preferences_gets_nothing(
    client_with_overrides: TestClient, fake_catalog
) -> None:
    response = client_with_overrides.get("/me/recommendations")

    assert response.status_code == 200
    assert response.json() == {"recommendations": []}
    assert fake_catalog.genre_queries == []


def test_recommendations_follow_preferences_and_skip_owned_books(
    client_with_overrides: TestClient, fake_catalog
) -> None:
    fake_catalog.books = [
        catalog_book("owned", ["Fantasy"], author="Le Guin"),
        catalog_book("match", ["Fantasy", "Adventure"], publication_year=2020),
        catalog_book("author", ["Fantasy"], author="Le Guin", publication_year=1968),
        catalog_book("cold", ["Cooking"]),
    ]
    client_with_overrides.patch(
        "/me/preferences",
        json={"favorite_genres": ["Fantasy"], "favorite_authors": ["Le Guin"]},
    )
    client_with_overrides.put("/me/genre-weights", json={"weights": {"Fantasy": 2}})
    client_with_overrides.put(
        "/me/books/status",
        json={"book": fake_catalog.books[0].model_dump(), "status": "want_to_read"},
    )

    response = client_with_overrides.get("/me/recommendations")

    assert response.status_code == 200
    ids = [book["id"] for book in response.json()["recommendations"]]
    assert ids == ["author", "match"]
    assert fake_catalog.genre_queries == [["Fantasy"]]


def test_history_seeds_similar_books_and_category_filter(
    client_with_overrides: TestClient, fake_catalog, db_session: Session
) -> None:
    books = BooksRepository(db_session)
    books.add(catalog_book("read-1", ["Mystery"]))
    books.add(catalog_book("sim-fiction", ["Mystery"], reading_level="intermediate"))
    books.add(catalog_book("sim-history", ["History"], reading_level="intermediate"))
    db_session.add(
        BookSimilarity(book_id="read-1", neighbor_ids=["sim-fiction", "sim-history"])
    )
    db_session.commit()
    client_with_overrides.put(
        "/me/books/status",
        json={"book": catalog_book("read-1", ["Mystery"]).model_dump(), "status": "read"},
    )

    everything = client_with_overrides.get("/me/recommendations").json()["recommendations"]
    fiction = client_with_overrides.get(
        "/me/recommendations", params={"filter": "Fiction"}
    ).json()["recommendations"]
    non_fiction = client_with_overrides.get(
        "/me/recommendations", params={"filter": "Non-Fiction"}
    ).json()["recommendations"]

    assert [book["id"] for book in everything] == ["sim-fiction", "sim-history"]
    assert [book["id"] for book in fiction] == ["sim-fiction"]
    assert [book["id"] for book in non_fiction] == ["sim-history"]
    # No stored favorite genres, so only similar books are sourced
    assert fake_catalog.genre_queries == []


def test_invalid_filter_is_rejected(client_with_overrides: TestClient) -> None:
    response = client_with_overrides.get("/me/recommendations", params={"filter": "Poetry"})

    assert response.status_code == 422


def test_anonymous_context_recommendations(
    client: TestClient, fake_catalog
) -> None:
    fake_catalog.books = [
        catalog_book("a", ["Romance"], reading_level="intermediate", publication_year=2001),
        catalog_book("b", ["Romance"], reading_level="intermediate", publication_year=2011),
        catalog_book("skip", ["Romance"], reading_level="intermediate"),
    ]

    response = client.post(
        "/recommendations",
        json={
            "recent_books": [catalog_book("seed", ["Romance"]).model_dump()],
            "exclude_ids": ["skip"],
        },
    )

    assert response.status_code == 200
    assert [book["id"] for book in response.json()["recommendations"]] == ["b", "a"]


def test_anonymous_context_without_seeds_is_empty(
    client: TestClient, fake_catalog
) -> None:
    response = client.post("/recommendations", json={})

    assert response.status_code == 200
    assert response.json() == {"recommendations": []}
    assert fake_catalog.genre_queries == []


def test_catalog_outage_degrades_to_empty_list(
    client: TestClient, fake_catalog
) -> None:
    fake_catalog.fail = True

    response = client.post(
        "/recommendations",
        json={"recent_books": [catalog_book("seed", ["Romance"]).model_dump()]},
    )

    assert response.status_code == 200
    assert response.json() == {"recommendations": []}
