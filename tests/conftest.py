from collections.abc import Collection, Iterator, Sequence

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from nextpage_api.clients.google_books import CatalogError
from nextpage_api.database import Base
from nextpage_api.dependencies.auth import get_external_idp_id
from nextpage_api.dependencies.books import get_catalog_client
from nextpage_api.main import app
from nextpage_api.repositories.users_repository import UsersRepository
from nextpage_api.schemas.book import Book
from nextpage_api.services.user_service import UserService


class FakeCatalog:
    """In-memory stand-in for the Google Books client."""

    def __init__(self) -> None:
        self.books: list[Book] = []
        self.genre_queries: list[list[str]] = []
        self.fail = False

    async def search_books(self, query: str, start_index: int = 0) -> list[Book]:
        if self.fail:
            raise CatalogError("catalog unavailable")
        needle = query.lower()
        matches = [book for book in self.books if needle in book.title.lower()]
        return matches[start_index:]

    async def search_by_genres(
        self, genres: Sequence[str], exclude_ids: Collection[str], limit: int
    ) -> list[Book]:
        self.genre_queries.append(list(genres))
        if self.fail:
            raise ConnectionError("catalog unavailable")
        wanted = set(genres)
        matches = [
            book
            for book in self.books
            if wanted.intersection(book.genres) and book.id not in exclude_ids
        ]
        return matches[:limit]


@pytest.fixture(autouse=True)
def clear_dependency_overrides() -> Iterator[None]:
    app.dependency_overrides.clear()
    yield
    app.dependency_overrides.clear()


@pytest.fixture(scope="session")
def db_engine() -> Engine:
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    return engine


@pytest.fixture
def db_session(db_engine: Engine) -> Iterator[Session]:
    connection = db_engine.connect()
    transaction = connection.begin()
    session_factory = sessionmaker(bind=connection)
    session = session_factory()
    try:
        yield session
    finally:
        session.close()
        transaction.rollback()
        connection.close()


@pytest.fixture
def test_external_idp_id() -> str:
    return "auth0|test_user_123"


@pytest.fixture
def users_repo(db_session: Session) -> UsersRepository:
    return UsersRepository(session=db_session)


@pytest.fixture
def user_service(users_repo: UsersRepository) -> UserService:
    return UserService(repo=users_repo)


@pytest.fixture
def fake_catalog() -> FakeCatalog:
    return FakeCatalog()


@pytest.fixture
def client(db_session: Session, fake_catalog: FakeCatalog) -> Iterator[TestClient]:
    from nextpage_api.dependencies.users import get_db_session

    def override_get_db_session() -> Iterator[Session]:
        yield db_session

    app.dependency_overrides[get_db_session] = override_get_db_session
    app.dependency_overrides[get_catalog_client] = lambda: fake_catalog

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def client_with_overrides(client: TestClient, test_external_idp_id: str) -> Iterator[TestClient]:
    def override_get_external_id() -> str:
        return test_external_idp_id

    app.dependency_overrides[get_external_idp_id] = override_get_external_id

    yield client
