"""Database-backed implementations of the recommendation collaborators."""

import asyncio
from collections.abc import Callable, Sequence
from typing import Any, TypeVar

from starlette.concurrency import run_in_threadpool

from nextpage_api.repositories.books_repository import BooksRepository
from nextpage_api.schemas.book import Book
from nextpage_api.schemas.user import GenreWeights, ReadingPattern, UserPreferences
from nextpage_api.services.user_service import UserService

T = TypeVar("T")


class SessionCalls:
    """Runs blocking session work in the threadpool, one call at a time.

    A SQLAlchemy session must not be used from two threads at once, so
    adapters sharing a request session share one instance.
    """

    def __init__(self) -> None:
        self._lock = asyncio.Lock()

    async def run(self, func: Callable[..., T], *args: Any) -> T:
        async with self._lock:
            return await run_in_threadpool(func, *args)


class StoredSimilarityLookup:
    def __init__(self, repo: BooksRepository, calls: SessionCalls | None = None) -> None:
        self.repo = repo
        self.calls = calls or SessionCalls()

    async def similar_books(self, book_ids: Sequence[str], limit: int) -> list[Book]:
        return await self.calls.run(self._similar_books, list(book_ids), limit)

    def _similar_books(self, book_ids: list[str], limit: int) -> list[Book]:
        seen = set(book_ids)
        neighbor_ids: list[str] = []
        for similarity in self.repo.get_similarities(book_ids):
            for neighbor_id in similarity.neighbor_ids:
                if neighbor_id not in seen:
                    seen.add(neighbor_id)
                    neighbor_ids.append(neighbor_id)
        rows = self.repo.get_by_ids(neighbor_ids[:limit])
        return [Book.model_validate(row) for row in rows]


class StoredUserContext:
    """Preferences, reading pattern and genre weights for a stored user."""

    def __init__(self, users: UserService, calls: SessionCalls | None = None) -> None:
        self.users = users
        self.calls = calls or SessionCalls()

    async def get_user_preferences(self, user_id: str) -> UserPreferences:
        return await self.calls.run(self.users.get_preferences, user_id)

    async def get_reading_pattern(self, user_id: str) -> ReadingPattern | None:
        return await self.calls.run(self.users.get_reading_pattern, user_id)

    async def get_genre_weights(self, user_id: str) -> GenreWeights:
        return await self.calls.run(self.users.get_genre_weights, user_id)
