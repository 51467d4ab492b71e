import logging
from collections.abc import Awaitable, Collection, Iterable, Sequence
from typing import Protocol, TypeVar

from nextpage_api.domain import Failure, LookupResult, Success
from nextpage_api.schemas.book import Book
from nextpage_api.schemas.user import GenreWeights, ReadingPattern, UserPreferences

logger = logging.getLogger(__name__)

MAX_QUERY_GENRES = 3
GENRE_CANDIDATE_LIMIT = 20
SIMILAR_BOOKS_LIMIT = 10

T = TypeVar("T")


class CatalogSearch(Protocol):
    async def search_by_genres(
        self, genres: Sequence[str], exclude_ids: Collection[str], limit: int
    ) -> list[Book]: ...


class SimilarityLookup(Protocol):
    async def similar_books(self, book_ids: Sequence[str], limit: int) -> list[Book]: ...


class PreferenceStore(Protocol):
    async def get_user_preferences(self, user_id: str) -> UserPreferences | None: ...


class ReadingPatternStore(Protocol):
    async def get_reading_pattern(self, user_id: str) -> ReadingPattern | None: ...


class GenreWeightStore(Protocol):
    async def get_genre_weights(self, user_id: str) -> GenreWeights: ...


async def attempt(lookup: Awaitable[T], description: str) -> LookupResult[T]:
    """Await a collaborator call and capture its outcome instead of raising."""
    try:
        return Success(await lookup)
    except Exception as exc:
        logger.warning("%s failed: %s", description, exc, exc_info=True)
        return Failure(exc)


def unique_genres(genres: Iterable[str]) -> list[str]:
    return list(dict.fromkeys(genre for genre in genres if genre))


async def fetch_genre_candidates(
    catalog: CatalogSearch,
    genres: Sequence[str],
    exclude_ids: Collection[str],
    limit: int = GENRE_CANDIDATE_LIMIT,
) -> LookupResult[list[Book]]:
    query_genres = unique_genres(genres)[:MAX_QUERY_GENRES]
    if not query_genres:
        return Success([])
    result = await attempt(
        catalog.search_by_genres(query_genres, exclude_ids, limit), "Genre catalog search"
    )
    if isinstance(result, Success):
        excluded = set(exclude_ids)
        books = [book for book in result.value if book.id not in excluded][:limit]
        return Success(books)
    return result


async def fetch_similar_candidates(
    lookup: SimilarityLookup, book_ids: Sequence[str]
) -> LookupResult[list[Book]]:
    if not book_ids:
        return Success([])
    result = await attempt(
        lookup.similar_books(list(book_ids), SIMILAR_BOOKS_LIMIT), "Similar books lookup"
    )
    if isinstance(result, Success):
        return Success(result.value[:SIMILAR_BOOKS_LIMIT])
    return result
