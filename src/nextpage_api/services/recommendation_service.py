import asyncio
import logging
from collections.abc import Collection, Sequence

from nextpage_api.domain import CategoryFilter, Success, unwrap_or
from nextpage_api.schemas.book import Book
from nextpage_api.schemas.user import GenreWeights, ReadingPattern, UserPreferences
from nextpage_api.services.scoring import (
    ScoredCandidate,
    build_candidate_pool,
    rank_and_filter,
    score_book,
)
from nextpage_api.services.sourcing import (
    CatalogSearch,
    GenreWeightStore,
    PreferenceStore,
    ReadingPatternStore,
    SimilarityLookup,
    attempt,
    fetch_genre_candidates,
    fetch_similar_candidates,
    unique_genres,
)

logger = logging.getLogger(__name__)


class RecommendationService:
    def __init__(
        self,
        catalog: CatalogSearch,
        similarity: SimilarityLookup,
        preferences: PreferenceStore,
        reading_patterns: ReadingPatternStore,
        genre_weights: GenreWeightStore,
        current_year: int | None = None,
    ) -> None:
        self.catalog = catalog
        self.similarity = similarity
        self.preferences = preferences
        self.reading_patterns = reading_patterns
        self.genre_weights = genre_weights
        self.current_year = current_year

    async def _load_user_context(
        self, user_id: str
    ) -> tuple[UserPreferences | None, ReadingPattern | None, GenreWeights]:
        prefs_result, pattern_result, weights_result = await asyncio.gather(
            attempt(self.preferences.get_user_preferences(user_id), "Preferences lookup"),
            attempt(self.reading_patterns.get_reading_pattern(user_id), "Reading pattern lookup"),
            attempt(self.genre_weights.get_genre_weights(user_id), "Genre weights lookup"),
        )
        return (
            unwrap_or(prefs_result, None),
            unwrap_or(pattern_result, None),
            unwrap_or(weights_result, {}) or {},
        )

    async def get_recommendations(
        self,
        user_id: str | None,
        recent_books: Sequence[Book],
        exclude_ids: Collection[str] = (),
        category_filter: CategoryFilter | None = None,
    ) -> list[Book]:
        """Return up to ten ranked books for the given user context.

        Never raises: lookup failures shrink the candidate pool and any other
        error yields an empty list.
        """
        try:
            return await self._recommend(user_id, recent_books, exclude_ids, category_filter)
        except Exception:
            logger.exception("Failed to build recommendations for user %s", user_id)
            return []

    async def _recommend(
        self,
        user_id: str | None,
        recent_books: Sequence[Book],
        exclude_ids: Collection[str],
        category_filter: CategoryFilter | None,
    ) -> list[Book]:
        if user_id is None and not recent_books:
            return []

        preferences: UserPreferences | None = None
        reading_pattern: ReadingPattern | None = None
        genre_weights: GenreWeights = {}
        if user_id is not None:
            preferences, reading_pattern, genre_weights = await self._load_user_context(user_id)

        # Seed genres only stand in when no preferences could be loaded.
        if preferences is not None:
            genres = unique_genres(preferences.favorite_genres)
        else:
            genres = unique_genres(genre for book in recent_books for genre in book.genres)

        if not genres and not recent_books:
            return []

        excluded = set(exclude_ids)
        genre_result, similar_result = await asyncio.gather(
            fetch_genre_candidates(self.catalog, genres, excluded),
            fetch_similar_candidates(self.similarity, [book.id for book in recent_books]),
        )
        genre_books = unwrap_or(genre_result, [])
        similar_books = unwrap_or(similar_result, [])

        pool = build_candidate_pool(similar_books, genre_books, excluded)

        scoring_preferences = preferences or UserPreferences()
        scored = [
            ScoredCandidate(
                book=book,
                score=score_book(
                    book,
                    scoring_preferences,
                    reading_pattern,
                    genre_weights,
                    current_year=self.current_year,
                ),
            )
            for book in pool
        ]
        recommendations = rank_and_filter(scored, category_filter)

        logger.info(
            "recommendations_served",
            extra={
                "user_id": user_id,
                "genres": genres,
                "genre_candidates": len(genre_books),
                "similar_candidates": len(similar_books),
                "genre_lookup_ok": isinstance(genre_result, Success),
                "similar_lookup_ok": isinstance(similar_result, Success),
                "pool_size": len(pool),
                "returned_count": len(recommendations),
                "category_filter": category_filter,
            },
        )
        return recommendations
