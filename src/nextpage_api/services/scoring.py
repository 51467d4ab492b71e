"""Personalized scoring, candidate pooling and ranking for recommendations.

Everything in this module is pure: candidates are read, never mutated, and the
same inputs always produce the same ranking.
"""

import logging
from collections.abc import Collection, Iterable, Mapping, Sequence
from dataclasses import dataclass
from datetime import date

from nextpage_api.domain import CategoryFilter
from nextpage_api.schemas.book import Book
from nextpage_api.schemas.user import ReadingPattern, UserPreferences

logger = logging.getLogger(__name__)

GENRE_MATCH_WEIGHT = 0.4
AUTHOR_MATCH_WEIGHT = 0.3
READING_LEVEL_WEIGHT = 0.2
PUBLICATION_YEAR_WEIGHT = 0.1

RECENCY_BASE_YEAR = 1900
DEFAULT_GENRE_WEIGHT = 1.0

FLOOR_SCORE = 0.1
MIN_SCORE_EXCLUSIVE = 0.1
MAX_RECOMMENDATIONS = 10

FICTION_MARKERS = ("fantasy", "science fiction", "fiction", "romance", "mystery")


@dataclass(frozen=True)
class ScoredCandidate:
    book: Book
    score: float


def _clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    return max(low, min(value, high))


def _genre_component(
    book: Book, preferences: UserPreferences, genre_weights: Mapping[str, float]
) -> float:
    if not book.genres or not preferences.favorite_genres:
        return 0.0
    favorites = set(preferences.favorite_genres)
    weighted = sum(
        genre_weights.get(genre) or DEFAULT_GENRE_WEIGHT
        for genre in book.genres
        if genre in favorites
    )
    return weighted / max(len(book.genres), 1) * GENRE_MATCH_WEIGHT


def _recency_component(publication_year: int | None, current_year: int) -> float:
    if publication_year is None:
        return 0.0
    span = current_year - RECENCY_BASE_YEAR
    return _clamp((publication_year - RECENCY_BASE_YEAR) / span) * PUBLICATION_YEAR_WEIGHT


def score_book(
    book: Book,
    preferences: UserPreferences,
    reading_pattern: ReadingPattern | None,
    genre_weights: Mapping[str, float],
    *,
    current_year: int | None = None,
) -> float:
    """Score a candidate book for a user, always returning a value in [0, 1].

    The score is a weighted sum of four signals: genre overlap (0.4), favorite
    author (0.3), reading level (0.2) and publication recency (0.1). A book that
    matches nothing gets the floor score, and so does a book whose record
    cannot be evaluated.

    ``reading_pattern`` is accepted for interface compatibility and does not
    influence the result.
    """
    try:
        year = current_year if current_year is not None else date.today().year

        score = _genre_component(book, preferences, genre_weights)

        if book.author in preferences.favorite_authors:
            score += AUTHOR_MATCH_WEIGHT

        if book.reading_level is not None and book.reading_level == preferences.reading_level:
            score += READING_LEVEL_WEIGHT

        score += _recency_component(book.publication_year, year)

        if score == 0:
            score = FLOOR_SCORE

        return _clamp(score)
    except Exception:
        logger.warning("Failed to score book %s, using floor score", book.id, exc_info=True)
        return FLOOR_SCORE


def build_candidate_pool(
    similar_books: Iterable[Book],
    genre_books: Iterable[Book],
    exclude_ids: Collection[str],
) -> list[Book]:
    """Merge both candidate sources, keeping the first occurrence of each id.

    Similar books come first so they win over genre matches with the same id.
    """
    excluded = set(exclude_ids)
    seen: set[str] = set()
    pool: list[Book] = []
    for source in (similar_books, genre_books):
        for book in source:
            if book.id in seen:
                continue
            seen.add(book.id)
            if book.id in excluded:
                continue
            pool.append(book)
    return pool


def is_fiction(book: Book) -> bool:
    return any(marker in genre.lower() for genre in book.genres for marker in FICTION_MARKERS)


def _passes_category(book: Book, category_filter: CategoryFilter | None) -> bool:
    if category_filter is None:
        return True
    if category_filter == "Fiction":
        return is_fiction(book)
    return not is_fiction(book)


def rank_and_filter(
    candidates: Sequence[ScoredCandidate],
    category_filter: CategoryFilter | None = None,
    *,
    limit: int = MAX_RECOMMENDATIONS,
) -> list[Book]:
    kept = [
        candidate
        for candidate in candidates
        if _passes_category(candidate.book, category_filter)
        and candidate.score > MIN_SCORE_EXCLUSIVE
    ]
    # sorted() is stable, so equal scores keep their input order
    ranked = sorted(kept, key=lambda candidate: candidate.score, reverse=True)
    return [candidate.book for candidate in ranked[:limit]]
