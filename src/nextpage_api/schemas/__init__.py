from nextpage_api.schemas.book import Book
from nextpage_api.schemas.user import (
    GenreWeights,
    ReadingPattern,
    UserPreferences,
    UserPreferencesUpdate,
    UserRead,
)

__all__ = [
    "Book",
    "GenreWeights",
    "ReadingPattern",
    "UserPreferences",
    "UserPreferencesUpdate",
    "UserRead",
]
