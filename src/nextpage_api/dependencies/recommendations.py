from typing import Annotated

from fastapi import Depends

from nextpage_api.clients.google_books import GoogleBooksClient
from nextpage_api.dependencies.books import get_books_repository, get_catalog_client
from nextpage_api.dependencies.users import get_user_service
from nextpage_api.repositories.books_repository import BooksRepository
from nextpage_api.services.recommendation_service import RecommendationService
from nextpage_api.services.stores import (
    SessionCalls,
    StoredSimilarityLookup,
    StoredUserContext,
)
from nextpage_api.services.user_service import UserService


def get_recommendation_service(
    catalog: Annotated[GoogleBooksClient, Depends(get_catalog_client)],
    books_repo: Annotated[BooksRepository, Depends(get_books_repository)],
    users: Annotated[UserService, Depends(get_user_service)],
) -> RecommendationService:
    # Both adapters share the request session.
    calls = SessionCalls()
    user_context = StoredUserContext(users, calls)
    return RecommendationService(
        catalog=catalog,
        similarity=StoredSimilarityLookup(books_repo, calls),
        preferences=user_context,
        reading_patterns=user_context,
        genre_weights=user_context,
    )
