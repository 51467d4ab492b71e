from typing import Annotated

from fastapi import APIRouter, Depends, Query
from starlette.concurrency import run_in_threadpool

from nextpage_api.dependencies.auth import get_optional_external_idp_id
from nextpage_api.dependencies.library import get_library_service
from nextpage_api.dependencies.recommendations import get_recommendation_service
from nextpage_api.dependencies.users import get_current_user, get_user_service
from nextpage_api.domain import CategoryFilter, ExternalIdpId
from nextpage_api.schemas.recommendation import RecommendationsRequest, RecommendationsResponse
from nextpage_api.schemas.user import UserRead
from nextpage_api.services.library_service import LibraryService
from nextpage_api.services.recommendation_service import RecommendationService
from nextpage_api.services.user_service import UserService

router = APIRouter(tags=["recommendations"])


@router.get("/me/recommendations", response_model=RecommendationsResponse)
async def read_my_recommendations(
    user: Annotated[UserRead, Depends(get_current_user)],
    library: Annotated[LibraryService, Depends(get_library_service)],
    svc: Annotated[RecommendationService, Depends(get_recommendation_service)],
    category: CategoryFilter | None = Query(
        None, alias="filter", description="Restrict to Fiction or Non-Fiction"
    ),
) -> RecommendationsResponse:
    """Recommend books seeded by the user's history, ratings and preferences."""
    seeds = await run_in_threadpool(library.recommendation_seeds, user.id)
    excluded = await run_in_threadpool(library.excluded_book_ids, user.id)
    recommendations = await svc.get_recommendations(user.id, seeds, excluded, category)
    return RecommendationsResponse(recommendations=recommendations)


@router.post("/recommendations", response_model=RecommendationsResponse)
async def recommend_for_context(
    payload: RecommendationsRequest,
    external_idp_id: Annotated[ExternalIdpId | None, Depends(get_optional_external_idp_id)],
    users: Annotated[UserService, Depends(get_user_service)],
    svc: Annotated[RecommendationService, Depends(get_recommendation_service)],
) -> RecommendationsResponse:
    """Recommend books for caller-supplied seeds; the X-User-Id header is optional."""
    user_id = None
    if external_idp_id is not None:
        user = await run_in_threadpool(users.get_or_create_shadow_user, external_idp_id)
        user_id = user.id
    recommendations = await svc.get_recommendations(
        user_id, payload.recent_books, payload.exclude_ids, payload.filter
    )
    return RecommendationsResponse(recommendations=recommendations)
