from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from nextpage_api.dependencies.users import get_current_user, get_user_service
from nextpage_api.schemas.user import (
    GenreWeightsUpdate,
    UserPreferences,
    UserPreferencesUpdate,
    UserRead,
)
from nextpage_api.services.user_service import UserService

router = APIRouter(prefix="/me", tags=["users"])


@router.get(
    "",
    response_model=UserRead,
    summary="Get Current User Profile",
    description=(
        "Fetches the current user profile based on the external identity provider ID. "
        "If the user doesn't exist, it is created as a shadow user."
    ),
    responses={401: {"description": "Not authenticated"}},
)
def get_my_profile(user: Annotated[UserRead, Depends(get_current_user)]) -> UserRead:
    return user


@router.get("/preferences", response_model=UserPreferences)
def get_my_preferences(user: Annotated[UserRead, Depends(get_current_user)]) -> UserPreferences:
    return user.preferences


@router.patch(
    "/preferences",
    response_model=UserPreferences,
    summary="Update Current User Preferences",
    description="Updates the current user's reading preferences. Only provided fields change.",
    responses={401: {"description": "Not authenticated"}},
)
def update_my_preferences(
    payload: UserPreferencesUpdate,
    user: Annotated[UserRead, Depends(get_current_user)],
    svc: Annotated[UserService, Depends(get_user_service)],
) -> UserPreferences:
    return svc.update_preferences(user_id=user.id, patch=payload)


@router.get("/genre-weights", response_model=GenreWeightsUpdate)
def get_my_genre_weights(
    user: Annotated[UserRead, Depends(get_current_user)],
    svc: Annotated[UserService, Depends(get_user_service)],
) -> GenreWeightsUpdate:
    return GenreWeightsUpdate(weights=svc.get_genre_weights(user.id))


@router.put(
    "/genre-weights",
    response_model=GenreWeightsUpdate,
    responses={400: {"description": "Non-positive weight"}},
)
def replace_my_genre_weights(
    payload: GenreWeightsUpdate,
    user: Annotated[UserRead, Depends(get_current_user)],
    svc: Annotated[UserService, Depends(get_user_service)],
) -> GenreWeightsUpdate:
    try:
        weights = svc.replace_genre_weights(user.id, payload.weights)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return GenreWeightsUpdate(weights=weights)
