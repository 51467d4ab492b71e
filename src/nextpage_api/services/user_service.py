from uuid import uuid4

from pydantic import validate_call

from nextpage_api.domain import ExternalIdpId, InternalUserId
from nextpage_api.models import User as UserModel
from nextpage_api.repositories.users_repository import UsersRepository
from nextpage_api.schemas.user import (
    GenreWeights,
    ReadingPattern,
    UserPreferences,
    UserPreferencesUpdate,
    UserRead,
)


class UserService:
    def __init__(self, repo: UsersRepository) -> None:
        self.repo = repo

    def _map_to_schema(self, user_model: UserModel) -> UserRead:
        return UserRead(
            id=InternalUserId(user_model.id),
            external_idp_id=ExternalIdpId(user_model.external_idp_id),
            preferences=self.get_preferences(user_model.id),
        )

    @validate_call
    def get_or_create_shadow_user(self, external_idp_id: ExternalIdpId) -> UserRead:
        existing = self.repo.get_by_external_id(external_idp_id)
        if existing is not None:
            return self._map_to_schema(existing)

        user_id = InternalUserId(f"usr_{uuid4()}")
        new_user = self.repo.create(id=user_id, external_idp_id=external_idp_id)
        return self._map_to_schema(new_user)

    def get_preferences(self, user_id: str) -> UserPreferences:
        prefs_model = self.repo.get_preferences(user_id)
        if prefs_model is None:
            return UserPreferences()
        return UserPreferences.model_validate(prefs_model)

    @validate_call
    def update_preferences(
        self, user_id: InternalUserId, patch: UserPreferencesUpdate
    ) -> UserPreferences:
        prefs_model = self.repo.update_preferences(user_id=user_id, patch=patch)
        return UserPreferences.model_validate(prefs_model)

    def get_reading_pattern(self, user_id: str) -> ReadingPattern | None:
        pattern_model = self.repo.get_reading_pattern(user_id)
        if pattern_model is None:
            return None
        return ReadingPattern.model_validate(pattern_model)

    def get_genre_weights(self, user_id: str) -> GenreWeights:
        return self.repo.get_genre_weights(user_id)

    def replace_genre_weights(self, user_id: str, weights: GenreWeights) -> GenreWeights:
        invalid = sorted(genre for genre, weight in weights.items() if weight <= 0)
        if invalid:
            raise ValueError(f"Genre weights must be positive: {', '.join(invalid)}")
        return self.repo.replace_genre_weights(user_id, weights)
