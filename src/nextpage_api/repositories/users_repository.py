from sqlalchemy import select
from sqlalchemy.orm import Session

from nextpage_api.domain import ExternalIdpId, InternalUserId
from nextpage_api.models import GenrePreference, UserPreference, UserReadingPattern
from nextpage_api.models import User as UserModel
from nextpage_api.schemas.user import UserPreferences, UserPreferencesUpdate


class UsersRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def get_by_external_id(self, external_idp_id: ExternalIdpId) -> UserModel | None:
        stmt = select(UserModel).where(UserModel.external_idp_id == external_idp_id)
        return self.session.scalars(stmt).first()

    def get_by_id(self, user_id: InternalUserId) -> UserModel | None:
        return self.session.get(UserModel, user_id)

    def create(self, id: InternalUserId, external_idp_id: ExternalIdpId) -> UserModel:
        user_model = UserModel(id=id, external_idp_id=external_idp_id)
        self.session.add(user_model)
        self.session.commit()
        self.session.refresh(user_model)

        return user_model

    def get_preferences(self, user_id: str) -> UserPreference | None:
        return self.session.get(UserPreference, user_id)

    def update_preferences(self, user_id: str, patch: UserPreferencesUpdate) -> UserPreference:
        prefs_model = self.session.get(UserPreference, user_id)
        if prefs_model is None:
            defaults = UserPreferences()
            prefs_model = UserPreference(user_id=user_id, **defaults.model_dump())
            self.session.add(prefs_model)

        update_data = patch.model_dump(exclude_unset=True, exclude_none=True)
        for field, value in update_data.items():
            setattr(prefs_model, field, value)

        self.session.commit()
        self.session.refresh(prefs_model)

        return prefs_model

    def get_reading_pattern(self, user_id: str) -> UserReadingPattern | None:
        return self.session.get(UserReadingPattern, user_id)

    def get_genre_weights(self, user_id: str) -> dict[str, float]:
        stmt = select(GenrePreference).where(GenrePreference.user_id == user_id)
        return {row.genre: row.weight for row in self.session.scalars(stmt).all()}

    def replace_genre_weights(self, user_id: str, weights: dict[str, float]) -> dict[str, float]:
        stmt = select(GenrePreference).where(GenrePreference.user_id == user_id)
        for row in self.session.scalars(stmt).all():
            self.session.delete(row)
        self.session.flush()
        self.session.add_all(
            GenrePreference(user_id=user_id, genre=genre, weight=weight)
            for genre, weight in weights.items()
        )
        self.session.commit()
        return self.get_genre_weights(user_id)
