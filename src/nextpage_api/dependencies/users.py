from collections.abc import Iterator
from typing import Annotated

from fastapi import Depends
from sqlalchemy.orm import Session

from nextpage_api.database import SessionLocal
from nextpage_api.dependencies.auth import get_external_idp_id
from nextpage_api.repositories.users_repository import UsersRepository
from nextpage_api.schemas.user import UserRead
from nextpage_api.services.user_service import UserService


def get_db_session() -> Iterator[Session]:
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


def get_users_repository(session: Annotated[Session, Depends(get_db_session)]) -> UsersRepository:
    return UsersRepository(session=session)


def get_user_service(
    repo: Annotated[UsersRepository, Depends(get_users_repository)],
) -> UserService:
    return UserService(repo=repo)


def get_current_user(
    external_idp_id: Annotated[str, Depends(get_external_idp_id)],
    svc: Annotated[UserService, Depends(get_user_service)],
) -> UserRead:
    return svc.get_or_create_shadow_user(external_idp_id=external_idp_id)
