from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import APIKeyHeader

from nextpage_api.domain import ExternalIdpId

api_key_header = APIKeyHeader(name="X-User-Id", auto_error=False)


def get_optional_external_idp_id(
    api_key: Annotated[str | None, Depends(api_key_header)] = None,
) -> ExternalIdpId | None:
    if not api_key or not api_key.strip():
        return None
    return ExternalIdpId(api_key.strip())


def get_external_idp_id(
    external_idp_id: Annotated[ExternalIdpId | None, Depends(get_optional_external_idp_id)],
) -> ExternalIdpId:
    if external_idp_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing or empty X-User-Id header",
        )
    return external_idp_id
