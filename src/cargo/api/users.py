"""FastAPI routes for the authenticated user."""

import json

from fastapi import APIRouter, Depends, Header, HTTPException
from protean.utils.globals import current_domain

from cargo.api.dependencies import authenticated_subject
from cargo.api.schemas import UserResponse
from cargo.provider.port import IdentityProviderError
from cargo.user.sync import SyncUser
from cargo.user.user import User

user_router = APIRouter(prefix="/api/users", tags=["users"])


@user_router.get("/authenticated", response_model=UserResponse)
async def get_authenticated_user(
    force_resync: bool = False,
    subject: str = Depends(authenticated_subject),
    x_user_roles: str = Header(default=""),
    x_user_signed_in: int | None = Header(default=None),
) -> UserResponse:
    """Sync the caller with the identity provider and return their profile."""
    roles = [role.strip() for role in x_user_roles.split(",") if role.strip()]
    command = SyncUser(
        subject=subject,
        roles=json.dumps(roles),
        last_signed_in=x_user_signed_in,
        force_resync=force_resync,
    )
    try:
        user_id = current_domain.process(command, asynchronous=False)
    except IdentityProviderError:
        raise HTTPException(status_code=502, detail="Identity provider unavailable") from None
    user = current_domain.repository_for(User).get(user_id)
    return UserResponse(
        id=str(user.id),
        first_name=user.first_name,
        last_name=user.last_name,
        email=user.email,
        image_url=user.image_url,
        authorities=list(user.authorities or []),
    )
