"""Request identity for the HTTP layer.

Access tokens are verified by the authenticating proxy in front of the API,
which forwards the token's subject, roles and sign-in time as headers. Routes
receive the calling user explicitly through these dependencies.
"""

from fastapi import Depends, Header, HTTPException
from protean.utils.globals import current_domain

from cargo.user.user import User


async def authenticated_subject(x_user_subject: str = Header(default="")) -> str:
    if not x_user_subject:
        raise HTTPException(status_code=401, detail="Not authenticated")
    return x_user_subject


async def current_buyer(subject: str = Depends(authenticated_subject)) -> User:
    """The synced User behind the request, or 401 when they never synced."""
    user = current_domain.repository_for(User).find_by_subject(subject)
    if user is None:
        raise HTTPException(status_code=401, detail="Unknown user")
    return user


async def current_admin(user: User = Depends(current_buyer)) -> User:
    if not user.is_admin:
        raise HTTPException(status_code=403, detail="Administrator role required")
    return user
