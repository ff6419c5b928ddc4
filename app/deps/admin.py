# app/deps/admin.py
from dataclasses import dataclass

from fastapi import Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_async_session
from app.models.user_model import User
from app.utils.profile_utils import ensure_user_profile
from app.utils.token_utils import Identity, get_current_identity


@dataclass
class CurrentSession:
    identity: Identity
    profile: User
    persisted: bool

    @property
    def is_admin(self) -> bool:
        return self.persisted and (self.profile.role or "").lower() == "admin"


async def get_current_session(
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_async_session),
) -> CurrentSession:
    """
    Resolves the caller's identity and profile, bootstrapping the profile
    row on first login.
    """
    profile, persisted = await ensure_user_profile(db, identity)
    return CurrentSession(identity=identity, profile=profile, persisted=persisted)


async def require_admin(current: CurrentSession = Depends(get_current_session)) -> User:
    """
    Requires a stored profile with role=admin.
    Raises 403 otherwise; metadata-only fallback profiles never qualify.
    """
    if not current.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Forbidden"
        )
    return current.profile
