from dataclasses import dataclass, field
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from app import config

bearer_scheme = HTTPBearer(auto_error=False)


@dataclass
class Identity:
    """Caller as asserted by a platform-issued access token."""

    id: str
    email: Optional[str] = None
    user_metadata: dict = field(default_factory=dict)
    access_token: Optional[str] = None


def _get_secret_key() -> str:
    secret = config.SUPABASE_JWT_SECRET
    if not secret:
        # Fail fast with a clear message instead of a generic 500
        raise RuntimeError("SUPABASE_JWT_SECRET is not configured in the backend environment")
    return secret


def decode_access_token(token: str) -> Identity:
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    try:
        payload = jwt.decode(
            token,
            _get_secret_key(),
            algorithms=[config.JWT_ALGORITHM],
            audience=config.JWT_AUDIENCE,
        )
    except JWTError:
        raise credentials_exception

    user_id = payload.get("sub")
    if not user_id:
        raise credentials_exception

    return Identity(
        id=str(user_id),
        email=payload.get("email"),
        user_metadata=payload.get("user_metadata") or {},
        access_token=token,
    )


async def get_optional_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Optional[Identity]:
    if credentials is None or not credentials.credentials:
        return None
    return decode_access_token(credentials.credentials)


async def get_current_identity(
    identity: Optional[Identity] = Depends(get_optional_identity),
) -> Identity:
    if identity is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return identity
