# app/utils/profile_utils.py
from typing import List, Optional, Tuple

from sqlalchemy import select, desc
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.user_model import User
from app.utils.token_utils import Identity

ROLES = ("user", "admin")


def synthesize_profile(identity: Identity) -> User:
    """
    Transient profile built from token metadata. Never added to a session;
    used only when the stored row can't be read or created.
    """
    meta = identity.user_metadata or {}
    role = meta.get("role") if meta.get("role") in ROLES else "user"
    return User(
        id=identity.id,
        email=identity.email,
        full_name=meta.get("full_name"),
        phone=meta.get("phone"),
        role=role,
    )


async def insert_profile(db: AsyncSession, user_id: str, email: str,
                         full_name: Optional[str] = None, phone: Optional[str] = None) -> User:
    profile = User(
        id=user_id,
        email=email,
        full_name=full_name,
        phone=phone,
        role="user",
    )
    db.add(profile)
    await db.commit()
    await db.refresh(profile)
    return profile


async def ensure_user_profile(db: AsyncSession, identity: Identity) -> Tuple[User, bool]:
    """
    Return (profile, persisted). Looks up the caller's row in `users` and
    creates it from token metadata on first sight. New rows always get the
    `user` role. If the row can't be created the synthesized profile is
    returned with persisted=False.
    """
    profile = await db.get(User, identity.id)
    if profile:
        return profile, True

    meta = identity.user_metadata or {}
    try:
        profile = await insert_profile(
            db,
            identity.id,
            identity.email or "",
            full_name=meta.get("full_name"),
            phone=meta.get("phone"),
        )
        print(f"[auth] Created missing profile for {identity.id}")
        return profile, True
    except SQLAlchemyError as e:
        await db.rollback()
        print(f"[auth] Failed to create profile for {identity.id}: {e!r}")

    # a concurrent request may have won the insert
    try:
        profile = await db.get(User, identity.id)
    except SQLAlchemyError as e:
        print(f"[auth] Profile re-read failed for {identity.id}: {e!r}")
        profile = None
    if profile:
        return profile, True

    return synthesize_profile(identity), False


async def make_user_admin(db: AsyncSession, user_id: str) -> Optional[User]:
    user = await db.get(User, user_id)
    if not user:
        return None
    user.role = "admin"
    await db.commit()
    await db.refresh(user)
    return user


async def get_user_role(db: AsyncSession, user_id: str) -> Optional[str]:
    result = await db.execute(select(User.role).where(User.id == user_id))
    role = result.scalar_one_or_none()
    if role is None:
        return None
    return role or "user"


async def list_all_users(db: AsyncSession) -> List[User]:
    result = await db.execute(select(User).order_by(desc(User.created_at)))
    return list(result.scalars().all())
