from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app import auth_client, config
from app.database import get_async_session
from app.deps.admin import CurrentSession, get_current_session
from app.limiter import limiter
from app.schemas.user_schemas import (
    UserCreate, UserLogin, ProfileUpdate, PasswordReset,
    SignupResponse, LoginResponse, SessionOut, IdentityOut, ProfileOut,
)
from app.utils.profile_utils import insert_profile
from app.utils.token_utils import Identity, get_current_identity

router = APIRouter(prefix="/api/auth", tags=["auth"])


def _identity_out(user: dict) -> IdentityOut:
    return IdentityOut(
        id=str(user.get("id")),
        email=user.get("email"),
        user_metadata=user.get("user_metadata") or {},
    )


@router.post("/sign-up", response_model=SignupResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(config.AUTH_RATE_LIMIT)
async def sign_up(request: Request, payload: UserCreate, db: AsyncSession = Depends(get_async_session)):
    metadata = {
        "full_name": payload.full_name,
        "phone": payload.phone,
        "role": "user",
    }
    user = await auth_client.sign_up(payload.email, payload.password, metadata)

    if not user.get("id"):
        raise HTTPException(status_code=502, detail="Auth platform returned no user")

    # An empty identities list means the email is already registered
    if not user.get("identities"):
        return SignupResponse(
            message="If this email is not registered yet, check your inbox to confirm it.",
            user=None,
        )

    try:
        await insert_profile(
            db,
            str(user["id"]),
            user.get("email") or payload.email,
            full_name=payload.full_name,
            phone=payload.phone,
        )
    except SQLAlchemyError as e:
        # The auth user exists; the profile gets created on first login instead
        await db.rollback()
        print(f"[auth] Error creating user profile for {user['id']}: {e!r}")

    return SignupResponse(
        message="Account created. Please check your email to confirm your address.",
        user=_identity_out(user),
    )


@router.post("/sign-in", response_model=LoginResponse)
@limiter.limit(config.AUTH_RATE_LIMIT)
async def sign_in(request: Request, payload: UserLogin):
    if not payload.password.strip():
        raise HTTPException(status_code=400, detail="Email and password are required")

    data = await auth_client.sign_in(payload.email, payload.password)
    if not data.get("access_token"):
        raise HTTPException(status_code=401, detail="Invalid credentials")

    return LoginResponse(
        access_token=data["access_token"],
        refresh_token=data.get("refresh_token"),
        user=_identity_out(data.get("user") or {}),
    )


@router.post("/sign-out", status_code=status.HTTP_204_NO_CONTENT)
async def sign_out(identity: Identity = Depends(get_current_identity)):
    await auth_client.sign_out(identity.access_token)


@router.get("/me", response_model=SessionOut)
async def me(current: CurrentSession = Depends(get_current_session)):
    return SessionOut(
        user=IdentityOut(
            id=current.identity.id,
            email=current.identity.email,
            user_metadata=current.identity.user_metadata,
        ),
        profile=ProfileOut.model_validate(current.profile),
        is_admin=current.is_admin,
    )


@router.put("/profile", response_model=ProfileOut)
async def update_profile(
    payload: ProfileUpdate,
    current: CurrentSession = Depends(get_current_session),
    db: AsyncSession = Depends(get_async_session),
):
    updates = payload.model_dump(exclude_unset=True)
    if not updates:
        raise HTTPException(status_code=400, detail="Nothing to update")

    if not current.persisted:
        raise HTTPException(status_code=500, detail="Profile is not available")

    await auth_client.update_user(current.identity.access_token, updates)

    profile = current.profile
    for field, value in updates.items():
        setattr(profile, field, value)
    try:
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        print(f"[auth] Profile update failed for {profile.id}: {e!r}")
        raise HTTPException(status_code=500, detail="Profile update failed")
    await db.refresh(profile)
    return profile


@router.post("/reset-password")
@limiter.limit(config.AUTH_RATE_LIMIT)
async def reset_password(request: Request, payload: PasswordReset):
    try:
        await auth_client.reset_password(
            str(payload.email),
            redirect_to=f"{config.PUBLIC_ORIGIN}/auth/reset-password",
        )
    except HTTPException as he:
        # Don't reveal whether the account exists
        print(f"[auth] Password reset request failed -> {he.detail}")
    return {"message": "If an account exists, a password reset link has been sent."}
