# app/routes/admin_users_routes.py
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_async_session
from app.deps.admin import require_admin
from app.schemas.user_schemas import ProfileOut, UserListResponse, UserRoleOut
from app.utils.profile_utils import get_user_role, list_all_users, make_user_admin

router = APIRouter(
    prefix="/api/admin/users",
    tags=["admin-users"],
    dependencies=[Depends(require_admin)],
)


@router.get("", response_model=UserListResponse)
async def list_users(db: AsyncSession = Depends(get_async_session)):
    return {"users": await list_all_users(db)}


@router.get("/{user_id}/role", response_model=UserRoleOut)
async def user_role(user_id: str, db: AsyncSession = Depends(get_async_session)):
    role = await get_user_role(db, user_id)
    if role is None:
        raise HTTPException(status_code=404, detail="User not found")
    return UserRoleOut(id=user_id, role=role)


@router.post("/{user_id}/make-admin", response_model=ProfileOut)
async def promote_user(user_id: str, db: AsyncSession = Depends(get_async_session)):
    user = await make_user_admin(db, user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    print(f"[admin] {user_id} is now admin")
    return user
