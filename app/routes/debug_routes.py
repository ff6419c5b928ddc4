# app/routes/debug_routes.py
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app import config
from app.database import get_async_session
from app.schemas.user_schemas import MakeAdminIn
from app.utils.profile_utils import make_user_admin


async def _debug_enabled():
    # Resolved before the body is parsed, so a disabled route looks absent
    if not config.ENABLE_DEBUG_ROUTES:
        raise HTTPException(status_code=404, detail="Not Found")


router = APIRouter(
    prefix="/api/debug",
    tags=["debug"],
    dependencies=[Depends(_debug_enabled)],
)


@router.post("/make-admin")
async def debug_make_admin(payload: MakeAdminIn, db: AsyncSession = Depends(get_async_session)):
    # No auth on this route; it only exists when explicitly switched on
    if not payload.userId:
        raise HTTPException(status_code=400, detail="User ID required")

    try:
        user = await make_user_admin(db, payload.userId)
    except SQLAlchemyError as e:
        await db.rollback()
        print(f"[debug] Error making user admin: {e!r}")
        raise HTTPException(status_code=500, detail="Failed to update user role")

    if not user:
        raise HTTPException(status_code=404, detail="User not found")

    print(f"[debug] {payload.userId} is now admin")
    return {"success": True, "message": "User is now admin"}
