"""
Public user profiles.

The route is named `user`, which gives the host a `user_path` helper.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from townsquare.database import get_db
from townsquare.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["Users"])


@router.get("/{user_id}", name="user")
async def user_profile(user_id: str, db: AsyncSession = Depends(get_db)):
    user = await UserService(db).get_by_id(user_id)

    if user is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found"
        )

    return {
        "id": user.id,
        "username": user.username,
        "name": user.name,
        "avatar_url": user.avatar_url,
        "admin": user.admin
    }
