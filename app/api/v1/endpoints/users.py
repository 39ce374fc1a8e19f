from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.v1.endpoints.auth import get_current_user
from app.core.exceptions import UserNotFoundError
from app.database import get_db
from app.models.user import User
from app.schemas.user import UserPublic, UserResponse, UserUpdate
from app.services import user_service

router = APIRouter(prefix="", tags=["users"])


@router.get("", response_model=UserResponse)
async def get_session_user(
    current_user: Annotated[User, Depends(get_current_user)],
) -> UserResponse:
    """Get the user behind the current session."""
    return UserResponse.model_validate(current_user)


@router.patch("", response_model=UserResponse)
async def update_session_user(
    data: UserUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> UserResponse:
    """
    Update profile fields and discovery preferences.

    Preferences drive /swipes/potential-matches:
    - seeking_gender: male, female, other or any
    - min_age_preference / max_age_preference: accepted age window
    """
    user = await user_service.update_user(db, current_user, data)
    return UserResponse.model_validate(user)


@router.get("/{user_id}", response_model=UserPublic)
async def get_user(
    user_id: UUID,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> UserPublic:
    """Public view of another user."""
    user = await user_service.get_user_by_id(db, user_id)
    if user is None or not user.is_active:
        raise UserNotFoundError()
    return UserPublic.model_validate(user)
