from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.v1.endpoints.auth import get_current_user
from app.config import settings
from app.database import get_db, get_serializable_db
from app.models.user import User
from app.schemas.match import MatchResponse, PotentialMatchesPage
from app.schemas.swipe import SwipeCreate, SwipeResponse, SwipeResultResponse
from app.schemas.user import UserPublic
from app.services import match_service, swipe_service

router = APIRouter(prefix="", tags=["swipes"])


@router.post("", response_model=SwipeResultResponse)
async def create_swipe(
    data: SwipeCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_serializable_db)],
) -> SwipeResultResponse:
    """
    Like or pass on another user.

    - decision: LIKE or PASS (case-insensitive)
    - Swiping the same user again replaces the earlier decision
    - A LIKE answering an earlier LIKE creates a match
    """
    result = await swipe_service.record_swipe(
        db, current_user.id, data.target_id, data.decision
    )

    return SwipeResultResponse(
        swipe=SwipeResponse.model_validate(result.swipe),
        is_match=result.is_match,
        match_created=result.match_created,
        match=MatchResponse.model_validate(result.match) if result.match else None,
    )


@router.get("/potential-matches", response_model=PotentialMatchesPage)
async def get_potential_matches(
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
    page: int = Query(0, ge=0, le=settings.MAX_PAGE_NUMBER),
    size: int = Query(settings.POTENTIAL_MATCHES_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
) -> PotentialMatchesPage:
    """
    Users you have not swiped on yet that fit your preferences.

    Excludes yourself and everyone you already liked or passed.
    """
    users, total = await swipe_service.get_potential_matches(db, current_user, page, size)
    return PotentialMatchesPage.build(users, total, page, size)


@router.get("/matches", response_model=list[UserPublic])
async def get_matches(
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
    page: int = Query(0, ge=0, le=settings.MAX_PAGE_NUMBER),
    size: int = Query(settings.MATCHES_PAGE_SIZE, ge=1, le=settings.MATCHES_PAGE_SIZE),
) -> list[UserPublic]:
    """Everyone you matched with, newest match first."""
    users = await match_service.get_matched_users(db, current_user.id, page, size)
    return [UserPublic.model_validate(u) for u in users]
