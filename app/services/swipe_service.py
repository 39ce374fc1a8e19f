"""Swipe recording, mutual-match detection and potential-match discovery."""

import logging
from dataclasses import dataclass
from datetime import date
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.exc import DBAPIError
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.core.exceptions import (
    ConflictError,
    InvalidDecisionError,
    SelfSwipeError,
    UserNotFoundError,
)
from app.database import dialect_insert
from app.models.match import Match
from app.models.swipe import Swipe
from app.models.user import User
from app.schemas.swipe import SwipeDecision
from app.services import match_service
from app.utils.age import birthday_window, calculate_age

logger = logging.getLogger(__name__)

# serialization_failure, deadlock_detected
RETRYABLE_SQLSTATES = {"40001", "40P01"}


@dataclass
class SwipeResult:
    swipe: Swipe
    match: Match | None = None
    match_created: bool = False

    @property
    def is_match(self) -> bool:
        return self.match is not None


def parse_decision(value: object) -> SwipeDecision:
    """Accept LIKE/PASS in any case."""
    if isinstance(value, SwipeDecision):
        return value
    if not isinstance(value, str):
        raise InvalidDecisionError(value)
    try:
        return SwipeDecision(value.strip().upper())
    except ValueError:
        raise InvalidDecisionError(value)


def _is_retryable(exc: DBAPIError) -> bool:
    orig = exc.orig
    code = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if code in RETRYABLE_SQLSTATES:
        return True
    # SQLite reports lock contention instead of serialization failures
    return "database is locked" in str(orig)


async def get_swipe(
    db: AsyncSession,
    swiper_id: UUID,
    target_id: UUID,
) -> Swipe | None:
    result = await db.execute(
        select(Swipe)
        .where(Swipe.swiper_id == swiper_id, Swipe.target_id == target_id)
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


async def get_swiped_ids(db: AsyncSession, swiper_id: UUID) -> set[UUID]:
    """Ids of every user ``swiper_id`` has swiped on, either way."""
    result = await db.execute(
        select(Swipe.target_id).where(Swipe.swiper_id == swiper_id)
    )
    return set(result.scalars().all())


async def _upsert_swipe(
    db: AsyncSession,
    swiper_id: UUID,
    target_id: UUID,
    decision: SwipeDecision,
) -> Swipe:
    """Insert the swipe or overwrite the decision of the existing one."""
    stmt = dialect_insert(db, Swipe).values(
        swiper_id=swiper_id,
        target_id=target_id,
        decision=decision.value,
    )
    stmt = stmt.on_conflict_do_update(
        index_elements=["swiper_id", "target_id"],
        set_={"decision": stmt.excluded.decision, "updated_at": func.now()},
    )
    await db.execute(stmt)
    return await get_swipe(db, swiper_id, target_id)


async def _record_swipe_once(
    db: AsyncSession,
    swiper_id: UUID,
    target_id: UUID,
    decision: SwipeDecision,
) -> SwipeResult:
    swiper = await db.get(User, swiper_id)
    if swiper is None:
        raise UserNotFoundError()

    target = await db.get(User, target_id)
    if target is None or not target.is_active:
        raise UserNotFoundError("Target user not found")

    swipe = await _upsert_swipe(db, swiper_id, target_id, decision)
    result = SwipeResult(swipe=swipe)

    if decision is SwipeDecision.LIKE:
        reciprocal = await get_swipe(db, target_id, swiper_id)
        if reciprocal is not None and reciprocal.decision == SwipeDecision.LIKE.value:
            result.match, result.match_created = await match_service.create_match(
                db, swiper_id, target_id
            )

    if result.match is None:
        # A PASS after matching does not undo the match
        result.match = await match_service.get_match_between_users(db, swiper_id, target_id)

    return result


async def record_swipe(
    db: AsyncSession,
    swiper_id: UUID,
    target_id: UUID,
    decision: object,
    max_attempts: int | None = None,
) -> SwipeResult:
    """
    Record swiper's decision on target and detect a mutual like.

    One row per (swiper, target): repeating a swipe updates the decision.
    A LIKE answered by an earlier LIKE from target creates the pair's match.
    Everything happens in one transaction; ``db`` is expected to run at
    SERIALIZABLE isolation so that opposite-direction likes racing each
    other cannot both miss the reciprocal row. Serialization failures are
    retried, and ConflictError is raised once attempts are exhausted.
    """
    decision = parse_decision(decision)
    if swiper_id == target_id:
        raise SelfSwipeError()

    attempts = max_attempts or settings.SWIPE_MAX_ATTEMPTS
    for attempt in range(1, attempts + 1):
        try:
            result = await _record_swipe_once(db, swiper_id, target_id, decision)
            await db.commit()
        except DBAPIError as e:
            await db.rollback()
            if not _is_retryable(e):
                raise
            logger.warning(
                "Swipe %s -> %s hit a serialization failure (attempt %d/%d)",
                swiper_id,
                target_id,
                attempt,
                attempts,
            )
            continue
        except Exception:
            await db.rollback()
            raise

        if result.match_created:
            logger.info("Mutual like between %s and %s", swiper_id, target_id)
        return result

    raise ConflictError()


def _potential_matches_query(user: User, reciprocal: bool, today: date):
    swiped = select(Swipe.target_id).where(Swipe.swiper_id == user.id)
    earliest, latest = birthday_window(
        user.min_age_preference, user.max_age_preference, today
    )

    conditions = [
        User.id != user.id,
        User.id.not_in(swiped),
        User.is_active.is_(True),
        User.birthday > earliest,
        User.birthday <= latest,
    ]
    if user.seeking_gender != "any":
        conditions.append(User.gender == user.seeking_gender)

    if reciprocal:
        user_age = calculate_age(user.birthday, today)
        if user.gender is None:
            conditions.append(User.seeking_gender == "any")
        else:
            conditions.append(User.seeking_gender.in_(["any", user.gender]))
        conditions.append(User.min_age_preference <= user_age)
        conditions.append(User.max_age_preference >= user_age)

    return select(User).where(*conditions)


async def get_potential_matches(
    db: AsyncSession,
    user: User,
    page: int = 0,
    size: int = 4,
    reciprocal: bool | None = None,
) -> tuple[list[User], int]:
    """
    Get a page of users ``user`` has not swiped on yet and who fit their
    preferences (and, when reciprocal filtering is on, whose preferences
    ``user`` fits). Pages are zero-based and ordered by sign-up time.
    """
    if reciprocal is None:
        reciprocal = settings.MATCH_RECIPROCAL_PREFERENCES

    query = _potential_matches_query(user, reciprocal, date.today())

    count_query = select(func.count()).select_from(query.subquery())
    total_result = await db.execute(count_query)
    total = total_result.scalar() or 0

    query = (
        query.order_by(User.created_at.asc(), User.id.asc())
        .offset(page * size)
        .limit(size)
    )
    result = await db.execute(query)
    return list(result.scalars().all()), total
