import logging
from uuid import UUID

from sqlalchemy import and_, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import ConflictError
from app.database import dialect_insert
from app.models.match import Match
from app.models.user import User

logger = logging.getLogger(__name__)


def canonical_pair(user_a_id: UUID, user_b_id: UUID) -> tuple[UUID, UUID]:
    """Order two user ids so that an unordered pair has exactly one form."""
    if user_a_id > user_b_id:
        return user_b_id, user_a_id
    return user_a_id, user_b_id


async def create_match(
    db: AsyncSession,
    user_a_id: UUID,
    user_b_id: UUID,
) -> tuple[Match, bool]:
    """
    Create the match between two users unless it already exists.

    The insert is ON CONFLICT DO NOTHING on the canonical pair, so a racing
    transaction that already inserted the row is not an error: the existing
    row is read back instead. Returns (match, created_by_this_call).
    Does not commit.
    """
    user_a_id, user_b_id = canonical_pair(user_a_id, user_b_id)

    stmt = dialect_insert(db, Match).values(user_a_id=user_a_id, user_b_id=user_b_id)
    stmt = stmt.on_conflict_do_nothing(index_elements=["user_a_id", "user_b_id"])
    result = await db.execute(stmt.returning(Match.id))
    created = result.scalar_one_or_none() is not None

    match = await get_match_between_users(db, user_a_id, user_b_id)
    if match is None:
        raise ConflictError("Match state changed concurrently, please retry")

    if created:
        logger.info("Match %s created between %s and %s", match.id, user_a_id, user_b_id)
    return match, created


async def get_match_between_users(
    db: AsyncSession,
    user_a_id: UUID,
    user_b_id: UUID,
) -> Match | None:
    """Get the match between two users, in either order, if it exists."""
    user_a_id, user_b_id = canonical_pair(user_a_id, user_b_id)

    result = await db.execute(
        select(Match)
        .where(
            and_(
                Match.user_a_id == user_a_id,
                Match.user_b_id == user_b_id,
            )
        )
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


async def get_user_matches(
    db: AsyncSession,
    user_id: UUID,
    page: int = 0,
    size: int = 20,
) -> tuple[list[Match], int]:
    """Get all matches a user takes part in, newest first."""
    query = select(Match).where(
        or_(Match.user_a_id == user_id, Match.user_b_id == user_id)
    )

    # Get total count
    count_query = select(func.count()).select_from(query.subquery())
    total_result = await db.execute(count_query)
    total = total_result.scalar() or 0

    query = (
        query.order_by(Match.created_at.desc(), Match.id)
        .offset(page * size)
        .limit(size)
    )
    result = await db.execute(query)
    matches = list(result.scalars().all())

    return matches, total


async def get_matched_users(
    db: AsyncSession,
    user_id: UUID,
    page: int = 0,
    size: int = 100,
) -> list[User]:
    """The counterpart user of every match ``user_id`` is part of, newest match first."""
    query = (
        select(User)
        .join(
            Match,
            or_(
                and_(Match.user_a_id == user_id, Match.user_b_id == User.id),
                and_(Match.user_b_id == user_id, Match.user_a_id == User.id),
            ),
        )
        .order_by(Match.created_at.desc(), Match.id)
        .offset(page * size)
        .limit(size)
    )
    result = await db.execute(query)
    return list(result.scalars().all())
