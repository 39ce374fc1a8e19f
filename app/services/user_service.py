import logging
from uuid import UUID

from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import AlreadyExistsError, ValidationError
from app.core.security import hash_password, verify_password
from app.models.user import User
from app.schemas.user import UserCreate, UserUpdate

logger = logging.getLogger(__name__)


async def get_user_by_id(db: AsyncSession, user_id: UUID) -> User | None:
    result = await db.execute(select(User).where(User.id == user_id))
    return result.scalar_one_or_none()


async def get_user_by_email(db: AsyncSession, email: str) -> User | None:
    result = await db.execute(select(User).where(User.email == email.lower()))
    return result.scalar_one_or_none()


async def get_user_by_username(db: AsyncSession, username: str) -> User | None:
    result = await db.execute(select(User).where(User.username == username))
    return result.scalar_one_or_none()


async def create_user(db: AsyncSession, data: UserCreate) -> User:
    """Create a new account. Email and username must be unused."""
    existing = await db.execute(
        select(User).where(
            or_(User.email == data.email.lower(), User.username == data.username)
        )
    )
    for user in existing.scalars():
        if user.email == data.email.lower():
            raise AlreadyExistsError("Email already registered", field="email")
        raise AlreadyExistsError("Username already taken", field="username")

    user_data = data.model_dump(exclude={"password"})
    for key, value in user_data.items():
        if hasattr(value, "value"):
            user_data[key] = value.value
    user_data["email"] = data.email.lower()

    user = User(password_hash=hash_password(data.password), **user_data)
    db.add(user)
    try:
        await db.commit()
    except IntegrityError:
        # Lost a race against a concurrent registration
        await db.rollback()
        raise AlreadyExistsError("Email or username already registered")
    await db.refresh(user)

    logger.info("Registered user %s", user.id)
    return user


async def authenticate_user(db: AsyncSession, email: str, password: str) -> User | None:
    user = await get_user_by_email(db, email)
    if user is None or not user.is_active:
        return None
    if not verify_password(password, user.password_hash):
        return None
    return user


async def update_user(db: AsyncSession, user: User, data: UserUpdate) -> User:
    """Update profile and discovery preferences. Only provided fields change."""
    update_data = data.model_dump(exclude_unset=True)

    for key, value in update_data.items():
        if hasattr(value, "value"):
            update_data[key] = value.value

    min_age = update_data.get("min_age_preference", user.min_age_preference)
    max_age = update_data.get("max_age_preference", user.max_age_preference)
    if min_age is None or max_age is None:
        raise ValidationError("Age preferences cannot be cleared", field="min_age_preference")
    if min_age > max_age:
        raise ValidationError(
            "min_age_preference cannot exceed max_age_preference",
            field="min_age_preference",
        )
    if update_data.get("seeking_gender", user.seeking_gender) is None:
        raise ValidationError("seeking_gender cannot be cleared", field="seeking_gender")

    new_username = update_data.get("username")
    if new_username and new_username != user.username:
        if await get_user_by_username(db, new_username):
            raise AlreadyExistsError("Username already taken", field="username")
    elif "username" in update_data and new_username is None:
        update_data.pop("username")

    for field, value in update_data.items():
        setattr(user, field, value)

    await db.commit()
    await db.refresh(user)
    return user
