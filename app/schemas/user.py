from datetime import date, datetime
from enum import Enum
from uuid import UUID

from pydantic import (
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    computed_field,
    field_validator,
    model_validator,
)

from app.utils.age import calculate_age

MIN_AGE = 18
MAX_AGE = 120


class Gender(str, Enum):
    male = "male"
    female = "female"
    other = "other"


class SeekingGender(str, Enum):
    male = "male"
    female = "female"
    other = "other"
    any = "any"


class UserCreate(BaseModel):
    email: EmailStr
    username: str = Field(..., min_length=3, max_length=50, pattern=r"^[A-Za-z0-9_.]+$")
    password: str = Field(..., min_length=8, max_length=72)
    birthday: date
    gender: Gender | None = None
    seeking_gender: SeekingGender = SeekingGender.any
    min_age_preference: int = Field(MIN_AGE, ge=MIN_AGE, le=MAX_AGE)
    max_age_preference: int = Field(99, ge=MIN_AGE, le=MAX_AGE)
    bio: str | None = Field(None, max_length=1000)
    image_url: str | None = Field(None, max_length=500)
    city: str | None = Field(None, max_length=200)
    country: str | None = Field(None, max_length=100)

    @field_validator("birthday")
    @classmethod
    def must_be_adult(cls, v: date) -> date:
        if calculate_age(v) < MIN_AGE:
            raise ValueError(f"You must be at least {MIN_AGE} years old")
        return v

    @model_validator(mode="after")
    def check_age_window(self) -> "UserCreate":
        if self.min_age_preference > self.max_age_preference:
            raise ValueError("min_age_preference cannot exceed max_age_preference")
        return self


class UserUpdate(BaseModel):
    """Partial update of the session user. Only provided fields change."""

    username: str | None = Field(None, min_length=3, max_length=50, pattern=r"^[A-Za-z0-9_.]+$")
    gender: Gender | None = None
    seeking_gender: SeekingGender | None = None
    min_age_preference: int | None = Field(None, ge=MIN_AGE, le=MAX_AGE)
    max_age_preference: int | None = Field(None, ge=MIN_AGE, le=MAX_AGE)
    bio: str | None = Field(None, max_length=1000)
    image_url: str | None = Field(None, max_length=500)
    city: str | None = Field(None, max_length=200)
    country: str | None = Field(None, max_length=100)


class UserPublic(BaseModel):
    """What other users get to see: discovery cards, matches"""

    id: UUID
    username: str
    birthday: date = Field(exclude=True)
    gender: str | None
    bio: str | None
    image_url: str | None
    city: str | None
    country: str | None

    model_config = ConfigDict(from_attributes=True)

    @computed_field
    @property
    def age(self) -> int:
        return calculate_age(self.birthday)


class UserResponse(BaseModel):
    """Session user, including account details and preferences"""

    id: UUID
    email: str
    username: str
    birthday: date
    gender: str | None
    seeking_gender: str
    min_age_preference: int
    max_age_preference: int
    bio: str | None
    image_url: str | None
    city: str | None
    country: str | None
    is_active: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_at: datetime


class TokenPayload(BaseModel):
    sub: str
    exp: int
