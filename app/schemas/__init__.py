from app.schemas.match import MatchResponse, PotentialMatchesPage
from app.schemas.swipe import (
    SwipeCreate,
    SwipeDecision,
    SwipeResponse,
    SwipeResultResponse,
)
from app.schemas.user import (
    Gender,
    SeekingGender,
    Token,
    TokenPayload,
    UserCreate,
    UserPublic,
    UserResponse,
    UserUpdate,
)

__all__ = [
    "UserCreate",
    "UserUpdate",
    "UserResponse",
    "UserPublic",
    "Gender",
    "SeekingGender",
    "Token",
    "TokenPayload",
    "MatchResponse",
    "PotentialMatchesPage",
    "SwipeCreate",
    "SwipeDecision",
    "SwipeResponse",
    "SwipeResultResponse",
]
