from datetime import datetime
from enum import Enum
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from app.schemas.match import MatchResponse


class SwipeDecision(str, Enum):
    LIKE = "LIKE"
    PASS = "PASS"


class SwipeCreate(BaseModel):
    """Swipe on another user"""

    target_id: UUID
    # Any scalar; the swipe service rejects bad values as an invalid operation
    decision: str | int | float | bool | None


class SwipeResponse(BaseModel):
    """Recorded swipe"""

    id: UUID
    swiper_id: UUID
    target_id: UUID
    decision: SwipeDecision
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class SwipeResultResponse(BaseModel):
    """Outcome of a swipe: the stored swipe and the pair's match, if any"""

    swipe: SwipeResponse
    is_match: bool
    match_created: bool = False
    match: MatchResponse | None = None
