from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from app.schemas.user import UserPublic


class MatchResponse(BaseModel):
    """Match details returned by API"""

    id: UUID
    user_a_id: UUID
    user_b_id: UUID
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class PotentialMatchesPage(BaseModel):
    """One page of discovery candidates (zero-based pages)"""

    content: list[UserPublic]
    page: int
    size: int
    total_elements: int
    total_pages: int
    has_next: bool

    @classmethod
    def build(
        cls, users: list, total: int, page: int, size: int
    ) -> "PotentialMatchesPage":
        total_pages = (total + size - 1) // size if size else 0
        return cls(
            content=[UserPublic.model_validate(u) for u in users],
            page=page,
            size=size,
            total_elements=total,
            total_pages=total_pages,
            has_next=page + 1 < total_pages,
        )
