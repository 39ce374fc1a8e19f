from app.models.match import Match
from app.models.swipe import Swipe
from app.models.user import User

__all__ = [
    "User",
    "Swipe",
    "Match",
]
