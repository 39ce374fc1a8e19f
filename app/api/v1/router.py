from fastapi import APIRouter

from app.api.v1.endpoints import auth, swipes, users

router = APIRouter()

router.include_router(auth.router, prefix="/auth")
router.include_router(users.router, prefix="/users")
router.include_router(swipes.router, prefix="/swipes")
