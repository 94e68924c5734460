"""API routes."""

from fastapi import APIRouter

from app.api.routes import auth, health, tasks, users

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(users.router, prefix="/protected/user", tags=["users"])
router.include_router(tasks.router, prefix="/protected/task", tags=["tasks"])
