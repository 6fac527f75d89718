"""Registration and login (plaintext credential check)."""

import structlog
from fastapi import APIRouter, HTTPException

from emerge_career.api.dependencies import StorageDep
from emerge_career.api.schemas import Credentials
from emerge_career.errors import DuplicateUsernameError
from emerge_career.models.records import ThinkingStyle, User, utcnow
from emerge_career.services.streak import next_streak

logger = structlog.get_logger()
router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/register")
async def register(body: Credentials, storage: StorageDep) -> dict:
    """Create an account whose username is the email address."""
    try:
        user = storage.create_user(
            User(
                username=body.email,
                password=body.password,
                email=body.email,
                subjects=[],
                interests="",
                skills="",
                goal="",
                thinking_style=ThinkingStyle.PLAN.value,
            )
        )
    except DuplicateUsernameError:
        raise HTTPException(status_code=400, detail="Email already registered")
    logger.info("user_registered", user_id=user.id)
    return {"success": True, "message": "Registration successful", "userId": user.id}


@router.post("/login")
async def login(body: Credentials, storage: StorageDep) -> dict:
    """Check credentials and advance the daily login streak."""
    user = storage.get_user_by_username(body.email)
    if user is None or user.password != body.password:
        raise HTTPException(status_code=401, detail="Invalid email or password")

    now = utcnow()
    streak = next_streak(user.streak_days, user.last_login_date, now)
    if streak is not None:
        user = storage.update_user(user.id, streak_days=streak, last_login_date=now) or user

    logger.info("user_logged_in", user_id=user.id, streak_days=user.streak_days)
    return {
        "success": True,
        "message": "Login successful",
        "userId": user.id,
        "hasProfile": user.has_profile,
    }


@router.post("/logout")
async def logout() -> dict:
    return {"success": True, "message": "Logged out successfully"}
