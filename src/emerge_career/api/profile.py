"""Profile survey, user lookup and the dashboard aggregate."""

import secrets

import structlog
from fastapi import APIRouter

from emerge_career.api.dependencies import PipelineDep, StorageDep, require_user
from emerge_career.api.schemas import (
    SurveyRequest,
    serialize_activity,
    serialize_goal,
    serialize_recommendation,
    serialize_user,
)
from emerge_career.errors import UserNotFoundError
from emerge_career.models.records import Activity, ActivityType, Goal, User
from emerge_career.services.goals import add_suggested_goals
from emerge_career.storage.base import Storage
from emerge_career.suggestions.fallbacks import fallback_trends
from emerge_career.suggestions.pipeline import SuggestionPipeline

logger = structlog.get_logger()
router = APIRouter(prefix="/api", tags=["profile"])

INITIAL_GOAL_COUNT = 3
DASHBOARD_ACTIVITY_LIMIT = 5

DAILY_CHALLENGE = {
    "id": "daily-1",
    "title": "Complete one learning goal",
    "description": "Finish at least one of your set goals for today to earn extra XP.",
    "completed": False,
    "xp": 50,
}


def _record_activity(storage: Storage, user_id: int, title: str) -> None:
    try:
        storage.create_activity(
            Activity(user_id=user_id, type=ActivityType.LESSON.value, title=title)
        )
    except Exception:
        logger.exception("activity_create_failed", user_id=user_id, title=title)


async def _seed_goals(storage: Storage, pipeline: SuggestionPipeline, user: User) -> list[Goal]:
    if not user.subjects:
        return []
    try:
        return await add_suggested_goals(storage, pipeline, user, INITIAL_GOAL_COUNT)
    except Exception:
        logger.exception("goal_seeding_failed", user_id=user.id)
        return []


@router.post("/survey")
async def submit_survey(body: SurveyRequest, storage: StorageDep, pipeline: PipelineDep) -> dict:
    """Create a profile, or update one when ``user_id`` is given.

    New users get suggested goals and a welcome activity. Existing users
    get a profile-update activity, and suggested goals if they have none.
    """
    if body.user_id is not None:
        user = storage.update_user(body.user_id, **body.profile_fields(only_set=True))
        if user is None:
            raise UserNotFoundError(body.user_id)
        logger.info("profile_updated", user_id=user.id)
        _record_activity(storage, user.id, "Updated Career Profile")
        if not storage.get_goals_by_user_id(user.id):
            await _seed_goals(storage, pipeline, user)
        return {"success": True, "message": "Profile updated successfully", "userId": user.id}

    username = body.username
    if not username:
        base = body.email.split("@")[0] if body.email else "user"
        username = f"{base}{secrets.randbelow(10000)}"

    user = storage.create_user(
        User(username=username, password=body.password, **body.profile_fields())
    )
    logger.info("profile_created", user_id=user.id)
    await _seed_goals(storage, pipeline, user)
    _record_activity(storage, user.id, "Joined Emerge Career Platform")
    return {"success": True, "message": "Survey submitted successfully", "userId": user.id}


@router.get("/user/{user_id}")
async def get_user(user_id: int, storage: StorageDep) -> dict:
    user = require_user(storage, user_id)
    return {"success": True, "user": serialize_user(user)}


@router.get("/dashboard/{user_id}")
async def get_dashboard(user_id: int, storage: StorageDep, pipeline: PipelineDep) -> dict:
    """Everything the dashboard shows, generating goals for goal-less profiles."""
    user = require_user(storage, user_id)
    goals = storage.get_goals_by_user_id(user_id)
    activities = storage.get_activities_by_user_id(user_id)
    recommendations = storage.get_recommendations_by_user_id(user_id)

    if not goals:
        goals = await _seed_goals(storage, pipeline, user)

    subject = user.subjects[0] if user.subjects else "Career"
    return {
        "success": True,
        "user": serialize_user(user),
        "goals": [serialize_goal(g) for g in goals],
        "activities": [serialize_activity(a) for a in activities[:DASHBOARD_ACTIVITY_LIMIT]],
        "recommendations": [serialize_recommendation(r) for r in recommendations],
        "trends": [t.model_dump(exclude_none=True) for t in fallback_trends(subject)],
        "daily_challenge": dict(DAILY_CHALLENGE),
    }
