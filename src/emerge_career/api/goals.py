"""Goal CRUD, completion and AI suggestions."""

import structlog
from fastapi import APIRouter, HTTPException

from emerge_career.api.dependencies import PipelineDep, StorageDep, require_user
from emerge_career.api.schemas import GoalCreate, GoalUpdate, serialize_goal
from emerge_career.errors import GoalNotFoundError
from emerge_career.models.records import Goal
from emerge_career.services.goals import add_suggested_goals, complete_goal

logger = structlog.get_logger()
router = APIRouter(prefix="/api/goals", tags=["goals"])


@router.post("")
async def create_goal(body: GoalCreate, storage: StorageDep) -> dict:
    goal = storage.create_goal(Goal(**body.model_dump()))
    return {"success": True, "message": "Goal created successfully", "goal": serialize_goal(goal)}


@router.put("/{goal_id}")
async def update_goal(goal_id: int, body: GoalUpdate, storage: StorageDep) -> dict:
    """Apply a partial update. Marking a goal completed also levels the
    owner's progress, logs a badge activity and deletes the goal."""
    goal = storage.update_goal(goal_id, **body.model_dump(exclude_unset=True))
    if goal is None:
        raise GoalNotFoundError(goal_id)

    if body.completed is True:
        complete_goal(storage, goal)
        return {
            "success": True,
            "message": "Goal completed",
            "goal": serialize_goal(goal),
            "deleted": True,
        }
    return {"success": True, "message": "Goal updated successfully", "goal": serialize_goal(goal)}


@router.delete("/{goal_id}")
async def delete_goal(goal_id: int, storage: StorageDep) -> dict:
    if not storage.delete_goal(goal_id):
        raise GoalNotFoundError(goal_id)
    return {"success": True, "message": "Goal deleted successfully"}


@router.get("/suggest/{user_id}")
async def suggest_goal(user_id: int, storage: StorageDep, pipeline: PipelineDep) -> dict:
    """Append one suggested goal to the user's existing goals."""
    user = require_user(storage, user_id)
    if not user.subjects:
        raise HTTPException(
            status_code=400,
            detail="User profile incomplete. Please add subjects of interest.",
        )

    await add_suggested_goals(storage, pipeline, user, count=1)
    goals = storage.get_goals_by_user_id(user_id)
    return {
        "success": True,
        "message": "New goal added successfully",
        "goals": [g.title for g in goals],
    }
