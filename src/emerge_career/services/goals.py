"""Goal workflows that touch more than one record kind."""

import structlog

from emerge_career.models.content import ProfileContext
from emerge_career.models.records import Activity, ActivityType, Goal, User
from emerge_career.services.progress import GOAL_COMPLETION_INCREMENT
from emerge_career.storage.base import Storage
from emerge_career.suggestions.pipeline import SuggestionPipeline

logger = structlog.get_logger()


async def add_suggested_goals(
    storage: Storage, pipeline: SuggestionPipeline, user: User, count: int
) -> list[Goal]:
    """Ask the pipeline for ``count`` goals and persist them for ``user``.

    Concurrent calls for the same user are not deduplicated.
    """
    profile = ProfileContext.from_user(user)
    titles = await pipeline.suggest_goals(
        profile.subjects, profile.skills or "", profile.interests or "", count
    )
    created = [storage.create_goal(Goal(user_id=user.id, title=title)) for title in titles]
    logger.info("suggested_goals_created", user_id=user.id, count=len(created))
    return created


def complete_goal(storage: Storage, goal: Goal) -> User | None:
    """Record a goal completion, then delete the goal.

    Raises the owner's progress, appends a badge activity and removes the
    goal. The writes are independent; a failure part-way leaves the earlier
    ones in place.

    Returns:
        The owner after the progress update, or None if the owner is gone.
    """
    user = storage.update_user_progress(goal.user_id, GOAL_COMPLETION_INCREMENT)
    if user is not None:
        storage.create_activity(
            Activity(
                user_id=user.id,
                type=ActivityType.BADGE.value,
                title=f"Completed goal: {goal.title}",
            )
        )
    storage.delete_goal(goal.id)
    logger.info(
        "goal_completed",
        goal_id=goal.id,
        user_id=goal.user_id,
        level=user.level if user else None,
        progress=user.progress if user else None,
    )
    return user
