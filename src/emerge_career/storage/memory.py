"""Dict-backed storage used by tests and when no database is configured."""

import itertools
from collections.abc import Iterator
from typing import Any

import structlog

from emerge_career.errors import DuplicateUsernameError, UserNotFoundError
from emerge_career.models.records import (
    Activity,
    ChatMessage,
    Goal,
    Recommendation,
    User,
    utcnow,
)
from emerge_career.services.progress import apply_progress
from emerge_career.storage.base import Storage, updatable_fields

logger = structlog.get_logger()


class InMemoryStorage(Storage):
    """Keeps every record in per-kind dicts keyed by id.

    Ids are assigned from one counter per record kind, starting at 1.
    """

    def __init__(self) -> None:
        self._users: dict[int, User] = {}
        self._goals: dict[int, Goal] = {}
        self._activities: dict[int, Activity] = {}
        self._messages: dict[int, ChatMessage] = {}
        self._recommendations: dict[int, Recommendation] = {}
        self._ids: dict[str, Iterator[int]] = {
            kind: itertools.count(1)
            for kind in ("user", "goal", "activity", "message", "recommendation")
        }

    def _require_user(self, user_id: int) -> None:
        if user_id not in self._users:
            raise UserNotFoundError(user_id)

    # Users

    def get_user(self, user_id: int) -> User | None:
        return self._users.get(user_id)

    def get_user_by_username(self, username: str) -> User | None:
        return next((u for u in self._users.values() if u.username == username), None)

    def create_user(self, user: User) -> User:
        if self.get_user_by_username(user.username) is not None:
            raise DuplicateUsernameError(user.username)
        user.id = next(self._ids["user"])
        self._users[user.id] = user
        logger.debug("user_created", user_id=user.id)
        return user

    def update_user(self, user_id: int, **changes: Any) -> User | None:
        user = self._users.get(user_id)
        if user is None:
            return None
        for key, value in updatable_fields(User, changes).items():
            setattr(user, key, value)
        user.updated_at = utcnow()
        return user

    def update_user_progress(self, user_id: int, increment: int) -> User | None:
        user = self._users.get(user_id)
        if user is None:
            return None
        level, progress = apply_progress(user.level, user.progress, increment)
        return self.update_user(user_id, level=level, progress=progress)

    # Goals

    def get_goal(self, goal_id: int) -> Goal | None:
        return self._goals.get(goal_id)

    def get_goals_by_user_id(self, user_id: int) -> list[Goal]:
        return [g for g in self._goals.values() if g.user_id == user_id]

    def create_goal(self, goal: Goal) -> Goal:
        self._require_user(goal.user_id)
        goal.id = next(self._ids["goal"])
        self._goals[goal.id] = goal
        return goal

    def update_goal(self, goal_id: int, **changes: Any) -> Goal | None:
        goal = self._goals.get(goal_id)
        if goal is None:
            return None
        for key, value in updatable_fields(Goal, changes).items():
            setattr(goal, key, value)
        goal.updated_at = utcnow()
        return goal

    def delete_goal(self, goal_id: int) -> bool:
        return self._goals.pop(goal_id, None) is not None

    def clear_user_goals(self, user_id: int) -> None:
        for goal_id in [g.id for g in self.get_goals_by_user_id(user_id)]:
            del self._goals[goal_id]

    # Activities

    def get_activities_by_user_id(self, user_id: int) -> list[Activity]:
        activities = [a for a in self._activities.values() if a.user_id == user_id]
        return sorted(activities, key=lambda a: (a.time, a.id), reverse=True)

    def create_activity(self, activity: Activity) -> Activity:
        self._require_user(activity.user_id)
        activity.id = next(self._ids["activity"])
        self._activities[activity.id] = activity
        return activity

    # Chat history

    def get_chat_history_by_user_id(self, user_id: int) -> list[ChatMessage]:
        messages = [m for m in self._messages.values() if m.user_id == user_id]
        return sorted(messages, key=lambda m: (m.timestamp, m.id))

    def create_chat_message(self, message: ChatMessage) -> ChatMessage:
        self._require_user(message.user_id)
        message.id = next(self._ids["message"])
        self._messages[message.id] = message
        return message

    # Recommendations

    def get_recommendations_by_user_id(
        self, user_id: int, type: str | None = None
    ) -> list[Recommendation]:
        recs = [
            r
            for r in self._recommendations.values()
            if r.user_id == user_id and (type is None or r.type == type)
        ]
        return sorted(recs, key=lambda r: (r.created_at, r.id), reverse=True)

    def create_recommendation(self, recommendation: Recommendation) -> Recommendation:
        self._require_user(recommendation.user_id)
        recommendation.id = next(self._ids["recommendation"])
        self._recommendations[recommendation.id] = recommendation
        return recommendation

    def delete_recommendation(self, recommendation_id: int) -> bool:
        return self._recommendations.pop(recommendation_id, None) is not None
