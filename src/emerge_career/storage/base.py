"""Persistence interface shared by the in-memory and relational backends."""

from abc import ABC, abstractmethod
from typing import Any

from emerge_career.models.records import (
    Activity,
    ChatMessage,
    Goal,
    Recommendation,
    User,
)

# Fields no update may overwrite
IMMUTABLE_FIELDS = frozenset({"id", "user_id", "created_at"})


def updatable_fields(model: type, changes: dict[str, Any]) -> dict[str, Any]:
    """Drop unknown and immutable keys from an update payload."""
    known = model.model_fields
    return {
        key: value
        for key, value in changes.items()
        if key in known and key not in IMMUTABLE_FIELDS
    }


class Storage(ABC):
    """CRUD surface over users, goals, activities, chat messages and recommendations.

    Getters and updates return the stored record or None when it does not
    exist. Every update refreshes ``updated_at`` where the record has one.
    Creating a child record for an unknown user raises UserNotFoundError.
    No operation spans more than one entity in a transaction.
    """

    # Users

    @abstractmethod
    def get_user(self, user_id: int) -> User | None: ...

    @abstractmethod
    def get_user_by_username(self, username: str) -> User | None: ...

    @abstractmethod
    def create_user(self, user: User) -> User:
        """Persist a new user; raises DuplicateUsernameError if the name is taken."""

    @abstractmethod
    def update_user(self, user_id: int, **changes: Any) -> User | None: ...

    @abstractmethod
    def update_user_progress(self, user_id: int, increment: int) -> User | None:
        """Add ``increment`` to the user's progress, levelling up at 100."""

    # Goals

    @abstractmethod
    def get_goal(self, goal_id: int) -> Goal | None: ...

    @abstractmethod
    def get_goals_by_user_id(self, user_id: int) -> list[Goal]: ...

    @abstractmethod
    def create_goal(self, goal: Goal) -> Goal: ...

    @abstractmethod
    def update_goal(self, goal_id: int, **changes: Any) -> Goal | None: ...

    @abstractmethod
    def delete_goal(self, goal_id: int) -> bool: ...

    @abstractmethod
    def clear_user_goals(self, user_id: int) -> None: ...

    # Activities

    @abstractmethod
    def get_activities_by_user_id(self, user_id: int) -> list[Activity]:
        """Newest first."""

    @abstractmethod
    def create_activity(self, activity: Activity) -> Activity: ...

    # Chat history

    @abstractmethod
    def get_chat_history_by_user_id(self, user_id: int) -> list[ChatMessage]:
        """Oldest first."""

    @abstractmethod
    def create_chat_message(self, message: ChatMessage) -> ChatMessage: ...

    # Recommendations

    @abstractmethod
    def get_recommendations_by_user_id(
        self, user_id: int, type: str | None = None
    ) -> list[Recommendation]:
        """Newest first, optionally restricted to one recommendation type."""

    @abstractmethod
    def create_recommendation(self, recommendation: Recommendation) -> Recommendation: ...

    @abstractmethod
    def delete_recommendation(self, recommendation_id: int) -> bool: ...
