"""Persisted record types.

These SQLModel tables back the relational storage backend; the in-memory
backend stores the same classes so both backends hand out identical shapes.
"""

from datetime import datetime, timezone
from enum import StrEnum
from typing import Any

from sqlalchemy import JSON, Column
from sqlmodel import Field, SQLModel


def utcnow() -> datetime:
    """Timezone-aware current time; every stored timestamp is UTC."""
    return datetime.now(timezone.utc)


class ThinkingStyle(StrEnum):
    """How the user prefers to approach their work."""

    PLAN = "Plan"
    FLOW = "Flow"


class ActivityType(StrEnum):
    LESSON = "lesson"
    BADGE = "badge"
    COURSE = "course"


class Sender(StrEnum):
    USER = "user"
    BOT = "bot"


class RecommendationType(StrEnum):
    COURSE = "course"
    VIDEO = "video"


class User(SQLModel, table=True):
    __tablename__ = "users"

    id: int | None = Field(default=None, primary_key=True)
    username: str = Field(index=True, unique=True, nullable=False)
    password: str = Field(nullable=False)
    name: str | None = None
    email: str | None = None
    avatar: str | None = None
    # ordered; the first subject drives video, course and trend lookups
    subjects: list[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    interests: str | None = None
    skills: str | None = None
    goal: str | None = None
    thinking_style: str = Field(default=ThinkingStyle.PLAN.value)
    extra_info: str | None = None
    level: int = Field(default=1)
    progress: int = Field(default=0)
    streak_days: int = Field(default=0)
    last_login_date: datetime | None = None
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @property
    def has_profile(self) -> bool:
        return bool(self.subjects and self.interests)


class Goal(SQLModel, table=True):
    __tablename__ = "goals"

    id: int | None = Field(default=None, primary_key=True)
    user_id: int = Field(index=True, foreign_key="users.id")
    title: str = Field(nullable=False)
    completed: bool = Field(default=False)
    progress: int = Field(default=0)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


class Activity(SQLModel, table=True):
    __tablename__ = "activities"

    id: int | None = Field(default=None, primary_key=True)
    user_id: int = Field(index=True, foreign_key="users.id")
    type: str = Field(nullable=False)
    title: str = Field(nullable=False)
    time: datetime = Field(default_factory=utcnow)
    is_recent: bool = Field(default=True)


class ChatMessage(SQLModel, table=True):
    __tablename__ = "chat_history"

    id: int | None = Field(default=None, primary_key=True)
    user_id: int = Field(index=True, foreign_key="users.id")
    message: str = Field(nullable=False)
    sender: str = Field(nullable=False)
    timestamp: datetime = Field(default_factory=utcnow)


class Recommendation(SQLModel, table=True):
    __tablename__ = "recommendations"

    id: int | None = Field(default=None, primary_key=True)
    user_id: int = Field(index=True, foreign_key="users.id")
    type: str = Field(nullable=False)
    title: str = Field(nullable=False)
    description: str | None = None
    url: str = Field(nullable=False)
    # "metadata" is reserved on declarative classes, so the attribute differs from the column
    meta: dict[str, Any] = Field(default_factory=dict, sa_column=Column("metadata", JSON))
    created_at: datetime = Field(default_factory=utcnow)
