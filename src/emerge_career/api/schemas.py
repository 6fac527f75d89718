"""Request bodies and response serializers for the JSON API."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from emerge_career.models.content import CourseSuggestion, VideoSuggestion
from emerge_career.models.records import (
    Activity,
    ActivityType,
    ChatMessage,
    Goal,
    Recommendation,
    Sender,
    ThinkingStyle,
    User,
)

# Requests


class Credentials(BaseModel):
    email: str = Field(min_length=1)
    password: str = Field(min_length=1)


class SurveyRequest(BaseModel):
    """Profile survey; ``user_id`` selects update instead of create."""

    user_id: int | None = None
    username: str | None = None
    password: str = "password123"
    name: str | None = None
    email: str | None = None
    avatar: str | None = None
    subjects: list[str] = Field(default_factory=list)
    interests: str = ""
    skills: str = ""
    goal: str = ""
    thinking_style: ThinkingStyle = ThinkingStyle.PLAN
    extra_info: str = ""

    def profile_fields(self, only_set: bool = False) -> dict[str, Any]:
        """Profile columns from the survey; ``only_set`` keeps fields the client sent."""
        fields = {
            "name": self.name,
            "email": self.email,
            "avatar": self.avatar,
            "subjects": [s.strip() for s in self.subjects if s.strip()],
            "interests": self.interests,
            "skills": self.skills,
            "goal": self.goal,
            "thinking_style": self.thinking_style.value,
            "extra_info": self.extra_info,
        }
        if only_set:
            return {k: v for k, v in fields.items() if k in self.model_fields_set}
        return fields


class GoalCreate(BaseModel):
    user_id: int
    title: str = Field(min_length=1)
    completed: bool = False
    progress: int = Field(default=0, ge=0, le=100)


class GoalUpdate(BaseModel):
    """Partial goal update. Omitted fields are left alone; null is rejected."""

    title: str | None = Field(default=None, min_length=1)
    completed: bool | None = None
    progress: int | None = Field(default=None, ge=0, le=100)

    @field_validator("title", "completed", "progress")
    @classmethod
    def _not_null(cls, value: Any) -> Any:
        if value is None:
            raise ValueError("must not be null")
        return value


class ActivityCreate(BaseModel):
    user_id: int
    type: ActivityType
    title: str = Field(min_length=1)
    is_recent: bool = True


class ChatCreate(BaseModel):
    user_id: int
    message: str = Field(min_length=1)
    sender: Sender


class LegacyUserData(BaseModel):
    """Profile object older clients send; only its id is read."""

    model_config = ConfigDict(extra="allow")

    id: int | None = None


class CoachRequest(BaseModel):
    """Career-coach turn. Older clients send the profile as ``userData``."""

    message: str = Field(min_length=1)
    user_id: int | None = None
    userData: LegacyUserData | None = None

    @model_validator(mode="after")
    def _resolve_user_id(self) -> "CoachRequest":
        if self.user_id is None and self.userData is not None:
            self.user_id = self.userData.id
        if self.user_id is None:
            raise ValueError("User data is required")
        return self


# Responses


def serialize_user(user: User) -> dict[str, Any]:
    return {
        "id": user.id,
        "name": user.name,
        "username": user.username,
        "email": user.email,
        "avatar": user.avatar,
        "subjects": user.subjects or [],
        "interests": user.interests,
        "skills": user.skills,
        "goal": user.goal,
        "thinking_style": user.thinking_style,
        "extra_info": user.extra_info,
        "level": user.level,
        "progress": user.progress,
        "streak_days": user.streak_days or 0,
        "hasProfile": user.has_profile,
    }


def serialize_goal(goal: Goal) -> dict[str, Any]:
    return {
        "id": str(goal.id),
        "user_id": goal.user_id,
        "title": goal.title,
        "completed": goal.completed,
        "progress": goal.progress,
    }


def serialize_activity(activity: Activity) -> dict[str, Any]:
    return {
        "id": str(activity.id),
        "type": activity.type,
        "title": activity.title,
        "time": activity.time.isoformat(),
        "isRecent": activity.is_recent,
    }


def serialize_message(message: ChatMessage) -> dict[str, Any]:
    return {
        "id": message.id,
        "message": message.message,
        "sender": message.sender,
        "timestamp": message.timestamp.isoformat(),
    }


def serialize_recommendation(rec: Recommendation) -> dict[str, Any]:
    return {
        "id": str(rec.id),
        "type": rec.type,
        "title": rec.title,
        "description": rec.description or "",
        "url": rec.url,
        "metadata": rec.meta or {},
    }


def serialize_video(video: VideoSuggestion) -> dict[str, Any]:
    return {
        "title": video.title,
        "description": video.description,
        "url": video.url,
        "thumbnailUrl": video.thumbnail_url or "",
        "channelTitle": video.channel_title or "",
    }


def serialize_course(course: CourseSuggestion) -> dict[str, Any]:
    return {
        "title": course.title,
        "description": course.description,
        "url": course.url,
        "duration": course.duration,
        "level": course.level,
    }
