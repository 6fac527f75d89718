"""Normalized shapes returned by the suggestion pipeline."""

from typing import Literal

from pydantic import BaseModel, Field

from emerge_career.models.records import User


class CourseSuggestion(BaseModel):
    title: str
    description: str
    duration: str = "4 weeks"
    level: str = "Beginner"
    url: str = "https://www.coursera.org/"
    platform: str | None = None


class VideoSuggestion(BaseModel):
    title: str
    description: str
    url: str
    thumbnail_url: str | None = None
    channel_title: str | None = None


class TrendMetrics(BaseModel):
    like_count: int = 0
    retweet_count: int = 0
    reply_count: int = 0


class Trend(BaseModel):
    """A trending topic or news item relevant to a subject's careers."""

    id: str
    title: str
    description: str
    url: str
    type: Literal["article", "post"] = "article"
    metrics: TrendMetrics | None = None


class ProfileContext(BaseModel):
    """The slice of a user profile that prompts are built from."""

    name: str | None = None
    username: str | None = None
    subjects: list[str] = Field(default_factory=list)
    skills: str | None = None
    interests: str | None = None
    goal: str | None = None
    thinking_style: str | None = None

    @classmethod
    def from_user(cls, user: User) -> "ProfileContext":
        return cls(
            name=user.name,
            username=user.username,
            subjects=list(user.subjects or []),
            skills=user.skills,
            interests=user.interests,
            goal=user.goal,
            thinking_style=user.thinking_style,
        )

    @property
    def primary_subject(self) -> str | None:
        return self.subjects[0] if self.subjects else None
