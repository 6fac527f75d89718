"""Suggestion pipeline: one upstream call, structured extraction, static fallback.

Every public coroutine here returns usable content. Upstream failures
(missing credentials, network errors, malformed output) are logged and
degraded to the fallback tables; they are never raised to the caller.
There are no retries and at most one upstream call per invocation.
"""

from collections.abc import Sequence
from typing import Literal

import structlog
from pydantic import ValidationError

from emerge_career.clients.classcentral import ClassCentralClient
from emerge_career.clients.llm import TextGenerator
from emerge_career.clients.news import NewsFeedClient
from emerge_career.clients.youtube import YouTubeClient
from emerge_career.config import Settings
from emerge_career.models.content import (
    CourseSuggestion,
    ProfileContext,
    Trend,
    VideoSuggestion,
)
from emerge_career.models.records import ChatMessage
from emerge_career.suggestions import fallbacks, prompts
from emerge_career.suggestions.extraction import (
    extract_json_object,
    extract_object_list,
    extract_string_list,
)

logger = structlog.get_logger()

MAX_TRENDS = 5
LLM_TRENDS_REQUESTED = 2


class SuggestionPipeline:
    """Produces goals, courses, videos, trends and coach replies.

    Args:
        generator: Generative text client.
        youtube: Video search client.
        news: News feed client.
        classcentral: Course search client.
        course_provider: "llm" or "classcentral".
        trends_provider: "news" or "llm".
    """

    def __init__(
        self,
        generator: TextGenerator,
        youtube: YouTubeClient,
        news: NewsFeedClient,
        classcentral: ClassCentralClient,
        course_provider: Literal["llm", "classcentral"] = "llm",
        trends_provider: Literal["news", "llm"] = "news",
    ):
        self.generator = generator
        self.youtube = youtube
        self.news = news
        self.classcentral = classcentral
        self.course_provider = course_provider
        self.trends_provider = trends_provider

    @classmethod
    def from_settings(cls, settings: Settings) -> "SuggestionPipeline":
        timeout = settings.http_timeout_seconds
        return cls(
            generator=TextGenerator(
                api_key=settings.llm_api_key,
                model=settings.llm_model,
                base_url=settings.llm_base_url,
                temperature=settings.llm_temperature,
                timeout=timeout,
            ),
            youtube=YouTubeClient(api_key=settings.youtube_api_key, timeout=timeout),
            news=NewsFeedClient(timeout=timeout),
            classcentral=ClassCentralClient(timeout=timeout),
            course_provider=settings.course_provider,
            trends_provider=settings.trends_provider,
        )

    async def suggest_goals(
        self,
        subjects: Sequence[str],
        skills: str = "",
        interests: str = "",
        count: int = 1,
    ) -> list[str]:
        """Suggest up to ``count`` short, actionable goals.

        Args:
            subjects: Subjects of interest, most important first.
            skills: Free-text current skills.
            interests: Free-text interests.
            count: Maximum number of goals to return (>= 1).

        Returns:
            Goal titles extracted from the model output, or the
            subject-keyed fallback goals when nothing usable came back.
        """
        if count < 1:
            raise ValueError("count must be at least 1")
        subjects = [s for s in subjects if s and s.strip()]
        if not subjects:
            return fallbacks.fallback_goals([], count)

        prompt = prompts.build_goals_prompt(subjects, skills, interests, count)
        try:
            text = await self.generator.generate(prompt)
            goals = extract_string_list(text, count)
        except Exception:
            logger.exception("goal_suggestion_failed", subjects=subjects)
            return fallbacks.fallback_goals(subjects, count)

        if goals is None:
            logger.warning("goal_suggestion_unparseable", subjects=subjects)
            return fallbacks.fallback_goals(subjects, count)
        return goals

    async def get_course_recommendation(self, profile: ProfileContext) -> CourseSuggestion:
        """Recommend a single free course for the profile's subjects."""
        try:
            if self.course_provider == "classcentral":
                return await self.classcentral.search_course(
                    profile.primary_subject or "Career"
                )
            text = await self.generator.generate(prompts.build_course_prompt(profile))
            course = self._course_from_text(text)
        except Exception:
            logger.exception("course_recommendation_failed", provider=self.course_provider)
            return fallbacks.fallback_course(profile.subjects)

        if course is None:
            logger.warning("course_recommendation_unparseable")
            return fallbacks.fallback_course(profile.subjects)
        return course

    @staticmethod
    def _course_from_text(text: str) -> CourseSuggestion | None:
        data = extract_json_object(text)
        if not data or not data.get("title") or not data.get("description"):
            return None
        defaults = CourseSuggestion.model_fields
        return CourseSuggestion(
            title=str(data["title"]),
            description=str(data["description"]),
            duration=str(data.get("duration") or defaults["duration"].default),
            level=str(data.get("level") or defaults["level"].default),
            url=str(data.get("url") or defaults["url"].default),
        )

    async def fetch_career_trends(self, subject: str) -> list[Trend]:
        """Trending topics for careers in ``subject`` (2 to 5 items)."""
        try:
            if self.trends_provider == "llm":
                text = await self.generator.generate(
                    prompts.build_trends_prompt(subject, LLM_TRENDS_REQUESTED)
                )
                trends = self._trends_from_text(text)
            else:
                trends = await self.news.search(f"{subject} career trends", limit=MAX_TRENDS)
        except Exception:
            logger.exception("career_trends_failed", subject=subject, provider=self.trends_provider)
            return fallbacks.fallback_trends(subject)

        if not trends:
            logger.warning("career_trends_empty", subject=subject)
            return fallbacks.fallback_trends(subject)
        return trends[:MAX_TRENDS]

    @staticmethod
    def _trends_from_text(text: str) -> list[Trend]:
        trends = []
        for index, entry in enumerate(extract_object_list(text) or []):
            entry.setdefault("id", f"trend-{index}")
            entry["id"] = str(entry["id"])
            try:
                trends.append(Trend.model_validate(entry))
            except ValidationError:
                logger.debug("trend_entry_dropped", entry=entry)
        return trends

    async def get_video_recommendation(self, subject: str) -> VideoSuggestion:
        try:
            return await self.youtube.search_video(f"{subject} career guide tutorial")
        except Exception:
            logger.exception("video_recommendation_failed", subject=subject)
            return fallbacks.fallback_video(subject)

    async def get_chat_response(
        self,
        message: str,
        profile: ProfileContext,
        history: Sequence[ChatMessage] = (),
    ) -> str:
        """Reply as the career coach, with the profile and replayed history as context."""
        system = prompts.build_coach_system_prompt(profile)
        prompt = prompts.build_coach_prompt(message, list(history))
        try:
            reply = await self.generator.generate(prompt, system=system)
        except Exception:
            logger.exception("chat_response_failed")
            return fallbacks.CHAT_OFFLINE_REPLY
        return reply.strip() or fallbacks.CHAT_EMPTY_REPLY
