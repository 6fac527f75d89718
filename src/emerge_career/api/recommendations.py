"""Video and course recommendations and career trend feeds."""

import structlog
from fastapi import APIRouter

from emerge_career.api.dependencies import PipelineDep, StorageDep
from emerge_career.api.schemas import serialize_course, serialize_video
from emerge_career.errors import NotFoundError
from emerge_career.models.content import ProfileContext
from emerge_career.models.records import Recommendation, RecommendationType

logger = structlog.get_logger()
router = APIRouter(prefix="/api", tags=["recommendations"])


@router.get("/personalized-recommendations/{user_id}")
async def personalized_video(user_id: int, storage: StorageDep, pipeline: PipelineDep) -> dict:
    """Fetch a fresh video for the user's first subject and store it."""
    user = storage.get_user(user_id)
    if user is None or not user.subjects:
        raise NotFoundError("User or subjects not found")

    video = await pipeline.get_video_recommendation(user.subjects[0])
    storage.create_recommendation(
        Recommendation(
            user_id=user.id,
            type=RecommendationType.VIDEO.value,
            title=video.title,
            description=video.description,
            url=video.url,
            meta={
                "thumbnailUrl": video.thumbnail_url or "",
                "channelTitle": video.channel_title or "",
            },
        )
    )
    return {"success": True, "data": {"video": serialize_video(video)}}


@router.get("/course-recommendation/{user_id}")
async def course_recommendation(user_id: int, storage: StorageDep, pipeline: PipelineDep) -> dict:
    """Newest stored course for the user, otherwise a new one (then stored)."""
    user = storage.get_user(user_id)
    if user is None:
        raise NotFoundError("User not found")

    stored = storage.get_recommendations_by_user_id(user_id, RecommendationType.COURSE.value)
    if stored:
        recent = stored[0]
        meta = recent.meta or {}
        return {
            "success": True,
            "course": {
                "title": recent.title,
                "description": recent.description or "",
                "url": recent.url,
                "duration": meta.get("duration", "8 weeks"),
                "level": meta.get("level", "Beginner"),
            },
        }

    course = await pipeline.get_course_recommendation(ProfileContext.from_user(user))
    storage.create_recommendation(
        Recommendation(
            user_id=user.id,
            type=RecommendationType.COURSE.value,
            title=course.title,
            description=course.description,
            url=course.url,
            meta={"duration": course.duration, "level": course.level},
        )
    )
    logger.info("course_recommended", user_id=user.id, title=course.title)
    return {"success": True, "course": serialize_course(course)}


@router.get("/career-trends/{subject}")
async def career_trends(subject: str, pipeline: PipelineDep) -> dict:
    trends = await pipeline.fetch_career_trends(subject)
    return {"success": True, "data": [t.model_dump(exclude_none=True) for t in trends]}
