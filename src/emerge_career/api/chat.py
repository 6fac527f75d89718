"""Activities, chat history and the career coach."""

import structlog
from fastapi import APIRouter

from emerge_career.api.dependencies import PipelineDep, StorageDep, require_user
from emerge_career.api.schemas import (
    ActivityCreate,
    ChatCreate,
    CoachRequest,
    serialize_activity,
    serialize_message,
)
from emerge_career.models.content import ProfileContext
from emerge_career.models.records import Activity, ChatMessage, Sender

logger = structlog.get_logger()
router = APIRouter(prefix="/api", tags=["chat"])

COACH_HISTORY_MESSAGES = 10


@router.post("/activities")
async def create_activity(body: ActivityCreate, storage: StorageDep) -> dict:
    activity = storage.create_activity(
        Activity(
            user_id=body.user_id,
            type=body.type.value,
            title=body.title,
            is_recent=body.is_recent,
        )
    )
    return {
        "success": True,
        "message": "Activity created successfully",
        "activity": serialize_activity(activity),
    }


@router.get("/chat/{user_id}")
@router.get("/chat-history/{user_id}")
async def get_chat_history(user_id: int, storage: StorageDep) -> dict:
    require_user(storage, user_id)
    messages = storage.get_chat_history_by_user_id(user_id)
    return {"success": True, "messages": [serialize_message(m) for m in messages]}


@router.post("/chat")
async def create_chat_message(body: ChatCreate, storage: StorageDep) -> dict:
    message = storage.create_chat_message(
        ChatMessage(user_id=body.user_id, message=body.message, sender=body.sender.value)
    )
    return {"success": True, "message": serialize_message(message)}


@router.post("/career-coach")
async def career_coach(body: CoachRequest, storage: StorageDep, pipeline: PipelineDep) -> dict:
    """Persist the user's message, ask the coach, persist and return the reply."""
    user = require_user(storage, body.user_id)
    history = storage.get_chat_history_by_user_id(user.id)[-COACH_HISTORY_MESSAGES:]

    storage.create_chat_message(
        ChatMessage(user_id=user.id, message=body.message, sender=Sender.USER.value)
    )
    reply = await pipeline.get_chat_response(
        body.message, ProfileContext.from_user(user), history
    )
    storage.create_chat_message(
        ChatMessage(user_id=user.id, message=reply, sender=Sender.BOT.value)
    )
    logger.info("coach_replied", user_id=user.id, history=len(history))
    return {"success": True, "response": reply}
