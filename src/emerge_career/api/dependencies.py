"""FastAPI dependencies resolving the per-app storage and pipeline."""

from typing import Annotated

from fastapi import Depends, Request

from emerge_career.errors import UserNotFoundError
from emerge_career.models.records import User
from emerge_career.storage.base import Storage
from emerge_career.suggestions.pipeline import SuggestionPipeline


def get_storage(request: Request) -> Storage:
    return request.app.state.storage


def get_pipeline(request: Request) -> SuggestionPipeline:
    return request.app.state.pipeline


StorageDep = Annotated[Storage, Depends(get_storage)]
PipelineDep = Annotated[SuggestionPipeline, Depends(get_pipeline)]


def require_user(storage: Storage, user_id: int) -> User:
    user = storage.get_user(user_id)
    if user is None:
        raise UserNotFoundError(user_id)
    return user
