"""Relational storage backend on SQLModel.

Works against any SQLAlchemy URL (PostgreSQL in production, SQLite for
local runs and tests). Tables are created on startup.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any, TypeVar

import structlog
from sqlalchemy import delete
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session, SQLModel, col, create_engine, select

from emerge_career.errors import DuplicateUsernameError, StorageError, UserNotFoundError
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

RecordT = TypeVar("RecordT", bound=SQLModel)


def build_engine(database_url: str, echo: bool = False) -> Engine:
    connect_args = {}
    if database_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
    return create_engine(
        database_url, echo=echo, pool_pre_ping=True, connect_args=connect_args
    )


class DatabaseStorage(Storage):
    """Storage backed by a SQL database through SQLModel sessions.

    Each operation opens its own short-lived session; records are returned
    detached with their loaded attributes intact.

    Args:
        engine: SQLAlchemy engine to run against.
    """

    def __init__(self, engine: Engine):
        self.engine = engine

    @classmethod
    def from_url(cls, database_url: str, echo: bool = False) -> "DatabaseStorage":
        return cls(build_engine(database_url, echo=echo))

    def create_tables(self) -> None:
        """Creates all tables defined via SQLModel metadata."""
        SQLModel.metadata.create_all(self.engine)

    @contextmanager
    def _session(self) -> Iterator[Session]:
        try:
            with Session(self.engine, expire_on_commit=False) as session:
                yield session
        except SQLAlchemyError as exc:
            logger.exception("database_operation_failed")
            raise StorageError("Database operation failed") from exc

    def _insert(self, record: RecordT) -> RecordT:
        with self._session() as session:
            session.add(record)
            session.commit()
            session.refresh(record)
            return record

    def _update(self, model: type[RecordT], record_id: int, changes: dict[str, Any]) -> RecordT | None:
        with self._session() as session:
            record = session.get(model, record_id)
            if record is None:
                return None
            for key, value in updatable_fields(model, changes).items():
                setattr(record, key, value)
            if "updated_at" in model.model_fields:
                record.updated_at = utcnow()
            session.add(record)
            session.commit()
            session.refresh(record)
            return record

    def _delete(self, model: type[SQLModel], record_id: int) -> bool:
        with self._session() as session:
            record = session.get(model, record_id)
            if record is None:
                return False
            session.delete(record)
            session.commit()
            return True

    def _require_user(self, user_id: int) -> None:
        if self.get_user(user_id) is None:
            raise UserNotFoundError(user_id)

    # Users

    def get_user(self, user_id: int) -> User | None:
        with self._session() as session:
            return session.get(User, user_id)

    def get_user_by_username(self, username: str) -> User | None:
        with self._session() as session:
            return session.exec(select(User).where(User.username == username)).first()

    def create_user(self, user: User) -> User:
        if self.get_user_by_username(user.username) is not None:
            raise DuplicateUsernameError(user.username)
        try:
            with Session(self.engine, expire_on_commit=False) as session:
                session.add(user)
                session.commit()
                session.refresh(user)
        except IntegrityError as exc:
            raise DuplicateUsernameError(user.username) from exc
        except SQLAlchemyError as exc:
            logger.exception("database_operation_failed")
            raise StorageError("Database operation failed") from exc
        logger.debug("user_created", user_id=user.id)
        return user

    def update_user(self, user_id: int, **changes: Any) -> User | None:
        return self._update(User, user_id, changes)

    def update_user_progress(self, user_id: int, increment: int) -> User | None:
        user = self.get_user(user_id)
        if user is None:
            return None
        level, progress = apply_progress(user.level, user.progress, increment)
        return self._update(User, user_id, {"level": level, "progress": progress})

    # Goals

    def get_goal(self, goal_id: int) -> Goal | None:
        with self._session() as session:
            return session.get(Goal, goal_id)

    def get_goals_by_user_id(self, user_id: int) -> list[Goal]:
        with self._session() as session:
            stmt = select(Goal).where(Goal.user_id == user_id).order_by(col(Goal.id))
            return list(session.exec(stmt).all())

    def create_goal(self, goal: Goal) -> Goal:
        self._require_user(goal.user_id)
        return self._insert(goal)

    def update_goal(self, goal_id: int, **changes: Any) -> Goal | None:
        return self._update(Goal, goal_id, changes)

    def delete_goal(self, goal_id: int) -> bool:
        return self._delete(Goal, goal_id)

    def clear_user_goals(self, user_id: int) -> None:
        with self._session() as session:
            session.execute(delete(Goal).where(col(Goal.user_id) == user_id))
            session.commit()

    # Activities

    def get_activities_by_user_id(self, user_id: int) -> list[Activity]:
        with self._session() as session:
            stmt = (
                select(Activity)
                .where(Activity.user_id == user_id)
                .order_by(col(Activity.time).desc(), col(Activity.id).desc())
            )
            return list(session.exec(stmt).all())

    def create_activity(self, activity: Activity) -> Activity:
        self._require_user(activity.user_id)
        return self._insert(activity)

    # Chat history

    def get_chat_history_by_user_id(self, user_id: int) -> list[ChatMessage]:
        with self._session() as session:
            stmt = (
                select(ChatMessage)
                .where(ChatMessage.user_id == user_id)
                .order_by(col(ChatMessage.timestamp), col(ChatMessage.id))
            )
            return list(session.exec(stmt).all())

    def create_chat_message(self, message: ChatMessage) -> ChatMessage:
        self._require_user(message.user_id)
        return self._insert(message)

    # Recommendations

    def get_recommendations_by_user_id(
        self, user_id: int, type: str | None = None
    ) -> list[Recommendation]:
        with self._session() as session:
            stmt = select(Recommendation).where(Recommendation.user_id == user_id)
            if type is not None:
                stmt = stmt.where(Recommendation.type == type)
            stmt = stmt.order_by(
                col(Recommendation.created_at).desc(), col(Recommendation.id).desc()
            )
            return list(session.exec(stmt).all())

    def create_recommendation(self, recommendation: Recommendation) -> Recommendation:
        self._require_user(recommendation.user_id)
        return self._insert(recommendation)

    def delete_recommendation(self, recommendation_id: int) -> bool:
        return self._delete(Recommendation, recommendation_id)
