"""Shared fixtures: storage backends, a mocked pipeline and an API client."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from emerge_career.clients.classcentral import ClassCentralClient
from emerge_career.clients.llm import TextGenerator
from emerge_career.clients.news import NewsFeedClient
from emerge_career.clients.youtube import YouTubeClient
from emerge_career.config import Settings
from emerge_career.errors import UpstreamError
from emerge_career.main import create_app
from emerge_career.models.records import User
from emerge_career.storage.database import DatabaseStorage
from emerge_career.storage.memory import InMemoryStorage
from emerge_career.suggestions.pipeline import SuggestionPipeline


@pytest.fixture
def memory_storage():
    return InMemoryStorage()


@pytest.fixture
def database_storage(tmp_path):
    storage = DatabaseStorage.from_url(f"sqlite:///{tmp_path / 'emerge.db'}")
    storage.create_tables()
    return storage


@pytest.fixture(params=["memory", "database"])
def storage(request):
    """Both backends, so contract tests run against each."""
    return request.getfixturevalue(f"{request.param}_storage")


@pytest.fixture
def generator():
    gen = MagicMock(spec=TextGenerator)
    gen.configured = True
    gen.generate = AsyncMock(side_effect=UpstreamError("offline"))
    return gen


@pytest.fixture
def pipeline(generator):
    youtube = MagicMock(spec=YouTubeClient)
    youtube.search_video = AsyncMock(side_effect=UpstreamError("no key"))
    news = MagicMock(spec=NewsFeedClient)
    news.search = AsyncMock(side_effect=UpstreamError("offline"))
    classcentral = MagicMock(spec=ClassCentralClient)
    classcentral.search_course = AsyncMock(side_effect=UpstreamError("offline"))
    return SuggestionPipeline(
        generator=generator,
        youtube=youtube,
        news=news,
        classcentral=classcentral,
    )


@pytest.fixture
def settings():
    return Settings(_env_file=None, database_url=None, app_secret=None)


@pytest.fixture
def client(settings, storage, pipeline):
    """API client over each storage backend in turn."""
    app = create_app(settings=settings, storage=storage, pipeline=pipeline)
    with TestClient(app) as c:
        yield c


@pytest.fixture
def biology_user(storage):
    return storage.create_user(
        User(
            username="ada",
            password="secret",
            name="Ada",
            subjects=["Biology", "Chemistry"],
            interests="genetics",
            skills="lab work",
            goal="Become a researcher",
        )
    )
