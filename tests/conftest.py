from __future__ import annotations

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from device_usage.api import deps
from device_usage.core.config import Settings
from device_usage.factory import create_app
from tests.fakes import FakePostsClient, FakeUsageRepository


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    return Settings(
        _env_file=None,
        env="test",
        debug=True,
        docs_enabled=False,
        log_level="WARNING",
        cors_origins=["http://localhost"],
        trusted_hosts=["testserver", "localhost"],
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'usage.db'}",
        posts_url="http://example.com/posts",
        posts_user_agent="test-agent",
        posts_timeout_seconds=1.0,
        posts_sample_size=5,
    )


@pytest.fixture()
def fake_repo() -> FakeUsageRepository:
    return FakeUsageRepository()


@pytest.fixture()
def fake_posts() -> FakePostsClient:
    return FakePostsClient()


@pytest.fixture()
def client(
    settings: Settings, fake_repo: FakeUsageRepository, fake_posts: FakePostsClient
) -> TestClient:
    app = create_app(settings)
    app.dependency_overrides[deps.get_usage_repository] = lambda: fake_repo
    app.dependency_overrides[deps.get_posts_client] = lambda: fake_posts
    with TestClient(app) as client:
        yield client


@pytest.fixture()
def sql_client(settings: Settings, fake_posts: FakePostsClient) -> TestClient:
    """Client wired to the real SQLite store created by the app lifespan."""
    app = create_app(settings)
    app.dependency_overrides[deps.get_posts_client] = lambda: fake_posts
    with TestClient(app) as client:
        yield client
