"""Shared fixtures: a file-backed SQLite database per test."""

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from stations_api.config import Config
from stations_api.crud.station import StationRepository
from stations_api.database.connection import (
    create_engine_from_config,
    create_session_factory,
    init_db,
)
from stations_api.main import create_app

AUTH_HEADERS = {"Authorization": "Bearer test-token"}


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("DATABASE_URL", raising=False)
    monkeypatch.delenv("PORT", raising=False)
    monkeypatch.delenv("CONFIG_FILE_PATH", raising=False)


@pytest.fixture
def database_url(tmp_path) -> str:
    return f"sqlite+aiosqlite:///{tmp_path / 'stations.db'}"


@pytest.fixture
def config(database_url: str) -> Config:
    return Config(data={"database": {"url": database_url, "pool_size": 2}})


@pytest.fixture
def client(config: Config):
    with TestClient(create_app(config)) as test_client:
        yield test_client


@pytest.fixture
def auth_headers() -> dict[str, str]:
    return dict(AUTH_HEADERS)


@pytest_asyncio.fixture
async def repository(config: Config):
    engine = create_engine_from_config(config)
    await init_db(engine)
    try:
        yield StationRepository(create_session_factory(engine))
    finally:
        await engine.dispose()
