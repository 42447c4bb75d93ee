import pytest
from fastapi.testclient import TestClient

from api.main import create_app
from utils.config import AppConfig

ENV_VARS = (
    "DB_TYPE",
    "DB_ENGINE",
    "DATABASE_URL",
    "DB_HOST",
    "DB_PORT",
    "DB_USER",
    "DB_PASSWORD",
    "DB_NAME",
    "SQLITE_DB_PATH",
    "APP_ENV",
    "APP_RESOURCE",
    "PORT",
    "SEED_DATA",
    "CORS_ORIGINS",
    "HOST",
    "LOG_LEVEL",
    "UPLOAD_DIR",
)


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    # Run from an empty directory so a developer's .env is never picked up.
    monkeypatch.chdir(tmp_path)
    for name in ENV_VARS:
        # setenv first so teardown also drops values a test loads from .env.
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    return tmp_path


@pytest.fixture
def movies_config(tmp_path) -> AppConfig:
    return AppConfig(
        resource="movies",
        db_type="sqlite",
        sqlite_db_path=str(tmp_path / "movies.db"),
        environment="test",
        seed_data=False,
    )


@pytest.fixture
def users_config(tmp_path) -> AppConfig:
    return AppConfig(
        resource="users",
        db_type="sqlite",
        sqlite_db_path=str(tmp_path / "users.db"),
        environment="test",
        upload_dir=str(tmp_path / "uploads"),
    )


@pytest.fixture
def movies_client(movies_config):
    with TestClient(create_app(movies_config)) as client:
        yield client


@pytest.fixture
def users_client(users_config):
    with TestClient(create_app(users_config)) as client:
        yield client
