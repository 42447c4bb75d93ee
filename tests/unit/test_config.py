import pytest

from adapters.factory import get_adapter
from adapters.postgres import PostgresAdapter
from utils.config import AppConfig, load_config, load_env_file


def test_defaults(clean_env):
    config = load_config()
    assert config.resource == "movies"
    assert config.port == 3000
    assert config.environment == "development"
    assert config.cors_origins == ["*"]
    assert config.seed_data is True
    assert config.db_type is None


def test_reads_environment(clean_env, monkeypatch):
    monkeypatch.setenv("APP_RESOURCE", "users")
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("APP_ENV", "production")
    monkeypatch.setenv("DB_ENGINE", "postgresql")
    monkeypatch.setenv("CORS_ORIGINS", "https://a.example, https://b.example")
    monkeypatch.setenv("SEED_DATA", "false")

    config = load_config()

    assert config.resource == "users"
    assert config.port == 8080
    assert config.environment == "production"
    assert config.db_type == "postgresql"
    assert config.cors_origins == ["https://a.example", "https://b.example"]
    assert config.seed_data is False


def test_invalid_port(clean_env, monkeypatch):
    monkeypatch.setenv("PORT", "eighty")
    with pytest.raises(ValueError, match="PORT must be an integer"):
        load_config()


def test_invalid_resource(clean_env, monkeypatch):
    monkeypatch.setenv("APP_RESOURCE", "books")
    with pytest.raises(ValueError, match="APP_RESOURCE must be one of"):
        load_config()


def test_env_file_does_not_override_process_env(clean_env, monkeypatch):
    monkeypatch.setenv("PORT", "4000")
    (clean_env / ".env").write_text('PORT=5000\nDB_NAME="films"\n', encoding="utf-8")

    applied = load_env_file()

    assert applied == {"DB_NAME": "films"}
    assert load_config().port == 4000


def test_source_config_drops_unset_values():
    config = AppConfig(db_type="sqlite", sqlite_db_path="/tmp/x.db")
    source = config.source_config()
    assert source["db_path"] == "/tmp/x.db"
    assert "database_url" not in source
    assert "password" not in source


def test_env_file_selects_engine(clean_env):
    (clean_env / ".env").write_text("# local\nexport DB_TYPE='postgresql'\n\n=orphan\n", encoding="utf-8")

    config = load_config()

    assert config.db_type == "postgresql"
    assert isinstance(get_adapter(config.db_type, config.source_config()), PostgresAdapter)


def test_named_env_file_replaces_default(clean_env):
    (clean_env / ".env").write_text("PORT=5000\nDB_NAME=local\n", encoding="utf-8")
    (clean_env / "prod.env").write_text("PORT=6000\n", encoding="utf-8")

    config = load_config("prod.env")

    assert config.port == 6000
    assert config.db_name == "movies_db"
