import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

RESOURCES = ("movies", "users")


def _parse_env_line(raw_line: str) -> Optional[Tuple[str, str]]:
    line = raw_line.strip()
    if line.startswith("export "):
        line = line[len("export "):].lstrip()
    if not line or line.startswith("#") or "=" not in line:
        return None
    key, value = line.split("=", 1)
    key = key.strip()
    if not key:
        return None
    return key, value.strip().strip("'").strip('"')


def load_env_file(env_path: str = ".env") -> Dict[str, str]:
    """Copy KEY=VALUE pairs from a dotenv file into os.environ.

    Variables already present in the process environment win. Returns the
    pairs that were actually applied.
    """
    env_file = Path(env_path)
    if not env_file.is_file():
        return {}

    applied: Dict[str, str] = {}
    for raw_line in env_file.read_text(encoding="utf-8").splitlines():
        pair = _parse_env_line(raw_line)
        if pair is None or pair[0] in os.environ:
            continue
        os.environ[pair[0]] = pair[1]
        applied[pair[0]] = pair[1]
    return applied


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got: {raw!r}") from exc


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class AppConfig:
    resource: str = "movies"
    host: str = "0.0.0.0"
    port: int = 3000
    environment: str = "development"
    log_level: str = "INFO"
    db_type: Optional[str] = None
    database_url: Optional[str] = None
    db_host: str = "localhost"
    db_port: Optional[int] = None
    db_user: Optional[str] = None
    db_password: Optional[str] = None
    db_name: str = "movies_db"
    sqlite_db_path: Optional[str] = None
    upload_dir: str = "public/uploads"
    cors_origins: List[str] = field(default_factory=lambda: ["*"])
    seed_data: bool = True

    def source_config(self) -> Dict[str, Any]:
        config: Dict[str, Any] = {
            "environment": self.environment,
            "database_url": self.database_url,
            "host": self.db_host,
            "port": self.db_port,
            "user": self.db_user,
            "password": self.db_password,
            "dbname": self.db_name,
            "db_path": self.sqlite_db_path,
        }
        return {key: value for key, value in config.items() if value is not None}


def load_config(env_path: str = ".env") -> AppConfig:
    load_env_file(env_path)
    resource = os.getenv("APP_RESOURCE", "movies").strip().lower()
    if resource not in RESOURCES:
        raise ValueError(f"APP_RESOURCE must be one of {', '.join(RESOURCES)}, got: {resource!r}")
    db_port = _env_int("DB_PORT", 0) or None
    cors_raw = os.getenv("CORS_ORIGINS", "*")
    return AppConfig(
        resource=resource,
        host=os.getenv("HOST", "0.0.0.0"),
        port=_env_int("PORT", 3000),
        environment=os.getenv("APP_ENV", "development"),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        db_type=os.getenv("DB_TYPE") or os.getenv("DB_ENGINE") or None,
        database_url=os.getenv("DATABASE_URL") or None,
        db_host=os.getenv("DB_HOST", "localhost"),
        db_port=db_port,
        db_user=os.getenv("DB_USER") or None,
        db_password=os.getenv("DB_PASSWORD") or None,
        db_name=os.getenv("DB_NAME", "movies_db"),
        sqlite_db_path=os.getenv("SQLITE_DB_PATH") or None,
        upload_dir=os.getenv("UPLOAD_DIR", "public/uploads"),
        cors_origins=[origin.strip() for origin in cors_raw.split(",") if origin.strip()],
        seed_data=_env_bool("SEED_DATA", True),
    )
