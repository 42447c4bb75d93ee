from typing import Any, Dict, List, Optional

from fastapi import Request
from fastapi.responses import JSONResponse

from adapters.base import DatabaseAdapter
from api.schemas import ErrorResponse
from utils.config import AppConfig


def get_db(request: Request) -> DatabaseAdapter:
    db = getattr(request.app.state, "db", None)
    if db is None:
        raise RuntimeError("Database adapter not available on app.state (lifespan not initialized).")
    return db


def get_config(request: Request) -> AppConfig:
    return request.app.state.config


def error_response(status_code: int, message: str, errors: Optional[List[Dict[str, Any]]] = None) -> JSONResponse:
    body = ErrorResponse(message=message, errors=errors)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))
