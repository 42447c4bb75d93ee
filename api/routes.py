import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from adapters.base import AdapterError, DatabaseAdapter
from api.deps import get_config, get_db
from api.schemas import HealthResponse, MessageResponse, MovieInput, MovieListResponse, MovieResponse
from catalog.movies import create_movie, delete_movie, list_movies, update_movie
from utils.config import AppConfig

logger = logging.getLogger(__name__)

MISSING_FIELDS_MESSAGE = "All fields required"

router = APIRouter(prefix="/api/movies", tags=["movies"])
health_router = APIRouter(tags=["health"])


def _require_fields(movie: Optional[MovieInput]) -> dict:
    movie = movie or MovieInput()
    if movie.missing_fields():
        raise HTTPException(status_code=400, detail=MISSING_FIELDS_MESSAGE)
    return movie.model_dump()


@router.get("", response_model=MovieListResponse)
async def get_movies(db: DatabaseAdapter = Depends(get_db)) -> MovieListResponse:
    logger.info("Getting all movies...")
    try:
        movies = await list_movies(db)
    except AdapterError as exc:
        logger.exception("Query error")
        raise HTTPException(status_code=500, detail="Database error") from exc
    return MovieListResponse(data=movies, count=len(movies))


@router.post("", response_model=MovieResponse, status_code=201)
async def add_movie(
    movie: Optional[MovieInput] = None,
    db: DatabaseAdapter = Depends(get_db),
) -> MovieResponse:
    fields = _require_fields(movie)
    try:
        movie_id = await create_movie(db, fields)
    except AdapterError as exc:
        logger.exception("Insert error")
        raise HTTPException(status_code=500, detail="Failed to add movie") from exc
    return MovieResponse(message="Movie added successfully!", data={"id": movie_id, **fields})


@router.put("/{movie_id}", response_model=MovieResponse)
async def edit_movie(
    movie_id: int,
    movie: Optional[MovieInput] = None,
    db: DatabaseAdapter = Depends(get_db),
) -> MovieResponse:
    fields = _require_fields(movie)
    try:
        updated = await update_movie(db, movie_id, fields)
    except AdapterError as exc:
        logger.exception("Update error")
        raise HTTPException(status_code=500, detail="Failed to update movie") from exc
    if not updated:
        raise HTTPException(status_code=404, detail="Movie not found")
    return MovieResponse(message="Movie updated successfully!", data={"id": movie_id, **fields})


@router.delete("/{movie_id}", response_model=MessageResponse)
async def remove_movie(movie_id: int, db: DatabaseAdapter = Depends(get_db)) -> MessageResponse:
    try:
        deleted = await delete_movie(db, movie_id)
    except AdapterError as exc:
        logger.exception("Delete error")
        raise HTTPException(status_code=500, detail="Failed to delete movie") from exc
    if not deleted:
        raise HTTPException(status_code=404, detail="Movie not found")
    return MessageResponse(success=True, message="Movie deleted successfully!")


@health_router.get("/health", response_model=HealthResponse)
async def health(
    db: DatabaseAdapter = Depends(get_db),
    config: AppConfig = Depends(get_config),
) -> HealthResponse:
    return HealthResponse(
        status="OK",
        timestamp=datetime.now(timezone.utc).isoformat(),
        database=db.display_name,
        environment=config.environment,
    )
