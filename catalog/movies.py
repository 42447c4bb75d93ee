from typing import Any, Dict, List, Mapping

from adapters.base import DatabaseAdapter

MOVIE_FIELDS = ("title", "director", "genre", "release_year", "rating")

_COLUMNS = ", ".join(("id",) + MOVIE_FIELDS)


def _values(movie: Mapping[str, Any]) -> List[Any]:
    return [movie[name] for name in MOVIE_FIELDS]


async def list_movies(adapter: DatabaseAdapter) -> List[Dict[str, Any]]:
    result = await adapter.run_query(f"SELECT {_COLUMNS} FROM movies ORDER BY id DESC")
    return result.rows


async def create_movie(adapter: DatabaseAdapter, movie: Mapping[str, Any]) -> int:
    result = await adapter.run_query(
        "INSERT INTO movies (title, director, genre, release_year, rating) VALUES (?, ?, ?, ?, ?)",
        _values(movie),
    )
    return int(result.inserted_id)


async def update_movie(adapter: DatabaseAdapter, movie_id: int, movie: Mapping[str, Any]) -> bool:
    result = await adapter.run_query(
        "UPDATE movies SET title = ?, director = ?, genre = ?, release_year = ?, rating = ? WHERE id = ?",
        _values(movie) + [movie_id],
    )
    return result.affected_rows > 0


async def delete_movie(adapter: DatabaseAdapter, movie_id: int) -> bool:
    result = await adapter.run_query("DELETE FROM movies WHERE id = ?", [movie_id])
    return result.affected_rows > 0
