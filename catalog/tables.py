import logging
from typing import List, Tuple

from adapters.base import DatabaseAdapter

logger = logging.getLogger(__name__)

SEED_MOVIES: List[Tuple[str, str, str, int, float]] = [
    ("The Shawshank Redemption", "Frank Darabont", "Drama", 1994, 9.3),
    ("The Godfather", "Francis Ford Coppola", "Drama", 1972, 9.2),
    ("The Dark Knight", "Christopher Nolan", "Action", 2008, 9.0),
    ("Pulp Fiction", "Quentin Tarantino", "Drama", 1994, 8.9),
    ("Forrest Gump", "Robert Zemeckis", "Drama", 1994, 8.8),
    ("Inception", "Christopher Nolan", "Sci-Fi", 2010, 8.7),
    ("The Matrix", "The Wachowskis", "Sci-Fi", 1999, 8.7),
    ("Goodfellas", "Martin Scorsese", "Drama", 1990, 8.7),
    ("The Lord of the Rings: The Fellowship of the Ring", "Peter Jackson", "Adventure", 2001, 8.8),
    ("Star Wars: Episode IV - A New Hope", "George Lucas", "Sci-Fi", 1977, 8.6),
]


def _movies_ddl(adapter: DatabaseAdapter) -> str:
    return f"""
        CREATE TABLE IF NOT EXISTS movies (
            {adapter.dialect.identity_column_ddl},
            title VARCHAR(255) NOT NULL,
            director VARCHAR(255) NOT NULL,
            genre VARCHAR(100) NOT NULL,
            release_year INTEGER NOT NULL,
            rating DECIMAL(3,1) NOT NULL CHECK (rating >= 0 AND rating <= 10)
        )
    """


def _users_ddl(adapter: DatabaseAdapter) -> str:
    return f"""
        CREATE TABLE IF NOT EXISTS users (
            {adapter.dialect.identity_column_ddl},
            name VARCHAR(100),
            email VARCHAR(100),
            phone VARCHAR(20),
            profile_pic VARCHAR(255),
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        )
    """


async def count_rows(adapter: DatabaseAdapter, table: str) -> int:
    result = await adapter.run_query(f"SELECT COUNT(*) AS total FROM {table}")
    return int(result.rows[0]["total"])


async def seed_movies(adapter: DatabaseAdapter) -> int:
    for movie in SEED_MOVIES:
        await adapter.run_query(
            "INSERT INTO movies (title, director, genre, release_year, rating) VALUES (?, ?, ?, ?, ?)",
            movie,
        )
    return len(SEED_MOVIES)


async def ensure_movies_table(adapter: DatabaseAdapter, seed: bool = True) -> int:
    await adapter.run_query(_movies_ddl(adapter))
    if not seed or await count_rows(adapter, "movies") > 0:
        return 0
    logger.info("Adding sample data to %s...", adapter.display_name)
    return await seed_movies(adapter)


async def ensure_users_table(adapter: DatabaseAdapter) -> None:
    await adapter.run_query(_users_ddl(adapter))


async def bootstrap(adapter: DatabaseAdapter, resource: str, seed: bool = True) -> int:
    """Create the table backing ``resource`` if needed; return how many rows were seeded."""
    if resource == "movies":
        return await ensure_movies_table(adapter, seed=seed)
    if resource == "users":
        await ensure_users_table(adapter)
        return 0
    raise ValueError(f"Unsupported resource: {resource}")
