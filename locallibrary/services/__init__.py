"""Services package."""
import asyncpg

from . import (
    author_service,
    book_service,
    bookinstance_service,
    catalog_service,
    genre_service,
)
from .repository import Repositories


def build_repositories(pool: asyncpg.pool.Pool) -> Repositories:
    """Repositories backed by the PostgreSQL tables."""
    return Repositories(
        authors=author_service.AuthorRepository(pool),
        genres=genre_service.GenreRepository(pool),
        books=book_service.BookRepository(pool),
        instances=bookinstance_service.BookInstanceRepository(pool),
    )


__all__ = [
    "Repositories",
    "author_service",
    "book_service",
    "bookinstance_service",
    "build_repositories",
    "catalog_service",
    "genre_service",
]
