"""Genre service helpers."""
from typing import Any, Dict, List, Optional, Tuple
from uuid import UUID

from locallibrary.models.genre_model import Genre, GenreForm
from locallibrary.services.repository import PgRepository, Repositories
from locallibrary.utils.concurrency import gather_all
from locallibrary.utils.logger import get_logger
from locallibrary.utils.validation import ValidationResult

logger = get_logger(__name__)


class GenreRepository(PgRepository[Genre]):
    table = "genres"
    model = Genre
    columns = ("name",)
    order_by = ("name",)


async def list_genres(repos: Repositories) -> List[Genre]:
    return await repos.genres.find_all_sorted()


async def get_genre_with_books(repos: Repositories, genre_id: UUID) -> Optional[Dict[str, Any]]:
    """Fetch a genre and every book filed under it."""
    results = await gather_all(
        genre=repos.genres.find_by_id(genre_id),
        genre_books=repos.books.find_by_filter(genre_ids=genre_id),
    )
    if results["genre"] is None:
        return None
    return results


async def create_genre(
    repos: Repositories, form: GenreForm
) -> Tuple[ValidationResult[GenreForm], Optional[Genre]]:
    """Validate the form and return the genre to redirect to.

    Creation is idempotent by name: an existing genre with the same name is
    returned instead of saving a duplicate. The lookup and the insert are not
    atomic.
    """
    result = form.check()
    if not result.ok:
        return result, None

    existing = await repos.genres.find_one(name=result.values["name"])
    if existing is not None:
        logger.info("Genre %r already exists as %s", existing.name, existing.id)
        return result, existing

    genre = await repos.genres.save(result.record(Genre))
    logger.info("Created genre %s (%s)", genre.id, genre.name)
    return result, genre


async def delete_genre(repos: Repositories, genre_id: UUID) -> None:
    await repos.genres.delete_by_id(genre_id)
    logger.info("Deleted genre %s", genre_id)
