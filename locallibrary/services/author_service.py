"""Author service helpers."""
from typing import Any, Dict, List, Optional, Tuple
from uuid import UUID

from locallibrary.models.author_model import Author, AuthorForm
from locallibrary.services.repository import PgRepository, Repositories
from locallibrary.utils.concurrency import gather_all
from locallibrary.utils.logger import get_logger
from locallibrary.utils.validation import ValidationResult

logger = get_logger(__name__)


class AuthorRepository(PgRepository[Author]):
    table = "authors"
    model = Author
    columns = ("first_name", "family_name", "date_of_birth", "date_of_death")
    order_by = ("family_name", "first_name")


async def list_authors(repos: Repositories) -> List[Author]:
    return await repos.authors.find_all_sorted()


async def get_author_with_books(repos: Repositories, author_id: UUID) -> Optional[Dict[str, Any]]:
    """Fetch an author and the books that reference them."""
    results = await gather_all(
        author=repos.authors.find_by_id(author_id),
        author_books=repos.books.find_by_filter(author_id=author_id),
    )
    if results["author"] is None:
        return None
    return results


async def create_author(
    repos: Repositories, form: AuthorForm
) -> Tuple[ValidationResult[AuthorForm], Optional[Author]]:
    """Validate the form and save a new author when it passes."""
    result = form.check()
    if not result.ok:
        return result, None

    author = await repos.authors.save(result.record(Author))
    logger.info("Created author %s (%s)", author.id, author.name)
    return result, author


async def delete_author(repos: Repositories, author_id: UUID) -> None:
    await repos.authors.delete_by_id(author_id)
    logger.info("Deleted author %s", author_id)
