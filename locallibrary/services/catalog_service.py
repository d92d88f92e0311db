"""Catalog-wide statistics."""
from typing import Dict

from locallibrary.models.bookinstance_model import BookInstanceStatus
from locallibrary.services.repository import Repositories
from locallibrary.utils.concurrency import gather_all


async def get_counts(repos: Repositories) -> Dict[str, int]:
    """Record counts shown on the home page, fetched concurrently."""
    return await gather_all(
        book_count=repos.books.count(),
        book_instance_count=repos.instances.count(),
        book_instance_available_count=repos.instances.count(status=BookInstanceStatus.AVAILABLE),
        author_count=repos.authors.count(),
        genre_count=repos.genres.count(),
    )
