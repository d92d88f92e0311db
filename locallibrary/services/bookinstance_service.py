"""Book copy service helpers."""
from typing import List, Optional, Sequence, Tuple
from uuid import UUID

from locallibrary.models.book_model import Book
from locallibrary.models.bookinstance_model import BookInstance, BookInstanceForm, BookInstanceView
from locallibrary.services.repository import PgRepository, Repositories, index_by_id
from locallibrary.utils.logger import get_logger
from locallibrary.utils.validation import FieldError, ValidationResult

logger = get_logger(__name__)


class BookInstanceRepository(PgRepository[BookInstance]):
    table = "book_instances"
    model = BookInstance
    columns = ("book_id", "imprint", "status", "due_back")
    order_by = ("imprint",)


async def populate_instances(
    repos: Repositories, instances: Sequence[BookInstance]
) -> List[BookInstanceView]:
    book_ids = {instance.book_id for instance in instances if instance.book_id is not None}
    books = index_by_id(await repos.books.find_by_filter(id=list(book_ids)))
    return [BookInstanceView(instance=instance, book=books.get(instance.book_id)) for instance in instances]


async def list_instances(repos: Repositories) -> List[BookInstanceView]:
    """All copies, ordered by their book's title and then by imprint."""
    instances = await repos.instances.find_all_sorted()
    views = await populate_instances(repos, instances)
    return sorted(views, key=lambda view: (view.title, view.instance.imprint))


async def get_instance(repos: Repositories, instance_id: UUID) -> Optional[BookInstanceView]:
    instance = await repos.instances.find_by_id(instance_id)
    if instance is None:
        return None
    return (await populate_instances(repos, [instance]))[0]


async def list_book_choices(repos: Repositories) -> List[Book]:
    return await repos.books.find_all_sorted()


async def create_instance(
    repos: Repositories, form: BookInstanceForm, enforce_references: bool = True
) -> Tuple[ValidationResult[BookInstanceForm], Optional[BookInstance]]:
    """Validate the form and save a new copy when it passes.

    With ``enforce_references`` off, a copy may point at a book that does not
    exist.
    """
    result = form.check()
    if result.ok and enforce_references:
        book_id = result.values["book_id"]
        if await repos.books.find_by_id(book_id) is None:
            result = result.with_errors(
                [FieldError(param="book", msg="Book not found", value=str(book_id))]
            )
    if not result.ok:
        return result, None

    instance = await repos.instances.save(result.record(BookInstance))
    logger.info("Created copy %s of book %s", instance.id, instance.book_id)
    return result, instance


async def delete_instance(repos: Repositories, instance_id: UUID) -> None:
    await repos.instances.delete_by_id(instance_id)
    logger.info("Deleted copy %s", instance_id)
