"""Book service helpers."""
from typing import Any, Dict, List, Optional, Sequence, Tuple
from uuid import UUID

from locallibrary.models.book_model import Book, BookForm, BookView
from locallibrary.services.repository import PgRepository, Repositories, index_by_id
from locallibrary.utils.concurrency import gather_all
from locallibrary.utils.logger import get_logger
from locallibrary.utils.validation import FieldError, ValidationResult

logger = get_logger(__name__)


class BookRepository(PgRepository[Book]):
    table = "books"
    model = Book
    columns = ("title", "summary", "isbn", "author_id", "genre_ids")
    array_columns = ("genre_ids",)
    order_by = ("title",)


async def populate_books(repos: Repositories, books: Sequence[Book]) -> List[BookView]:
    """Resolve each book's author and genres. Dangling references are dropped."""
    author_ids = {book.author_id for book in books if book.author_id is not None}
    genre_ids = {genre_id for book in books for genre_id in book.genre_ids}
    results = await gather_all(
        authors=repos.authors.find_by_filter(id=list(author_ids)),
        genres=repos.genres.find_by_filter(id=list(genre_ids)),
    )
    authors = index_by_id(results["authors"])
    genres = index_by_id(results["genres"])
    return [
        BookView(
            book=book,
            author=authors.get(book.author_id),
            genres=[genres[genre_id] for genre_id in book.genre_ids if genre_id in genres],
        )
        for book in books
    ]


async def list_books(repos: Repositories) -> List[BookView]:
    books = await repos.books.find_all_sorted()
    return await populate_books(repos, books)


async def get_book_with_instances(repos: Repositories, book_id: UUID) -> Optional[Dict[str, Any]]:
    """Fetch a book (author and genres resolved) and all of its copies."""
    results = await gather_all(
        book=repos.books.find_by_id(book_id),
        book_instances=repos.instances.find_by_filter(book_id=book_id),
    )
    if results["book"] is None:
        return None
    results["book"] = (await populate_books(repos, [results["book"]]))[0]
    return results


async def get_form_choices(repos: Repositories) -> Dict[str, Any]:
    """Authors and genres offered by the book form."""
    return await gather_all(
        authors=repos.authors.find_all_sorted(),
        genres=repos.genres.find_all_sorted(),
    )


async def get_book_for_update(repos: Repositories, book_id: UUID) -> Optional[Dict[str, Any]]:
    results = await gather_all(
        book=repos.books.find_by_id(book_id),
        authors=repos.authors.find_all_sorted(),
        genres=repos.genres.find_all_sorted(),
    )
    if results["book"] is None:
        return None
    return results


async def check_references(
    repos: Repositories, result: ValidationResult[BookForm]
) -> ValidationResult[BookForm]:
    """Add errors for an author or genres that don't exist."""
    author_id = result.values.get("author_id")
    genre_ids = result.values.get("genre_ids") or []
    found = await gather_all(
        author=repos.authors.find_by_id(author_id) if author_id else _none(),
        genres=repos.genres.find_by_filter(id=list(genre_ids)),
    )
    errors = []
    if author_id and found["author"] is None:
        errors.append(FieldError(param="author", msg="Author not found", value=str(author_id)))
    known = {genre.id for genre in found["genres"]}
    for genre_id in genre_ids:
        if genre_id not in known:
            errors.append(FieldError(param="genre", msg="Genre not found", value=str(genre_id)))
    return result.with_errors(errors)


async def _none() -> None:
    return None


async def _validate(
    repos: Repositories, form: BookForm, enforce_references: bool
) -> ValidationResult[BookForm]:
    result = form.check()
    if result.ok and enforce_references:
        result = await check_references(repos, result)
    return result


async def create_book(
    repos: Repositories, form: BookForm, enforce_references: bool = True
) -> Tuple[ValidationResult[BookForm], Optional[Book]]:
    result = await _validate(repos, form, enforce_references)
    if not result.ok:
        return result, None

    book = await repos.books.save(result.record(Book))
    logger.info("Created book %s (%s)", book.id, book.title)
    return result, book


async def update_book(
    repos: Repositories, book_id: UUID, form: BookForm, enforce_references: bool = True
) -> Tuple[ValidationResult[BookForm], Optional[Book]]:
    """Overwrite the book with ``book_id``, keeping its id.

    Returns a ``None`` book with a passing result when the book is gone.
    """
    result = await _validate(repos, form, enforce_references)
    if not result.ok:
        return result, None

    book = await repos.books.replace(result.record(Book, id=book_id))
    if book is not None:
        logger.info("Updated book %s (%s)", book.id, book.title)
    return result, book


async def delete_book(repos: Repositories, book_id: UUID) -> None:
    await repos.books.delete_by_id(book_id)
    logger.info("Deleted book %s", book_id)
