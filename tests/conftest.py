import asyncio
import re

import pytest
from fastapi.testclient import TestClient

from locallibrary.config import Settings
from locallibrary.main import create_app
from locallibrary.models import Author, Book, BookInstance, BookInstanceStatus, Genre
from tests.fakes import make_repositories

ERRORS_BLOCK = re.compile(r'<ul class="errors">(.*?)</ul>', re.S)
ERROR_ITEM = re.compile(r"<li>(.*?)</li>", re.S)


def error_messages(response) -> list:
    """Validation messages rendered on a form page."""
    block = ERRORS_BLOCK.search(response.text)
    if block is None:
        return []
    return [item.strip() for item in ERROR_ITEM.findall(block.group(1))]


def run(coro):
    return asyncio.run(coro)


@pytest.fixture
def repos():
    return make_repositories()


@pytest.fixture
def settings():
    return Settings(enforce_references=True, app_env="test")


@pytest.fixture
def client(repos, settings):
    app = create_app(repositories=repos, settings=settings)
    return TestClient(app)


@pytest.fixture
def catalog(repos):
    """A small catalog: two authors, two genres, two books, two copies."""
    tolkien = Author(first_name="John", family_name="Tolkien")
    asimov = Author(first_name="Isaac", family_name="Asimov")
    fantasy = Genre(name="Fantasy")
    scifi = Genre(name="Science Fiction")
    hobbit = Book(
        title="The Hobbit",
        summary="There and back again.",
        isbn="9780261103344",
        author_id=tolkien.id,
        genre_ids=[fantasy.id],
    )
    foundation = Book(
        title="Foundation",
        summary="Psychohistory.",
        isbn="9780553293357",
        author_id=asimov.id,
        genre_ids=[scifi.id],
    )
    copies = [
        BookInstance(book_id=hobbit.id, imprint="Allen &amp; Unwin, 1937", status=BookInstanceStatus.AVAILABLE),
        BookInstance(book_id=foundation.id, imprint="Gnome Press, 1951", status=BookInstanceStatus.LOANED),
    ]

    async def fill():
        for author in (tolkien, asimov):
            await repos.authors.save(author)
        for genre in (fantasy, scifi):
            await repos.genres.save(genre)
        for book in (hobbit, foundation):
            await repos.books.save(book)
        for copy in copies:
            await repos.instances.save(copy)

    run(fill())
    return {
        "tolkien": tolkien,
        "asimov": asimov,
        "fantasy": fantasy,
        "scifi": scifi,
        "hobbit": hobbit,
        "foundation": foundation,
        "copies": copies,
    }
