"""Seed the catalog with a few authors, genres, books and copies."""
import argparse
import asyncio
import sys
from datetime import date
from pathlib import Path

# Add parent directory to path to import locallibrary modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from locallibrary.db.connection import close_pool, init_db
from locallibrary.models import Author, Book, BookInstance, BookInstanceStatus, Genre
from locallibrary.services import build_repositories
from locallibrary.utils.logger import get_logger

logger = get_logger("populate_db")

AUTHORS = [
    Author(first_name="Patrick", family_name="Rothfuss", date_of_birth=date(1973, 6, 6)),
    Author(first_name="Ben", family_name="Bova", date_of_birth=date(1932, 11, 8)),
    Author(first_name="Isaac", family_name="Asimov", date_of_birth=date(1920, 1, 2), date_of_death=date(1992, 4, 6)),
    Author(first_name="Bob", family_name="Billings"),
    Author(first_name="Jim", family_name="Jones", date_of_birth=date(1971, 12, 16)),
]

GENRES = [
    Genre(name="Fantasy"),
    Genre(name="Science Fiction"),
    Genre(name="French Poetry"),
]


def build_books():
    rothfuss, bova, asimov, billings, jones = AUTHORS
    fantasy, scifi, _ = GENRES
    return [
        Book(
            title="The Name of the Wind (The Kingkiller Chronicle, #1)",
            summary="I have stolen princesses back from sleeping barrow kings.",
            isbn="9781473211896",
            author_id=rothfuss.id,
            genre_ids=[fantasy.id],
        ),
        Book(
            title="The Wise Man's Fear (The Kingkiller Chronicle, #2)",
            summary="Picking up the tale of Kvothe Kingkiller once again.",
            isbn="9788401352836",
            author_id=rothfuss.id,
            genre_ids=[fantasy.id],
        ),
        Book(
            title="Apes and Angels",
            summary="Humankind headed out to the stars not for conquest, but for salvation.",
            isbn="9780765379528",
            author_id=bova.id,
            genre_ids=[scifi.id],
        ),
        Book(
            title="Death Wave",
            summary="In Ben Bova's previous novel, the human race was saved from extinction.",
            isbn="9780765379504",
            author_id=bova.id,
            genre_ids=[scifi.id],
        ),
        Book(
            title="Test Book 1",
            summary="Summary of test book 1",
            isbn="ISBN111111",
            author_id=billings.id,
            genre_ids=[fantasy.id, scifi.id],
        ),
        Book(
            title="Test Book 2",
            summary="Summary of test book 2",
            isbn="ISBN222222",
            author_id=jones.id,
        ),
    ]


def build_instances(books):
    name_of_wind, wise_mans_fear, apes, death_wave, test_1, _ = books
    return [
        BookInstance(book_id=name_of_wind.id, imprint="London Gollancz, 2014.", status=BookInstanceStatus.AVAILABLE),
        BookInstance(book_id=wise_mans_fear.id, imprint="Gollancz, 2011.", status=BookInstanceStatus.LOANED, due_back=date(2026, 11, 1)),
        BookInstance(book_id=apes.id, imprint="Gollancz, 2015."),
        BookInstance(book_id=death_wave.id, imprint="New York Tom Doherty Associates, 2016.", status=BookInstanceStatus.AVAILABLE),
        BookInstance(book_id=death_wave.id, imprint="New York Tom Doherty Associates, 2016.", status=BookInstanceStatus.AVAILABLE),
        BookInstance(book_id=test_1.id, imprint="Imprint XXX2", status=BookInstanceStatus.RESERVED),
    ]


async def populate(reset: bool = False) -> None:
    pool = await init_db()
    repos = build_repositories(pool)
    try:
        if reset:
            async with pool.acquire() as conn:
                await conn.execute("TRUNCATE book_instances, books, genres, authors")
            logger.info("Cleared existing catalog records")

        books = build_books()
        for repo, records in (
            (repos.authors, AUTHORS),
            (repos.genres, GENRES),
            (repos.books, books),
            (repos.instances, build_instances(books)),
        ):
            await asyncio.gather(*(repo.save(record) for record in records))
            logger.info("Saved %d records into %s", len(records), repo.table)
    finally:
        await close_pool()


def main():
    parser = argparse.ArgumentParser(description="Populate the catalog with sample records")
    parser.add_argument("--reset", action="store_true", help="Delete existing records first")
    args = parser.parse_args()
    asyncio.run(populate(reset=args.reset))


if __name__ == "__main__":
    main()
