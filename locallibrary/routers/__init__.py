"""Catalog routers package."""
from fastapi import APIRouter

from . import authors, bookinstances, books, catalog, genres

router = APIRouter()
router.include_router(catalog.router)
router.include_router(books.router)
router.include_router(authors.router)
router.include_router(genres.router)
router.include_router(bookinstances.router)
