"""Asyncpg connection utilities."""
from pathlib import Path
from typing import Optional

import asyncpg

from locallibrary.config import Settings, settings as default_settings
from locallibrary.utils.logger import get_logger

logger = get_logger(__name__)

SCHEMA_PATH = Path(__file__).parent / "schema.sql"

_pool: Optional[asyncpg.pool.Pool] = None


def _ssl_mode(settings: Settings) -> Optional[str]:
    # Azure PostgreSQL requires SSL
    host = settings.pg_host.lower()
    return "require" if "azure" in host else None


async def ensure_schema_exists(pool: asyncpg.pool.Pool) -> None:
    """Create the catalog tables if they don't exist."""
    if not SCHEMA_PATH.exists():
        logger.warning("Schema file not found at %s", SCHEMA_PATH)
        return

    async with pool.acquire() as conn:
        table_count = await conn.fetchval(
            """
            SELECT COUNT(*)
            FROM information_schema.tables
            WHERE table_schema = 'public'
            AND table_name IN ('authors', 'genres', 'books', 'book_instances')
            """
        )
        if table_count < 4:
            await conn.execute(SCHEMA_PATH.read_text())
            logger.info("Database schema created")
        else:
            logger.info("Database schema already exists")


async def init_db(settings: Optional[Settings] = None) -> asyncpg.pool.Pool:
    """Initialize the connection pool and make sure the schema exists."""
    global _pool
    if _pool is None:
        settings = settings or default_settings
        # Empty password means trust auth for local development
        password = settings.pg_password.strip() or None

        _pool = await asyncpg.create_pool(
            host=settings.pg_host,
            port=settings.pg_port,
            user=settings.pg_user,
            password=password,
            database=settings.pg_database,
            min_size=settings.pg_pool_min_size,
            max_size=settings.pg_pool_max_size,
            ssl=_ssl_mode(settings),
        )
        logger.info(
            "Connected to %s:%s/%s", settings.pg_host, settings.pg_port, settings.pg_database
        )
        await ensure_schema_exists(_pool)

    return _pool


async def get_pool() -> asyncpg.pool.Pool:
    if _pool is None:
        return await init_db()
    return _pool


async def close_pool() -> None:
    global _pool
    if _pool:
        await _pool.close()
        _pool = None
        logger.info("Connection pool closed")
