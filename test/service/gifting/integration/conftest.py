"""
Integration fixtures - real PostgreSQL test database.

The schema is rebuilt once per session through the alembic migrations, and
every table is truncated before each test. When no database is reachable the
whole integration suite is skipped.
"""

import asyncio
from collections.abc import AsyncGenerator
from pathlib import Path

from alembic import command
from alembic.config import Config
import pytest
import pytest_asyncio
from sqlalchemy import text
from sqlalchemy.exc import DBAPIError
from sqlalchemy.ext.asyncio import create_async_engine

from src.platform.config.core_setting import settings
from src.platform.database.asyncpg_setting import close_all_asyncpg_pools


ALEMBIC_INI = Path(__file__).parents[4] / 'alembic.ini'

_cached_tables: list[str] | None = None


# =============================================================================
# Database Setup and Cleanup
# =============================================================================
async def _setup_test_database() -> None:
    db_url = settings.DATABASE_URL_ASYNC
    test_db = settings.POSTGRES_DB

    # Create database if not exists
    postgres_url = db_url.replace(f'/{test_db}', '/postgres')
    engine = create_async_engine(postgres_url, isolation_level='AUTOCOMMIT')
    try:
        async with engine.begin() as conn:
            result = await conn.execute(
                text('SELECT 1 FROM pg_database WHERE datname = :name'), {'name': test_db}
            )
            if not result.fetchone():
                await conn.execute(text(f'CREATE DATABASE "{test_db}"'))
    finally:
        await engine.dispose()

    # Reset schema; migrations run afterwards, outside this event loop
    reset_engine = create_async_engine(db_url)
    try:
        async with reset_engine.begin() as conn:
            await conn.execute(text('DROP SCHEMA public CASCADE'))
            await conn.execute(text('CREATE SCHEMA public'))
    finally:
        await reset_engine.dispose()


async def _clean_all_tables() -> None:
    global _cached_tables
    engine = create_async_engine(settings.DATABASE_URL_ASYNC)
    try:
        async with engine.begin() as conn:
            if _cached_tables is None:
                result = await conn.execute(
                    text(
                        "SELECT tablename FROM pg_tables WHERE schemaname = 'public' "
                        "AND tablename != 'alembic_version'"
                    )
                )
                _cached_tables = [row[0] for row in result]

            if _cached_tables:
                quoted = [f'"{t}"' for t in _cached_tables]
                await conn.execute(text(f'TRUNCATE {", ".join(quoted)} RESTART IDENTITY CASCADE'))
    finally:
        await engine.dispose()


# =============================================================================
# Integration Test Fixtures
# =============================================================================
@pytest.fixture(scope='session')
def migrated_database() -> None:
    try:
        asyncio.run(_setup_test_database())
    except (OSError, DBAPIError) as e:
        pytest.skip(f'PostgreSQL is not reachable: {e}')

    # env.py drives its own event loop
    command.upgrade(Config(str(ALEMBIC_INI)), 'head')


@pytest_asyncio.fixture
async def clean_database(migrated_database: None) -> AsyncGenerator[None, None]:
    await _clean_all_tables()
    yield

    await close_all_asyncpg_pools()
