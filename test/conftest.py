"""
Test Configuration and Fixtures

This module provides:
- Environment setup that must run before application modules read settings
- The anyio backend used by the concurrency tests

Architecture:
- Unit tests (test/**/unit/): in-memory repositories and AsyncMock ports, no database
- HTTP tests swap the DI container's providers for the same in-memory repositories
"""

# =============================================================================
# CRITICAL: Environment setup MUST happen before any other imports
# Settings and the loguru file sink read these at import time
# =============================================================================
import os
from pathlib import Path


def _early_setup_test_environment() -> None:
    """Set test environment variables before any module imports."""
    worker_id = os.environ.get('PYTEST_XDIST_WORKER', 'master')
    if worker_id == 'master':
        os.environ['POSTGRES_DB'] = 'gift_wave_test_db'
    else:
        os.environ['POSTGRES_DB'] = f'gift_wave_test_db_{worker_id}'

    test_log_dir = Path(__file__).parent / 'test_log'
    test_log_dir.mkdir(exist_ok=True)
    os.environ['TEST_LOG_DIR'] = str(test_log_dir)

    test_media_dir = Path(__file__).parent / 'test_media'
    test_media_dir.mkdir(exist_ok=True)
    os.environ['MEDIA_ROOT'] = str(test_media_dir)

    os.environ.setdefault('SECRET_KEY', 'test_secret_key')
    os.environ.setdefault('ASYNCPG_POOL_MIN_SIZE', '1')
    os.environ.setdefault('ASYNCPG_POOL_MAX_SIZE', '2')


# Call immediately to set env vars before any imports
_early_setup_test_environment()

import pytest  # noqa: E402


@pytest.fixture
def anyio_backend() -> str:
    return 'asyncio'
