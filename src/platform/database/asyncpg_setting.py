import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import asyncpg

from src.platform.config.core_setting import settings
from src.platform.exception.exceptions import UnavailableError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.gifting_metrics import metrics


# Global connection pools per event loop
asyncpg_pools: dict[int, asyncpg.Pool] = {}

# Driver-level failures that mean "the store did not answer", never "the write happened"
STORE_FAILURES: tuple[type[BaseException], ...] = (
    TimeoutError,
    asyncio.TimeoutError,
    asyncpg.PostgresConnectionError,
    asyncpg.InterfaceError,
    asyncpg.QueryCanceledError,
    OSError,
)


async def get_asyncpg_pool() -> asyncpg.Pool:
    current_loop = asyncio.get_running_loop()
    loop_id = id(current_loop)

    # Fast path: pool already exists for this loop
    if loop_id in asyncpg_pools:
        return asyncpg_pools[loop_id]

    # Slow path: create new pool (should only happen at startup)
    dsn = settings.DATABASE_URL_ASYNC.replace('postgresql+asyncpg://', 'postgresql://')

    pool = await asyncpg.create_pool(
        dsn,
        min_size=settings.ASYNCPG_POOL_MIN_SIZE,
        max_size=settings.ASYNCPG_POOL_MAX_SIZE,
        command_timeout=settings.ASYNCPG_POOL_COMMAND_TIMEOUT,
        max_inactive_connection_lifetime=settings.ASYNCPG_POOL_MAX_INACTIVE_LIFETIME,
        timeout=settings.ASYNCPG_POOL_TIMEOUT,
    )

    asyncpg_pools[loop_id] = pool
    Logger.base.info(
        f'🏊 [Pool] created (min={settings.ASYNCPG_POOL_MIN_SIZE}, max={settings.ASYNCPG_POOL_MAX_SIZE})'
    )
    return pool


@asynccontextmanager
async def store_connection() -> AsyncIterator[asyncpg.Connection]:
    """
    Acquire a pooled connection and translate driver failures.

    Timeouts, dropped connections and interface errors surface as
    `UnavailableError` so callers never mistake them for a completed write.
    """
    try:
        async with asyncio.timeout(settings.STORE_TIMEOUT_SECONDS):
            pool = await get_asyncpg_pool()
            async with pool.acquire(timeout=settings.ASYNCPG_POOL_TIMEOUT) as conn:
                yield conn
    except STORE_FAILURES as e:
        Logger.base.error(f'❌ [Store] unavailable: {type(e).__name__}: {e}')
        metrics.record_store_unavailable(error_type=type(e).__name__)
        raise UnavailableError() from e


async def warmup_asyncpg_pool() -> int:
    """Acquire MIN_SIZE connections once so the first requests find a warm pool."""
    pool = await get_asyncpg_pool()
    connections = []

    Logger.base.info(
        f'🔥 [Pool Warmup] Starting warmup (target={settings.ASYNCPG_POOL_MIN_SIZE})...'
    )
    try:
        for i in range(settings.ASYNCPG_POOL_MIN_SIZE):
            try:
                connections.append(await pool.acquire(timeout=5.0))
            except asyncio.TimeoutError:
                Logger.base.warning(f'   ⚠️  Pool warmup timeout at {i + 1} connections')
                break
    finally:
        for conn in connections:
            await pool.release(conn)

    Logger.base.info(f'✅ [Pool Warmup] Completed: {len(connections)} connections ready')
    return len(connections)


async def close_all_asyncpg_pools() -> None:
    """Close every pool; only call during application shutdown."""
    for _, pool in list(asyncpg_pools.items()):
        try:
            await pool.close()
        except Exception as e:
            Logger.base.warning(f'⚠️  [Pool] close failed: {e}')
    asyncpg_pools.clear()
