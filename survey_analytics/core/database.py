"""
asyncpg connection pool for the survey response store.

The analytics service only reads: studies, respondents and responses are
written by the collection side. One pool is shared by every request; each
request borrows a single connection through core/dependencies.py.

Lifecycle:
    init_db()      create the pool (idempotent), called from the app lifespan
    get_db_pool()  return the pool, creating it on first use
    close_db()     close and forget the pool; a later get_db_pool() reopens it

Pool sizing and the per-query timeout come from Settings
(db_pool_min_size, db_pool_max_size, db_command_timeout).
"""

import logging
from typing import Optional
from urllib.parse import urlsplit

import asyncpg
from asyncpg import Pool

from survey_analytics.core.config import Settings, get_settings

logger = logging.getLogger(__name__)


# =============================================================================
# Pool Singleton
# =============================================================================

_pool: Optional[Pool] = None


def _describe_target(database_url: str) -> str:
    """host:port/database of a DSN, without credentials, for log lines."""
    parts = urlsplit(database_url)
    return f"{parts.hostname}:{parts.port or 5432}{parts.path}"


# =============================================================================
# Lifecycle
# =============================================================================

async def init_db(settings: Optional[Settings] = None) -> Pool:
    """
    Create the shared pool if it does not exist yet.

    Args:
        settings: Settings to size the pool from; defaults to get_settings().

    Returns:
        The shared asyncpg pool.

    Raises:
        asyncpg.PostgresError: The server refused the connection.
        OSError: The database host is unreachable.
    """
    global _pool

    if _pool is not None:
        return _pool

    settings = settings or get_settings()
    _pool = await asyncpg.create_pool(
        dsn=settings.database_url,
        min_size=settings.db_pool_min_size,
        max_size=settings.db_pool_max_size,
        command_timeout=settings.db_command_timeout,
        # Naive submitted_at values are UTC
        server_settings={"timezone": "UTC"},
    )
    logger.info(
        f"Opened pool to {_describe_target(settings.database_url)} "
        f"(min={settings.db_pool_min_size}, max={settings.db_pool_max_size})"
    )
    return _pool


async def get_db_pool() -> Pool:
    """Return the shared pool, opening it first if the lifespan has not."""
    if _pool is None:
        return await init_db()
    return _pool


async def close_db() -> None:
    """Close the shared pool after in-flight queries finish. No-op without a pool."""
    global _pool

    if _pool is None:
        return

    pool, _pool = _pool, None
    await pool.close()
