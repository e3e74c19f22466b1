"""
FastAPI dependency injection module for the Survey Analytics backend.

Keeps endpoint handlers loosely coupled from the connection pool singleton.

Key Dependencies Provided:
- get_db_session: Async generator yielding database connections from the pool
- DBSessionDep: Type alias for injecting database connections into endpoints

Usage Examples:
    @router.get("/studies/{study_id}/summary")
    async def study_summary(study_id: str, db: DBSessionDep) -> StudySummary:
        return await get_study_summary(db, study_id, {})

Testing:
    app.dependency_overrides[get_db_session] = fake_session
"""

from typing import Annotated, AsyncGenerator

from asyncpg import Connection
from fastapi import Depends

from survey_analytics.core.database import get_db_pool


# =============================================================================
# Database Session Dependency
# =============================================================================

async def get_db_session() -> AsyncGenerator[Connection, None]:
    """
    Yield an async database connection from the pool.

    The connection is released back to the pool when the endpoint completes,
    regardless of whether the operation succeeded or raised an exception. A
    client that disconnects mid-request cancels the handler and the
    ``async with`` block still releases the connection.

    Yields:
        asyncpg.Connection: An active database connection from the pool.

    Raises:
        asyncpg.PostgresError: If connection acquisition fails.
    """
    pool = await get_db_pool()
    async with pool.acquire() as connection:
        yield connection


# =============================================================================
# Type Aliases for Dependency Injection
# =============================================================================

# Usage: async def endpoint(db: DBSessionDep)
DBSessionDep = Annotated[Connection, Depends(get_db_session)]
