"""Pool lifespan middleware - ties the document store pool to the ASGI lifespan."""

import logging
from typing import Any

from psycopg_pool import AsyncConnectionPool, PoolTimeout

logger = logging.getLogger(__name__)


class PoolLifespanMiddleware:
    """Open the pool before the first request and close it on shutdown.

    Startup waits until ``min_size`` connections are established, so a server
    that cannot reach the database fails to start instead of answering every
    routing request with 500.
    """

    def __init__(self, pool: AsyncConnectionPool, open_timeout: float = 30.0) -> None:
        self._pool = pool
        self._open_timeout = open_timeout

    async def process_startup(
        self, scope: dict[str, Any], event: dict[str, Any]
    ) -> None:
        try:
            await self._pool.open(wait=True, timeout=self._open_timeout)
        except PoolTimeout:
            logger.error(
                "Database unreachable after %.0fs; refusing to start", self._open_timeout
            )
            raise
        logger.info(
            "Document store pool opened (min_size=%d, max_size=%d)",
            self._pool.min_size,
            self._pool.max_size,
        )

    async def process_shutdown(
        self, scope: dict[str, Any], event: dict[str, Any]
    ) -> None:
        await self._pool.close()
        logger.info("Document store pool closed")
