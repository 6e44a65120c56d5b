"""
PostgreSQL Client Wrapper

Centralized PostgreSQL client wrapper around an asyncpg connection pool.
Provides a consistent database access pattern for repositories.

Usage:
    from core.postgres_client import PostgresClientWrapper

    db = PostgresClientWrapper("tax_service")

    # Execute queries
    async with db:
        rows = await db.query("SELECT * FROM tax.ledger_entries WHERE company_id = $1", [company_id])
"""

import logging
from typing import Any, Dict, List, Optional

import asyncpg

from core.config import InfraConfig

logger = logging.getLogger(__name__)


class PostgresClientWrapper:
    """
    PostgreSQL client wrapper.

    Provides:
    - Lazy asyncpg pool creation on first use
    - Environment variable configuration through InfraConfig
    - Rows returned as plain dictionaries
    """

    def __init__(
        self,
        service_name: str,
        config: Optional[InfraConfig] = None,
        host: Optional[str] = None,
        port: Optional[int] = None,
        database: Optional[str] = None,
    ):
        """
        Initialize PostgreSQL client wrapper.

        Args:
            service_name: Name of the service using this client
            config: Infrastructure config (loaded from environment if not given)
            host: PostgreSQL host override
            port: PostgreSQL port override
            database: Database name override
        """
        config = config or InfraConfig.from_env()

        self.service_name = service_name
        self.host = host or config.postgres_host
        self.port = port or config.postgres_port
        self.database = database or config.postgres_db
        self.username = config.postgres_user
        self.password = config.postgres_password
        self.min_size = config.postgres_min_pool_size
        self.max_size = config.postgres_max_pool_size

        self._pool: Optional[asyncpg.Pool] = None

        logger.info(f"PostgreSQL client initialized for {service_name}: {self.host}:{self.port}/{self.database}")

    async def connect(self) -> None:
        """Create the connection pool if it does not exist yet"""
        if self._pool is None:
            self._pool = await asyncpg.create_pool(
                host=self.host,
                port=self.port,
                database=self.database,
                user=self.username,
                password=self.password,
                min_size=self.min_size,
                max_size=self.max_size,
                server_settings={"application_name": self.service_name},
            )

    async def __aenter__(self):
        """Async context manager entry"""
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Pool stays open across requests; closed explicitly on shutdown"""
        return None

    async def health_check(self) -> bool:
        """Check database health"""
        try:
            async with self:
                return await self._pool.fetchval("SELECT 1") == 1
        except Exception as e:
            logger.warning(f"PostgreSQL health check failed: {e}")
            return False

    async def query(self, sql: str, params: Optional[List[Any]] = None) -> List[Dict[str, Any]]:
        """Execute query and return results"""
        await self.connect()
        records = await self._pool.fetch(sql, *(params or []))
        return [dict(record) for record in records]

    async def execute(self, sql: str, params: Optional[List[Any]] = None) -> str:
        """Execute SQL statement"""
        await self.connect()
        return await self._pool.execute(sql, *(params or []))

    async def execute_many(self, sql: str, params_list: List[List[Any]]) -> None:
        """Execute SQL statement with multiple parameter sets in one transaction"""
        await self.connect()
        async with self._pool.acquire() as connection:
            async with connection.transaction():
                await connection.executemany(sql, params_list)

    async def close(self):
        """Close connection pool"""
        if self._pool is not None:
            await self._pool.close()
            self._pool = None

