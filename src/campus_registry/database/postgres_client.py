"""
Direct Postgres implementation of the table client, over an asyncpg pool
"""

import logging
from typing import Any, Dict, List, Optional

import asyncpg

from campus_registry.database.table_client import TableClient, TableResult

logger = logging.getLogger(__name__)


def quote_ident(name: str) -> str:
    """Quote a table or column name for interpolation into SQL"""
    return '"' + name.replace('"', '""') + '"'


class PostgresTableClient(TableClient):
    """
    Table client for the same database the REST API fronts

    Identifiers only ever come from entity descriptors; values are always
    bound parameters. Internal ids are compared as text so string ids from
    the HTTP layer work for integer and uuid columns alike.
    """

    def __init__(self, pool: asyncpg.Pool):
        self.pool = pool

    @classmethod
    async def connect(
        cls,
        database_url: str,
        min_size: int = 1,
        max_size: int = 5,
        command_timeout: Optional[float] = 60
    ) -> "PostgresTableClient":
        pool = await asyncpg.create_pool(
            database_url,
            min_size=min_size,
            max_size=max_size,
            command_timeout=command_timeout,
            statement_cache_size=0  # pgbouncer compatibility
        )

        async with pool.acquire() as conn:
            await conn.fetchval("SELECT 1")

        logger.info("Postgres pool initialized successfully")
        return cls(pool)

    async def close(self) -> None:
        await self.pool.close()
        logger.info("Postgres pool closed")

    async def select_all(self, table: str, order_by: str, ascending: bool = True) -> TableResult:
        direction = "ASC" if ascending else "DESC"
        sql = f"SELECT * FROM {quote_ident(table)} ORDER BY {quote_ident(order_by)} {direction}"
        return await self._fetch(sql)

    async def select_one(self, table: str, id_field: str, record_id: str) -> TableResult:
        sql = f"SELECT * FROM {quote_ident(table)} WHERE {quote_ident(id_field)}::text = $1 LIMIT 1"
        result = await self._fetch(sql, str(record_id))
        if result.success and not result.data:
            return TableResult.failed(f"Record not found: {record_id}")
        return result

    async def insert(self, table: str, rows: List[Dict[str, Any]]) -> TableResult:
        try:
            async with self.pool.acquire() as conn:
                async with conn.transaction():
                    for row in rows:
                        columns = list(row.keys())
                        placeholders = ", ".join(f"${i + 1}" for i in range(len(columns)))
                        sql = (
                            f"INSERT INTO {quote_ident(table)} "
                            f"({', '.join(quote_ident(c) for c in columns)}) VALUES ({placeholders})"
                        )
                        await conn.execute(sql, *[row[c] for c in columns])
            return TableResult.ok()
        except (asyncpg.PostgresError, asyncpg.InterfaceError, OSError) as e:
            logger.error(f"INSERT {table} failed: {e}")
            return TableResult.failed(str(e))

    async def update(self, table: str, id_field: str, record_id: str, values: Dict[str, Any]) -> TableResult:
        columns = list(values.keys())
        assignments = ", ".join(f"{quote_ident(c)} = ${i + 1}" for i, c in enumerate(columns))
        sql = (
            f"UPDATE {quote_ident(table)} SET {assignments} "
            f"WHERE {quote_ident(id_field)}::text = ${len(columns) + 1}"
        )
        return await self._execute(sql, *[values[c] for c in columns], str(record_id))

    async def delete(self, table: str, id_field: str, record_id: str) -> TableResult:
        sql = f"DELETE FROM {quote_ident(table)} WHERE {quote_ident(id_field)}::text = $1"
        return await self._execute(sql, str(record_id))

    async def _fetch(self, sql: str, *args: Any) -> TableResult:
        try:
            async with self.pool.acquire() as conn:
                records = await conn.fetch(sql, *args)
            return TableResult.ok([dict(record) for record in records])
        except (asyncpg.PostgresError, asyncpg.InterfaceError, OSError) as e:
            logger.error(f"Query failed: {e}")
            return TableResult.failed(str(e))

    async def _execute(self, sql: str, *args: Any) -> TableResult:
        try:
            async with self.pool.acquire() as conn:
                await conn.execute(sql, *args)
            return TableResult.ok()
        except (asyncpg.PostgresError, asyncpg.InterfaceError, OSError) as e:
            logger.error(f"Statement failed: {e}")
            return TableResult.failed(str(e))
