"""
Table client lifecycle management
"""

import logging
from typing import Optional

from campus_registry.config.settings import Settings
from campus_registry.database.table_client import TableClient, PostgrestTableClient

logger = logging.getLogger(__name__)

# Global table client
table_client: Optional[TableClient] = None


async def init_table_client(settings: Settings, client: Optional[TableClient] = None) -> TableClient:
    """
    Initialize the table client for the configured backend

    Args:
        settings: Application settings
        client: Pre-built client to install instead of building one

    Returns:
        The active table client
    """
    global table_client

    if client is not None:
        table_client = client
        logger.info(f"Table client installed: {type(client).__name__}")
        return table_client

    errors = settings.validate()
    if errors:
        raise ValueError(f"Configuration errors: {', '.join(errors)}")

    if settings.backend == "postgres":
        from campus_registry.database.postgres_client import PostgresTableClient
        table_client = await PostgresTableClient.connect(
            settings.database_url,
            min_size=settings.db_pool_min_size,
            max_size=settings.db_pool_max_size,
            command_timeout=settings.db_command_timeout
        )
    else:
        table_client = PostgrestTableClient(settings.supabase_url, settings.supabase_key)
        logger.info(f"Supabase REST client configured for {settings.supabase_url}")

    return table_client


async def close_table_client():
    """Close the active table client"""
    global table_client
    if table_client:
        await table_client.close()
    table_client = None
    logger.info("Table client closed")


def get_table_client() -> Optional[TableClient]:
    """Get the active table client"""
    return table_client
