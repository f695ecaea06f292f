"""
Health check API route
"""

from datetime import datetime, timezone
from fastapi import APIRouter, HTTPException

from campus_registry.database.connection import get_table_client
from campus_registry.models.entities import ALL_ENTITIES

router = APIRouter()


@router.get("")
async def health_check():
    """
    Health check - probes every table with the same ordered select a page
    load performs
    """
    client = get_table_client()
    if client is None:
        raise HTTPException(status_code=503, detail="Table client not initialized")

    tables = {}
    for entity in ALL_ENTITIES:
        result = await client.select_all(entity.table, entity.natural_key)
        tables[entity.table] = "reachable" if result.success else f"error: {result.error}"

    healthy = all(state == "reachable" for state in tables.values())
    return {
        "status": "healthy" if healthy else "degraded",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "backend": type(client).__name__,
        "tables": tables
    }
