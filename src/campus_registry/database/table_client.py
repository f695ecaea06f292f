"""
Remote table client - row operations against the hosted store
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import httpx

logger = logging.getLogger(__name__)


@dataclass
class TableResult:
    """Result from a remote table operation"""
    success: bool
    data: List[Dict[str, Any]] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def count(self) -> int:
        return len(self.data)

    @classmethod
    def ok(cls, data: Optional[List[Dict[str, Any]]] = None) -> "TableResult":
        return cls(success=True, data=data or [])

    @classmethod
    def failed(cls, error: str) -> "TableResult":
        return cls(success=False, error=error)


class TableClient(ABC):
    """Row operations the registry consumes, per table name"""

    @abstractmethod
    async def select_all(self, table: str, order_by: str, ascending: bool = True) -> TableResult:
        """Fetch every row ordered by one column"""

    @abstractmethod
    async def select_one(self, table: str, id_field: str, record_id: str) -> TableResult:
        """Fetch the single row whose internal id matches"""

    @abstractmethod
    async def insert(self, table: str, rows: List[Dict[str, Any]]) -> TableResult:
        """Insert new rows"""

    @abstractmethod
    async def update(self, table: str, id_field: str, record_id: str, values: Dict[str, Any]) -> TableResult:
        """Replace fields of the row whose internal id matches"""

    @abstractmethod
    async def delete(self, table: str, id_field: str, record_id: str) -> TableResult:
        """Remove the row whose internal id matches"""

    async def close(self) -> None:
        """Release network resources"""


class PostgrestTableClient(TableClient):
    """
    Supabase REST (PostgREST) implementation over httpx

    Every request carries the project key both as ``apikey`` and as a bearer
    token, which is what the hosted API expects for anonymous access.
    """

    def __init__(self, base_url: str, api_key: str, http_client: Optional[httpx.AsyncClient] = None):
        self.base_url = base_url.rstrip("/")
        self.rest_url = f"{self.base_url}/rest/v1"
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient()
        self._headers = {
            "apikey": api_key,
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        }

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def select_all(self, table: str, order_by: str, ascending: bool = True) -> TableResult:
        direction = "asc" if ascending else "desc"
        params = {"select": "*", "order": f"{order_by}.{direction}"}
        return await self._request("GET", table, params=params)

    async def select_one(self, table: str, id_field: str, record_id: str) -> TableResult:
        params = {"select": "*", id_field: f"eq.{record_id}", "limit": "1"}
        result = await self._request("GET", table, params=params)
        if result.success and not result.data:
            return TableResult.failed(f"Record not found: {record_id}")
        return result

    async def insert(self, table: str, rows: List[Dict[str, Any]]) -> TableResult:
        return await self._request(
            "POST", table, json=rows, headers={"Prefer": "return=minimal"}
        )

    async def update(self, table: str, id_field: str, record_id: str, values: Dict[str, Any]) -> TableResult:
        return await self._request(
            "PATCH", table,
            params={id_field: f"eq.{record_id}"},
            json=values,
            headers={"Prefer": "return=minimal"}
        )

    async def delete(self, table: str, id_field: str, record_id: str) -> TableResult:
        return await self._request(
            "DELETE", table,
            params={id_field: f"eq.{record_id}"},
            headers={"Prefer": "return=minimal"}
        )

    async def _request(
        self,
        method: str,
        table: str,
        params: Optional[Dict[str, str]] = None,
        json: Any = None,
        headers: Optional[Dict[str, str]] = None
    ) -> TableResult:
        request_headers = dict(self._headers)
        if headers:
            request_headers.update(headers)

        try:
            response = await self._client.request(
                method,
                f"{self.rest_url}/{table}",
                params=params,
                json=json,
                headers=request_headers
            )
        except httpx.HTTPError as e:
            logger.error(f"{method} {table} failed: {e}")
            return TableResult.failed(str(e) or type(e).__name__)

        if response.is_error:
            message = self._error_message(response)
            logger.error(f"{method} {table} returned {response.status_code}: {message}")
            return TableResult.failed(message)

        if not response.content:
            return TableResult.ok()

        body = response.json()
        if isinstance(body, dict):
            body = [body]
        return TableResult.ok(body)

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        """PostgREST errors are JSON objects with a ``message`` key"""
        try:
            body = response.json()
        except ValueError:
            return response.text or f"HTTP {response.status_code}"

        if isinstance(body, dict) and body.get("message"):
            return body["message"]
        return response.text or f"HTTP {response.status_code}"
