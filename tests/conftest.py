"""
pytest configuration and fixtures for the registry test suite
In-memory table client with failure injection, a controllable clock, and
controllers wired to both.
"""

import copy
from typing import Any, Dict, List, Optional

import pytest

from campus_registry.database.table_client import TableClient, TableResult
from campus_registry.models.entities import STUDENTS, COURSES, PROFESSORS
from campus_registry.services.entity_controller import EntityController
from campus_registry.services.status_notifier import StatusNotifier


class InMemoryTableClient(TableClient):
    """Row store double: tables of dict rows with store-assigned integer ids"""

    def __init__(self):
        self.tables: Dict[str, List[Dict[str, Any]]] = {}
        self.failures: Dict[str, str] = {}
        self.calls: List[tuple] = []
        self._next_id = 1
        self.closed = False

    def seed(self, table: str, *rows: Dict[str, Any]) -> List[int]:
        ids = []
        for row in rows:
            stored = dict(row)
            stored.setdefault("id", self._next_id)
            self._next_id = max(self._next_id, stored["id"]) + 1
            self.tables.setdefault(table, []).append(stored)
            ids.append(stored["id"])
        return ids

    def fail(self, operation: str, message: str):
        """Make every later call of ``operation`` fail with ``message``"""
        self.failures[operation] = message

    def recover(self, operation: Optional[str] = None):
        if operation is None:
            self.failures.clear()
        else:
            self.failures.pop(operation, None)

    def rows(self, table: str) -> List[Dict[str, Any]]:
        return self.tables.get(table, [])

    def _check(self, operation: str, *args) -> Optional[TableResult]:
        self.calls.append((operation,) + args)
        if operation in self.failures:
            return TableResult.failed(self.failures[operation])
        return None

    def _find(self, table: str, id_field: str, record_id: str):
        return [row for row in self.rows(table) if str(row.get(id_field)) == str(record_id)]

    async def select_all(self, table, order_by, ascending=True):
        failure = self._check("select_all", table, order_by, ascending)
        if failure:
            return failure
        ordered = sorted(self.rows(table), key=lambda row: row.get(order_by), reverse=not ascending)
        return TableResult.ok(copy.deepcopy(ordered))

    async def select_one(self, table, id_field, record_id):
        failure = self._check("select_one", table, id_field, record_id)
        if failure:
            return failure
        matches = self._find(table, id_field, record_id)
        if not matches:
            return TableResult.failed(f"Record not found: {record_id}")
        return TableResult.ok(copy.deepcopy(matches[:1]))

    async def insert(self, table, rows):
        failure = self._check("insert", table, rows)
        if failure:
            return failure
        for row in rows:
            self.seed(table, {k: v for k, v in row.items() if k != "id"})
        return TableResult.ok()

    async def update(self, table, id_field, record_id, values):
        failure = self._check("update", table, id_field, record_id, values)
        if failure:
            return failure
        for row in self._find(table, id_field, record_id):
            row.update(values)
        return TableResult.ok()

    async def delete(self, table, id_field, record_id):
        failure = self._check("delete", table, id_field, record_id)
        if failure:
            return failure
        self.tables[table] = [
            row for row in self.rows(table) if str(row.get(id_field)) != str(record_id)
        ]
        return TableResult.ok()

    async def close(self):
        self.closed = True


class FakeClock:
    """Monotonic clock the tests move by hand"""

    def __init__(self, start: float = 100.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


@pytest.fixture
def table_client() -> InMemoryTableClient:
    return InMemoryTableClient()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def notifier(clock) -> StatusNotifier:
    return StatusNotifier(timeout=3.0, clock=clock)


@pytest.fixture
def students(table_client, notifier) -> EntityController:
    return EntityController(STUDENTS, table_client, notifier)


@pytest.fixture
def courses(table_client, notifier) -> EntityController:
    return EntityController(COURSES, table_client, notifier)


@pytest.fixture
def professors(table_client, notifier) -> EntityController:
    return EntityController(PROFESSORS, table_client, notifier)


def cell_values(row) -> List[str]:
    return [cell.value for cell in row.cells]
