"""
Entity controller - binds one page's form and table to one remote table

A single generic controller serves every entity; the three pages are
descriptor instances, not copies.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from campus_registry.database.table_client import TableClient, TableResult
from campus_registry.models.entity import EntityDescriptor, FieldCoercionError
from campus_registry.models.view import FormMode, FormView, PageView, TableView
from campus_registry.services.confirmation import Confirmation, DeclineConfirmation
from campus_registry.services.rendering import empty_table, format_value, render_table
from campus_registry.services.status_notifier import StatusNotifier
from campus_registry.utils.error_handling import log_business_error

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ControllerState:
    """Either creating a new row or editing the row with ``record_id``"""
    mode: FormMode = FormMode.CREATING
    record_id: Optional[str] = None

    @classmethod
    def creating(cls) -> "ControllerState":
        return cls()

    @classmethod
    def editing(cls, record_id: str) -> "ControllerState":
        return cls(mode=FormMode.EDITING, record_id=record_id)

    @property
    def is_editing(self) -> bool:
        return self.mode == FormMode.EDITING


class EntityController:
    """
    Owns the form, table and state of one entity page

    Every public action runs under a per-controller lock, so an action and
    its reload finish before the next action starts. Every mutation is
    followed by a full reload of the table.
    """

    def __init__(self, entity: EntityDescriptor, client: TableClient, notifier: StatusNotifier):
        self.entity = entity
        self.client = client
        self.notifier = notifier
        self.state = ControllerState.creating()
        self.form_values: Dict[str, str] = {}
        self.table: TableView = empty_table(entity)
        self._lock = asyncio.Lock()

    # Page snapshot

    def page(self) -> PageView:
        return PageView(
            entity=self.entity.table,
            singular=self.entity.singular,
            plural=self.entity.plural,
            natural_key=self.entity.natural_key,
            form=self._form_view(),
            table=self.table,
            status=self.notifier.current
        )

    def _form_view(self) -> FormView:
        values = {name: self.form_values.get(name, "") for name in self.entity.field_names}
        if self.state.is_editing:
            return FormView(
                mode=FormMode.EDITING,
                editing_id=self.state.record_id,
                values=values,
                locked_fields=[self.entity.natural_key],
                submit_label="Update"
            )
        return FormView(values=values)

    # Actions

    async def open_page(self) -> bool:
        """What a page (re)load does: back to create mode, then load"""
        async with self._lock:
            self._reset_form()
            return await self._load()

    async def load(self) -> bool:
        async with self._lock:
            return await self._load()

    async def submit(self, values: Dict[str, Any]) -> bool:
        """
        Handle a form submission in the current mode

        Only for callers that own this page instance; the HTTP layer names
        the operation explicitly through ``create`` and ``update``.

        Args:
            values: Raw form values keyed by field name

        Returns:
            True if the remote operation succeeded
        """
        async with self._lock:
            if self.state.is_editing:
                return await self._update_from_form(self.state.record_id, values)
            return await self._create_from_form(values)

    async def create(self, values: Dict[str, Any]) -> bool:
        """Insert a new row, whatever row the form is currently editing"""
        async with self._lock:
            return await self._create_from_form(values)

    async def update(self, record_id: str, values: Dict[str, Any]) -> bool:
        """Replace every field but the natural key of row ``record_id``"""
        async with self._lock:
            return await self._update_from_form(str(record_id), values)

    async def begin_edit(self, record_id: str) -> bool:
        """Fetch one row into the form and switch to update mode"""
        async with self._lock:
            result = await self.client.select_one(self.entity.table, self.entity.id_field, record_id)
            if not result.success or not result.data:
                self._report_failure("edit_load", f"Error loading {self.entity.singular}", result, record_id)
                return False

            record = result.data[0]
            self.form_values = {name: format_value(record.get(name)) for name in self.entity.field_names}
            self.state = ControllerState.editing(str(record_id))

            key_value = self.form_values.get(self.entity.natural_key, "")
            logger.info(f"Editing {self.entity.singular} {key_value} (id={record_id})")
            self.notifier.info(f"Editing {self.entity.singular} {key_value}")
            return True

    async def cancel_edit(self) -> None:
        async with self._lock:
            if self.state.is_editing:
                logger.info(f"Edit of {self.entity.singular} id={self.state.record_id} cancelled")
            self._reset_form()

    async def delete(self, record_id: str, confirmation: Optional[Confirmation] = None) -> bool:
        """
        Delete a row after explicit confirmation

        A declined confirmation is a silent no-op: no remote call, no message.

        Args:
            record_id: Internal identifier of the row
            confirmation: Capability asked before deleting (default: decline)

        Returns:
            True only if the row was deleted
        """
        confirmation = confirmation or DeclineConfirmation()
        async with self._lock:
            prompt = f"Are you sure you want to delete this {self.entity.singular}?"
            if not await confirmation.confirm(prompt):
                logger.debug(f"Delete of {self.entity.singular} id={record_id} declined")
                return False

            logger.info(f"Deleting {self.entity.singular} id={record_id}")
            result = await self.client.delete(self.entity.table, self.entity.id_field, record_id)
            if not result.success:
                self._report_failure("delete", "Error", result, record_id)
                return False

            if self._is_editing(record_id):
                self._reset_form()

            logger.info(f"{self.entity.singular.capitalize()} id={record_id} deleted")
            self.notifier.success(f"{self.entity.singular.capitalize()} deleted successfully")
            await self._load()
            return True

    # Internals (callers hold the lock)

    async def _load(self) -> bool:
        result = await self.client.select_all(self.entity.table, self.entity.natural_key, ascending=True)
        if not result.success:
            # keep the stale table visible
            self._report_failure("load", f"Error loading {self.entity.plural}", result)
            return False

        self.table = render_table(self.entity, result.data)
        logger.info(f"Loaded {result.count} {self.entity.plural}")
        return True

    async def _create_from_form(self, values: Dict[str, Any]) -> bool:
        trimmed = self._trim(values)
        # an open edit form belongs to the row being edited
        if not self.state.is_editing:
            self.form_values = trimmed
        return await self._create(trimmed)

    async def _update_from_form(self, record_id: str, values: Dict[str, Any]) -> bool:
        trimmed = self._trim(values)
        if self._is_editing(record_id):
            # natural key is locked while editing
            trimmed[self.entity.natural_key] = self.form_values.get(self.entity.natural_key, "")
            self.form_values = trimmed
        return await self._update(record_id, trimmed)

    async def _create(self, values: Dict[str, str]) -> bool:
        try:
            record = self.entity.build_record(values)
        except FieldCoercionError as e:
            self._report_invalid(e)
            return False

        logger.info(f"Creating {self.entity.singular}: {record}")
        result = await self.client.insert(self.entity.table, [record])
        if not result.success:
            self._report_failure("create", "Error", result)
            return False

        logger.info(f"{self.entity.singular.capitalize()} created")
        self.notifier.success(f"{self.entity.singular.capitalize()} created successfully")
        if not self.state.is_editing:
            self.form_values = {}
        await self._load()
        return True

    async def _update(self, record_id: str, values: Dict[str, str]) -> bool:
        try:
            changes = self.entity.build_record(values, self.entity.editable_fields)
        except FieldCoercionError as e:
            self._report_invalid(e)
            return False

        logger.info(f"Updating {self.entity.singular} id={record_id}: {changes}")
        result = await self.client.update(self.entity.table, self.entity.id_field, record_id, changes)
        if not result.success:
            self._report_failure("update", "Error", result, record_id)
            return False

        logger.info(f"{self.entity.singular.capitalize()} id={record_id} updated")
        self.notifier.success(f"{self.entity.singular.capitalize()} updated successfully")
        if self._is_editing(record_id):
            self._reset_form()
        await self._load()
        return True

    def _is_editing(self, record_id: str) -> bool:
        return self.state.is_editing and self.state.record_id == str(record_id)

    def _reset_form(self) -> None:
        self.state = ControllerState.creating()
        self.form_values = {}

    def _trim(self, values: Dict[str, Any]) -> Dict[str, str]:
        return {
            name: format_value(values.get(name)).strip()
            for name in self.entity.field_names
        }

    def _report_failure(
        self,
        operation: str,
        prefix: str,
        result: TableResult,
        record_id: Optional[str] = None
    ) -> None:
        message = result.error or "Unknown error"
        log_business_error(
            "remote_operation_failed",
            f"{operation} on {self.entity.table} failed: {message}",
            {"table": self.entity.table, "operation": operation, "record_id": record_id}
        )
        self.notifier.error(f"{prefix}: {message}")

    def _report_invalid(self, error: FieldCoercionError) -> None:
        log_business_error(
            "invalid_field",
            str(error),
            {"table": self.entity.table, "field": error.field_name}
        )
        self.notifier.error(f"Error: {error}")


def build_controllers(
    entities: List[EntityDescriptor],
    client: TableClient,
    notifier_factory: Callable[[], StatusNotifier] = StatusNotifier
) -> Dict[str, EntityController]:
    """One controller per entity, keyed by table name, each with its own banner"""
    return {
        entity.table: EntityController(entity, client, notifier_factory())
        for entity in entities
    }
