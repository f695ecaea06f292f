"""
Declarative rendering of records into table views
"""

from typing import Any, Dict, List

from campus_registry.models.entity import EntityDescriptor
from campus_registry.models.view import (
    CellView, ColumnView, RowAction, RowActionKind, RowView, TableView
)


def format_value(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def render_columns(entity: EntityDescriptor) -> List[ColumnView]:
    return [ColumnView(field=f.name, label=f.label) for f in entity.fields]


def render_row(entity: EntityDescriptor, record: Dict[str, Any]) -> RowView:
    """Map one record to a row: cells in field order, then edit/delete actions"""
    record_id = format_value(record.get(entity.id_field))
    return RowView(
        record_id=record_id,
        cells=[CellView(field=f.name, value=format_value(record.get(f.name))) for f in entity.fields],
        actions=[
            RowAction(kind=RowActionKind.EDIT, record_id=record_id, label="Edit"),
            RowAction(kind=RowActionKind.DELETE, record_id=record_id, label="Delete"),
        ]
    )


def render_placeholder(entity: EntityDescriptor) -> RowView:
    # spans every field column plus the actions column
    return RowView(
        placeholder=True,
        message=entity.placeholder_text,
        colspan=len(entity.fields) + 1
    )


def render_table(entity: EntityDescriptor, records: List[Dict[str, Any]]) -> TableView:
    """
    Render a full table body from the records in the order given

    An empty result renders exactly one placeholder row, never an empty body.
    """
    if records:
        rows = [render_row(entity, record) for record in records]
    else:
        rows = [render_placeholder(entity)]
    return TableView(columns=render_columns(entity), rows=rows)


def empty_table(entity: EntityDescriptor) -> TableView:
    """Table shown before anything was loaded"""
    return TableView(columns=render_columns(entity), rows=[])
