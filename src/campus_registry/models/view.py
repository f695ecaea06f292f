"""
Page view models returned to the client

A page is the form, the table and the status banner of one entity.
"""

from typing import Dict, List, Optional
from datetime import datetime
from pydantic import BaseModel
from enum import Enum


class StatusKind(str, Enum):
    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"


class RowActionKind(str, Enum):
    EDIT = "edit"
    DELETE = "delete"


class FormMode(str, Enum):
    CREATING = "creating"
    EDITING = "editing"


class StatusMessage(BaseModel):
    """Transient banner shown above the page"""
    kind: StatusKind
    text: str
    shown_at: datetime
    expires_in: float


class CellView(BaseModel):
    field: str
    value: str


class RowAction(BaseModel):
    kind: RowActionKind
    record_id: str
    label: str


class RowView(BaseModel):
    """
    One rendered table row

    Placeholder rows carry a message spanning every column and no record.
    """
    record_id: Optional[str] = None
    cells: List[CellView] = []
    actions: List[RowAction] = []
    placeholder: bool = False
    message: Optional[str] = None
    colspan: Optional[int] = None


class ColumnView(BaseModel):
    field: str
    label: str


class TableView(BaseModel):
    columns: List[ColumnView]
    rows: List[RowView] = []


class FormView(BaseModel):
    mode: FormMode = FormMode.CREATING
    editing_id: Optional[str] = None
    values: Dict[str, str] = {}
    locked_fields: List[str] = []
    submit_label: str = "Save"


class PageView(BaseModel):
    """Snapshot of an entity page"""
    entity: str
    singular: str
    plural: str
    natural_key: str
    form: FormView
    table: TableView
    status: Optional[StatusMessage] = None
