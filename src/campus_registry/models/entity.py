"""
Entity descriptor models - one generic description per managed table
"""

from typing import Any, Dict, List, Optional
from pydantic import BaseModel
from enum import Enum


class FieldType(str, Enum):
    """Supported field types in entity descriptors"""
    STRING = "string"
    INTEGER = "integer"


class FieldCoercionError(ValueError):
    """Raised when a form value cannot be converted to its column type"""

    def __init__(self, field_name: str, label: str, value: str, expected: FieldType):
        self.field_name = field_name
        self.label = label
        self.value = value
        self.expected = expected
        super().__init__(f"{label} must be an {expected.value}, got '{value}'")


class EntityField(BaseModel):
    """Field definition within an entity descriptor"""
    name: str
    label: str
    type: FieldType = FieldType.STRING

    def coerce(self, value: str) -> Any:
        """Convert a trimmed form value into the value sent to the store"""
        if self.type == FieldType.INTEGER:
            try:
                return int(value)
            except ValueError:
                raise FieldCoercionError(self.name, self.label, value, self.type)
        return value


class EntityDescriptor(BaseModel):
    """Everything a controller needs to manage one table"""
    table: str
    singular: str
    plural: str
    natural_key: str
    fields: List[EntityField]
    id_field: str = "id"

    @property
    def field_names(self) -> List[str]:
        return [f.name for f in self.fields]

    @property
    def editable_fields(self) -> List[EntityField]:
        """Fields an update may replace - everything but the natural key"""
        return [f for f in self.fields if f.name != self.natural_key]

    @property
    def placeholder_text(self) -> str:
        return f"No {self.plural} registered"

    def build_record(self, values: Dict[str, str], fields: Optional[List[EntityField]] = None) -> Dict[str, Any]:
        """
        Build the payload for the store from trimmed form values

        Args:
            values: Mapping of field name to trimmed form value
            fields: Subset of fields to include (default: all fields)

        Returns:
            Dictionary of column name to coerced value

        Raises:
            FieldCoercionError: if a value does not fit its column type
        """
        selected = self.fields if fields is None else fields
        return {f.name: f.coerce(values.get(f.name, "")) for f in selected}
