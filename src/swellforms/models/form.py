"""
Form field models — GET /api/v1/forms/{formId}/fields.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator


class FieldType(str, Enum):
    TEXT = "text"
    EMAIL = "email"
    TEXTAREA = "textarea"
    PASSWORD = "password"
    NUMBER = "number"
    SELECT = "select"
    CHECKBOX = "checkbox"
    RADIO = "radio"


def _number_to_str(v: Any) -> Any:
    if isinstance(v, bool) or not isinstance(v, (int, float)):
        return v
    if isinstance(v, float) and v.is_integer():
        v = int(v)
    return str(v)


class FieldOption(BaseModel):
    value: str
    label: str = ""

    @field_validator("value", "label", mode="before")
    @classmethod
    def _stringify(cls, v: Any) -> Any:
        return _number_to_str(v)


class FormField(BaseModel):
    id: str
    name: Optional[str] = None
    label: Optional[str] = None
    type: FieldType = FieldType.TEXT
    required: bool = False
    placeholder: Optional[str] = None
    options: Optional[list[FieldOption]] = None
    meta: Optional[dict[str, Any]] = None

    model_config = {"frozen": True}

    @field_validator("id", "name", "label", "placeholder", mode="before")
    @classmethod
    def _stringify(cls, v: Any) -> Any:
        return _number_to_str(v)

    @field_validator("type", mode="before")
    @classmethod
    def _known_type(cls, v: Any) -> Any:
        try:
            return FieldType(v)
        except ValueError:
            return FieldType.TEXT

    @field_validator("required", mode="before")
    @classmethod
    def _required_flag(cls, v: Any) -> Any:
        return bool(v)

    @property
    def key(self) -> str:
        """Name used in field values and the error bag."""
        return self.name or self.id


class FieldsResponse(BaseModel):
    form_id: str = Field(alias="formId")
    fields: list[FormField] = Field(default_factory=list)

    model_config = {"populate_by_name": True}
