"""
SwellForm — blocking wrapper around AsyncSwellForm.
"""

import asyncio
from typing import Any, Optional

from swellforms.form import AsyncSwellForm
from swellforms.models.form import FieldsResponse, FormField
from swellforms.models.results import SubmitResult, ValidateResult
from swellforms.transport.http import Fetch


class SwellForm:
    """Sync wrapper around AsyncSwellForm. Runs the event loop internally."""

    def __init__(self, form_id: str, initial_fields: Optional[dict[str, Any]] = None, **kwargs: Any):
        self._async = AsyncSwellForm(form_id, initial_fields, **kwargs)
        self._loop = asyncio.new_event_loop()

    def _run(self, coro: Any) -> Any:
        return self._loop.run_until_complete(coro)

    def close(self) -> None:
        self._loop.close()

    @property
    def form_id(self) -> str:
        return self._async.form_id

    @property
    def definitions_fetched(self) -> bool:
        return self._async.definitions_fetched

    def set_field(self, name: str, value: Any) -> None:
        self._async.set_field(name, value)

    def set_fields(self, values: dict[str, Any]) -> None:
        self._async.set_fields(values)

    def clear_errors(self) -> None:
        self._async.clear_errors()

    def get_field(self, name: str, default: Any = None) -> Any:
        return self._async.get_field(name, default)

    def get_fields(self) -> dict[str, Any]:
        return self._async.get_fields()

    def get_definitions(self) -> list[FormField]:
        return self._async.get_definitions()

    def is_processing(self) -> bool:
        return self._async.is_processing()

    def is_valid(self, name: Optional[str] = None) -> bool:
        return self._async.is_valid(name)

    def has_error(self, name: str) -> bool:
        return self._async.has_error(name)

    def get_field_error(self, name: str) -> Optional[str]:
        return self._async.get_field_error(name)

    def get_form_errors(self) -> dict[str, list[str]]:
        return self._async.get_form_errors()

    def has_form_errors(self) -> bool:
        return self._async.has_form_errors()

    def fetch_fields(self, fetch: Optional[Fetch] = None) -> FieldsResponse:
        return self._run(self._async.fetch_fields(fetch))

    def validate(self, only: Optional[list[str]] = None, fetch: Optional[Fetch] = None) -> ValidateResult:
        return self._run(self._async.validate(only=only, fetch=fetch))

    def validate_field(self, name: str, fetch: Optional[Fetch] = None) -> ValidateResult:
        return self._run(self._async.validate_field(name, fetch=fetch))

    def submit(self, fields: Optional[dict[str, Any]] = None, fetch: Optional[Fetch] = None) -> SubmitResult:
        return self._run(self._async.submit(fields=fields, fetch=fetch))
