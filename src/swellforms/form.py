"""
AsyncSwellForm — local state of one Swellforms form plus its validate/submit lifecycle.

Values are edited locally, then checked against the server. Once field
definitions have been fetched, required fields are checked locally first and
the server is only contacted when that check passes.

Nothing serializes concurrent calls on one instance: if ``validate`` and
``submit`` overlap, ``processing`` and the error bag reflect whichever call
finishes last.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Iterator, Optional

from swellforms.errors import ErrorCode, SwellformsError
from swellforms.models.context import PageContext
from swellforms.models.form import FieldsResponse, FormField
from swellforms.models.results import (
    SubmitResult,
    SubmitResultErr,
    SubmitResultOk,
    ValidateResult,
    ValidateResultErr,
    ValidateResultOk,
)
from swellforms.transport.http import (
    DEFAULT_BASE_URL,
    DEFAULT_TIMEOUT_S,
    Fetch,
    endpoint,
    fetch_json,
    json_request,
)
from swellforms.utils import is_empty, normalize_errors, to_plain

log = logging.getLogger(__name__)

REQUIRED_MESSAGE = "This field is required."
LOCAL_FAILURE_MESSAGE = "Please fill in all required fields."


def _get(body: Any, key: str) -> Any:
    return body.get(key) if isinstance(body, dict) else None


def _message(body: Any) -> Optional[str]:
    msg = _get(body, "message")
    return msg if isinstance(msg, str) else None


def _prune(bag: dict[str, list[str]]) -> dict[str, list[str]]:
    return {name: messages for name, messages in bag.items() if messages}


def _parse_definitions(body: Any) -> list[FormField]:
    if isinstance(body, list):
        raw = body
    elif isinstance(_get(body, "fields"), list):
        raw = body["fields"]
    else:
        raw = []
    definitions = []
    for item in raw:
        if not isinstance(item, dict):
            log.warning("Skipping field definition that is not an object: %r", item)
            continue
        try:
            definitions.append(FormField.model_validate(item))
        except ValueError as e:
            log.warning("Skipping invalid field definition %r: %s", item.get("id"), e)
    return definitions


class AsyncSwellForm:
    """Async form state machine (primary)."""

    def __init__(
        self,
        form_id: str,
        initial_fields: Optional[dict[str, Any]] = None,
        *,
        fetch: Optional[Fetch] = None,
        base_url: str = DEFAULT_BASE_URL,
        context: Optional[PageContext] = None,
        timeout: float = DEFAULT_TIMEOUT_S,
    ):
        self._form_id = form_id
        self._fields: dict[str, Any] = dict(initial_fields or {})
        self._errors: dict[str, list[str]] = {}
        self._definitions: list[FormField] = []
        self._definitions_fetched = False
        self._processing = False
        self._fetch = fetch
        self._base_url = base_url
        self._context = context or PageContext()
        self._timeout = timeout

    @property
    def form_id(self) -> str:
        return self._form_id

    @property
    def definitions_fetched(self) -> bool:
        return self._definitions_fetched

    # ---------- mutation ----------

    def set_field(self, name: str, value: Any) -> None:
        """Set one value and drop any error recorded for that field."""
        self._fields[name] = value
        self._errors.pop(name, None)

    def set_fields(self, values: dict[str, Any]) -> None:
        """Merge several values at once. Existing errors are left untouched."""
        self._fields.update(values)

    def clear_errors(self) -> None:
        self._errors = {}

    # ---------- read ----------

    def get_field(self, name: str, default: Any = None) -> Any:
        return self._fields.get(name, default)

    def get_fields(self) -> dict[str, Any]:
        return dict(self._fields)

    def get_definitions(self) -> list[FormField]:
        return list(self._definitions)

    def is_processing(self) -> bool:
        return self._processing

    def is_valid(self, name: Optional[str] = None) -> bool:
        if name is not None:
            return not self.has_error(name)
        return not self._errors

    def has_error(self, name: str) -> bool:
        return bool(self._errors.get(name))

    def get_field_error(self, name: str) -> Optional[str]:
        messages = self._errors.get(name)
        return messages[0] if messages else None

    def get_form_errors(self) -> dict[str, list[str]]:
        return {name: list(messages) for name, messages in self._errors.items()}

    def has_form_errors(self) -> bool:
        return bool(self._errors)

    # ---------- network ----------

    async def fetch_fields(self, fetch: Optional[Fetch] = None) -> FieldsResponse:
        """Load field definitions; enables local required-field checks."""
        res, body = await fetch_json(
            endpoint(self._base_url, self._form_id, "fields"),
            json_request("GET"),
            fetch or self._fetch,
            self._timeout,
        )
        if not 200 <= res.status < 300:
            if res.status == 404:
                raise SwellformsError("Form not found", res.status, ErrorCode.NOT_FOUND)
            if res.status in (401, 403):
                raise SwellformsError("Unauthorized", res.status, ErrorCode.UNAUTHORIZED)
            raise SwellformsError(f"Failed to fetch fields ({res.status})", res.status, ErrorCode.UNEXPECTED)

        self._definitions = _parse_definitions(body)
        self._definitions_fetched = True
        log.debug("Fetched %d field definitions for form %s", len(self._definitions), self._form_id)
        return FieldsResponse(form_id=self._form_id, fields=list(self._definitions))

    async def validate(
        self,
        only: Optional[list[str]] = None,
        fetch: Optional[Fetch] = None,
    ) -> ValidateResult:
        """Validate current values, optionally restricted to the fields in ``only``."""
        with self._busy():
            local = self._check_required(only)
            if local:
                self._errors = local
                return ValidateResultErr(errors=self.get_form_errors(), message=LOCAL_FAILURE_MESSAGE)

            body: dict[str, Any] = {"formId": self._form_id, "fields": to_plain(self._fields)}
            if only:
                body["only"] = list(only)
            res, data = await fetch_json(
                endpoint(self._base_url, self._form_id, "validate"),
                json_request("POST", self._with_meta(body)),
                fetch or self._fetch,
                self._timeout,
            )

            if res.status == 200 and _get(data, "valid") is True:
                self._errors = {}
                return ValidateResultOk(message=_message(data))
            if res.status == 422:
                self._errors = _prune(normalize_errors(data))
                return ValidateResultErr(errors=self.get_form_errors(), message=_message(data))
            raise SwellformsError(f"Unexpected status {res.status}", res.status, ErrorCode.UNEXPECTED)

    async def validate_field(self, name: str, fetch: Optional[Fetch] = None) -> ValidateResult:
        return await self.validate(only=[name], fetch=fetch)

    async def submit(
        self,
        fields: Optional[dict[str, Any]] = None,
        fetch: Optional[Fetch] = None,
    ) -> SubmitResult:
        """Submit current values. ``fields`` win over stored values for this call only."""
        with self._busy():
            local = self._check_required()
            if local:
                self._errors = local
                return SubmitResultErr(errors=self.get_form_errors(), data={"message": LOCAL_FAILURE_MESSAGE})

            merged = {**self._fields, **(fields or {})}
            body = {"formId": self._form_id, "fields": to_plain(merged)}
            res, data = await fetch_json(
                endpoint(self._base_url, self._form_id, "submit"),
                json_request("POST", self._with_meta(body)),
                fetch or self._fetch,
                self._timeout,
            )

            status = res.status
            if status == 422:
                self._errors = _prune(normalize_errors(data))
                return SubmitResultErr(errors=self.get_form_errors(), data=data)
            if 200 <= status < 300:
                self._errors = {}
                return SubmitResultOk(status=status, data=data)
            if status == 429:
                raise SwellformsError("Rate limited", status, ErrorCode.RATE_LIMITED)
            if status == 409:
                raise SwellformsError("Conflict", status, ErrorCode.CONFLICT)
            if status >= 500:
                raise SwellformsError("Server error", status, ErrorCode.SERVER)
            raise SwellformsError(f"Unexpected status {status}", status, ErrorCode.UNEXPECTED)

    # ---------- utils ----------

    @contextmanager
    def _busy(self) -> Iterator[None]:
        self._processing = True
        try:
            yield
        finally:
            self._processing = False

    def _check_required(self, only: Optional[list[str]] = None) -> dict[str, list[str]]:
        if not self._definitions_fetched:
            return {}
        errors: dict[str, list[str]] = {}
        for definition in self._definitions:
            key = definition.key
            if only and key not in only:
                continue
            if definition.required and is_empty(self._fields.get(key)):
                errors[key] = [REQUIRED_MESSAGE]
        if errors:
            log.debug("Local check failed for form %s: %s", self._form_id, sorted(errors))
        return errors

    def _with_meta(self, body: dict[str, Any]) -> dict[str, Any]:
        return {**body, "originUrl": self._context.host, "fullUrl": self._context.href}


async def submit_form(payload: dict[str, Any], fetch: Optional[Fetch] = None) -> SubmitResult:
    """One-shot submit: ``payload`` holds ``formId`` and optional ``fields``."""
    form = AsyncSwellForm(payload["formId"], payload.get("fields") or {}, fetch=fetch)
    return await form.submit()


async def validate_form(payload: dict[str, Any], fetch: Optional[Fetch] = None) -> ValidateResult:
    """One-shot validate: ``payload`` holds ``formId``, optional ``fields`` and ``only``."""
    form = AsyncSwellForm(payload["formId"], payload.get("fields") or {}, fetch=fetch)
    return await form.validate(only=payload.get("only"))
