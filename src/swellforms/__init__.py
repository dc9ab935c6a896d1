"""
swellforms — Swellforms SDK for Python.

Holds the state of one remote form and keeps it in step with the Swellforms
REST API: fetch field definitions, validate, submit.
"""

from swellforms.client import SwellForm
from swellforms.errors import ErrorCode, SwellformsError
from swellforms.form import AsyncSwellForm, submit_form, validate_form
from swellforms.models.context import PageContext
from swellforms.models.form import FieldOption, FieldsResponse, FieldType, FormField
from swellforms.models.results import (
    SubmitResult,
    SubmitResultErr,
    SubmitResultOk,
    ValidateResult,
    ValidateResultErr,
    ValidateResultOk,
)
from swellforms.transport.http import DEFAULT_BASE_URL, FetchResponse, HttpxFetch, RequestInit, fetch_json
from swellforms.utils import MISSING, normalize_errors, to_plain

__version__ = "0.1.0"
__all__ = [
    "SwellForm",
    "AsyncSwellForm",
    "submit_form",
    "validate_form",
    "SwellformsError",
    "ErrorCode",
    "PageContext",
    "FieldType",
    "FieldOption",
    "FormField",
    "FieldsResponse",
    "SubmitResult",
    "SubmitResultOk",
    "SubmitResultErr",
    "ValidateResult",
    "ValidateResultOk",
    "ValidateResultErr",
    "DEFAULT_BASE_URL",
    "RequestInit",
    "FetchResponse",
    "HttpxFetch",
    "fetch_json",
    "MISSING",
    "to_plain",
    "normalize_errors",
]
