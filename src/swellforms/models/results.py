"""
Outcomes of validate and submit calls.

Expected failures (HTTP 422 or missing required fields) come back as the
``*Err`` variants; anything else raises SwellformsError.
"""

from typing import Any, Literal, Optional, Union

from pydantic import BaseModel, Field


class ValidateResultOk(BaseModel):
    valid: Literal[True] = True
    message: Optional[str] = None


class ValidateResultErr(BaseModel):
    valid: Literal[False] = False
    errors: dict[str, list[str]] = Field(default_factory=dict)
    message: Optional[str] = None


class SubmitResultOk(BaseModel):
    ok: Literal[True] = True
    status: int
    data: Any = None


class SubmitResultErr(BaseModel):
    ok: Literal[False] = False
    status: Literal[422] = 422
    errors: dict[str, list[str]] = Field(default_factory=dict)
    data: Any = None


ValidateResult = Union[ValidateResultOk, ValidateResultErr]
SubmitResult = Union[SubmitResultOk, SubmitResultErr]
