"""Outcome of the persistence callbacks handed to a ManagementTable.

Callbacks either return ``None`` on success or one of the result objects below.
Callbacks that raise instead are still handled: the exception message is
parsed best-effort for a ``{field: message}`` JSON payload.
"""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Iterable, Optional, Union

from ..core.constants import MAX_PLAIN_ERROR_LENGTH
from ..core.exceptions import ApiError
from ..core.types import ValidationErrors


@dataclass(frozen=True)
class FieldErrors:
    errors: dict[str, str] = field(default_factory=dict)
    message: Optional[str] = None


@dataclass(frozen=True)
class GenericError:
    message: str


PersistenceResult = Union[None, FieldErrors, GenericError]


def _first_message(value: Any) -> Optional[str]:
    if isinstance(value, str):
        return value
    if isinstance(value, (list, tuple)) and value and all(isinstance(v, str) for v in value):
        return value[0]
    return None


def _payload_of(error: BaseException) -> Any:
    if isinstance(error, ApiError) and error.payload is not None:
        return error.payload
    message = str(error)
    try:
        return json.loads(message)
    except (TypeError, ValueError):
        return message


def classify_error(error: BaseException, known_keys: Iterable[str]) -> Union[FieldErrors, GenericError]:
    """Turn a raised persistence error into a result.

    Only keys of the current form are mapped to inline messages; anything that
    yields no field-shaped entry falls back to a generic error.
    """
    payload = _payload_of(error)
    if isinstance(payload, dict):
        keys = set(known_keys)
        errors = {}
        for key, value in payload.items():
            if key not in keys:
                continue
            message = _first_message(value)
            if message:
                errors[key] = message
        if errors:
            return FieldErrors(errors=errors)
        detail = _first_message(payload.get("detail")) or _first_message(payload.get("non_field_errors"))
        if detail:
            return GenericError(detail)
        return GenericError("")
    if isinstance(payload, str) and _is_short_text(payload):
        return GenericError(payload.strip())
    return GenericError("")


def _is_short_text(text: str) -> bool:
    text = text.strip()
    return bool(text) and len(text) <= MAX_PLAIN_ERROR_LENGTH and "\n" not in text and not text.startswith("<")


def restrict_to(result: FieldErrors, known_keys: Iterable[str]) -> ValidationErrors:
    keys = set(known_keys)
    return {k: v for k, v in result.errors.items() if k in keys}
