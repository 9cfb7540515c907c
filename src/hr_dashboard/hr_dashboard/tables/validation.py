from __future__ import annotations

from typing import Any, Callable, Mapping, Sequence

from ..common.validators import is_blank, parse_number
from ..core.enums import FieldType
from ..core.types import ValidationErrors
from .fields import FieldSpec, dispatch


def _required(field: FieldSpec, value: Any) -> str:
    if is_blank(value):
        return f"{field.label} is required"
    return ""


def _finite_number(field: FieldSpec, value: Any) -> str:
    if parse_number(value) is None:
        return f"{field.label} must be a valid number"
    return ""


def _never_required(field: FieldSpec, value: Any) -> str:
    return ""


_VALIDATORS: dict[FieldType, Callable[[FieldSpec, Any], str]] = {
    FieldType.TEXT: _required,
    FieldType.TIME: _required,
    FieldType.NUMBER: _finite_number,
    FieldType.SWITCH: _never_required,
}


def validate_field(field: FieldSpec, value: Any) -> str:
    """Return an error message for ``value`` or an empty string when it is valid."""
    if field.readonly:
        return ""
    return dispatch(_VALIDATORS, field)(field, value)


def validate_form(fields: Sequence[FieldSpec], values: Mapping[str, Any]) -> ValidationErrors:
    errors: ValidationErrors = {}
    for field in fields:
        message = validate_field(field, values.get(field.key))
        if message:
            errors[field.key] = message
    return errors
