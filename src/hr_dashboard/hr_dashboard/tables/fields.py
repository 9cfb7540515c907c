"""Declarative field schema shared by the dialog form and the default columns."""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Sequence

from ..common.validators import parse_number
from ..core.constants import ACTIVE_FLAG_KEY
from ..core.enums import FieldType

_TIME_RE = re.compile(r"^(\d{1,2}):(\d{2})(?::\d{2})?$")
_TRUTHY = {"1", "true", "on", "yes"}


@dataclass(frozen=True)
class FieldSpec:
    key: str
    label: str
    type: FieldType = FieldType.TEXT
    readonly: bool = False

    def __post_init__(self):
        # Accept plain strings ("text", "switch", ...) from page definitions.
        object.__setattr__(self, "type", FieldType(self.type))


def text(key: str, label: str, *, readonly: bool = False) -> FieldSpec:
    return FieldSpec(key, label, FieldType.TEXT, readonly)


def switch(key: str, label: str, *, readonly: bool = False) -> FieldSpec:
    return FieldSpec(key, label, FieldType.SWITCH, readonly)


def number(key: str, label: str, *, readonly: bool = False) -> FieldSpec:
    return FieldSpec(key, label, FieldType.NUMBER, readonly)


def time(key: str, label: str, *, readonly: bool = False) -> FieldSpec:
    return FieldSpec(key, label, FieldType.TIME, readonly)


def dispatch(table: Mapping[FieldType, Any], field: FieldSpec) -> Any:
    """Look up the handler for ``field.type``; every table must cover every FieldType."""
    try:
        return table[field.type]
    except KeyError:
        raise TypeError(f"Unhandled field type: {field.type!r}") from None


def switch_default(key: str) -> bool:
    """Business rule of the form generator: only ``is_active`` starts switched on."""
    return key == ACTIVE_FLAG_KEY


_OPEN_DEFAULTS: dict[FieldType, Callable[[FieldSpec], Any]] = {
    FieldType.TEXT: lambda f: None,
    FieldType.SWITCH: lambda f: switch_default(f.key),
    FieldType.NUMBER: lambda f: None,
    FieldType.TIME: lambda f: None,
}

_SUBMIT_DEFAULTS: dict[FieldType, Callable[[FieldSpec], Any]] = {
    FieldType.TEXT: lambda f: "",
    FieldType.SWITCH: lambda f: switch_default(f.key),
    FieldType.NUMBER: lambda f: 0,
    FieldType.TIME: lambda f: "",
}


def default_value(field: FieldSpec) -> Any:
    """Value a field starts with when the Add dialog opens (None = no default)."""
    return dispatch(_OPEN_DEFAULTS, field)(field)


def submit_default(field: FieldSpec) -> Any:
    """Fill-in value for a key still missing when an Add form is submitted."""
    return dispatch(_SUBMIT_DEFAULTS, field)(field)


def initial_form(fields: Sequence[FieldSpec]) -> dict[str, Any]:
    form: dict[str, Any] = {}
    for field in fields:
        value = default_value(field)
        if value is not None:
            form[field.key] = value
    return form


def _coerce_text(raw: Any) -> Any:
    return "" if raw is None else str(raw)


def _coerce_switch(raw: Any) -> bool:
    if isinstance(raw, bool):
        return raw
    if raw is None:
        return False
    return str(raw).strip().lower() in _TRUTHY


def _coerce_number(raw: Any) -> Any:
    if raw is None or (isinstance(raw, (int, float)) and not isinstance(raw, bool)):
        return raw
    parsed = parse_number(raw)
    # Keep the raw text so validation can report it.
    return parsed if parsed is not None else str(raw)


def _coerce_time(raw: Any) -> str:
    if raw is None:
        return ""
    if hasattr(raw, "strftime"):
        return raw.strftime("%H:%M")
    value = str(raw).strip()
    match = _TIME_RE.match(value)
    if match:
        return f"{int(match.group(1)):02d}:{match.group(2)}"
    return value


_COERCERS: dict[FieldType, Callable[[Any], Any]] = {
    FieldType.TEXT: _coerce_text,
    FieldType.SWITCH: _coerce_switch,
    FieldType.NUMBER: _coerce_number,
    FieldType.TIME: _coerce_time,
}


def coerce_input(field: FieldSpec, raw: Any) -> Any:
    """Convert an HTML form value into the value stored in the form state."""
    return dispatch(_COERCERS, field)(raw)


_INPUT_TYPES: dict[FieldType, str] = {
    FieldType.TEXT: "text",
    FieldType.SWITCH: "checkbox",
    FieldType.NUMBER: "number",
    FieldType.TIME: "time",
}


def input_type(field: FieldSpec) -> str:
    """HTML ``<input type>`` used by the dialog template."""
    return dispatch(_INPUT_TYPES, field)
