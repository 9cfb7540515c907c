from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Iterable, Optional, Sequence

from markupsafe import Markup

from ..common.records import field_value, stringify
from ..core.enums import FieldType
from ..core.types import CellContent, CellRenderer, SortAccessor
from .fields import FieldSpec, dispatch

ToggleUrl = Callable[[Any, str], str]


@dataclass(frozen=True)
class Column:
    key: str
    header: str
    cell: Optional[CellRenderer] = None
    sortable: bool = False
    sort_accessor: Optional[SortAccessor] = None
    css_class: Optional[str] = None

    def render(self, record: Any, index: int) -> CellContent:
        if self.cell is not None:
            return self.cell(record, index)
        return stringify(field_value(record, self.key))

    def sort_value(self, record: Any) -> Any:
        if self.sort_accessor is not None:
            return self.sort_accessor(record)
        return field_value(record, self.key)


def ensure_unique_keys(columns: Iterable[Column]) -> list[Column]:
    seen: set[str] = set()
    result = []
    for column in columns:
        if column.key in seen:
            raise ValueError(f"Duplicate column key: {column.key!r}")
        seen.add(column.key)
        result.append(column)
    return result


def display_text(value: Any) -> str:
    if isinstance(value, bool):
        return "Yes" if value else "No"
    return stringify(value)


def render_switch(record: Any, key: str, toggle_url: Optional[ToggleUrl]) -> Markup:
    checked = bool(field_value(record, key))
    status = "Active" if checked else "Inactive"
    if toggle_url is None:
        return Markup(
            '<span class="switch{}" role="switch" aria-checked="{}" aria-disabled="true"></span>'
            '<span class="text-muted">{}</span>'
        ).format(" checked" if checked else "", "true" if checked else "false", status)
    return Markup(
        '<form method="post" action="{}" class="inline-toggle">'
        '<input type="hidden" name="value" value="{}">'
        '<button type="submit" class="switch{}" role="switch" aria-checked="{}"></button>'
        '<span class="text-muted">{}</span></form>'
    ).format(
        toggle_url(record, key),
        "false" if checked else "true",
        " checked" if checked else "",
        "true" if checked else "false",
        status,
    )


def _switch_cell(field: FieldSpec, toggle_url: Optional[ToggleUrl]) -> CellRenderer:
    def cell(record: Any, index: int) -> CellContent:
        return render_switch(record, field.key, toggle_url)

    return cell


def _value_cell(field: FieldSpec, toggle_url: Optional[ToggleUrl]) -> CellRenderer:
    def cell(record: Any, index: int) -> CellContent:
        return display_text(field_value(record, field.key))

    return cell


_CELL_FACTORIES: dict[FieldType, Callable[[FieldSpec, Optional[ToggleUrl]], CellRenderer]] = {
    FieldType.SWITCH: _switch_cell,
    FieldType.TEXT: _value_cell,
    FieldType.NUMBER: _value_cell,
    FieldType.TIME: _value_cell,
}


def derive_columns(
    fields: Sequence[FieldSpec],
    *,
    toggle_url: Optional[ToggleUrl] = None,
    sortable: bool = True,
) -> list[Column]:
    """One column per field; switch fields become inline toggles."""
    columns = []
    for f in fields:
        factory = dispatch(_CELL_FACTORIES, f)
        columns.append(Column(key=f.key, header=f.label, cell=factory(f, toggle_url), sortable=sortable))
    return columns


def render_cell(field: FieldSpec, record: Any, toggle_url: Optional[ToggleUrl] = None) -> CellContent:
    """Render one record value the way the derived column for ``field`` would."""
    return dispatch(_CELL_FACTORIES, field)(field, toggle_url)(record, 0)
