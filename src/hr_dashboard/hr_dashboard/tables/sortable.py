"""Sortable, optionally paginated table over a sequence of records.

The table owns only its sort key/direction and current page. Rows are derived
from ``data`` and ``columns`` on every call, and ``data`` is never mutated.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from functools import cmp_to_key
from typing import Any, Callable, Mapping, Optional, Sequence

from ..common.records import field_value
from ..core.constants import DEFAULT_EMPTY_TEXT, LOADING_TEXT
from ..core.enums import BodyState, SortDirection
from ..core.types import CellContent, RowKey
from .columns import Column, ensure_unique_keys

_logger = logging.getLogger("hr_dashboard.tables")

_INDICATORS = {SortDirection.ASC: "▲", SortDirection.DESC: "▼"}
_UNSORTED_INDICATOR = "⇵"


@dataclass(frozen=True)
class SortState:
    key: Optional[str] = None
    direction: SortDirection = SortDirection.ASC

    def toggled(self, key: str) -> "SortState":
        """Unsorted -> asc -> desc -> asc ...; a different column starts at asc."""
        if self.key == key:
            flipped = SortDirection.DESC if self.direction == SortDirection.ASC else SortDirection.ASC
            return SortState(key, flipped)
        return SortState(key, SortDirection.ASC)


@dataclass(frozen=True)
class HeaderCell:
    key: str
    header: str
    sortable: bool
    indicator: str = ""
    css_class: Optional[str] = None
    query: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class Row:
    key: RowKey
    index: int
    cells: list[CellContent]
    striped: bool = False


@dataclass(frozen=True)
class TableBody:
    state: BodyState
    rows: list[Row] = field(default_factory=list)
    message: str = ""
    colspan: int = 1


def compare_values(a: Any, b: Any) -> int:
    try:
        if a < b:
            return -1
        if a > b:
            return 1
        return 0
    except TypeError:
        sa, sb = str(a), str(b)
        return (sa > sb) - (sa < sb)


def sort_records(records: Sequence[Any], accessor: Callable[[Any], Any], direction: SortDirection) -> list[Any]:
    """Stable sort; records whose value is None always come first."""
    nulls = []
    keyed = []
    for record in records:
        value = accessor(record)
        if value is None:
            nulls.append(record)
        else:
            keyed.append((value, record))
    keyed.sort(key=cmp_to_key(lambda x, y: compare_values(x[0], y[0])), reverse=direction == SortDirection.DESC)
    return nulls + [record for _, record in keyed]


def default_row_key(record: Any, index: int) -> RowKey:
    value = field_value(record, "id")
    return index if value is None else value


class SortableTable:
    def __init__(
        self,
        columns: Sequence[Column],
        data: Sequence[Any],
        *,
        get_row_key: Callable[[Any, int], RowKey] = default_row_key,
        page_size: Optional[int] = None,
        empty_text: str = DEFAULT_EMPTY_TEXT,
        loading: bool = False,
        striped: bool = False,
        sort: Optional[SortState] = None,
        page: int = 1,
    ):
        self._columns = ensure_unique_keys(columns)
        self._data = data
        self._get_row_key = get_row_key
        self._page_size = page_size if page_size and page_size > 0 else None
        self.empty_text = empty_text
        self.loading = loading
        self.striped = striped
        self._sort = SortState()
        if sort is not None and sort.key is not None and self._sortable(sort.key):
            self._sort = sort
        self._page = 1
        self.set_page(page)

    @classmethod
    def from_query(cls, columns: Sequence[Column], data: Sequence[Any], args: Mapping[str, Any], **kwargs) -> "SortableTable":
        """Restore sort/page state from request query parameters."""
        key = args.get("sort") or None
        try:
            direction = SortDirection(args.get("dir") or SortDirection.ASC.value)
        except ValueError:
            direction = SortDirection.ASC
        try:
            page = int(args.get("page") or 1)
        except (TypeError, ValueError):
            page = 1
        return cls(columns, data, sort=SortState(key, direction) if key else None, page=page, **kwargs)

    @property
    def columns(self) -> list[Column]:
        return list(self._columns)

    @property
    def sort(self) -> SortState:
        return self._sort

    @property
    def page_size(self) -> Optional[int]:
        return self._page_size

    def _column(self, key: str) -> Optional[Column]:
        for column in self._columns:
            if column.key == key:
                return column
        return None

    def _sortable(self, key: str) -> bool:
        column = self._column(key)
        return bool(column and column.sortable)

    # Sorting

    def toggle_sort(self, key: str) -> SortState:
        if self._sortable(key):
            self._sort = self._sort.toggled(key)
        return self._sort

    def sorted_rows(self) -> list[Any]:
        column = self._column(self._sort.key) if self._sort.key else None
        if column is None or not column.sortable:
            return list(self._data)
        return sort_records(self._data, column.sort_value, self._sort.direction)

    # Pagination

    @property
    def total_pages(self) -> int:
        if not self._page_size:
            return 1
        return max(1, math.ceil(len(self._data) / self._page_size))

    @property
    def page(self) -> int:
        return min(max(1, self._page), self.total_pages)

    def set_page(self, page: int) -> int:
        self._page = min(max(1, int(page)), self.total_pages)
        return self._page

    def next_page(self) -> int:
        return self.set_page(self.page + 1)

    def previous_page(self) -> int:
        return self.set_page(self.page - 1)

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    def set_page_size(self, page_size: Optional[int]) -> None:
        self._page_size = page_size if page_size and page_size > 0 else None
        self._page = 1

    @property
    def offset(self) -> int:
        if not self._page_size:
            return 0
        return (self.page - 1) * self._page_size

    def page_rows(self) -> list[Any]:
        rows = self.sorted_rows()
        if not self._page_size:
            return rows
        return rows[self.offset:self.offset + self._page_size]

    # Rendering

    def headers(self) -> list[HeaderCell]:
        cells = []
        for column in self._columns:
            if not column.sortable:
                cells.append(HeaderCell(column.key, column.header, False, css_class=column.css_class))
                continue
            if self._sort.key == column.key:
                indicator = _INDICATORS[self._sort.direction]
            else:
                indicator = _UNSORTED_INDICATOR
            nxt = self._sort.toggled(column.key)
            cells.append(
                HeaderCell(
                    column.key,
                    column.header,
                    True,
                    indicator=indicator,
                    css_class=column.css_class,
                    query=self.query_params(sort=nxt.key, dir=nxt.direction.value),
                )
            )
        return cells

    def body(self) -> TableBody:
        colspan = max(1, len(self._columns))
        if self.loading:
            return TableBody(BodyState.LOADING, message=LOADING_TEXT, colspan=colspan)
        records = self.page_rows()
        if not records:
            return TableBody(BodyState.EMPTY, message=self.empty_text, colspan=colspan)

        rows = []
        seen: set = set()
        for i, record in enumerate(records):
            index = self.offset + i
            key = self._get_row_key(record, index)
            if key in seen:
                _logger.warning("Duplicate row key %r on page %d", key, self.page)
            seen.add(key)
            cells = [column.render(record, index) for column in self._columns]
            rows.append(Row(key=key, index=index, cells=cells, striped=self.striped and i % 2 == 1))
        return TableBody(BodyState.ROWS, rows=rows, colspan=colspan)

    def query_params(self, **overrides: Any) -> dict[str, Any]:
        params: dict[str, Any] = {}
        if self._sort.key:
            params["sort"] = self._sort.key
            params["dir"] = self._sort.direction.value
        if self._page_size and self.page > 1:
            params["page"] = self.page
        params.update(overrides)
        return {k: v for k, v in params.items() if v is not None}
