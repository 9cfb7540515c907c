from __future__ import annotations

from enum import Enum


class FieldType(str, Enum):
    """Field kinds driving the generated form inputs and the default columns."""

    TEXT = "text"
    SWITCH = "switch"
    NUMBER = "number"
    TIME = "time"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


class DialogKind(str, Enum):
    CLOSED = "closed"
    ADD = "add"
    EDIT = "edit"


class ToastVariant(str, Enum):
    """Maps onto Flask flash categories."""

    SUCCESS = "success"
    DESTRUCTIVE = "danger"
    INFO = "info"


class BodyState(str, Enum):
    LOADING = "loading"
    EMPTY = "empty"
    ROWS = "rows"
