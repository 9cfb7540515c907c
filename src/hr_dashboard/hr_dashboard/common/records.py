from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Optional


def field_value(record: Any, key: str) -> Any:
    """Read ``key`` from a mapping or an attribute object; missing -> None."""
    if isinstance(record, Mapping):
        return record.get(key)
    return getattr(record, key, None)


def record_id(record: Any) -> Optional[int]:
    value = field_value(record, "id")
    if value is None:
        return None
    return int(value)


def stringify(value: Any) -> str:
    if value is None:
        return ""
    return str(value)
