from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Optional, Sequence

from ..core.constants import DEFAULT_LABEL_KEY
from ..tables.columns import Column
from ..tables.fields import FieldSpec


@dataclass(frozen=True)
class ResourceDefinition:
    """One administrative settings screen backed by a REST collection."""

    name: str
    title: str
    endpoint: str
    fields: Sequence[FieldSpec]
    description: str = ""
    label_key: str = DEFAULT_LABEL_KEY
    update_method: str = "patch"
    columns: Optional[Callable[[], Sequence[Column]]] = None
    nav_label: str = ""

    def detail_endpoint(self, record_id: int) -> str:
        return f"{self.endpoint.rstrip('/')}/{int(record_id)}/"

    @property
    def field_keys(self) -> list[str]:
        return [f.key for f in self.fields]

    @property
    def menu_label(self) -> str:
        return self.nav_label or self.title
