"""Common type aliases for the table layer."""
from __future__ import annotations

from typing import Any, Callable, Hashable, Mapping, Union

from markupsafe import Markup

# A single backend row (attribute name -> value). Objects with attributes work too.
Record = Union[Mapping[str, Any], Any]

# Partial record produced by a dialog form
FormState = dict[str, Any]

# FieldSpec key -> human readable message
ValidationErrors = dict[str, str]

RowKey = Hashable
CellContent = Union[str, Markup]
CellRenderer = Callable[[Any, int], CellContent]
SortAccessor = Callable[[Any], Any]
