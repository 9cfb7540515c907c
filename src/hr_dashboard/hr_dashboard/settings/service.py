from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Sequence

from ..common.validators import require_non_empty
from ..core.constants import ACTIVE_FLAG_KEY
from ..core.enums import FieldType
from ..core.exceptions import ValidationError
from ..core.types import FormState
from .model import ResourceDefinition
from .registry import get_resource
from .repository import ResourceRepository

_logger = logging.getLogger("hr_dashboard.settings")


class SettingsService:
    """Use case: manage the lookup tables behind the admin settings screens."""

    def __init__(self, repo: ResourceRepository):
        self._repo = repo

    @staticmethod
    def _normalize(resource: ResourceDefinition, data: Mapping[str, Any], *, partial: bool) -> FormState:
        payload: FormState = {}
        for field in resource.fields:
            if field.key not in data:
                continue
            value = data[field.key]
            if value is None and partial:
                continue
            if field.type in (FieldType.TEXT, FieldType.TIME):
                value = "" if value is None else str(value).strip()
            elif field.type == FieldType.SWITCH:
                value = bool(value)
            payload[field.key] = value
        return payload

    def resource(self, name: str) -> ResourceDefinition:
        return get_resource(name)

    def list(self, name: str) -> Sequence[dict]:
        return self._repo.list_all(get_resource(name))

    def create(self, name: str, data: Mapping[str, Any]) -> Any:
        resource = get_resource(name)
        payload = self._normalize(resource, data, partial=False)
        label = next((f.label for f in resource.fields if f.key == resource.label_key), resource.label_key)
        payload[resource.label_key] = require_non_empty(payload.get(resource.label_key), label)
        if ACTIVE_FLAG_KEY in resource.field_keys:
            payload.setdefault(ACTIVE_FLAG_KEY, True)
        _logger.info("create %s", resource.name)
        return self._repo.create(resource, payload)

    def update(self, name: str, record_id: int, data: Mapping[str, Any], current: Optional[Mapping[str, Any]] = None) -> Any:
        """Send the changed fields of one record.

        PUT endpoints replace the whole record, so for them the current values
        are merged under the change.
        """
        resource = get_resource(name)
        payload = self._normalize(resource, data, partial=True)
        if not payload:
            _logger.debug("update %s id=%s: nothing changed", resource.name, record_id)
            return None
        _logger.info("update %s id=%s keys=%s", resource.name, record_id, sorted(payload))
        if resource.update_method == "put":
            if current is None:
                raise ValidationError(f"{resource.title} {record_id} must be loaded before it can be replaced")
            payload = {**self._normalize(resource, current, partial=True), **payload}
        return self._repo.update(resource, int(record_id), payload)

    def delete(self, name: str, record_id: int) -> None:
        resource = get_resource(name)
        _logger.info("delete %s id=%s", resource.name, record_id)
        self._repo.delete(resource, int(record_id))
