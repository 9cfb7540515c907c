from __future__ import annotations

from typing import Any, Protocol, Sequence

from ..api.client import ApiClient
from ..core.types import FormState
from .model import ResourceDefinition


class ResourceRepository(Protocol):
    """Storage seen by the settings service; the backend REST API in production."""

    def list_all(self, resource: ResourceDefinition) -> Sequence[dict]:
        raise NotImplementedError

    def create(self, resource: ResourceDefinition, data: FormState) -> Any:
        raise NotImplementedError

    def update(self, resource: ResourceDefinition, record_id: int, data: FormState) -> Any:
        raise NotImplementedError

    def delete(self, resource: ResourceDefinition, record_id: int) -> None:
        raise NotImplementedError


class ApiResourceRepository:
    def __init__(self, client: ApiClient):
        self._client = client

    def list_all(self, resource: ResourceDefinition) -> Sequence[dict]:
        data = self._client.get(resource.endpoint)
        # Paginated DRF responses wrap rows in "results".
        if isinstance(data, dict):
            data = data.get("results", [])
        return list(data or [])

    def create(self, resource: ResourceDefinition, data: FormState) -> Any:
        return self._client.post(resource.endpoint, data)

    def update(self, resource: ResourceDefinition, record_id: int, data: FormState) -> Any:
        if resource.update_method == "put":
            return self._client.put(resource.detail_endpoint(record_id), data)
        return self._client.patch(resource.detail_endpoint(record_id), data)

    def delete(self, resource: ResourceDefinition, record_id: int) -> None:
        self._client.delete(resource.detail_endpoint(record_id))
