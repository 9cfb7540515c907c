from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .api.client import ApiClient, ApiConfig
from .core.constants import DEFAULT_API_TIMEOUT
from .settings.repository import ApiResourceRepository
from .settings.service import SettingsService


@dataclass(frozen=True)
class Container:
    api: ApiClient

    resources_repo: ApiResourceRepository

    settings_service: SettingsService


def build_container(*, api_config: dict, api_client: Optional[ApiClient] = None) -> Container:
    config = ApiConfig(
        base_url=str(api_config["base_url"]),
        timeout=float(api_config.get("timeout", DEFAULT_API_TIMEOUT)),
        token=api_config.get("token") or None,
    )
    api = api_client or ApiClient(config)

    resources_repo = ApiResourceRepository(api)
    settings_service = SettingsService(resources_repo)

    return Container(
        api=api,
        resources_repo=resources_repo,
        settings_service=settings_service,
    )
