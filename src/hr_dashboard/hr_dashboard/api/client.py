from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

import requests

from ..core.constants import DEFAULT_API_TIMEOUT
from ..core.exceptions import ApiError

_logger = logging.getLogger("hr_dashboard.api")


@dataclass
class ApiConfig:
    base_url: str
    timeout: float = DEFAULT_API_TIMEOUT
    token: Optional[str] = None


class ApiClient:
    """Thin JSON client for the HR backend.

    Note: Errors are re-raised as ApiError whose message is the JSON response
    body, which is what the management tables parse for field errors.
    """

    def __init__(self, config: ApiConfig, session: Optional[requests.Session] = None):
        self._config = config
        self._session = session or requests.Session()
        self._session.headers.update({"Content-Type": "application/json", "Accept": "application/json"})
        if config.token:
            self._session.headers["Authorization"] = f"Bearer {config.token}"

    def url(self, path: str) -> str:
        return f"{self._config.base_url.rstrip('/')}/{path.lstrip('/')}"

    def request(self, method: str, path: str, *, json: Any = None, params: Optional[dict] = None) -> Any:
        url = self.url(path)
        try:
            resp = self._session.request(method, url, json=json, params=params, timeout=self._config.timeout)
        except requests.RequestException as e:
            _logger.error("%s %s failed: %s", method, url, e)
            raise ApiError(0, message="Could not reach the server. Please try again.") from e

        if not resp.ok:
            try:
                payload = resp.json()
            except ValueError:
                payload = resp.text or None
            _logger.warning("%s %s -> %s %s", method, url, resp.status_code, payload)
            raise ApiError(resp.status_code, payload)

        if resp.status_code == 204 or not resp.content:
            return None
        try:
            return resp.json()
        except ValueError as e:
            raise ApiError(resp.status_code, message="Invalid JSON in server response") from e

    def get(self, path: str, *, params: Optional[dict] = None) -> Any:
        return self.request("GET", path, params=params)

    def post(self, path: str, data: Any) -> Any:
        return self.request("POST", path, json=data)

    def put(self, path: str, data: Any) -> Any:
        return self.request("PUT", path, json=data)

    def patch(self, path: str, data: Any) -> Any:
        return self.request("PATCH", path, json=data)

    def delete(self, path: str) -> Any:
        return self.request("DELETE", path)
