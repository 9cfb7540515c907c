from __future__ import annotations

import pytest
import requests

from src.hr_dashboard.hr_dashboard.api.client import ApiClient, ApiConfig
from src.hr_dashboard.hr_dashboard.core.exceptions import ApiError


class FakeResponse:
    def __init__(self, status_code=200, payload=None, text=None):
        self.status_code = status_code
        self._payload = payload
        self.text = text if text is not None else ("" if payload is None else "json")
        self.content = self.text.encode()

    @property
    def ok(self):
        return 200 <= self.status_code < 400

    def json(self):
        if self._payload is None:
            raise ValueError("no json")
        return self._payload


class FakeSession:
    def __init__(self, response=None, error=None):
        self.headers = {}
        self.calls = []
        self._response = response
        self._error = error

    def request(self, method, url, **kwargs):
        self.calls.append((method, url, kwargs))
        if self._error:
            raise self._error
        return self._response


def _client(session, token=None):
    return ApiClient(ApiConfig(base_url="http://api.test/api/v1/", timeout=3, token=token), session=session)


def test_builds_urls_and_sends_json():
    session = FakeSession(FakeResponse(201, {"id": 1, "name": "HR"}))
    client = _client(session, token="abc")

    result = client.post("/common/designations/", {"title": "HR"})

    assert result == {"id": 1, "name": "HR"}
    method, url, kwargs = session.calls[0]
    assert (method, url) == ("POST", "http://api.test/api/v1/common/designations/")
    assert kwargs["json"] == {"title": "HR"}
    assert kwargs["timeout"] == 3
    assert session.headers["Authorization"] == "Bearer abc"
    assert session.headers["Accept"] == "application/json"


def test_empty_body_returns_none():
    client = _client(FakeSession(FakeResponse(204)))
    assert client.delete("common/shifts/1/") is None


def test_error_response_raises_with_payload():
    client = _client(FakeSession(FakeResponse(400, {"name": ["required"]})))

    with pytest.raises(ApiError) as exc:
        client.patch("accounts/roles/2/", {"name": ""})

    assert exc.value.status_code == 400
    assert exc.value.payload == {"name": ["required"]}
    assert str(exc.value) == '{"name": ["required"]}'


def test_non_json_error_body_keeps_text():
    client = _client(FakeSession(FakeResponse(502, None, text="Bad Gateway")))

    with pytest.raises(ApiError) as exc:
        client.get("common/technologies/")

    assert str(exc.value) == "Bad Gateway"


def test_transport_failure_is_wrapped():
    client = _client(FakeSession(error=requests.ConnectionError("refused")))

    with pytest.raises(ApiError) as exc:
        client.get("common/shifts/")

    assert exc.value.status_code == 0
