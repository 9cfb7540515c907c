from __future__ import annotations

import os

import pytest

os.environ.setdefault("APP_ENV", "testing")

from src.hr_dashboard.hr_dashboard.tables import fields as f  # noqa: E402


@pytest.fixture
def dept_fields():
    return [f.text("name", "Name"), f.switch("is_active", "Active")]


@pytest.fixture
def people():
    return [
        {"id": 1, "name": "Charlie", "age": 41, "is_active": True},
        {"id": 2, "name": "alice", "age": None, "is_active": False},
        {"id": 3, "name": "Bob", "age": 29, "is_active": True},
        {"id": 4, "name": "Dana", "age": 29, "is_active": True},
        {"id": 5, "name": "Eve", "age": None, "is_active": False},
    ]
