from __future__ import annotations

import pytest

from src.hr_dashboard.hr_dashboard.main import create_app
from src.hr_dashboard.hr_dashboard.container import Container
from src.hr_dashboard.hr_dashboard.core.exceptions import ApiError
from src.hr_dashboard.hr_dashboard.settings.service import SettingsService


class InMemoryRepo:
    def __init__(self):
        self.rows = {
            "technologies": [
                {"id": 1, "name": "Python", "is_active": True},
                {"id": 2, "name": "Go", "is_active": False},
            ],
            "shifts": [
                {"id": 1, "name": "Morning", "start_time": "09:00:00", "end_time": "18:00:00", "is_active": True},
            ],
        }
        self.created = []
        self.updated = []
        self.deleted = []
        self.fail_list = False
        self.fail_create = None

    def list_all(self, resource):
        if self.fail_list:
            raise ApiError(500)
        return list(self.rows.get(resource.name, []))

    def create(self, resource, data):
        if self.fail_create is not None:
            raise self.fail_create
        self.created.append((resource.name, data))
        return {"id": 10, **data}

    def update(self, resource, record_id, data):
        self.updated.append((resource.name, record_id, data))
        return {"id": record_id, **data}

    def delete(self, resource, record_id):
        self.deleted.append((resource.name, record_id))


@pytest.fixture
def repo():
    return InMemoryRepo()


@pytest.fixture
def client(repo):
    container = Container(api=None, resources_repo=repo, settings_service=SettingsService(repo))
    app = create_app(container=container)
    return app.test_client()


def test_root_redirects_to_first_resource(client):
    resp = client.get("/", follow_redirects=True)

    assert resp.status_code == 200
    assert b"Manage user roles" in resp.data


def test_list_page_renders_rows(client):
    resp = client.get("/settings/technologies")
    html = resp.get_data(as_text=True)

    assert resp.status_code == 200
    assert "Python" in html
    assert "Go" in html
    assert "Inactive" in html
    assert "/settings/technologies/1/toggle/is_active" in html


def test_unknown_resource_is_404(client):
    assert client.get("/settings/payroll").status_code == 404
    assert client.post("/settings/payroll/add").status_code == 404


def test_backend_failure_renders_empty_table(client, repo):
    repo.fail_list = True

    html = client.get("/settings/roles").get_data(as_text=True)

    assert "Failed to load roles" in html
    assert "No records found." in html


def test_add_validation_error_keeps_dialog_open(client, repo):
    resp = client.post("/settings/technologies/add", data={"name": "  "})
    html = resp.get_data(as_text=True)

    assert resp.status_code == 200
    assert "Add New Technology" in html
    assert "Name is required" in html
    assert repo.created == []


def test_add_success_redirects_with_toast(client, repo):
    resp = client.post("/settings/technologies/add", data={"name": "Rust", "is_active": "true"})

    assert resp.status_code == 302
    assert repo.created == [("technologies", {"name": "Rust", "is_active": True})]

    html = client.get(resp.headers["Location"]).get_data(as_text=True)
    assert "Item added successfully" in html


def test_add_server_field_error_is_inline(client, repo):
    repo.fail_create = ApiError(400, {"name": ["technology with this name already exists."]})

    html = client.post("/settings/technologies/add", data={"name": "Python", "is_active": "true"}).get_data(as_text=True)

    assert "technology with this name already exists." in html
    assert "Failed to add item" not in html


def test_edit_dialog_from_query(client):
    html = client.get("/settings/shifts?dialog=edit&id=1").get_data(as_text=True)

    assert "Edit Shifts" in html
    assert 'value="Morning"' in html
    assert "/settings/shifts/1/edit" in html


def test_edit_sends_only_changed_fields(client, repo):
    resp = client.post(
        "/settings/shifts/1/edit",
        data={"name": "Morning", "start_time": "09:00", "end_time": "17:30", "is_active": "true"},
    )

    assert resp.status_code == 302
    assert repo.updated == [("shifts", 1, {"end_time": "17:30"})]


def test_edit_unknown_record_warns_and_returns_to_list(client, repo):
    resp = client.post("/settings/shifts/42/edit", data={"name": "X"})

    assert resp.status_code == 302
    assert repo.updated == []

    html = client.get(resp.headers["Location"]).get_data(as_text=True)
    assert "Shifts not found" in html


def test_toggle_switch_sends_full_record_for_put_resources(client, repo):
    resp = client.post("/settings/technologies/2/toggle/is_active", data={"value": "true"})

    assert resp.status_code == 302
    assert repo.updated == [("technologies", 2, {"name": "Go", "is_active": True})]


def test_toggle_switch_on_patch_resource_sends_only_the_switch(client, repo):
    resp = client.post("/settings/shifts/1/toggle/is_active", data={"value": "false"})

    assert resp.status_code == 302
    assert repo.updated == [("shifts", 1, {"is_active": False})]


def test_edit_put_resource_keeps_untouched_fields(client, repo):
    resp = client.post("/settings/technologies/1/edit", data={"name": "Python"})

    assert resp.status_code == 302
    assert repo.updated == [("technologies", 1, {"name": "Python", "is_active": False})]


def test_toggle_rejects_non_switch_field(client, repo):
    resp = client.post("/settings/technologies/1/toggle/name", data={"value": "true"})

    assert resp.status_code == 400
    assert repo.updated == []


def test_delete_prompt_then_confirm(client, repo):
    html = client.get("/settings/technologies?confirm_delete=1").get_data(as_text=True)
    assert "Are you sure?" in html
    assert "Yes, delete it!" in html

    client.post("/settings/technologies/1/delete")
    assert repo.deleted == []

    resp = client.post("/settings/technologies/1/delete", data={"confirm": "yes"})
    assert resp.status_code == 302
    assert repo.deleted == [("technologies", 1)]

    html = client.get(resp.headers["Location"]).get_data(as_text=True)
    assert "Deleted!" in html
    assert "Item deleted successfully" in html


def test_sort_and_page_links_keep_state(client):
    html = client.get("/settings/technologies?sort=name&dir=asc").get_data(as_text=True)

    assert html.index('data-key="2"') < html.index('data-key="1"')
    assert "dir=desc" in html
