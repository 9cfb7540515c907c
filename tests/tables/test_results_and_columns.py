from __future__ import annotations

from markupsafe import Markup

from src.hr_dashboard.hr_dashboard.core.exceptions import ApiError
from src.hr_dashboard.hr_dashboard.tables import fields as f
from src.hr_dashboard.hr_dashboard.tables.actions import ActionButton, action_buttons, render_actions
from src.hr_dashboard.hr_dashboard.tables.columns import derive_columns, display_text, render_cell, render_switch
from src.hr_dashboard.hr_dashboard.tables.results import FieldErrors, GenericError, classify_error


def test_classify_field_errors_from_api_error():
    err = ApiError(400, {"name": ["This field is required.", "Too short"], "start_time": "Invalid"})

    result = classify_error(err, ["name", "start_time"])

    assert result == FieldErrors({"name": "This field is required.", "start_time": "Invalid"})


def test_classify_detail_and_non_field_errors():
    assert classify_error(ApiError(403, {"detail": "Forbidden"}), ["name"]) == GenericError("Forbidden")
    assert classify_error(ApiError(400, {"non_field_errors": ["Overlap"]}), ["name"]) == GenericError("Overlap")


def test_classify_unparseable_or_unknown():
    assert classify_error(ValueError("{not json"), ["name"]) == GenericError("{not json")
    assert classify_error(ValueError(""), ["name"]) == GenericError("")
    assert classify_error(ApiError(400, {"other": ["x"]}), ["name"]) == GenericError("")
    assert classify_error(ApiError(400, [1, 2]), ["name"]) == GenericError("")
    assert classify_error(ApiError(502, "x" * 500), ["name"]) == GenericError("")
    assert classify_error(ApiError(500, "Traceback:\n  File app.py"), ["name"]) == GenericError("")


def test_api_error_message_is_json_body():
    assert str(ApiError(400, {"name": ["bad"]})) == '{"name": ["bad"]}'
    assert str(ApiError(502)) == "Request failed with status 502"
    assert str(ApiError(0, message="offline")) == "offline"


def test_display_text():
    assert display_text(True) == "Yes"
    assert display_text(False) == "No"
    assert display_text(None) == ""
    assert display_text(3) == "3"


def test_derived_value_cells_render_booleans_as_yes_no():
    columns = derive_columns([f.text("remote", "Remote"), f.number("level", "Level")])

    assert columns[0].render({"remote": True}, 0) == "Yes"
    assert columns[1].render({"level": 2}, 0) == "2"
    assert all(c.sortable for c in columns)


def test_switch_without_toggle_url_is_read_only():
    html = render_switch({"is_active": False}, "is_active", None)

    assert "aria-disabled" in html
    assert "Inactive" in html


def test_switch_markup_escapes_url():
    html = render_switch({"id": 1, "is_active": True}, "is_active", lambda r, k: '/t?a=1&b="2"')

    assert "&amp;" in html
    assert "&#34;" in html
    assert "Active" in html


def test_action_buttons_render_as_links():
    extra = ActionButton("History", "/history/1", icon="clock")
    buttons = action_buttons(edit_url="/e?a=1&b=2", delete_url="/d", extras=[extra])

    assert [b.title for b in buttons] == ["Edit", "Delete", "History"]

    html = render_actions(buttons)
    assert isinstance(html, Markup)
    assert 'href="/e?a=1&amp;b=2"' in html
    assert 'href="/d"' in html
    assert "<form" not in html

    disabled = render_actions(buttons, disabled=True)
    assert "href" not in disabled
    assert disabled.count(" disabled\"") == 3


def test_render_cell_matches_field_type():
    record = {"id": 7, "name": "Ops", "is_active": False}

    assert render_cell(f.text("name", "Name"), record) == "Ops"
    assert render_cell(f.time("start_time", "Start"), record) == ""
    assert 'action="/t/7"' in render_cell(f.switch("is_active", "Active"), record, lambda r, k: f"/t/{r['id']}")
