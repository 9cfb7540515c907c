from __future__ import annotations

import pytest

from src.hr_dashboard.hr_dashboard.core.enums import FieldType
from src.hr_dashboard.hr_dashboard.tables import fields as f
from src.hr_dashboard.hr_dashboard.tables.fields import (
    FieldSpec,
    coerce_input,
    default_value,
    initial_form,
    input_type,
    submit_default,
    switch_default,
)
from src.hr_dashboard.hr_dashboard.tables.validation import validate_field, validate_form


def test_field_type_accepts_plain_strings():
    assert FieldSpec("start_time", "Start", "time").type == FieldType.TIME
    with pytest.raises(ValueError):
        FieldSpec("x", "X", "date")


def test_is_active_is_the_only_switch_on_by_default():
    assert switch_default("is_active") is True
    assert switch_default("is_remote") is False
    assert default_value(f.switch("is_active", "Active")) is True
    assert default_value(f.switch("is_overnight", "Overnight")) is False
    assert default_value(f.text("name", "Name")) is None


def test_initial_form_only_contains_switch_defaults():
    fields = [f.text("name", "Name"), f.number("level", "Level"), f.switch("is_active", "Active"), f.switch("billable", "Billable")]

    assert initial_form(fields) == {"is_active": True, "billable": False}


def test_submit_defaults_per_type():
    assert submit_default(f.text("name", "Name")) == ""
    assert submit_default(f.time("start_time", "Start")) == ""
    assert submit_default(f.number("level", "Level")) == 0
    assert submit_default(f.switch("is_active", "Active")) is True


@pytest.mark.parametrize("value", [None, "", "   "])
def test_text_and_time_are_required(value):
    assert validate_field(f.text("name", "Name"), value) == "Name is required"
    assert validate_field(f.time("start_time", "Start Time"), value) == "Start Time is required"


@pytest.mark.parametrize("value,ok", [(3, True), ("4.5", True), (0, True), ("", False), (None, False), ("abc", False), ("inf", False), (float("nan"), False)])
def test_number_must_be_finite(value, ok):
    message = validate_field(f.number("level", "Level"), value)
    assert (message == "") is ok
    if not ok:
        assert message == "Level must be a valid number"


def test_switch_and_readonly_are_never_required():
    assert validate_field(f.switch("is_active", "Active"), None) == ""
    assert validate_field(f.text("code", "Code", readonly=True), "") == ""


def test_validate_form_reports_all_errors_together():
    fields = [f.text("name", "Name"), f.number("level", "Level"), f.switch("is_active", "Active")]

    errors = validate_form(fields, {"is_active": True, "level": "x"})

    assert errors == {"name": "Name is required", "level": "Level must be a valid number"}
    assert validate_form(fields, {"name": "Ops", "level": 2}) == {}


def test_coerce_input():
    assert coerce_input(f.switch("is_active", "A"), "true") is True
    assert coerce_input(f.switch("is_active", "A"), "on") is True
    assert coerce_input(f.switch("is_active", "A"), "false") is False
    assert coerce_input(f.switch("is_active", "A"), None) is False
    assert coerce_input(f.number("level", "L"), "7") == 7
    assert coerce_input(f.number("level", "L"), "2.5") == 2.5
    assert coerce_input(f.number("level", "L"), "two") == "two"
    assert coerce_input(f.time("start", "S"), "9:05") == "09:05"
    assert coerce_input(f.time("start", "S"), "18:30:00") == "18:30"
    assert coerce_input(f.text("name", "N"), None) == ""


def test_every_field_type_has_an_input_type():
    for t in FieldType:
        assert input_type(FieldSpec("k", "K", t))
