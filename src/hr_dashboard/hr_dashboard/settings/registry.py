"""Settings screens and their field schemas."""
from __future__ import annotations

from typing import Optional

from markupsafe import Markup

from ..common.datetime_utils import format_time12, parse_hhmm
from ..common.records import field_value, stringify
from ..core.exceptions import NotFoundError
from ..tables import fields as f
from ..tables.columns import Column
from .model import ResourceDefinition


def _shift_columns() -> list[Column]:
    def time_range(record, index):
        start = format_time12(field_value(record, "start_time"))
        end = format_time12(field_value(record, "end_time"))
        return Markup('<span class="text-sm">{} - {}</span>').format(start, end)

    return [
        Column(
            key="sr",
            header="Sr No.",
            cell=lambda record, index: Markup('<span class="font-medium">{}</span>').format(index + 1),
            css_class="w-16",
        ),
        Column(
            key="name",
            header="Name",
            cell=lambda record, index: Markup('<span class="font-medium">{}</span>').format(stringify(field_value(record, "name"))),
            sortable=True,
        ),
        Column(
            key="time_range",
            header="Time",
            cell=time_range,
            sortable=True,
            sort_accessor=lambda record: parse_hhmm(field_value(record, "start_time")),
        ),
    ]


RESOURCES: dict[str, ResourceDefinition] = {
    r.name: r
    for r in (
        ResourceDefinition(
            name="roles",
            title="Role",
            nav_label="Roles",
            description="Manage user roles",
            endpoint="accounts/roles/",
            fields=(f.text("name", "Name"), f.text("description", "Description"), f.switch("is_active", "Status")),
        ),
        ResourceDefinition(
            name="designations",
            title="Designation",
            nav_label="Designations",
            description="Manage employee designations",
            endpoint="common/designations/",
            fields=(f.text("title", "Title"), f.switch("is_active", "Status")),
            label_key="title",
        ),
        ResourceDefinition(
            name="employee-types",
            title="Employee Type",
            nav_label="Employee Types",
            description="Manage employee types",
            endpoint="common/employee-types/",
            fields=(f.text("name", "Name"), f.text("description", "Description"), f.switch("is_active", "Status")),
        ),
        ResourceDefinition(
            name="shifts",
            title="Shifts",
            description="",
            endpoint="common/shifts/",
            fields=(
                f.text("name", "Name"),
                f.time("start_time", "Start Time"),
                f.time("end_time", "End Time"),
                f.switch("is_active", "Status"),
            ),
            columns=_shift_columns,
        ),
        ResourceDefinition(
            name="technologies",
            title="Technology",
            nav_label="Technologies",
            description="Manage technologies",
            endpoint="common/technologies/",
            fields=(f.text("name", "Name"), f.switch("is_active", "Status")),
            update_method="put",
        ),
    )
}


def get_resource(name: str) -> ResourceDefinition:
    resource: Optional[ResourceDefinition] = RESOURCES.get(name)
    if resource is None:
        raise NotFoundError(f"Unknown settings resource: {name}")
    return resource
