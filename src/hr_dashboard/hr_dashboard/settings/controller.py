from __future__ import annotations

import logging
from typing import Any, Optional

from flask import Flask, abort, flash, redirect, render_template, request, session, url_for

from ..container import Container
from ..common.records import record_id as id_of
from ..core.exceptions import ApiError, NotFoundError
from ..tables.fields import coerce_input, switch
from ..tables.management import ManagementTable, TableUrls
from ..tables.notify import FlashNotifier
from .model import ResourceDefinition
from .registry import RESOURCES

_logger = logging.getLogger("hr_dashboard.settings")

_ACK_SESSION_KEY = "settings_ack"


def register(app: Flask, container: Container) -> None:
    app.jinja_env.globals["csrf_token"] = lambda: ""
    service = container.settings_service

    def _resource_or_404(name: str) -> ResourceDefinition:
        try:
            return service.resource(name)
        except NotFoundError:
            abort(404)

    def _state_args() -> dict[str, Any]:
        return {k: v for k, v in request.args.items() if k in ("sort", "dir", "page")}

    def _page_url(resource: ResourceDefinition, **extra: Any) -> str:
        return url_for("settings_page", resource=resource.name, **{**_state_args(), **extra})

    def _load(resource: ResourceDefinition) -> list:
        try:
            return list(service.list(resource.name))
        except ApiError as e:
            _logger.error("Loading %s failed: %s", resource.name, e)
            flash(f"Failed to load {resource.menu_label.lower()}", "danger")
            return []

    def _build(resource: ResourceDefinition) -> ManagementTable:
        items = _load(resource)
        by_id = {id_of(r): r for r in items}
        return ManagementTable(
            title=resource.title,
            description=resource.description,
            items=items,
            fields=resource.fields,
            table_columns=resource.columns() if resource.columns else None,
            label_key=resource.label_key,
            page_size=app.config.get("PAGE_SIZE"),
            on_add=lambda data: service.create(resource.name, data),
            on_edit=lambda record_id, data: service.update(
                resource.name, record_id, data, current=by_id.get(record_id)
            ),
            on_delete=lambda record_id: service.delete(resource.name, record_id),
            urls=TableUrls(
                edit=lambda r: _page_url(resource, dialog="edit", id=id_of(r)),
                delete=lambda r: _page_url(resource, confirm_delete=id_of(r)),
                toggle=lambda r, key: url_for(
                    "settings_toggle", resource=resource.name, record_id=id_of(r), key=key, **_state_args()
                ),
            ),
            notifier=FlashNotifier(),
        )

    def _find_or_warn(table: ManagementTable, resource: ResourceDefinition, record_id: int) -> Optional[Any]:
        record = table.find(record_id)
        if record is None:
            flash(f"{resource.title} not found", "warning")
        return record

    def _render(resource: ResourceDefinition, table: ManagementTable):
        grid = table.table_from_query(request.args)
        return render_template(
            "settings/management.html",
            resource=resource,
            resources=list(RESOURCES.values()),
            table=table,
            grid=grid,
            state_args=_state_args(),
            page_url=lambda **params: url_for("settings_page", resource=resource.name, **params),
            acknowledgement=session.pop(_ACK_SESSION_KEY, None),
            active_page=resource.name,
        )

    @app.route("/", endpoint="index")
    def index():
        return redirect(url_for("settings_index"))

    @app.route("/settings", endpoint="settings_index")
    def settings_index():
        first = next(iter(RESOURCES))
        return redirect(url_for("settings_page", resource=first))

    @app.route("/settings/<resource>", methods=["GET"], endpoint="settings_page")
    def settings_page(resource: str):
        res = _resource_or_404(resource)
        table = _build(res)

        dialog = request.args.get("dialog")
        if dialog == "add":
            table.open_add()
        elif dialog == "edit":
            record_id = request.args.get("id", type=int)
            record = _find_or_warn(table, res, record_id) if record_id is not None else None
            if record is not None:
                table.open_edit(record)

        confirm_id = request.args.get("confirm_delete", type=int)
        if confirm_id is not None:
            record = _find_or_warn(table, res, confirm_id)
            if record is not None:
                table.request_delete(record)

        return _render(res, table)

    @app.route("/settings/<resource>/add", methods=["POST"], endpoint="settings_add")
    async def settings_add(resource: str):
        res = _resource_or_404(resource)
        table = _build(res)
        table.open_add()
        table.apply_form(request.form)
        if await table.submit():
            return redirect(_page_url(res))
        return _render(res, table)

    @app.route("/settings/<resource>/<int:record_id>/edit", methods=["POST"], endpoint="settings_edit")
    async def settings_edit(resource: str, record_id: int):
        res = _resource_or_404(resource)
        table = _build(res)
        record = _find_or_warn(table, res, record_id)
        if record is None:
            return redirect(_page_url(res))
        table.open_edit(record)
        table.apply_form(request.form)
        if await table.submit():
            return redirect(_page_url(res))
        return _render(res, table)

    @app.route("/settings/<resource>/<int:record_id>/toggle/<key>", methods=["POST"], endpoint="settings_toggle")
    async def settings_toggle(resource: str, record_id: int, key: str):
        res = _resource_or_404(resource)
        table = _build(res)
        record = _find_or_warn(table, res, record_id)
        if record is not None:
            value = coerce_input(switch(key, key), request.form.get("value"))
            try:
                await table.toggle_switch(record, key, value)
            except (KeyError, ValueError):
                abort(400)
        return redirect(_page_url(res))

    @app.route("/settings/<resource>/<int:record_id>/delete", methods=["POST"], endpoint="settings_delete")
    async def settings_delete(resource: str, record_id: int):
        res = _resource_or_404(resource)
        table = _build(res)
        record = _find_or_warn(table, res, record_id)
        if record is not None:
            table.request_delete(record)
            await table.confirm_delete(request.form.get("confirm") == "yes")
            ack = table.acknowledgement
            if ack is not None:
                session[_ACK_SESSION_KEY] = {"title": ack.title, "text": ack.text, "icon": ack.icon}
        return redirect(_page_url(res))
