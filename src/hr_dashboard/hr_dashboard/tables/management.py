"""CRUD table driven by a declarative field schema.

A ManagementTable owns the dialog state (which dialog is open, the in-flight
form and its validation errors) and delegates persistence to the ``on_add``,
``on_edit`` and ``on_delete`` callables supplied by the page. It keeps no copy
of the records: after a successful call the page is expected to refetch and
build a new table around the fresh items.

Callbacks may be plain functions or coroutines. They report failure either by
returning a :class:`FieldErrors` / :class:`GenericError` result or by raising;
no error ever propagates out of the table, everything becomes an inline field
message or a toast.
"""
from __future__ import annotations

import inspect
import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Mapping, Optional, Sequence, Union

from ..common.records import field_value, record_id, stringify
from ..core.constants import DEFAULT_EMPTY_TEXT, DEFAULT_LABEL_KEY
from ..core.enums import DialogKind, FieldType, ToastVariant
from ..core.exceptions import DialogStateError
from ..core.types import FormState, ValidationErrors
from .actions import action_buttons, render_actions
from .columns import Column, derive_columns
from .fields import FieldSpec, coerce_input, initial_form, input_type, submit_default
from .notify import Acknowledgement, CollectingNotifier, ConfirmPrompt, Notifier, Toast
from .results import FieldErrors, GenericError, PersistenceResult, classify_error, restrict_to
from .sortable import SortableTable
from .validation import validate_form

_logger = logging.getLogger("hr_dashboard.tables")

MaybeAwaitable = Union[PersistenceResult, Awaitable[PersistenceResult], Any]
OnAdd = Callable[[FormState], MaybeAwaitable]
OnEdit = Callable[[int, FormState], MaybeAwaitable]
OnDelete = Callable[[int], MaybeAwaitable]


@dataclass(frozen=True)
class ClosedDialog:
    kind: DialogKind = field(default=DialogKind.CLOSED, init=False)


@dataclass(frozen=True)
class AddDialog:
    kind: DialogKind = field(default=DialogKind.ADD, init=False)


@dataclass(frozen=True)
class EditDialog:
    record: Any
    kind: DialogKind = field(default=DialogKind.EDIT, init=False)


ActiveDialog = Union[ClosedDialog, AddDialog, EditDialog]
CLOSED = ClosedDialog()


@dataclass(frozen=True)
class TableUrls:
    """URL builders for row actions; a missing builder hides that action."""

    edit: Optional[Callable[[Any], str]] = None
    delete: Optional[Callable[[Any], str]] = None
    toggle: Optional[Callable[[Any, str], str]] = None


@dataclass(frozen=True)
class FormFieldView:
    field: FieldSpec
    value: Any
    error: str
    input_type: str

    @property
    def checked(self) -> bool:
        return self.field.type == FieldType.SWITCH and bool(self.value)


async def _invoke(fn: Callable[..., Any], *args: Any) -> Any:
    result = fn(*args)
    if inspect.isawaitable(result):
        result = await result
    return result


def _failure(result: Any) -> bool:
    return isinstance(result, (FieldErrors, GenericError))


class ManagementTable:
    def __init__(
        self,
        *,
        title: str,
        items: Sequence[Any],
        fields: Sequence[FieldSpec],
        on_add: OnAdd,
        on_edit: OnEdit,
        on_delete: OnDelete,
        description: str = "",
        table_columns: Optional[Sequence[Column]] = None,
        label_key: str = DEFAULT_LABEL_KEY,
        loading: bool = False,
        page_size: Optional[int] = None,
        empty_text: str = DEFAULT_EMPTY_TEXT,
        urls: Optional[TableUrls] = None,
        notifier: Optional[Notifier] = None,
    ):
        self.title = title
        self.description = description
        self.items = list(items)
        self.fields = list(fields)
        self.table_columns = list(table_columns) if table_columns else None
        self.label_key = label_key
        self.loading = loading
        self.page_size = page_size
        self.empty_text = empty_text
        self.urls = urls or TableUrls()
        self.notifier: Notifier = notifier or CollectingNotifier()

        self._on_add = on_add
        self._on_edit = on_edit
        self._on_delete = on_delete

        self._dialog: ActiveDialog = CLOSED
        self._form: FormState = {}
        self._errors: ValidationErrors = {}
        self._submitting = False
        self._pending_delete: Optional[ConfirmPrompt] = None
        self._acknowledgement: Optional[Acknowledgement] = None

    # State

    @property
    def active_dialog(self) -> ActiveDialog:
        return self._dialog

    @property
    def is_add_open(self) -> bool:
        return self._dialog.kind == DialogKind.ADD

    @property
    def is_edit_open(self) -> bool:
        return self._dialog.kind == DialogKind.EDIT

    @property
    def editing_record(self) -> Any:
        return self._dialog.record if isinstance(self._dialog, EditDialog) else None

    @property
    def form(self) -> FormState:
        return dict(self._form)

    @property
    def errors(self) -> ValidationErrors:
        return dict(self._errors)

    @property
    def submitting(self) -> bool:
        return self._submitting

    @property
    def pending_delete(self) -> Optional[ConfirmPrompt]:
        return self._pending_delete

    @property
    def acknowledgement(self) -> Optional[Acknowledgement]:
        return self._acknowledgement

    @property
    def dialog_title(self) -> str:
        if self.is_add_open:
            return f"Add New {self.title}"
        if self.is_edit_open:
            return f"Edit {self.title}"
        return ""

    def _field(self, key: str) -> FieldSpec:
        for f in self.fields:
            if f.key == key:
                return f
        raise KeyError(key)

    def _reset(self) -> None:
        self._dialog = CLOSED
        self._form = {}
        self._errors = {}

    def _notify(self, title: str, description: str, variant: ToastVariant = ToastVariant.SUCCESS) -> None:
        self.notifier.notify(Toast(title, description, variant))

    # Dialog transitions

    def open_add(self) -> None:
        if self._dialog.kind != DialogKind.CLOSED:
            raise DialogStateError(f"Cannot open add dialog while {self._dialog.kind.value} dialog is open")
        self._dialog = AddDialog()
        self._form = initial_form(self.fields)
        self._errors = {}

    def open_edit(self, record: Any) -> None:
        if self._dialog.kind != DialogKind.CLOSED:
            raise DialogStateError(f"Cannot open edit dialog while {self._dialog.kind.value} dialog is open")
        self._dialog = EditDialog(record)
        # Only edited keys are tracked; unchanged values are read from the record.
        self._form = {}
        self._errors = {}

    def cancel(self) -> None:
        self._reset()

    # Form editing

    def set_field(self, key: str, value: Any) -> None:
        if self._dialog.kind == DialogKind.CLOSED:
            raise DialogStateError("No dialog is open")
        self._field(key)
        self._form[key] = value
        self._errors.pop(key, None)

    def display_value(self, key: str) -> Any:
        if key in self._form:
            return self._form[key]
        if isinstance(self._dialog, EditDialog):
            return field_value(self._dialog.record, key)
        return None

    def apply_form(self, raw: Mapping[str, Any]) -> None:
        """Record submitted HTML form values that differ from what is displayed."""
        for f in self.fields:
            if f.readonly:
                continue
            if f.type == FieldType.SWITCH:
                # Unchecked checkboxes are not submitted at all.
                value = coerce_input(f, raw.get(f.key) if f.key in raw else False)
            elif f.key in raw:
                value = coerce_input(f, raw.get(f.key))
            else:
                continue
            if value != coerce_input(f, self.display_value(f.key)):
                self.set_field(f.key, value)

    def form_fields(self) -> list[FormFieldView]:
        views = []
        for f in self.fields:
            value = self.display_value(f.key)
            views.append(FormFieldView(f, "" if value is None else value, self._errors.get(f.key, ""), input_type(f)))
        return views

    # Validation and submission

    def _current_values(self) -> FormState:
        if isinstance(self._dialog, EditDialog):
            values = {f.key: field_value(self._dialog.record, f.key) for f in self.fields}
            values.update(self._form)
            return values
        return dict(self._form)

    def validate(self) -> bool:
        self._errors = validate_form(self.fields, self._current_values())
        return not self._errors

    def _add_payload(self) -> FormState:
        payload = dict(self._form)
        for f in self.fields:
            if payload.get(f.key) is None or payload.get(f.key) == "":
                payload[f.key] = submit_default(f)
        return payload

    async def submit(self) -> bool:
        """Submit the open dialog; True when the record was persisted and the dialog closed."""
        if self._submitting:
            return False
        if self._dialog.kind == DialogKind.CLOSED:
            raise DialogStateError("No dialog is open")
        if not self.validate():
            return False

        adding = self.is_add_open
        self._submitting = True
        try:
            if adding:
                result = await _invoke(self._on_add, self._add_payload())
            else:
                result = await _invoke(self._on_edit, record_id(self.editing_record), dict(self._form))
        except Exception as exc:
            _logger.warning("%s %s failed: %s", self.title, "add" if adding else "edit", exc)
            result = classify_error(exc, [f.key for f in self.fields])
        finally:
            self._submitting = False

        if _failure(result):
            self._apply_failure(result, "Failed to add item" if adding else "Failed to update item")
            return False

        self._reset()
        if adding:
            self._notify("Success", "Item added successfully")
        else:
            self._notify("Success", "Item updated successfully")
        return True

    def _apply_failure(self, result: Union[FieldErrors, GenericError], fallback: str) -> None:
        if isinstance(result, FieldErrors):
            errors = restrict_to(result, [f.key for f in self.fields])
            if errors:
                self._errors.update(errors)
                return
            message = result.message
        else:
            message = result.message
        self._notify("Error", message or fallback, ToastVariant.DESTRUCTIVE)

    # Inline switch

    async def toggle_switch(self, record: Any, key: str, value: bool) -> bool:
        """Persist a single switch change straight from the table row."""
        f = self._field(key)
        if f.type != FieldType.SWITCH:
            raise ValueError(f"{key!r} is not a switch field")
        try:
            result = await _invoke(self._on_edit, record_id(record), {key: bool(value)})
        except Exception as exc:
            _logger.warning("%s status update failed: %s", self.title, exc)
            result = GenericError(str(exc))
        if _failure(result):
            self._notify("Error", "Failed to update status", ToastVariant.DESTRUCTIVE)
            return False
        self._notify("Success", "Status updated successfully")
        return True

    # Delete

    def delete_label(self, record: Any) -> str:
        label = field_value(record, self.label_key)
        if label is None or label == "":
            label = field_value(record, DEFAULT_LABEL_KEY)
        return stringify(label)

    def request_delete(self, record: Any) -> ConfirmPrompt:
        prompt = ConfirmPrompt(record_id=record_id(record), label=self.delete_label(record))
        self._pending_delete = prompt
        self._acknowledgement = None
        return prompt

    async def confirm_delete(self, confirmed: bool) -> bool:
        """Run the pending delete only after an explicit affirmative answer."""
        prompt, self._pending_delete = self._pending_delete, None
        if prompt is None or not confirmed:
            return False
        try:
            result = await _invoke(self._on_delete, prompt.record_id)
        except Exception:
            _logger.exception("Error deleting %s %s", self.title, prompt.record_id)
            result = GenericError("")
        if _failure(result):
            self._acknowledgement = Acknowledgement("Error!", "Failed to delete the item. Please try again.", "error")
            self._notify("Error", "Failed to delete item", ToastVariant.DESTRUCTIVE)
            return False
        self._acknowledgement = Acknowledgement("Deleted!", "The item has been deleted successfully.", "success")
        self._notify("Success", "Item deleted successfully")
        return True

    # Table

    def columns(self) -> list[Column]:
        base = self.table_columns or derive_columns(self.fields, toggle_url=self.urls.toggle)
        if not (self.urls.edit or self.urls.delete):
            return list(base)
        urls = self.urls

        def actions(record: Any, index: int):
            buttons = action_buttons(
                edit_url=urls.edit(record) if urls.edit else None,
                delete_url=urls.delete(record) if urls.delete else None,
            )
            return render_actions(buttons, disabled=self._submitting)

        return list(base) + [Column(key="actions", header="Actions", cell=actions, css_class="col-actions")]

    def table(self, **kwargs: Any) -> SortableTable:
        kwargs.setdefault("page_size", self.page_size)
        kwargs.setdefault("empty_text", self.empty_text)
        kwargs.setdefault("loading", self.loading)
        return SortableTable(self.columns(), self.items, **kwargs)

    def table_from_query(self, args: Mapping[str, Any], **kwargs: Any) -> SortableTable:
        kwargs.setdefault("page_size", self.page_size)
        kwargs.setdefault("empty_text", self.empty_text)
        kwargs.setdefault("loading", self.loading)
        return SortableTable.from_query(self.columns(), self.items, args, **kwargs)

    def find(self, rid: int) -> Any:
        for item in self.items:
            if record_id(item) == rid:
                return item
        return None
