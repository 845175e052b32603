"""
Generic tenant-scoped editor screens.

Every backoffice content screen is one of three parameterised views:

- ResourceEditorView: a list of records under ``/tenants/{id}/<path>``
  with create, edit and delete.
- SectionEditorView: one record per tenant that the backend replaces
  wholesale on every write; the screen owns some of its fields and
  re-submits all the others unchanged.
- LocalCollectionEditorView: rows kept in the browser session that
  never reach the backend.

All three share the same screen states: ``list`` by default,
``?mode=create``, ``?mode=edit&id=N`` and ``?mode=delete&id=N`` (the
confirmation prompt). A successful write always re-reads the data
before the list is rendered again.
"""

import logging
from typing import List, Optional, Tuple

from django.shortcuts import render
from django.utils import timezone
from django.utils.decorators import method_decorator
from django.views import View

from tenant_backoffice.decorators import backoffice_login_required
from tenant_backoffice.exceptions import ApiError, AuthenticationError
from tenant_backoffice.notifications import (
    notify_error,
    notify_form_errors,
    notify_info,
    notify_success,
)
from tenant_backoffice.results import Found, NotFound
from tenant_backoffice.utils import as_list, filter_records

logger = logging.getLogger(__name__)


@method_decorator(backoffice_login_required, name="dispatch")
class BackofficeScreen(View):
    """Base class for screens behind the backoffice auth gate."""

    title = ""

    @property
    def tenant_session(self):
        return self.request.tenant_session

    @property
    def client(self):
        return self.tenant_session.get_client()

    def get_context_data(self, **kwargs) -> dict:
        context = {
            "title": self.title,
            "screen": self,
            "screen_url": self.request.path,
            "tenant_id": self.tenant_session.tenant_id,
        }
        context.update(kwargs)
        return context

    def render(self, template_name: str, **context):
        return render(self.request, template_name, self.get_context_data(**context))


class RecordEditorView(BackofficeScreen):
    """
    List/form/delete state machine shared by the editor screens.

    Subclasses provide the storage hooks ``load_records``,
    ``create_record``, ``update_record`` and ``delete_record``. Hooks
    that talk to the backend raise ApiError on failure; the state
    machine turns that into a notification and leaves the screen state
    unchanged.
    """

    form_class = None
    search_fields: Tuple[str, ...] = ()
    list_columns: Tuple[Tuple[str, str], ...] = ()
    # Extra per-row links as (label, url) with {screen} and {id} placeholders
    row_actions: Tuple[Tuple[str, str], ...] = ()
    # Per-row POST buttons as (label, action); action "x" is handled by handle_x(record_id)
    row_post_actions: Tuple[Tuple[str, str], ...] = ()
    verbose_name = "record"
    verbose_name_plural = "records"

    list_template_name = "tenant_backoffice/editor/list.html"
    form_template_name = "tenant_backoffice/editor/form.html"
    confirm_template_name = "tenant_backoffice/editor/confirm_delete.html"

    # Storage hooks

    def load_records(self) -> Tuple[List[dict], Optional[Exception]]:
        raise NotImplementedError

    def create_record(self, form):
        raise NotImplementedError

    def update_record(self, record_id: str, form):
        raise NotImplementedError

    def delete_record(self, record_id: str):
        raise NotImplementedError

    # Form construction

    def get_form_kwargs(self, editing: bool = False) -> dict:
        return {}

    def get_initial(self, record: dict) -> dict:
        initial_from_record = getattr(self.form_class, "initial_from_record", None)
        if initial_from_record is not None:
            return initial_from_record(record)
        return {name: record.get(name) for name in self.form_class.base_fields if name in record}

    def get_form(self, data=None, files=None, initial=None, editing=False):
        kwargs = self.get_form_kwargs(editing)
        if data is not None:
            return self.form_class(data, files, **kwargs)
        return self.form_class(initial=initial, **kwargs)

    # Screen states

    def get(self, request, *args, **kwargs):
        mode = request.GET.get("mode", "list")

        if mode == "create":
            return self.render_form(self.get_form())

        if mode in ("edit", "delete"):
            records, error = self.load_records()
            record = self.find_record(records, request.GET.get("id"))
            if record is None:
                if error is None:
                    notify_error(request, f"{self.verbose_name.capitalize()} not found.")
                return self.render_list(records, error)
            if mode == "edit":
                form = self.get_form(initial=self.get_initial(record), editing=True)
                return self.render_form(form, record=record)
            return self.render(self.confirm_template_name, record=record, record_label=self.record_label(record))

        return self.render_list(*self.load_records())

    def post(self, request, *args, **kwargs):
        action = request.POST.get("action", "save")
        if action == "delete":
            return self.handle_delete(request.POST.get("record_id"))
        if action in {name for _, name in self.row_post_actions}:
            return getattr(self, f"handle_{action}")(request.POST.get("record_id"))
        return self.handle_save(request.POST.get("record_id") or None)

    def handle_save(self, record_id: Optional[str]):
        form = self.get_form(self.request.POST, self.request.FILES, editing=record_id is not None)
        if not form.is_valid():
            notify_form_errors(self.request, form)
            return self.render_form(form, record_id=record_id)

        try:
            if record_id:
                self.update_record(record_id, form)
            else:
                self.create_record(form)
        except AuthenticationError:
            raise
        except ApiError as exc:
            notify_error(self.request, exc, f"Failed to save {self.verbose_name}")
            return self.render_form(form, record_id=record_id)

        notify_success(self.request, self.get_success_message("updated" if record_id else "created"))
        return self.render_list(*self.load_records())

    def handle_delete(self, record_id: Optional[str]):
        if not record_id:
            notify_error(self.request, f"No {self.verbose_name} selected.")
            return self.render_list(*self.load_records())

        if self.request.POST.get("confirm") != "yes":
            notify_info(self.request, "Delete cancelled.")
            return self.render_list(*self.load_records())

        try:
            self.delete_record(record_id)
        except AuthenticationError:
            raise
        except ApiError as exc:
            notify_error(self.request, exc, f"Failed to delete {self.verbose_name}")
            return self.render_list(*self.load_records())

        notify_success(self.request, self.get_success_message("deleted"))
        return self.render_list(*self.load_records())

    def get_success_message(self, verb: str) -> str:
        return f"{self.verbose_name.capitalize()} {verb} successfully!"

    # Rendering

    def find_record(self, records: List[dict], record_id) -> Optional[dict]:
        if record_id in (None, ""):
            return None
        for record in records:
            if str(record.get("id")) == str(record_id):
                return record
        return None

    def record_label(self, record: dict) -> str:
        for field, _ in self.list_columns:
            if record.get(field):
                return str(record[field])
        return f"{self.verbose_name} #{record.get('id')}"

    def build_rows(self, records: List[dict]) -> List[dict]:
        return [
            {
                "id": record.get("id"),
                "cells": [record.get(field) for field, _ in self.list_columns],
                "actions": [
                    (label, url.format(screen=self.request.path, id=record.get("id")))
                    for label, url in self.row_actions
                ],
                "post_actions": self.row_post_actions,
                "record": record,
            }
            for record in records
        ]

    def render_list(self, records: List[dict], error: Optional[Exception] = None):
        query = self.request.GET.get("q", "")
        visible = filter_records(records, query, self.search_fields)
        return self.render(
            self.list_template_name,
            rows=self.build_rows(visible),
            columns=[label for _, label in self.list_columns],
            total=len(records),
            query=query,
            error=error,
            verbose_name=self.verbose_name,
            verbose_name_plural=self.verbose_name_plural,
        )

    def render_form(self, form, record: dict = None, record_id: str = None):
        if record is not None and record_id is None:
            record_id = record.get("id")
        return self.render(
            self.form_template_name,
            form=form,
            record=record,
            record_id=record_id,
            is_edit=record_id is not None,
            verbose_name=self.verbose_name,
        )


class ResourceEditorView(RecordEditorView):
    """
    Editor for a list resource owned by the tenant.

    Configure with:
        resource_path: path below ``/tenants/{id}/``; may reference URL
            kwargs, e.g. ``"blogs/{blog_id}/banners"``
        form_class: an EditorForm naming the backend fields
        multipart: encode writes as multipart form data (file-bearing
            resources) instead of JSON
    """

    resource_path = ""
    multipart = True
    fetch_error_message = "Failed to load records"

    def get_resource_path(self, record_id=None) -> str:
        parts = [self.resource_path.format(**self.kwargs)]
        if record_id is not None:
            parts.append(record_id)
        return self.client.tenant_path(*parts)

    def load_records(self):
        try:
            return as_list(self.client.get_all(self.get_resource_path())), None
        except AuthenticationError:
            raise
        except ApiError as exc:
            logger.warning("Loading %s failed: %s", self.verbose_name_plural, exc)
            notify_error(self.request, exc, self.fetch_error_message)
            return [], exc

    def create_record(self, form):
        body, files = form.payload()
        return self.client.post(self.get_resource_path(), body, multipart=self.multipart, files=files)

    def update_record(self, record_id, form):
        body, files = form.payload()
        return self.client.put(
            self.get_resource_path(record_id), body, multipart=self.multipart, files=files
        )

    def delete_record(self, record_id):
        return self.client.request("delete", self.get_resource_path(record_id))


class SectionEditorView(BackofficeScreen):
    """
    Editor for a single-record-per-tenant resource.

    The backend replaces the whole record on every write. The screen's
    form owns some fields; every other field listed in
    ``record_fields`` is re-submitted from a fresh read of the record
    (or its default when the record does not have it yet), so saving
    one section never clobbers its siblings.

    Configure with:
        resource_path: path below ``/tenants/{id}/``
        form_class: an EditorForm for the owned fields
        record_fields: mapping of every record field to its default
        deletable: whether the screen offers deleting the record
    """

    resource_path = ""
    form_class = None
    record_fields: dict = {}
    multipart = True
    deletable = False
    verbose_name = "section"
    empty_message = "Nothing has been added yet."

    display_template_name = "tenant_backoffice/editor/section.html"
    form_template_name = "tenant_backoffice/editor/form.html"
    confirm_template_name = "tenant_backoffice/editor/confirm_delete.html"

    def get_resource_path(self) -> str:
        return self.client.tenant_path(self.resource_path)

    def fetch_record(self):
        """Fresh read of the record as a result variant."""
        result = self.client.fetch(self.get_resource_path())
        if result.found and isinstance(result.record, list):
            records = result.record
            return Found(records[0]) if records else NotFound()
        return result

    def merge_record(self, existing: dict, owned: dict) -> dict:
        """
        Full replacement body: siblings from ``existing`` plus ``owned``.

        A sibling missing from the existing record is sent with its
        default so the backend's required fields are always present.
        """
        existing = existing or {}
        body = {}
        for name, default in self.record_fields.items():
            if name in owned:
                continue
            value = existing.get(name)
            body[name] = value if value not in (None, "") else default
        body.update(owned)
        return body

    def get(self, request, *args, **kwargs):
        mode = request.GET.get("mode", "view")
        result = self.fetch_record()

        if result.failed:
            notify_error(request, result, f"Failed to load {self.verbose_name}")

        if mode == "edit" and not result.failed:
            record = result.unwrap_or({})
            form = self.form_class(initial=self.form_class.initial_from_record(record))
            return self.render_form(form, record=record if result.found else None)

        if mode == "delete" and self.deletable and result.found:
            return self.render(
                self.confirm_template_name,
                record=result.record,
                record_label=self.verbose_name,
            )

        return self.render_display(result)

    def post(self, request, *args, **kwargs):
        if request.POST.get("action") == "delete" and self.deletable:
            return self.handle_delete()
        return self.handle_save()

    def get_form_kwargs(self) -> dict:
        return {}

    def handle_save(self):
        form = self.form_class(self.request.POST, self.request.FILES, **self.get_form_kwargs())
        if not form.is_valid():
            notify_form_errors(self.request, form)
            return self.render_form(form)

        result = self.fetch_record()
        if result.failed:
            notify_error(self.request, result, f"Failed to save {self.verbose_name}")
            return self.render_form(form)

        owned, files = form.payload()
        body = self.merge_record(result.unwrap_or({}), owned)
        try:
            if result.found:
                self.client.put(self.get_resource_path(), body, multipart=self.multipart, files=files)
            else:
                self.client.post(self.get_resource_path(), body, multipart=self.multipart, files=files)
        except AuthenticationError:
            raise
        except ApiError as exc:
            notify_error(self.request, exc, f"Failed to save {self.verbose_name}")
            return self.render_form(form)

        notify_success(self.request, f"{self.verbose_name.capitalize()} updated successfully!")
        return self.render_display(self.fetch_record())

    def handle_delete(self):
        if self.request.POST.get("confirm") != "yes":
            notify_info(self.request, "Delete cancelled.")
            return self.render_display(self.fetch_record())
        try:
            self.client.request("delete", self.get_resource_path())
        except AuthenticationError:
            raise
        except ApiError as exc:
            notify_error(self.request, exc, f"Failed to delete {self.verbose_name}")
            return self.render_display(self.fetch_record())

        notify_success(self.request, f"{self.verbose_name.capitalize()} deleted successfully!")
        return self.render_display(self.fetch_record())

    def display_rows(self, record: dict) -> List[Tuple[str, object]]:
        form = self.form_class()
        rows = []
        for name in self.form_class.text_fields():
            rows.append((form[name].label, record.get(name)))
        for name, field in form.fields.items():
            url = record.get(f"{name}_url")
            if name not in self.form_class.text_fields() and url:
                rows.append((form[name].label, url))
        return rows

    def render_display(self, result):
        record = result.record if result.found else None
        return self.render(
            self.display_template_name,
            record=record,
            rows=self.display_rows(record) if record else [],
            failed=result.failed,
            deletable=self.deletable,
            empty_message=self.empty_message,
            verbose_name=self.verbose_name,
        )

    def render_form(self, form, record: dict = None):
        return self.render(
            self.form_template_name,
            form=form,
            record=record,
            record_id=None,
            is_edit=record is not None,
            verbose_name=self.verbose_name,
        )


class LocalCollectionEditorView(RecordEditorView):
    """
    Editor whose rows live in the browser session only.

    Nothing is sent to the backend; the rows disappear with the
    session. ``seed`` provides the initial rows for a new session.
    """

    session_key = ""
    seed: Tuple[dict, ...] = ()
    # Fields a new row starts with; edits keep whatever the row holds
    row_defaults: dict = {}

    def get_session_key(self) -> str:
        return f"tenant_backoffice:{self.session_key}:{self.tenant_session.tenant_id}"

    def get_rows(self) -> List[dict]:
        key = self.get_session_key()
        if key not in self.request.session:
            self.request.session[key] = [dict(row) for row in self.seed]
        return self.request.session[key]

    def save_rows(self, rows: List[dict]):
        self.request.session[self.get_session_key()] = rows

    def load_records(self):
        return list(self.get_rows()), None

    def build_row(self, form) -> dict:
        return dict(form.cleaned_data)

    def create_record(self, form):
        rows = self.get_rows()
        next_id = max((int(row["id"]) for row in rows), default=0) + 1
        row = {"id": next_id, "created_at": timezone.now().isoformat(timespec="seconds")}
        row.update(self.row_defaults)
        row.update(self.build_row(form))
        self.save_rows(rows + [row])
        return row

    def update_record(self, record_id, form):
        rows = []
        for row in self.get_rows():
            if str(row["id"]) == str(record_id):
                row = dict(row, **self.build_row(form))
            rows.append(row)
        self.save_rows(rows)

    def delete_record(self, record_id):
        self.save_rows([row for row in self.get_rows() if str(row["id"]) != str(record_id)])
