# taskboard/ui/app.py
import logging

import flet as ft

from ..client import TasksClient
from ..logging_setup import setup_logging
from ..settings import get_settings
from .preview import EMPTY_PLACEHOLDER, description_preview
from .state import Severity, TaskListController, TaskListView, ViewState

logger = logging.getLogger(__name__)

SNACKBAR_MS = 2000


class TaskListPage:
    """Flet rendering of the task list screen. All state lives in TaskListController."""

    def __init__(self, page: ft.Page, client: TasksClient):
        self.page = page
        self.ctrl = TaskListController(client, on_change=self.render)
        self._shown_notification = None

        # ---------- header ----------
        self.total_text = ft.Text("", size=13, color=ft.Colors.ON_SURFACE_VARIANT)
        self.add_btn = ft.FilledButton("Add task", icon=ft.Icons.ADD, on_click=self.on_add)

        # ---------- body ----------
        self.body = ft.Column(spacing=12, scroll=ft.ScrollMode.AUTO, expand=True)
        self.prev_btn = ft.TextButton("Previous", on_click=lambda e: self.ctrl.change_page(self.ctrl.view.page - 1))
        self.next_btn = ft.TextButton("Next", on_click=lambda e: self.ctrl.change_page(self.ctrl.view.page + 1))
        self.page_text = ft.Text("")
        self.pager = ft.Row(
            [self.prev_btn, self.page_text, self.next_btn],
            alignment=ft.MainAxisAlignment.CENTER,
            visible=False,
        )

        # ---------- create/edit dialog ----------
        self.title_tf = ft.TextField(label="Title", autofocus=True, on_change=self._sync_form)
        self.desc_tf = ft.TextField(label="Description", multiline=True, min_lines=4, max_lines=10, on_change=self._sync_form)
        self.due_tf = ft.TextField(label="Due date", hint_text="YYYY-MM-DD", width=180, on_change=self._sync_form)
        self.completed_cb = ft.Checkbox(label="Completed", on_change=self._sync_form)
        self.submit_btn = ft.FilledButton("Create", on_click=self.on_submit)
        self.form_dlg = ft.AlertDialog(
            modal=True,
            title=ft.Text("Add task"),
            content=ft.Column(
                [self.title_tf, self.desc_tf, self.due_tf, self.completed_cb],
                tight=True,
                width=480,
            ),
            actions=[ft.TextButton("Cancel", on_click=self.on_form_cancel), self.submit_btn],
            actions_alignment=ft.MainAxisAlignment.END,
        )

        # ---------- delete dialog ----------
        self.delete_text = ft.Text("")
        self.delete_btn = ft.FilledButton(
            "Delete",
            style=ft.ButtonStyle(bgcolor=ft.Colors.ERROR, color=ft.Colors.ON_ERROR),
            on_click=self.on_delete_confirm,
        )
        self.delete_cancel_btn = ft.TextButton("Cancel", on_click=self.on_delete_cancel)
        self.delete_dlg = ft.AlertDialog(
            modal=True,
            title=ft.Text("Delete task?"),
            content=self.delete_text,
            actions=[self.delete_cancel_btn, self.delete_btn],
            actions_alignment=ft.MainAxisAlignment.END,
        )

    def build(self) -> ft.Control:
        return ft.Container(
            padding=16,
            expand=True,
            content=ft.Column(
                [
                    ft.Row([self.total_text, self.add_btn], alignment=ft.MainAxisAlignment.SPACE_BETWEEN),
                    self.body,
                    self.pager,
                ],
                expand=True,
            ),
        )

    def mount(self):
        self.page.add(self.build())
        self.ctrl.load()

    # ---------- rendering ----------

    def render(self, view: TaskListView):
        self.total_text.value = view.total_label
        self.body.controls = self._body_controls(view)
        self.pager.visible = view.show_pagination
        self.prev_btn.disabled = not view.has_previous
        self.next_btn.disabled = not view.has_next
        self.page_text.value = f"Page {view.page}"

        if view.notification is not None and view.notification is not self._shown_notification:
            self._shown_notification = view.notification
            self._show_snackbar(view.notification.message, view.notification.severity)
        self.page.update()

    def _body_controls(self, view: TaskListView) -> list:
        if view.state is ViewState.LOADING:
            return [ft.ProgressRing()]
        if view.state is ViewState.ERROR:
            return [
                ft.Row(
                    [
                        ft.Icon(ft.Icons.ERROR_OUTLINE, color=ft.Colors.ERROR),
                        ft.Text(view.error or "", color=ft.Colors.ERROR, expand=True),
                        ft.IconButton(icon=ft.Icons.CLOSE, on_click=lambda e: self.ctrl.dismiss_error()),
                    ]
                )
            ]
        if view.is_empty:
            return [ft.Text("No tasks yet. Add one to get started.", color=ft.Colors.ON_SURFACE_VARIANT)]

        controls = []
        for label, tasks in view.groups():
            controls.append(ft.Text(label, size=16, weight=ft.FontWeight.W_600))
            controls.append(self._table(tasks))
        return controls

    def _table(self, tasks) -> ft.DataTable:
        rows = []
        for task in tasks:
            title = ft.Text(task.title.strip() or EMPTY_PLACEHOLDER)
            if task.completed:
                title.style = ft.TextStyle(decoration=ft.TextDecoration.LINE_THROUGH)
            rows.append(
                ft.DataRow(
                    cells=[
                        ft.DataCell(ft.Checkbox(value=task.completed, on_change=lambda e, t=task: self.ctrl.toggle_complete(t))),
                        ft.DataCell(title),
                        ft.DataCell(
                            ft.Container(
                                content=ft.Text(description_preview(task.description), color=ft.Colors.ON_SURFACE_VARIANT),
                                width=300,
                            )
                        ),
                        ft.DataCell(
                            ft.Row(
                                [
                                    ft.IconButton(icon=ft.Icons.EDIT, tooltip="Edit", on_click=lambda e, t=task: self.on_edit(t)),
                                    ft.IconButton(icon=ft.Icons.DELETE, tooltip="Delete", on_click=lambda e, t=task: self.on_delete(t)),
                                ],
                                alignment=ft.MainAxisAlignment.END,
                            )
                        ),
                    ]
                )
            )
        return ft.DataTable(
            columns=[
                ft.DataColumn(ft.Text("Done")),
                ft.DataColumn(ft.Text("Title")),
                ft.DataColumn(ft.Text("Description")),
                ft.DataColumn(ft.Text("Actions")),
            ],
            rows=rows,
        )

    def _show_snackbar(self, message: str, severity: Severity):
        color = ft.Colors.GREEN_700 if severity is Severity.SUCCESS else ft.Colors.RED_700
        snack = ft.SnackBar(
            ft.Text(message),
            bgcolor=color,
            duration=SNACKBAR_MS,
            on_dismiss=lambda e: self.ctrl.dismiss_notification(),
        )
        self.page.open(snack)

    # ---------- form dialog ----------

    def _fill_form_fields(self):
        form = self.ctrl.form
        self.form_dlg.title = ft.Text(form.dialog_title)
        self.submit_btn.text = form.submit_label
        self.title_tf.value = form.title
        self.desc_tf.value = form.description
        self.due_tf.value = form.due_date
        self.completed_cb.value = form.completed

    def _sync_form(self, e=None):
        form = self.ctrl.form
        form.title = self.title_tf.value or ""
        form.description = self.desc_tf.value or ""
        form.due_date = self.due_tf.value or ""
        form.completed = bool(self.completed_cb.value)

    def on_add(self, e):
        self.ctrl.open_create()
        self._fill_form_fields()
        self.page.open(self.form_dlg)

    def on_edit(self, task):
        self.ctrl.open_edit(task)
        self._fill_form_fields()
        self.page.open(self.form_dlg)

    def on_form_cancel(self, e):
        self.ctrl.form.close()
        self.page.close(self.form_dlg)

    def on_submit(self, e):
        self._sync_form()
        self.submit_btn.disabled = True
        self.page.update()
        try:
            closed = self.ctrl.submit_form()
        finally:
            self.submit_btn.disabled = False
        if closed:
            self.page.close(self.form_dlg)
        else:
            self.page.update()

    # ---------- delete dialog ----------

    def on_delete(self, task):
        self.ctrl.open_delete(task)
        self.delete_text.value = self.ctrl.delete_dialog.prompt
        self.page.open(self.delete_dlg)

    def on_delete_cancel(self, e):
        if self.ctrl.delete_dialog.close():
            self.page.close(self.delete_dlg)

    def on_delete_confirm(self, e):
        self.delete_btn.disabled = True
        self.delete_cancel_btn.disabled = True
        self.page.update()
        try:
            closed = self.ctrl.confirm_delete()
        finally:
            self.delete_btn.disabled = False
            self.delete_cancel_btn.disabled = False
        if closed:
            self.page.close(self.delete_dlg)
        else:
            self.page.update()


def main(page: ft.Page):
    settings = get_settings()
    page.title = "Tasks"
    page.appbar = ft.AppBar(title=ft.Text("Tasks"), center_title=False)
    page.padding = 0

    client = TasksClient(settings.api_url)
    page.on_close = lambda e: client.close()
    logger.info("UI talking to %s", settings.api_url)
    TaskListPage(page, client).mount()


# PUBLIC_INTERFACE
def run():
    """Start the flet UI (``taskboard-ui``)."""
    setup_logging(get_settings().log_level)
    ft.app(target=main, view=ft.AppView.WEB_BROWSER)
