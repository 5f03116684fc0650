from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, List, Optional, Protocol, Tuple

from ..client import TasksApiError, TasksResponse
from ..schemas import TaskOut
from ..utils import DEFAULT_LIMIT
from .forms import DeleteDialog, TaskForm
from .preview import group_by_due_date

logger = logging.getLogger(__name__)

LOAD_FAILED = "Failed to load tasks"


class TasksApi(Protocol):
    """What the UI needs from the API adapter (``taskboard.client.TasksClient``)."""

    def list(self, page: int = ..., limit: int = ...) -> TasksResponse: ...

    def create(self, payload: dict) -> TaskOut: ...

    def update(self, task_id: str, payload: dict) -> TaskOut: ...

    def delete(self, task_id: str) -> None: ...


class ViewState(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    ERROR = "error"


class Severity(str, Enum):
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class Notification:
    message: str
    severity: Severity


# PUBLIC_INTERFACE
@dataclass(frozen=True)
class TaskListView:
    """
    Immutable snapshot of the task list screen.

    Rendering code reads everything it needs from here: the view state, the
    fetched page, pagination flags and the current notification.
    """

    state: ViewState = ViewState.IDLE
    tasks: Tuple[TaskOut, ...] = ()
    total: int = 0
    page: int = 1
    limit: int = DEFAULT_LIMIT
    error: Optional[str] = None
    notification: Optional[Notification] = None

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page * self.limit < self.total

    @property
    def show_pagination(self) -> bool:
        return self.total > self.limit

    @property
    def total_label(self) -> str:
        return f"{self.total} task{'' if self.total == 1 else 's'}"

    @property
    def is_empty(self) -> bool:
        return self.state is ViewState.LOADED and not self.tasks

    def groups(self) -> List[Tuple[str, List[TaskOut]]]:
        return group_by_due_date(self.tasks)


# PUBLIC_INTERFACE
class TaskListController:
    """
    Drives the task list screen: loading, paging, mutations and notifications.

    Every mutation is followed by a full reload of the current page. Each
    transition publishes a new TaskListView to ``on_change`` (if given) and
    returns it.
    """

    def __init__(
        self,
        api: TasksApi,
        *,
        limit: int = DEFAULT_LIMIT,
        on_change: Optional[Callable[[TaskListView], None]] = None,
    ) -> None:
        self._api = api
        self._view = TaskListView(limit=limit)
        self._on_change = on_change
        self.form = TaskForm()
        self.delete_dialog = DeleteDialog()

    @property
    def view(self) -> TaskListView:
        return self._view

    def _publish(self, **changes) -> TaskListView:
        self._view = replace(self._view, **changes)
        if self._on_change is not None:
            self._on_change(self._view)
        return self._view

    # notifications

    def notify(self, message: str, severity: Severity) -> TaskListView:
        return self._publish(notification=Notification(message, severity))

    def dismiss_notification(self) -> TaskListView:
        return self._publish(notification=None)

    def dismiss_error(self) -> TaskListView:
        return self._publish(state=ViewState.LOADED, error=None)

    # list

    def load(self) -> TaskListView:
        self._publish(state=ViewState.LOADING, error=None)
        try:
            res = self._api.list(self._view.page, self._view.limit)
        except TasksApiError as e:
            logger.warning("Loading tasks failed: %s", e)
            return self._publish(
                state=ViewState.ERROR,
                error=str(e) or LOAD_FAILED,
                notification=Notification(LOAD_FAILED, Severity.ERROR),
            )
        return self._publish(state=ViewState.LOADED, tasks=tuple(res.data), total=res.total)

    def change_page(self, page: int) -> TaskListView:
        if page < 1 or page == self._view.page:
            return self._view
        if page > self._view.page and not self._view.has_next:
            return self._view
        self._publish(page=page)
        return self.load()

    # mutations

    def toggle_complete(self, task: TaskOut) -> TaskListView:
        try:
            self._api.update(task.id, {"completed": not task.completed})
        except TasksApiError as e:
            return self.notify(str(e) or "Update failed", Severity.ERROR)
        return self.load()

    def open_create(self) -> None:
        self.form.open(None)

    def open_edit(self, task: TaskOut) -> None:
        self.form.open(task)

    def submit_form(self) -> bool:
        """Create or update from the form. Returns True when the dialog closed."""
        form = self.form
        problem = form.validate()
        if problem:
            self.notify(problem, Severity.ERROR)
            return False

        form.busy = True
        try:
            if form.initial_task is not None:
                self._api.update(form.initial_task.id, form.payload())
                message = "Task updated"
            else:
                self._api.create(form.payload())
                message = "Task created"
        except TasksApiError as e:
            self.notify(str(e) or "Request failed", Severity.ERROR)
            return False
        finally:
            form.busy = False

        form.close()
        self.notify(message, Severity.SUCCESS)
        self.load()
        return True

    def open_delete(self, task: TaskOut) -> None:
        self.delete_dialog.open(task)

    def confirm_delete(self) -> bool:
        """Delete the task held by the dialog. Returns True when the dialog closed."""
        dialog = self.delete_dialog
        if not dialog.can_confirm:
            return False

        dialog.busy = True
        try:
            self._api.delete(dialog.task.id)
        except TasksApiError as e:
            self.notify(str(e) or "Delete failed", Severity.ERROR)
            return False
        finally:
            dialog.busy = False

        dialog.close()
        self.notify("Task deleted", Severity.SUCCESS)
        view = self.load()
        # the deleted task was the last one on a trailing page
        if view.state is ViewState.LOADED and not view.tasks and view.page > 1:
            self._publish(page=view.page - 1)
            self.load()
        return True
