from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Optional

from ..schemas import TaskOut

TITLE_REQUIRED = "Title is required"
INVALID_DUE_DATE = "Due date must be a valid date (YYYY-MM-DD)"


@dataclass
class TaskForm:
    """
    Field state of the create/edit dialog.

    ``open`` resets every field from the task being edited, or to blanks when
    creating, so stale input never leaks between openings.
    """

    is_open: bool = False
    initial_task: Optional[TaskOut] = None
    title: str = ""
    description: str = ""
    completed: bool = False
    due_date: str = ""
    busy: bool = False

    @property
    def is_edit(self) -> bool:
        return self.initial_task is not None

    @property
    def dialog_title(self) -> str:
        return "Edit task" if self.is_edit else "Add task"

    @property
    def submit_label(self) -> str:
        return "Update" if self.is_edit else "Create"

    def open(self, task: Optional[TaskOut] = None) -> None:
        self.initial_task = task
        self.title = task.title if task else ""
        self.description = (task.description or "") if task else ""
        self.completed = task.completed if task else False
        self.due_date = task.due_date.isoformat() if task and task.due_date else ""
        self.busy = False
        self.is_open = True

    def close(self) -> None:
        self.is_open = False
        self.initial_task = None

    def validate(self) -> Optional[str]:
        """Return an error message, or None when the form can be submitted."""
        if not self.title.strip():
            return TITLE_REQUIRED
        if self.due_date.strip():
            try:
                date.fromisoformat(self.due_date.strip())
            except ValueError:
                return INVALID_DUE_DATE
        return None

    def payload(self) -> Dict[str, Any]:
        """
        Request body for create or update.

        Blank description/due date are left out; when editing, a field that
        had a value and is now blank is sent as null to clear it.
        """
        body: Dict[str, Any] = {"title": self.title.strip(), "completed": self.completed}
        optional = {"description": self.description.strip(), "dueDate": self.due_date.strip()}
        previous = {
            "description": self.initial_task.description if self.initial_task else None,
            "dueDate": self.initial_task.due_date if self.initial_task else None,
        }
        for key, value in optional.items():
            if value:
                body[key] = value
            elif previous[key]:
                body[key] = None
        return body


@dataclass
class DeleteDialog:
    """Confirmation dialog state for deleting one task."""

    task: Optional[TaskOut] = None
    is_open: bool = False
    busy: bool = False

    @property
    def prompt(self) -> str:
        return f'Are you sure you want to delete "{self.task.title}"?' if self.task else ""

    @property
    def can_confirm(self) -> bool:
        return self.task is not None and not self.busy

    def open(self, task: TaskOut) -> None:
        self.task = task
        self.busy = False
        self.is_open = True

    def close(self) -> bool:
        """Close unless a delete request is in flight. Returns whether the dialog closed."""
        if self.busy:
            return False
        self.is_open = False
        self.task = None
        return True
