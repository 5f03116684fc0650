from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from typing import List, Optional

from taskboard.client import TasksApiError, TasksResponse
from taskboard.schemas import TaskOut


def create_task_payload(title="Test Task", description="Do something", completed=None, due_date=None):
    payload = {"title": title, "description": description}
    if completed is not None:
        payload["completed"] = completed
    if due_date is not None:
        payload["dueDate"] = due_date
    return payload


def make_task(
    n: int,
    *,
    title: Optional[str] = None,
    description: Optional[str] = None,
    completed: bool = False,
    due_date: Optional[date] = None,
) -> TaskOut:
    return TaskOut(
        id=f"task-{n}",
        title=title or f"Task {n}",
        description=description,
        completed=completed,
        due_date=due_date,
        created_at=datetime(2025, 1, 1, tzinfo=timezone.utc) + timedelta(minutes=n),
    )


class FakeTasksApi:
    """
    Records calls made by the UI controller and serves a fixed task list.
    Set ``fail_with`` to make the next calls raise TasksApiError.
    """

    def __init__(self, tasks: Optional[List[TaskOut]] = None, total: Optional[int] = None) -> None:
        self.tasks = list(tasks or [])
        self.total = total
        self.fail_with: Optional[str] = None
        self.calls: list = []

    def _maybe_fail(self) -> None:
        if self.fail_with is not None:
            raise TasksApiError(self.fail_with, status_code=500)

    def list(self, page: int = 1, limit: int = 50) -> TasksResponse:
        self.calls.append(("list", page, limit))
        self._maybe_fail()
        start = (page - 1) * limit
        return TasksResponse(
            data=self.tasks[start:start + limit],
            total=self.total if self.total is not None else len(self.tasks),
        )

    def create(self, payload: dict) -> TaskOut:
        self.calls.append(("create", payload))
        self._maybe_fail()
        task = make_task(len(self.tasks) + 1, title=payload["title"])
        self.tasks.insert(0, task)
        return task

    def update(self, task_id: str, payload: dict) -> TaskOut:
        self.calls.append(("update", task_id, payload))
        self._maybe_fail()
        for i, task in enumerate(self.tasks):
            if task.id == task_id:
                self.tasks[i] = task.model_copy(update={k: v for k, v in payload.items() if k in {"title", "completed"}})
                return self.tasks[i]
        raise TasksApiError("not found", status_code=404)

    def delete(self, task_id: str) -> None:
        self.calls.append(("delete", task_id))
        self._maybe_fail()
        self.tasks = [t for t in self.tasks if t.id != task_id]

    def call_names(self) -> List[str]:
        return [c[0] for c in self.calls]
