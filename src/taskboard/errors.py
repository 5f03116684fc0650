from __future__ import annotations


class TaskboardError(Exception):
    """Base class for taskboard domain errors."""


# PUBLIC_INTERFACE
class TaskNotFoundError(TaskboardError):
    """Raised when an operation targets a task id that does not exist."""

    def __init__(self, task_id: str) -> None:
        self.task_id = task_id
        super().__init__(f"Task with id {task_id} not found")
