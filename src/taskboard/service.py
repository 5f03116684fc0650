from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List

from .errors import TaskNotFoundError
from .models import TaskEntity
from .repositories import ListQuery, Repository
from .schemas import TaskCreate, TaskOut, TaskUpdate
from .utils import DEFAULT_LIMIT, DEFAULT_PAGE, clamp_pagination, page_offset

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TaskPage:
    data: List[TaskOut]
    total: int
    page: int
    limit: int


# PUBLIC_INTERFACE
class TaskService:
    """
    Task use cases on top of a Repository.

    Inputs are validated at the API boundary; the service only clamps paging
    values and turns missing ids into TaskNotFoundError.
    """

    def __init__(self, repo: Repository) -> None:
        self._repo = repo

    @staticmethod
    def _out(entity: TaskEntity) -> TaskOut:
        return TaskOut(**entity)

    def create(self, data: TaskCreate) -> TaskOut:
        created = self._repo.create(data)
        logger.info("Created task %s", created["id"])
        return self._out(created)

    def list(self, page: int = DEFAULT_PAGE, limit: int = DEFAULT_LIMIT) -> TaskPage:
        page, limit = clamp_pagination(page, limit)
        items, total = self._repo.list(ListQuery(limit=limit, offset=page_offset(page, limit)))
        return TaskPage(data=[self._out(it) for it in items], total=total, page=page, limit=limit)

    def get(self, task_id: str) -> TaskOut:
        item = self._repo.get(task_id)
        if item is None:
            raise TaskNotFoundError(task_id)
        return self._out(item)

    def update(self, task_id: str, data: TaskUpdate) -> TaskOut:
        updated = self._repo.update(task_id, data)
        if updated is None:
            raise TaskNotFoundError(task_id)
        logger.info("Updated task %s (%s)", task_id, ", ".join(sorted(data.model_fields_set)) or "no fields")
        return self._out(updated)

    def delete(self, task_id: str) -> None:
        if not self._repo.delete(task_id):
            raise TaskNotFoundError(task_id)
        logger.info("Deleted task %s", task_id)
