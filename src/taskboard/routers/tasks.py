from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Query, Response, status
from pydantic import BaseModel, Field

from ..repositories import Repository, get_repository
from ..schemas import TaskCreate, TaskOut, TaskUpdate
from ..service import TaskService
from ..utils import DEFAULT_LIMIT, DEFAULT_PAGE, MAX_LIMIT, pagination_envelope

router = APIRouter(
    prefix="/tasks",
    tags=["tasks"],
)

_NOT_FOUND = {404: {"description": "Task not found"}}


class PaginationEnvelope(BaseModel):
    """
    Envelope for paginated list responses.
    """
    data: List[TaskOut] = Field(..., description="Tasks on the requested page, newest first")
    total: int = Field(..., description="Total number of stored tasks")


def get_service(repo: Repository = Depends(get_repository)) -> TaskService:
    """
    Dependency building the TaskService over the configured repository.
    """
    return TaskService(repo)


# PUBLIC_INTERFACE
@router.post(
    "",
    response_model=TaskOut,
    status_code=status.HTTP_201_CREATED,
    summary="Create Task",
    description="Create a new task and return the created resource.",
    responses={
        201: {"description": "Task created successfully"},
        422: {"description": "Validation error"},
    },
)
def create_task(payload: TaskCreate, service: TaskService = Depends(get_service)) -> TaskOut:
    return service.create(payload)


# PUBLIC_INTERFACE
@router.get(
    "",
    response_model=PaginationEnvelope,
    summary="List Tasks",
    description=(
        "List tasks ordered by creation time, newest first.\n\n"
        "Query parameters:\n"
        "- page: 1-based page number (values below 1 are treated as 1)\n"
        f"- limit: page size, clamped to 1..{MAX_LIMIT}\n\n"
        "Returns the page of tasks and the total count."
    ),
    responses={
        200: {"description": "List retrieved successfully"},
        422: {"description": "Invalid query parameters"},
    },
)
def list_tasks(
    page: int = Query(DEFAULT_PAGE, description="1-based page number"),
    limit: int = Query(DEFAULT_LIMIT, description=f"Page size (clamped to 1..{MAX_LIMIT})"),
    service: TaskService = Depends(get_service),
) -> PaginationEnvelope:
    result = service.list(page, limit)
    return PaginationEnvelope(**pagination_envelope(result.data, result.total))


# PUBLIC_INTERFACE
@router.get(
    "/{task_id}",
    response_model=TaskOut,
    summary="Get Task",
    description="Get a single task by ID.",
    responses={200: {"description": "Task found"}, **_NOT_FOUND},
)
def get_task(task_id: str, service: TaskService = Depends(get_service)) -> TaskOut:
    return service.get(task_id)


# PUBLIC_INTERFACE
@router.patch(
    "/{task_id}",
    response_model=TaskOut,
    summary="Update Task",
    description="Partially update a task. Fields omitted from the body keep their values.",
    responses={200: {"description": "Task updated"}, **_NOT_FOUND},
)
def patch_task(task_id: str, payload: TaskUpdate, service: TaskService = Depends(get_service)) -> TaskOut:
    return service.update(task_id, payload)


# PUBLIC_INTERFACE
@router.delete(
    "/{task_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete Task",
    description="Permanently delete a task by ID.",
    responses={204: {"description": "Task deleted"}, **_NOT_FOUND},
)
def delete_task(task_id: str, service: TaskService = Depends(get_service)) -> Response:
    """
    Delete a task. Returns 204 on success, 404 if not found.
    """
    service.delete(task_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
