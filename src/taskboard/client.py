from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import httpx

from .errors import TaskboardError
from .schemas import TaskOut
from .utils import DEFAULT_LIMIT, DEFAULT_PAGE

logger = logging.getLogger(__name__)


# PUBLIC_INTERFACE
class TasksApiError(TaskboardError):
    """Raised for non-2xx responses and transport failures."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


@dataclass(frozen=True)
class TasksResponse:
    data: List[TaskOut]
    total: int


# PUBLIC_INTERFACE
class TasksClient:
    """
    Thin client for the Taskboard REST API.

    Either pass ``base_url`` or an already configured ``httpx.Client`` (for
    example FastAPI's TestClient). Payloads use the API's camelCase keys.
    """

    def __init__(
        self,
        base_url: str = "",
        *,
        http: Optional[httpx.Client] = None,
        timeout: float = 10.0,
    ) -> None:
        self._owns_http = http is None
        self._http = http if http is not None else httpx.Client(
            base_url=base_url,
            timeout=timeout,
            headers={"Content-Type": "application/json"},
        )

    def close(self) -> None:
        if self._owns_http:
            self._http.close()

    def __enter__(self) -> "TasksClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        try:
            res = self._http.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            logger.warning("%s %s failed: %s", method, path, e)
            raise TasksApiError(str(e) or e.__class__.__name__) from e

        if not res.is_success:
            raise TasksApiError(res.text or f"HTTP {res.status_code}", status_code=res.status_code)
        if res.status_code == 204 or not res.content:
            return None
        return res.json()

    def list(self, page: int = DEFAULT_PAGE, limit: int = DEFAULT_LIMIT) -> TasksResponse:
        body = self._request("GET", "/tasks", params={"page": page, "limit": limit})
        return TasksResponse(
            data=[TaskOut.model_validate(t) for t in body["data"]],
            total=int(body["total"]),
        )

    def get(self, task_id: str) -> TaskOut:
        return TaskOut.model_validate(self._request("GET", f"/tasks/{task_id}"))

    def create(self, payload: Dict[str, Any]) -> TaskOut:
        return TaskOut.model_validate(self._request("POST", "/tasks", json=payload))

    def update(self, task_id: str, payload: Dict[str, Any]) -> TaskOut:
        return TaskOut.model_validate(self._request("PATCH", f"/tasks/{task_id}", json=payload))

    def delete(self, task_id: str) -> None:
        self._request("DELETE", f"/tasks/{task_id}")
