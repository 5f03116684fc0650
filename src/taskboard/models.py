from __future__ import annotations

from datetime import date, datetime
from typing import Optional, TypedDict


# PUBLIC_INTERFACE
class TaskEntity(TypedDict):
    """
    Storage-level representation of a Task shared by all repository backends.

    Fields:
    - id: UUID4 string assigned by the repository, never changes
    - title: Short title (1..255 chars, trimmed on input via schemas)
    - description: Optional text; plain text or a serialized rich-text document, stored as-is
    - completed: Boolean completion flag
    - due_date: Optional calendar date
    - created_at: UTC creation timestamp, drives the default ordering
    """

    id: str
    title: str
    description: Optional[str]
    completed: bool
    due_date: Optional[date]
    created_at: datetime
