from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

TITLE_MAX_LENGTH = 255

# Shared type for incoming due dates: a date or an ISO8601 string
DueDateInput = Union[date, datetime, str]


def _parse_due_date(value: Optional[DueDateInput]) -> Optional[date]:
    """
    Internal helper to normalize due date input into a calendar date.
    - If value is a string, parse it as an ISO date. Datetime strings are rejected.
    - If value is a datetime, reject it.
    - If value is a date, return as-is.
    """
    if value is None:
        return None

    if isinstance(value, datetime):
        raise ValueError("dueDate must be a calendar date without a time component.")

    if isinstance(value, date):
        return value

    if isinstance(value, str):
        s = value.strip()
        try:
            return date.fromisoformat(s)
        except ValueError as e:
            raise ValueError(
                "Invalid dueDate format. Use an ISO8601 calendar date (e.g., '2025-01-31')."
            ) from e

    raise ValueError("Invalid type for dueDate; expected an ISO8601 date string.")


def _clean_title(v: str) -> str:
    s = v.strip()
    if not s:
        raise ValueError("title must not be empty")
    if len(s) > TITLE_MAX_LENGTH:
        raise ValueError(f"title must be at most {TITLE_MAX_LENGTH} characters")
    return s


# PUBLIC_INTERFACE
class TaskCreate(BaseModel):
    """
    Schema for creating a new Task. Unknown fields are rejected.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
        json_schema_extra={
            "example": {
                "title": "Buy groceries",
                "description": "Milk, eggs, bread",
                "completed": False,
                "dueDate": "2025-02-01",
            }
        },
    )

    title: str = Field(..., description="Short title for the task (1..255 chars)", strict=True)
    description: Optional[str] = Field(
        default=None, description="Optional description; plain text or serialized rich text", strict=True
    )
    completed: bool = Field(default=False, description="Completion status flag", strict=True)
    due_date: Optional[date] = Field(default=None, description="Optional due date (YYYY-MM-DD)")

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        """
        Strip whitespace and enforce 1..255 length.
        """
        return _clean_title(v)

    @field_validator("due_date", mode="before")
    @classmethod
    def parse_due_date(cls, v: Optional[DueDateInput]) -> Optional[date]:
        return _parse_due_date(v)


# PUBLIC_INTERFACE
class TaskUpdate(BaseModel):
    """
    Schema for partially updating an existing Task.
    All fields are optional; only fields present in the payload are applied
    (see ``model_fields_set``). ``description`` and ``dueDate`` may be cleared
    with an explicit null, ``title`` and ``completed`` may not.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
        json_schema_extra={
            "example": {
                "title": "Buy groceries and supplies",
                "completed": True,
                "dueDate": "2025-02-02",
            }
        },
    )

    title: Optional[str] = Field(default=None, description="Short title for the task (1..255 chars)", strict=True)
    description: Optional[str] = Field(default=None, description="Optional description", strict=True)
    completed: Optional[bool] = Field(default=None, description="Completion status flag", strict=True)
    due_date: Optional[date] = Field(default=None, description="Optional due date (YYYY-MM-DD)")

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: Optional[str]) -> str:
        if v is None:
            raise ValueError("title cannot be null")
        return _clean_title(v)

    @field_validator("completed")
    @classmethod
    def validate_completed(cls, v: Optional[bool]) -> bool:
        if v is None:
            raise ValueError("completed cannot be null")
        return v

    @field_validator("due_date", mode="before")
    @classmethod
    def parse_due_date(cls, v: Optional[DueDateInput]) -> Optional[date]:
        return _parse_due_date(v)

    def changes(self) -> dict:
        """Return only the fields supplied by the caller, keyed by attribute name."""
        return {name: getattr(self, name) for name in self.model_fields_set}


# PUBLIC_INTERFACE
class TaskOut(BaseModel):
    """
    Schema returned by the API for a Task.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "id": "5b6f1c1e-8f0b-4a52-9d0c-2f4a8a3f1d2e",
                "title": "Buy groceries",
                "description": "Milk, eggs, bread",
                "completed": False,
                "dueDate": "2025-02-01",
                "createdAt": "2025-01-25T10:15:30.123456Z",
            }
        },
    )

    id: str = Field(..., description="Unique identifier of the task")
    title: str = Field(..., description="Short title for the task")
    description: Optional[str] = Field(default=None, description="Optional description")
    completed: bool = Field(..., description="Completion status flag")
    due_date: Optional[date] = Field(default=None, description="Due date of the task")
    created_at: datetime = Field(..., description="Creation timestamp")
