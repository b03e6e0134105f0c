"""Wire models for the v3 tasks API.

Field names mirror the JSON payloads exactly. Every response field carries a
zero-value default so that any JSON object decodes; validity rules belong to
the server.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class TaskState(str, Enum):
    """Known task lifecycle states.

    ``Task.state`` stays a plain string so states added server-side still decode.
    """

    PENDING = "PENDING"
    RUNNING = "RUNNING"
    CANCELING = "CANCELING"
    SUCCEEDED = "SUCCEEDED"
    FAILED = "FAILED"


_TERMINAL_STATES = frozenset({TaskState.SUCCEEDED.value, TaskState.FAILED.value})


class _WireModel(BaseModel):
    """Base for response models: JSON nulls decode to the field default.

    A null in place of a whole object decodes to a zero-valued model.
    """

    @model_validator(mode="before")
    @classmethod
    def drop_nulls(cls, data: Any) -> Any:
        if data is None:
            return {}
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data


class Link(_WireModel):
    """A hyperlink reference."""

    href: str = ""


class TaskResult(_WireModel):
    failure_reason: str = ""


class TaskLinks(_WireModel):
    """Links from a task to itself, its app and its droplet."""

    model_config = ConfigDict(populate_by_name=True)

    self_: Link = Field(default_factory=Link, alias="self")
    app: Link = Field(default_factory=Link)
    droplet: Link = Field(default_factory=Link)


class Task(_WireModel):
    """A one-off command execution against a staged droplet."""

    guid: str = ""
    sequence_id: int = 0
    name: str = ""
    command: str = ""
    state: str = ""
    memory_in_mb: int = 0
    disk_in_mb: int = 0
    result: TaskResult = Field(default_factory=TaskResult)
    created_at: datetime | None = None
    updated_at: datetime | None = None
    droplet_guid: str = ""
    links: TaskLinks = Field(default_factory=TaskLinks)

    @property
    def failure_reason(self) -> str:
        """Failure reason reported by the server, empty unless the task failed."""
        return self.result.failure_reason

    @property
    def is_terminal(self) -> bool:
        """Whether the task has finished running, successfully or not."""
        return self.state.upper() in _TERMINAL_STATES


class Pagination(_WireModel):
    total_results: int = 0
    total_pages: int = 0
    first: Link = Field(default_factory=Link)
    last: Link = Field(default_factory=Link)
    next: Link | None = None
    previous: Link | None = None


class TaskListResponse(_WireModel):
    """One page of tasks as returned by the list endpoints."""

    model_config = ConfigDict(populate_by_name=True)

    pagination: Pagination = Field(default_factory=Pagination)
    tasks: list[Task] = Field(default_factory=list, alias="resources")


class TaskRequest(BaseModel):
    """Client-supplied parameters for creating a task.

    ``droplet_guid`` selects the target in the request path and is never part
    of the body.
    """

    command: str = ""
    name: str = ""
    memory_in_mb: int = 0
    disk_in_mb: int = 0
    droplet_guid: str = ""

    def to_wire_body(self) -> dict[str, str]:
        """Build the JSON body sent on creation.

        ``command`` is always present. Optional fields are omitted when empty or
        zero, and quotas are rendered as decimal strings.

        Returns:
            Mapping of wire field names to string values.
        """
        body: dict[str, str] = {"command": self.command}
        if self.name:
            body["name"] = self.name
        if self.memory_in_mb:
            body["memory_in_mb"] = str(self.memory_in_mb)
        if self.disk_in_mb:
            body["disk_in_mb"] = str(self.disk_in_mb)
        return body
