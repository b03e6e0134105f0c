"""cf-task-client.

Async client and CLI for the task resource of a platform v3 API: one-off
commands run inside an application's staged droplet.
"""

from __future__ import annotations

from .client import ClientError, DecodeError, ErrorKind, RequestError, TaskClient
from .config import ClientConfig, load_client_config, resolve_config_for_cli
from .models import (
    Link,
    Pagination,
    Task,
    TaskLinks,
    TaskListResponse,
    TaskRequest,
    TaskResult,
    TaskState,
)

__all__ = [
    # Client
    "TaskClient",
    # Errors
    "ClientError",
    "DecodeError",
    "ErrorKind",
    "RequestError",
    # Models
    "Link",
    "Pagination",
    "Task",
    "TaskLinks",
    "TaskListResponse",
    "TaskRequest",
    "TaskResult",
    "TaskState",
    # Config
    "ClientConfig",
    "load_client_config",
    "resolve_config_for_cli",
]
