"""Shared payload builders for task client tests."""

from __future__ import annotations

from typing import Any


def make_task_payload(guid: str = "task-1", **overrides: Any) -> dict[str, Any]:
    """Build a task JSON object as the API returns it."""
    payload: dict[str, Any] = {
        "guid": guid,
        "sequence_id": 1,
        "name": "migrate",
        "command": "rake db:migrate",
        "state": "RUNNING",
        "memory_in_mb": 512,
        "disk_in_mb": 1024,
        "result": {"failure_reason": None},
        "created_at": "2016-05-04T17:00:41Z",
        "updated_at": "2016-05-04T17:00:42Z",
        "droplet_guid": "droplet-1",
        "links": {
            "self": {"href": f"https://api.example.com/v3/tasks/{guid}"},
            "app": {"href": "https://api.example.com/v3/apps/app-1"},
            "droplet": {"href": "https://api.example.com/v3/droplets/droplet-1"},
        },
    }
    payload.update(overrides)
    return payload


def make_list_payload(
    tasks: list[dict[str, Any]], next_href: str | None = None
) -> dict[str, Any]:
    """Build a paginated task list JSON object."""
    return {
        "pagination": {
            "total_results": len(tasks),
            "total_pages": 2 if next_href else 1,
            "first": {"href": "https://api.example.com/v3/tasks?page=1"},
            "last": {"href": "https://api.example.com/v3/tasks?page=1"},
            "next": {"href": next_href} if next_href else None,
            "previous": None,
        },
        "resources": tasks,
    }
