"""Async HTTP client for the v3 tasks API."""

from __future__ import annotations

import logging
from collections.abc import Container
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from ..config import DEFAULT_API_URL, DEFAULT_TIMEOUT, ClientConfig
from ..models import Task, TaskListResponse, TaskRequest
from .errors import DecodeError, RequestError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

_SUCCESS = range(200, 300)


class TaskClient:
    """Async client for the task resource of the platform API.

    Usage::

        async with TaskClient("https://api.example.com", token=token) as client:
            tasks = await client.list_tasks()
            task = await client.create_task(
                TaskRequest(command="rake db:migrate", droplet_guid=app_guid)
            )

    Args:
        base_url: Base URL of the platform API.
        token: Bearer token attached to every request.
        timeout: Request timeout in seconds.
        verify: Verify the server's TLS certificate.
        check_status: Require a 2xx status on create, get and list-by-app
            calls. Off by default, in which case any response body is decoded.
        http_client: Pre-configured client to use instead of building one.
            ``timeout`` and ``verify`` only apply to a client built here; the
            Accept and Authorization headers are sent either way.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_API_URL,
        *,
        token: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        verify: bool = True,
        check_status: bool = False,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._check_status = check_status
        self._headers = {"Accept": "application/json"}
        if token:
            self._headers["Authorization"] = f"bearer {token}"
        self._client = http_client or httpx.AsyncClient(
            base_url=base_url,
            headers=self._headers,
            timeout=timeout,
            verify=verify,
        )

    @classmethod
    def from_config(cls, config: ClientConfig) -> TaskClient:
        """Build a client from resolved configuration."""
        return cls(
            config.api_url,
            token=config.token,
            timeout=config.timeout,
            verify=config.verify_ssl,
            check_status=config.check_status,
        )

    async def __aenter__(self) -> TaskClient:
        """Enter the async context manager.

        Returns:
            The client instance.
        """
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> None:
        """Exit the async context manager, closing the underlying HTTP client."""
        await self.close()

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    async def _request(
        self,
        method: str,
        path: str,
        context: str,
        **kwargs: Any,
    ) -> httpx.Response:
        """Send an HTTP request and return the raw response.

        Args:
            method: HTTP method (GET, POST, etc.).
            path: URL path relative to ``base_url``.
            context: Message prefix used if the request fails.
            **kwargs: Extra keyword arguments forwarded to ``httpx.AsyncClient.request``.

        Returns:
            The HTTP response, whatever its status code.

        Raises:
            RequestError: If the request could not be completed.
        """
        logger.debug("%s %s", method, path)
        try:
            response = await self._client.request(
                method, path, headers=self._headers, **kwargs
            )
        except httpx.HTTPError as exc:
            raise RequestError(f"{context}: {exc}") from exc
        logger.debug("%s %s -> %d", method, path, response.status_code)
        return response

    @staticmethod
    def _expect_status(
        response: httpx.Response,
        accepted: Container[int],
        message: str,
    ) -> None:
        """Raise RequestError unless the response status is accepted.

        Raises:
            RequestError: Carrying the observed status code.
        """
        if response.status_code in accepted:
            return
        logger.warning(
            "%s %s returned unexpected status %d",
            response.request.method,
            response.request.url.path,
            response.status_code,
        )
        raise RequestError(message, status_code=response.status_code)

    def _maybe_expect_success(self, response: httpx.Response, context: str) -> None:
        if self._check_status:
            self._expect_status(
                response,
                _SUCCESS,
                f"{context}: status code {response.status_code}",
            )

    @staticmethod
    def _decode(model: type[ModelT], response: httpx.Response, context: str) -> ModelT:
        """Decode the response body into ``model``.

        Raises:
            DecodeError: If the body is not valid JSON of the expected shape.
        """
        try:
            return model.model_validate_json(response.content)
        except ValidationError as exc:
            logger.warning("%s: could not decode %s", context, model.__name__)
            raise DecodeError(
                f"{context}: {exc}", status_code=response.status_code
            ) from exc

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def list_tasks(self) -> list[Task]:
        """List all tasks the user has access to.

        Only the first page returned by the server is decoded.

        Returns:
            Tasks in the order the server returned them.

        Raises:
            RequestError: If the request fails or the status is not 200.
            DecodeError: If the body is not a task list.
        """
        response = await self._request("GET", "/v3/tasks", "Error requesting tasks")
        self._expect_status(
            response,
            (200,),
            f"Error requesting tasks: status code not 200, it was {response.status_code}",
        )
        return self._decode(TaskListResponse, response, "Error reading tasks").tasks

    async def create_task(self, request: TaskRequest) -> Task:
        """Create a task on the droplet named by ``request.droplet_guid``.

        Args:
            request: Creation parameters.

        Returns:
            The task as the server describes it.

        Raises:
            RequestError: If the request fails.
            DecodeError: If the body is not a task.
        """
        response = await self._request(
            "POST",
            f"/v3/apps/{request.droplet_guid}/tasks",
            "Error creating task",
            json=request.to_wire_body(),
        )
        self._maybe_expect_success(response, "Error creating task")
        task = self._decode(Task, response, "Error unmarshaling task")
        if task.guid:
            logger.info("Created task %s on %s", task.guid, request.droplet_guid)
        return task

    async def task_by_guid(self, guid: str) -> Task:
        """Get a single task by its GUID.

        Raises:
            RequestError: If the request fails.
            DecodeError: If the body is not a task.
        """
        response = await self._request("GET", f"/v3/tasks/{guid}", "Error requesting task")
        self._maybe_expect_success(response, "Error requesting task")
        return self._decode(Task, response, "Error unmarshaling task")

    async def tasks_by_app(self, guid: str) -> list[Task]:
        """List the tasks of one app.

        Pagination links are not followed; only the returned page is decoded.

        Args:
            guid: App GUID.

        Raises:
            RequestError: If the request fails.
            DecodeError: If the body is not a task list.
        """
        response = await self._request(
            "GET", f"/v3/apps/{guid}/tasks", "Error requesting tasks"
        )
        self._maybe_expect_success(response, "Error requesting tasks")
        return self._decode(TaskListResponse, response, "Error parsing tasks").tasks

    async def terminate_task(self, guid: str) -> None:
        """Cancel a task.

        Raises:
            RequestError: If the request fails or the status is not 202.
        """
        response = await self._request(
            "PUT", f"/v3/tasks/{guid}/cancel", "Error terminating task"
        )
        self._expect_status(
            response,
            (202,),
            f"Failed terminating task, response status code {response.status_code}",
        )
        logger.info("Cancelled task %s", guid)
