"""CLI for the task client.

Provides command-line access to list, inspect, create and cancel tasks.
"""

from __future__ import annotations

import asyncio
import json
import logging
import sys
from typing import Any

import click

from .client import ClientError, TaskClient
from .config import ClientConfig, resolve_config_for_cli
from .models import Task, TaskRequest

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger(__name__)


@click.group()
@click.option("--config", "config_path", type=click.Path(), help="Config file path")
@click.option("--api-url", help="Platform API URL (overrides config and CF_API_URL)")
@click.option("--token", help="Bearer token (overrides config and CF_TOKEN)")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.pass_context
def cli(
    ctx: click.Context,
    config_path: str | None,
    api_url: str | None,
    token: str | None,
    verbose: bool,
) -> None:
    """cf-tasks - Run and inspect one-off tasks on the platform."""
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)
    try:
        ctx.obj = resolve_config_for_cli(config_path, api_url=api_url, token=token)
    except (FileNotFoundError, ValueError) as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)


@cli.command(name="list")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_obj
def list_command(config: ClientConfig, as_json: bool) -> None:
    """List all tasks visible to the current user."""
    tasks = _run(_list_async(config))
    _print_tasks(tasks, as_json)


@cli.command(name="app")
@click.argument("app_guid")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_obj
def app_command(config: ClientConfig, app_guid: str, as_json: bool) -> None:
    """List the tasks of one app."""
    tasks = _run(_app_tasks_async(config, app_guid))
    _print_tasks(tasks, as_json)


@cli.command(name="show")
@click.argument("guid")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_obj
def show_command(config: ClientConfig, guid: str, as_json: bool) -> None:
    """Show a single task."""
    task = _run(_show_async(config, guid))
    _print_task(task, as_json)


@cli.command(name="create")
@click.argument("app_guid")
@click.option("--command", "-c", "command", required=True, help="Command to run")
@click.option("--name", "-n", default="", help="Task name")
@click.option("--memory", "-m", default=0, type=int, help="Memory quota in MB")
@click.option("--disk", "-k", default=0, type=int, help="Disk quota in MB")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_obj
def create_command(
    config: ClientConfig,
    app_guid: str,
    command: str,
    name: str,
    memory: int,
    disk: int,
    as_json: bool,
) -> None:
    """Run COMMAND as a task on APP_GUID."""
    request = TaskRequest(
        command=command,
        name=name,
        memory_in_mb=memory,
        disk_in_mb=disk,
        droplet_guid=app_guid,
    )
    task = _run(_create_async(config, request))
    _print_task(task, as_json)


@cli.command(name="cancel")
@click.argument("guid")
@click.pass_obj
def cancel_command(config: ClientConfig, guid: str) -> None:
    """Cancel a running task."""
    _run(_cancel_async(config, guid))
    click.echo(f"Task {guid} cancellation requested")


def _run(coro: Any) -> Any:
    """Run a client coroutine, exiting with status 1 on client errors."""
    try:
        return asyncio.run(coro)
    except ClientError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)


async def _list_async(config: ClientConfig) -> list[Task]:
    async with TaskClient.from_config(config) as client:
        return await client.list_tasks()


async def _app_tasks_async(config: ClientConfig, app_guid: str) -> list[Task]:
    async with TaskClient.from_config(config) as client:
        return await client.tasks_by_app(app_guid)


async def _show_async(config: ClientConfig, guid: str) -> Task:
    async with TaskClient.from_config(config) as client:
        return await client.task_by_guid(guid)


async def _create_async(config: ClientConfig, request: TaskRequest) -> Task:
    async with TaskClient.from_config(config) as client:
        return await client.create_task(request)


async def _cancel_async(config: ClientConfig, guid: str) -> None:
    async with TaskClient.from_config(config) as client:
        await client.terminate_task(guid)


def _print_tasks(tasks: list[Task], as_json: bool) -> None:
    """Print a task listing."""
    if as_json:
        payload = [task.model_dump(mode="json", by_alias=True) for task in tasks]
        click.echo(json.dumps(payload, indent=2))
        return

    if not tasks:
        click.echo("No tasks found.")
        return

    click.echo(f"{'GUID':<38} {'SEQ':>4}  {'STATE':<10} {'NAME':<20} COMMAND")
    click.echo("-" * 90)
    for task in tasks:
        click.echo(
            f"{task.guid:<38} {task.sequence_id:>4}  {task.state:<10} "
            f"{task.name:<20} {task.command}"
        )


def _print_task(task: Task, as_json: bool) -> None:
    """Print a single task's details."""
    if as_json:
        click.echo(json.dumps(task.model_dump(mode="json", by_alias=True), indent=2))
        return

    click.echo(f"guid:        {task.guid}")
    click.echo(f"name:        {task.name}")
    click.echo(f"state:       {task.state}")
    click.echo(f"command:     {task.command}")
    click.echo(f"sequence_id: {task.sequence_id}")
    click.echo(f"memory:      {task.memory_in_mb} MB")
    click.echo(f"disk:        {task.disk_in_mb} MB")
    click.echo(f"droplet:     {task.droplet_guid}")
    if task.created_at is not None:
        click.echo(f"created_at:  {task.created_at.isoformat()}")
    if task.failure_reason:
        click.echo(f"failure:     {task.failure_reason}")


def main() -> None:
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
