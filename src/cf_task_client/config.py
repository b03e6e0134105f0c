"""Client configuration for the task API.

Settings come from ``.cf-tasks/config.toml`` (discovered by walking up from the
working directory), then environment variables, then explicit CLI flags, each
layer overriding the previous one.
"""

from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import dataclass, replace
from pathlib import Path

logger = logging.getLogger(__name__)

_CONFIG_DIR = ".cf-tasks"
_CONFIG_FILE = "config.toml"

DEFAULT_API_URL = "http://127.0.0.1:8080"
DEFAULT_TIMEOUT = 30.0

ENV_API_URL = "CF_API_URL"
ENV_TOKEN = "CF_TOKEN"


@dataclass(frozen=True)
class ClientConfig:
    """Connection settings for a TaskClient.

    Attributes:
        api_url: Base URL of the platform API.
        token: Bearer token sent with every request, if set.
        timeout: Request timeout in seconds.
        verify_ssl: Verify the server's TLS certificate.
        check_status: Also require a 2xx status on create, get and
            list-by-app calls, which otherwise decode any response.
    """

    api_url: str = DEFAULT_API_URL
    token: str | None = None
    timeout: float = DEFAULT_TIMEOUT
    verify_ssl: bool = True
    check_status: bool = False


def load_client_config(config_file: Path) -> ClientConfig:
    """Load config from a TOML file.

    Args:
        config_file: Path to the config.toml file.

    Returns:
        Parsed ClientConfig.

    Raises:
        FileNotFoundError: If the file is missing.
        ValueError: On invalid, empty, or corrupt TOML.
    """
    if not config_file.exists():
        msg = f"Client config not found: {config_file}"
        raise FileNotFoundError(msg)

    content = config_file.read_text(encoding="utf-8")
    if not content.strip():
        msg = f"Config file is empty: {config_file}"
        raise ValueError(msg)

    try:
        data = tomllib.loads(content)
    except tomllib.TOMLDecodeError as exc:
        msg = f"Invalid TOML in {config_file}: {exc}"
        raise ValueError(msg) from exc

    return _parse_config(data)


def _parse_config(data: dict[str, object]) -> ClientConfig:
    """Parse raw TOML data into a ClientConfig.

    Unknown fields are silently ignored for forward compatibility.
    """
    api = data.get("api", {})
    if not isinstance(api, dict):
        msg = "[api] section must be a table"
        raise ValueError(msg)

    url = api.get("url", DEFAULT_API_URL)
    if not isinstance(url, str) or not url:
        msg = "api.url must be a non-empty string"
        raise ValueError(msg)

    token = api.get("token")
    if token is not None and not isinstance(token, str):
        msg = "api.token must be a string"
        raise ValueError(msg)

    timeout = api.get("timeout", DEFAULT_TIMEOUT)
    if isinstance(timeout, bool) or not isinstance(timeout, (int, float)):
        msg = "api.timeout must be a number"
        raise ValueError(msg)

    verify_ssl = api.get("verify_ssl", True)
    check_status = api.get("check_status", False)
    if not isinstance(verify_ssl, bool) or not isinstance(check_status, bool):
        msg = "api.verify_ssl and api.check_status must be booleans"
        raise ValueError(msg)

    config = ClientConfig(
        api_url=url,
        token=token or None,
        timeout=float(timeout),
        verify_ssl=verify_ssl,
        check_status=check_status,
    )
    _validate_config(config)
    return config


def _validate_config(config: ClientConfig) -> None:
    """Validate config field values.

    Raises:
        ValueError: If any field has an invalid value.
    """
    if not config.api_url.startswith(("http://", "https://")):
        msg = f"api.url must be an http(s) URL, got '{config.api_url}'"
        raise ValueError(msg)

    if config.timeout <= 0:
        msg = f"api.timeout must be positive, got {config.timeout}"
        raise ValueError(msg)


def find_config_root(start: Path | None = None) -> Path | None:
    """Walk up from start to find nearest .cf-tasks/ directory.

    Args:
        start: Starting directory. Defaults to cwd.

    Returns:
        The directory containing .cf-tasks/, or None if not found.
    """
    current = (start or Path.cwd()).resolve()
    while True:
        if (current / _CONFIG_DIR).is_dir():
            return current
        parent = current.parent
        if parent == current:
            return None
        current = parent


def apply_env_overrides(config: ClientConfig) -> ClientConfig:
    """Return config with CF_API_URL / CF_TOKEN applied when set."""
    api_url = os.environ.get(ENV_API_URL)
    token = os.environ.get(ENV_TOKEN)
    if api_url:
        config = replace(config, api_url=api_url)
    if token:
        config = replace(config, token=token)
    return config


def resolve_config_for_cli(
    config_override: str | None = None,
    *,
    api_url: str | None = None,
    token: str | None = None,
) -> ClientConfig:
    """Resolve client config for CLI commands with auto-discovery fallback.

    Args:
        config_override: Explicit --config path. If given, skips discovery.
        api_url: Explicit --api-url, overriding file and environment.
        token: Explicit --token, overriding file and environment.

    Returns:
        The effective ClientConfig.

    Raises:
        FileNotFoundError: If config_override points at a missing file.
        ValueError: If the config file is corrupt or a value is invalid.
    """
    if config_override is not None:
        config = load_client_config(Path(config_override))
    else:
        root = find_config_root()
        if root is None:
            logger.debug("No %s/ directory found, using defaults", _CONFIG_DIR)
            config = ClientConfig()
        else:
            config = load_client_config(root / _CONFIG_DIR / _CONFIG_FILE)

    config = apply_env_overrides(config)
    if api_url:
        config = replace(config, api_url=api_url)
    if token:
        config = replace(config, token=token)

    _validate_config(config)
    return config
