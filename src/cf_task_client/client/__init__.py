"""Async Python client for the platform's v3 tasks API."""

from .client import TaskClient
from .errors import ClientError, DecodeError, ErrorKind, RequestError

__all__ = [
    "ClientError",
    "DecodeError",
    "ErrorKind",
    "RequestError",
    "TaskClient",
]
