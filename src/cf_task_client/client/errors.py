"""Custom exceptions for the task client."""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Category of a client failure."""

    REQUEST = "request"
    DECODE = "decode"


class ClientError(Exception):
    """Base error for task client failures.

    The lower-level exception, when there is one, is chained as ``__cause__``.

    Attributes:
        kind: Whether the request or the response decoding failed.
        message: A human-readable error description.
        status_code: The HTTP status code observed, if a response was received.
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        status_code: int | None = None,
    ) -> None:
        self.kind = kind
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class RequestError(ClientError):
    """Raised when a request fails or returns an unaccepted status code."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(ErrorKind.REQUEST, message, status_code=status_code)


class DecodeError(ClientError):
    """Raised when a response body does not decode into the expected model."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(ErrorKind.DECODE, message, status_code=status_code)
