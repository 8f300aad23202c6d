"""Error taxonomy for the books client."""

from __future__ import annotations


class BookServiceError(Exception):
    """Base class for every failure raised by the client core."""

    def __init__(self, message: str, operation: str):
        super().__init__(message)
        self.operation = operation


class RemoteError(BookServiceError):
    """The server answered with an unexpected status code."""

    def __init__(self, status_code: int, operation: str):
        super().__init__(f"Books service returned HTTP {status_code} for {operation}", operation)
        self.status_code = status_code

    def __repr__(self) -> str:
        return f"RemoteError(status_code={self.status_code}, operation={self.operation!r})"


class DecodeError(BookServiceError):
    """A 2xx body did not have the expected shape."""

    def __init__(self, operation: str, detail: str):
        super().__init__(f"Unexpected response body for {operation}: {detail}", operation)
        self.detail = detail


class ConnectionFailure(BookServiceError):
    """The request never produced a response (DNS, refused, timeout...)."""

    def __init__(self, operation: str, reason: str):
        super().__init__(f"Could not reach books service during {operation}: {reason}", operation)
        self.reason = reason


class PreconditionError(BookServiceError, ValueError):
    """Caller-side check failed; nothing was sent to the server."""

    def __init__(self, message: str, operation: str):
        super().__init__(message, operation)
