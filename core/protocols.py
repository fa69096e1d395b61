"""Shared protocol definitions."""

from typing import Protocol


class RequestLogger(Protocol):
    """Protocol for request logging (Dashboard)."""

    def log_request(self, method: str, path: str, origin: str | None, headers: dict[str, str]) -> None: ...
    def log_response(self, method: str, origin: str | None, status: int) -> None: ...
    def log_error(self, route: str, status: int, message: str) -> None: ...

