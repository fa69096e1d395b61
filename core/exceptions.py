"""Custom exception hierarchy for the RunPod chat proxy."""

from typing import Any

MAX_DETAILS_LENGTH = 500


def truncate_details(text: str, limit: int = MAX_DETAILS_LENGTH) -> str:
    """Cut upstream text down to a size safe to echo back to the browser."""
    return text[:limit]


class ProxyError(Exception):
    """Base exception for all proxy errors.

    Attributes:
        message: Short error string sent as the envelope's ``error`` field
        details: Optional raw upstream or exception text
    """

    status_code = 500

    def __init__(self, message: str, details: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details

    def to_envelope(self) -> dict[str, Any]:
        envelope: dict[str, Any] = {"error": self.message}
        if self.details is not None:
            envelope["details"] = self.details
        return envelope


class ConfigurationError(ProxyError):
    """Raised when the pod id or credential is missing."""


class ClientRequestError(ProxyError):
    """Raised when the inbound request body is not valid JSON."""

    status_code = 400


class ForbiddenOriginError(ProxyError):
    """Raised when the request origin is rejected by the CORS policy."""

    status_code = 403


class UpstreamError(ProxyError):
    """Raised when the upstream returns a non-2xx status.

    Attributes:
        upstream_status: HTTP status code from upstream (optional)
    """

    def __init__(
        self,
        message: str,
        details: str | None = None,
        upstream_status: int | None = None,
    ) -> None:
        super().__init__(message, details)
        self.upstream_status = upstream_status

    @property
    def status_code(self) -> int:  # type: ignore[override]
        if self.upstream_status and 400 <= self.upstream_status <= 599:
            return self.upstream_status
        return 502


class UpstreamTimeoutError(UpstreamError):
    """Raised when the upstream request exceeds the configured timeout."""

    def __init__(self, message: str, details: str | None = None) -> None:
        super().__init__(message, details, upstream_status=504)


class UpstreamProtocolError(ProxyError):
    """Raised when the upstream answers 2xx with an empty or malformed body."""

    status_code = 502


class InternalError(ProxyError):
    """Raised for any uncategorized failure while handling a request."""
