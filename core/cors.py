"""CORS origin admission and response header construction."""

from core.config import CorsSettings

SECURE_SCHEME = "https://"


class CorsPolicy:
    """Evaluate the configured origin policy for a request origin."""

    def __init__(self, settings: CorsSettings) -> None:
        self._settings = settings

    @property
    def mode(self) -> str:
        return self._settings.mode

    def allowed_origin(self, origin: str | None) -> str | None:
        """Return the Access-Control-Allow-Origin value, or None to omit it."""
        settings = self._settings
        if settings.mode == "wildcard":
            return origin or "*"

        if settings.mode == "allow-list":
            if origin and origin in settings.allowed_origins:
                return origin
            if "*" in settings.allowed_origins:
                return "*"
            return None

        if origin and self._matches_pattern(origin):
            return origin
        return None

    def rejects(self, origin: str | None) -> bool:
        """True when a present origin must be refused with 403."""
        return self.mode == "pattern" and bool(origin) and self.allowed_origin(origin) is None

    def headers(self, origin: str | None) -> dict[str, str]:
        """Build the CORS headers attached to every response."""
        headers = {
            "Access-Control-Allow-Methods": self._settings.allow_methods,
            "Access-Control-Allow-Headers": self._settings.allow_headers,
            "Access-Control-Max-Age": str(self._settings.max_age),
        }
        allowed = self.allowed_origin(origin)
        if allowed is not None:
            headers["Access-Control-Allow-Origin"] = allowed
            if allowed != "*":
                headers["Vary"] = "Origin"
        return headers

    def preflight_headers(self, origin: str | None, requested_headers: str | None) -> dict[str, str]:
        """CORS headers for an OPTIONS response, echoing requested headers."""
        headers = self.headers(origin)
        if requested_headers:
            headers["Access-Control-Allow-Headers"] = requested_headers
        return headers

    def _matches_pattern(self, origin: str) -> bool:
        if origin == self._settings.production_origin:
            return True
        suffix = self._settings.preview_suffix
        return bool(suffix) and origin.startswith(SECURE_SCHEME) and origin.endswith(suffix)
