"""Header construction for upstream requests."""


class HeaderBuilder:
    """Build upstream headers for the RunPod chat endpoint."""

    def build_upstream_headers(self, api_key: str) -> dict[str, str]:
        """Inject the bearer credential; inbound headers are never forwarded."""
        return {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
