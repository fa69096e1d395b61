"""HTTP forwarding to the RunPod chat endpoint."""

from typing import Any

import httpx

from core.config import UpstreamSettings
from core.exceptions import (
    InternalError,
    UpstreamError,
    UpstreamProtocolError,
    UpstreamTimeoutError,
    truncate_details,
)
from core.headers import HeaderBuilder
from core.parsing import JsonFailure, parse_json


class UpstreamClient:
    """Forward chat payloads upstream and validate what comes back."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        settings: UpstreamSettings,
        header_builder: HeaderBuilder | None = None,
    ) -> None:
        self._client = client
        self._settings = settings
        self._headers = header_builder or HeaderBuilder()

    async def chat(self, body: Any) -> str:
        """POST body to the chat endpoint and return the raw JSON text.

        Raises:
            UpstreamTimeoutError: the request exceeded the configured timeout
            UpstreamError: upstream answered with a non-2xx status
            UpstreamProtocolError: 2xx with an empty or non-JSON body
            InternalError: any other transport failure
        """
        try:
            response = await self._client.post(
                self._settings.chat_url(),
                json=body,
                headers=self._headers.build_upstream_headers(self._settings.api_key),
                timeout=self._settings.timeout,
            )
        except httpx.TimeoutException as e:
            raise UpstreamTimeoutError("upstream timeout", details=str(e) or None) from e
        except httpx.RequestError as e:
            raise InternalError("internal server error", details=str(e)) from e

        return self._validate(response)

    def _validate(self, response: httpx.Response) -> str:
        """Classify the upstream response by status and body."""
        text = response.text
        if not response.is_success:
            raise UpstreamError(
                f"upstream API error ({response.status_code})",
                details=truncate_details(text),
                upstream_status=response.status_code,
            )

        parsed = parse_json(text)
        if isinstance(parsed, JsonFailure):
            if parsed.empty:
                raise UpstreamProtocolError("upstream returned empty successful response")
            raise UpstreamProtocolError("malformed JSON from upstream", details=truncate_details(text))
        return text
