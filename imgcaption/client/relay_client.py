"""
Purpose:
- POST a GenerationRequest to the credential relay and turn the reply into caption text.
- All transport problems become TransportError; a 2xx without usable text becomes ApplicationError.
"""

from __future__ import annotations
from typing import Any, Optional
import httpx
from loguru import logger

from ..core.errors import ApplicationError, TransportError
from .schema import GenerationRequest, extract_caption

class RelayClient:
    def __init__(self, url: str, *, timeout: Optional[float] = None, client: Optional[httpx.AsyncClient] = None):
        self.url = url
        self.timeout = timeout
        # injected clients are borrowed, never closed here
        self._client = client

    async def _post(self, client: httpx.AsyncClient, payload: dict[str, Any]) -> httpx.Response:
        return await client.post(self.url, json=payload, headers={"Content-Type": "application/json"})

    async def generate(self, request: GenerationRequest) -> Any:
        """Send one request; return the decoded JSON body of a 2xx reply."""
        payload = request.to_wire()
        try:
            if self._client is not None:
                resp = await self._post(self._client, payload)
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    resp = await self._post(client, payload)
        except httpx.HTTPError as e:
            raise TransportError(f"Relay unreachable: {type(e).__name__}: {e}") from e

        if not resp.is_success:
            raise TransportError(f"API error: {resp.status_code}", status_code=resp.status_code,
                                 data={"body": resp.text[:500]})
        try:
            return resp.json()
        except ValueError as e:
            raise ApplicationError("Relay returned a non-JSON body") from e

    async def caption(self, request: GenerationRequest) -> str:
        result = await self.generate(request)
        try:
            return extract_caption(result)
        except ApplicationError:
            logger.error("Unexpected API response structure: {}", result)
            raise
