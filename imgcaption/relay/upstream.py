"""
Purpose:
- Forward a generateContent payload to the upstream API with the secret key attached.
- Hand back (status, body text) untouched so error bodies round-trip as well as successes.

Notes:
- The key only ever appears in the outbound query string; redact() scrubs it from
  anything that might be echoed back to a caller.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import AsyncIterator
from urllib.parse import quote, quote_plus
import httpx
from fastapi import Depends
from loguru import logger

from ..core.settings import Settings, get_settings
from ..core.errors import RelayUpstreamError

REDACTED = "***"

@dataclass
class UpstreamReply:
    status_code: int
    text: str

def redact(message: str, secret: str | None) -> str:
    """Scrub the secret, raw and percent-encoded (as it appears inside a URL)."""
    if secret:
        for form in (secret, quote(secret, safe=""), quote_plus(secret, safe="")):
            message = message.replace(form, REDACTED)
    return message

async def get_upstream_client(cfg: Settings = Depends(get_settings)) -> AsyncIterator[httpx.AsyncClient]:
    """FastAPI dependency: one short-lived AsyncClient per inbound request."""
    async with httpx.AsyncClient(timeout=cfg.upstream_timeout) as client:
        yield client

async def forward_generate(client: httpx.AsyncClient, raw_body: bytes, api_key: str, cfg: Settings) -> UpstreamReply:
    """
    POST raw_body verbatim to the generation endpoint. Non-2xx is not an error
    here; the caller passes status and body through. Only transport failures raise.
    """
    url = cfg.upstream_url()
    try:
        resp = await client.post(
            url,
            params={"key": api_key},
            content=raw_body,
            headers={"Content-Type": "application/json"},
        )
    except httpx.HTTPError as e:
        raise RelayUpstreamError(redact(f"{type(e).__name__}: {e}", api_key)) from e

    text = resp.text
    logger.info("upstream {} -> {} ({} bytes)", cfg.upstream_model, resp.status_code, len(text))
    return UpstreamReply(status_code=resp.status_code, text=text)
