"""
Purpose:
- The credential relay: browser-facing endpoint that forwards generateContent payloads.
- OPTIONS answers the CORS preflight locally; POST forwards; everything else gets 405.
- Every response carries the CORS headers, errors included.
"""

import json
from fastapi import APIRouter, Depends, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import Response, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
import httpx
from loguru import logger

from ..core.settings import Settings, get_settings
from ..core.errors import CaptionError, RelayInternalError
from ..relay.upstream import forward_generate, get_upstream_client, redact

router = APIRouter(tags=["relay"])

def cors_headers(cfg: Settings) -> dict[str, str]:
    return {
        "Access-Control-Allow-Origin": cfg.cors_allow_origin,
        "Access-Control-Allow-Methods": "POST,OPTIONS",
        "Access-Control-Allow-Headers": "Content-Type",
    }

def _describe(e: Exception) -> str:
    # mirrors how a JS runtime stringifies an Error: "<Name>: <message>"
    return f"{type(e).__name__}: {e}"

@router.options("/")
def preflight(cfg: Settings = Depends(get_settings)):
    return Response(status_code=200, headers=cors_headers(cfg))

async def method_not_allowed(request: Request, exc: StarletteHTTPException):
    """
    App-wide HTTPException handler. Any method without a route on the relay path
    (GET, PUT, PROPFIND, ...) gets the plain-text 405 with CORS headers; everything
    else keeps FastAPI's JSON body.
    """
    if exc.status_code != 405 or request.url.path != "/":
        return await http_exception_handler(request, exc)
    # handlers sit outside dependency injection; honour overrides the same way Depends would
    cfg = request.app.dependency_overrides.get(get_settings, get_settings)()
    return PlainTextResponse("Expected POST request", status_code=405, headers=cors_headers(cfg))

@router.post("/")
async def relay(
    request: Request,
    cfg: Settings = Depends(get_settings),
    client: httpx.AsyncClient = Depends(get_upstream_client),
):
    headers = cors_headers(cfg)
    api_key = cfg.gemini_api_key.get_secret_value() if cfg.gemini_api_key else None
    try:
        raw = await request.body()
        try:
            json.loads(raw)
        except ValueError as e:
            raise RelayInternalError(_describe(e)) from e
        if not api_key:
            raise RelayInternalError("GEMINI_API_KEY is not configured")

        reply = await forward_generate(client, raw, api_key, cfg)
        return Response(
            content=reply.text,
            status_code=reply.status_code,
            headers={**headers, "Content-Type": "application/json"},
        )
    except Exception as e:
        detail = redact(str(e) if isinstance(e, CaptionError) else _describe(e), api_key)
        logger.error("relay failed: {}", detail)
        return PlainTextResponse(f"Worker error: {detail}", status_code=500, headers=headers)
