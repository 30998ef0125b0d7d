"""
Purpose:
- FastAPI application factory for the credential relay.
- CORS headers are written by the relay routes themselves: the preflight must be
  answered for any caller, not only for requests carrying an Origin header.
- `imgcaption-relay` serves this through uvicorn on settings.host:settings.port.
"""

from fastapi import FastAPI
from starlette.exceptions import HTTPException as StarletteHTTPException
import uvicorn
from .core.settings import APP_VERSION, settings
from .core.logging import setup_logger
from .api.health import router as health_router
from .api.relay import method_not_allowed, router as relay_router

def create_app() -> FastAPI:
    setup_logger()
    app = FastAPI(title="Image Caption Relay", version=APP_VERSION)
    app.include_router(health_router)
    app.include_router(relay_router)
    app.add_exception_handler(StarletteHTTPException, method_not_allowed)
    return app

app = create_app()

def run() -> None:
    uvicorn.run("imgcaption.main:app", host=settings.host, port=settings.port, log_level=settings.log_level.lower())
