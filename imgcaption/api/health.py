# Common language: Environment/ops probe for the relay. Shows version pins and whether
# the credential is configured (presence only, never the value).

from fastapi import APIRouter, Depends
from ..core.settings import APP_VERSION, Settings, get_settings
import sys, importlib

router = APIRouter(tags=["health"])

def _ver(modname: str) -> str:
    try:
        m = importlib.import_module(modname)
        return getattr(m, "__version__", "unknown")
    except ImportError:
        return "not-installed"

@router.get("/healthz")
def healthz(cfg: Settings = Depends(get_settings)):
    return {
        "status": "ok",
        "version": APP_VERSION,
        "python": sys.version.split()[0],
        "versions": {
            "fastapi": _ver("fastapi"),
            "uvicorn": _ver("uvicorn"),
            "httpx": _ver("httpx"),
            "pydantic": _ver("pydantic"),
            "pydantic_settings": _ver("pydantic_settings"),
        },
        "upstream": {
            "url": cfg.upstream_url(),
            "model": cfg.upstream_model,
            "timeout": cfg.upstream_timeout,
        },
        "env_keys_present": {
            "GEMINI_API_KEY": bool(cfg.gemini_api_key and cfg.gemini_api_key.get_secret_value()),
        },
        "cors_allow_origin": cfg.cors_allow_origin,
    }
