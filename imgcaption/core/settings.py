"""
Purpose:
- Centralized configuration using pydantic-settings.
- Reads from environment variables and optional .env file.
- The relay and the client share one Settings object; only the relay reads the API key.
"""

from typing import Optional
from pathlib import Path
from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

APP_VERSION = "0.1.0"
RESOURCES_DIR = Path(__file__).resolve().parent.parent / "resources"

class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Relay host/port
    host: str = Field(default="0.0.0.0", description="Bind address for the relay (uvicorn)")
    port: int = Field(default=8787, description="Port for the relay (uvicorn)")
    log_level: str = Field(default="INFO", description="Loguru stderr level")

    # ---- Relay ----
    # GEMINI_API_KEY lives only in the relay's environment
    gemini_api_key: Optional[SecretStr] = None
    upstream_base_url: str = Field(
        default="https://generativelanguage.googleapis.com/v1beta",
        description="Base URL of the generation API"
    )
    upstream_model: str = Field(default="gemini-2.5-flash")
    upstream_timeout: float = Field(default=60.0, description="Seconds before the forward call gives up")
    cors_allow_origin: str = Field(
        default="https://imgcaption.com",
        description="Single origin echoed in Access-Control-Allow-Origin"
    )

    # ---- Client ----
    relay_url: str = Field(default="http://localhost:8787/", description="Where the client POSTs payloads")
    relay_timeout: float = Field(default=75.0, description="Client-side wait for the relay; covers the upstream timeout")
    default_ui_language: str = Field(default="zh")
    translations_file: Path = Field(default=RESOURCES_DIR / "translations.json")
    prompt_file: Path = Field(default=RESOURCES_DIR / "prompt.txt")
    max_image_bytes: int = Field(default=10 * 1024 * 1024)   # 10 MiB
    extra_prompt_max_chars: int = Field(default=128)

    def upstream_url(self) -> str:
        """Generation endpoint without the key; the key goes in as a query param."""
        return f"{self.upstream_base_url.rstrip('/')}/models/{self.upstream_model}:generateContent"

settings = Settings()

def get_settings() -> Settings:
    return settings
