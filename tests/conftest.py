from io import BytesIO
from typing import List, Optional

import httpx
import pytest
from PIL import Image

from imgcaption.core.settings import Settings, RESOURCES_DIR, get_settings
from imgcaption.client.i18n import Translations
from imgcaption.client.prompt import load_prompt_template
from imgcaption.client.state import ClientContext
from imgcaption.relay.upstream import get_upstream_client

SECRET = "sk-test-relay-secret-0123456789"
CAT_REPLY = '{"candidates":[{"content":{"parts":[{"text":"A cat sleeping."}]}}]}'


class FakeUpstream:
    """Stands in for the generation API behind an httpx.MockTransport."""

    def __init__(self) -> None:
        self.calls: List[httpx.Request] = []
        self.status = 200
        self.body = CAT_REPLY
        self.exc: Optional[Exception] = None

    def reply(self, status: int, body: str) -> None:
        self.status, self.body = status, body

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        if self.exc is not None:
            raise self.exc
        return httpx.Response(self.status, text=self.body)


@pytest.fixture
def png_bytes() -> bytes:
    buf = BytesIO()
    Image.new("RGB", (4, 3), color=(200, 10, 10)).save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture
def ctx() -> ClientContext:
    return ClientContext(
        translations=Translations.load(RESOURCES_DIR / "translations.json"),
        prompt_template=load_prompt_template(RESOURCES_DIR / "prompt.txt"),
    )


@pytest.fixture
def relay_settings() -> Settings:
    return Settings(_env_file=None, gemini_api_key=SECRET, cors_allow_origin="https://imgcaption.com")


@pytest.fixture
def fake_upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture
def relay_app(fake_upstream, relay_settings):
    from imgcaption.main import app

    async def upstream_client():
        async with httpx.AsyncClient(transport=httpx.MockTransport(fake_upstream.handler)) as client:
            yield client

    app.dependency_overrides[get_upstream_client] = upstream_client
    app.dependency_overrides[get_settings] = lambda: relay_settings
    yield app
    app.dependency_overrides.clear()
