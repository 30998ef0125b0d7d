"""
Purpose:
- Pydantic models for the relay wire contract (generateContent shape).
- Field names are snake_case in Python, camelCase on the wire (mimeType, inlineData).
"""

from __future__ import annotations
from typing import Any, List, Optional
from pydantic import BaseModel, ConfigDict, Field

from ..core.errors import ApplicationError

class InlineData(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    mime_type: str = Field(..., alias="mimeType")
    data: str = Field(..., description="Base64-encoded image bytes")

class Part(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    text: Optional[str] = None
    inline_data: Optional[InlineData] = Field(default=None, alias="inlineData")

class Content(BaseModel):
    role: str = "user"
    parts: List[Part] = Field(default_factory=list)

class GenerationRequest(BaseModel):
    contents: List[Content]

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)

def build_generation_request(prompt: str, mime_type: str, image_base64: str) -> GenerationRequest:
    """One user message: the filled prompt followed by the inline image."""
    return GenerationRequest(contents=[
        Content(role="user", parts=[
            Part(text=prompt),
            Part(inline_data=InlineData(mime_type=mime_type, data=image_base64)),
        ])
    ])

# --- response side: only candidates[0].content.parts[0].text matters ---

def _first(value: Any) -> Any:
    return value[0] if isinstance(value, list) and value else None

def _field(value: Any, key: str) -> Any:
    return value.get(key) if isinstance(value, dict) else None

def extract_caption(payload: Any) -> str:
    """
    Return candidates[0].content.parts[0].text, stripped. Later candidates and parts
    are never looked at. A missing or empty text is an ApplicationError even though
    the call succeeded.
    """
    candidate = _first(_field(payload, "candidates"))
    part = _first(_field(_field(candidate, "content"), "parts"))
    text = _field(part, "text")
    if not isinstance(text, str) or not text:
        raise ApplicationError("Unexpected API response structure", data={"has_candidate": candidate is not None})
    return text.strip()
