"""
Purpose:
- Immutable application state for one caption session: what the user picked (SessionState)
  and how the page presents it (UIState). Transitions return new AppState values.
- ClientContext carries the read-only resources loaded once at startup.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Tuple

from .i18n import MenuEntry, Option, Translations

@dataclass(frozen=True)
class ClientContext:
    translations: Translations
    prompt_template: str
    max_image_bytes: int = 10 * 1024 * 1024
    extra_max_chars: int = 128

@dataclass(frozen=True)
class SessionState:
    image_base64: Optional[str] = None
    image_mime_type: Optional[str] = None
    image_name: Optional[str] = None
    language: str = ""
    tone: str = ""
    extra_instructions: str = ""
    result_text: str = ""

    @property
    def has_image(self) -> bool:
        return bool(self.image_base64)

@dataclass(frozen=True)
class Toast:
    key: str
    message: str

@dataclass(frozen=True)
class Preview:
    data_url: str
    size: Optional[Tuple[int, int]] = None   # (width, height) when Pillow can decode it

@dataclass(frozen=True)
class UIState:
    ui_language: str
    page_url: str = ""
    page_title: str = ""
    view: str = "upload"                  # "upload" | "preview"
    preview: Optional[Preview] = None
    generate_enabled: bool = False
    loading: bool = False
    result_visible: bool = False
    toast: Optional[Toast] = None
    copied: bool = False
    char_counter: str = "0 / 128"
    language_options: Tuple[Option, ...] = ()
    tone_options: Tuple[Option, ...] = ()
    language_menu: Tuple[MenuEntry, ...] = ()
    current_flag: str = ""

@dataclass(frozen=True)
class AppState:
    session: SessionState
    ui: UIState
    # bumped by generate and reset; replies tagged with an older id are dropped
    request_id: int = 0
