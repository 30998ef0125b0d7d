"""
Purpose:
- Composition root of the client: owns the AppState, runs transitions, calls the relay,
  and hands every new state to an optional render callback.

Notes:
- The disabled generate control is the only concurrency guard: generate() while a
  request is in flight does nothing.
- reset() bumps the request id, so a reply that lands after it is logged and dropped.
"""

from __future__ import annotations
from typing import Any, Callable, Optional, Sequence
from loguru import logger

from ..core.errors import CaptionError
from ..core.settings import Settings
from . import transitions
from .clipboard import ClipboardStrategy, copy_text
from .i18n import Translations
from .prompt import build_prompt, load_prompt_template
from .relay_client import RelayClient
from .schema import build_generation_request
from .state import AppState, ClientContext
from .upload import ImageUpload

Renderer = Callable[[AppState], None]

class CaptionController:
    def __init__(
        self,
        relay: RelayClient,
        ctx: ClientContext,
        *,
        page_url: str = "",
        default_language: str = "zh",
        render: Optional[Renderer] = None,
        clipboard: Optional[Sequence[ClipboardStrategy]] = None,
    ):
        self.relay = relay
        self.ctx = ctx
        self._render = render
        self._clipboard = clipboard
        self._state = transitions.initial_state(ctx, page_url, default_language)
        self._emit()

    @classmethod
    def from_settings(cls, cfg: Settings, **kwargs: Any) -> "CaptionController":
        ctx = ClientContext(
            translations=Translations.load(cfg.translations_file, cfg.default_ui_language),
            prompt_template=load_prompt_template(cfg.prompt_file),
            max_image_bytes=cfg.max_image_bytes,
            extra_max_chars=cfg.extra_prompt_max_chars,
        )
        kwargs.setdefault("default_language", cfg.default_ui_language)
        return cls(RelayClient(cfg.relay_url, timeout=cfg.relay_timeout), ctx, **kwargs)

    @property
    def state(self) -> AppState:
        return self._state

    def _emit(self) -> None:
        if self._render is not None:
            self._render(self._state)

    def _apply(self, state: AppState) -> AppState:
        self._state = state
        self._emit()
        return state

    def dispatch(self, event: str, payload: Any = None) -> AppState:
        try:
            transition = transitions.EVENTS[event]
        except KeyError:
            raise ValueError(f"unknown UI event: {event}") from None
        return self._apply(transition(self._state, payload, self.ctx))

    # --- operations ---

    def accept_image(self, upload: Optional[ImageUpload]) -> bool:
        """True when the image was taken; a rejected file only raises the errorFormat toast."""
        if upload is None:
            return False
        before = self._state.session
        after = self.dispatch("file_selected", upload)
        if after.session is before:
            logger.warning("Rejected upload {} ({}, {} bytes)", upload.name, upload.mime_type, upload.size)
            return False
        return True

    def reset(self) -> AppState:
        return self.dispatch("reset_clicked")

    def set_ui_language(self, lang: str) -> AppState:
        return self.dispatch("ui_language_changed", lang)

    async def generate(self) -> Optional[str]:
        """
        Run one generation cycle. Returns the caption on success, None otherwise
        (including when the call was skipped or its reply arrived after a reset).
        """
        state = self._state
        if not state.session.has_image or not self.ctx.prompt_template or state.ui.loading:
            return None

        state = self._apply(transitions.generation_started(state))
        request_id = state.request_id
        session = state.session
        prompt = build_prompt(self.ctx.prompt_template, session.language, session.tone, session.extra_instructions)
        request = build_generation_request(prompt, session.image_mime_type, session.image_base64)

        text: Optional[str] = None
        error: Optional[CaptionError] = None
        try:
            text = await self.relay.caption(request)
        except CaptionError as e:
            error = e
            logger.error("Error calling caption relay: {}", e.to_dict())
        finally:
            if self._state.request_id != request_id:
                logger.info("Discarding reply for superseded request {}", request_id)
                text = None
            else:
                current = self._state
                if text is not None:
                    current = transitions.generation_succeeded(current, text)
                elif error is not None:
                    current = transitions.generation_failed(current, error.message_key, self.ctx)
                self._apply(transitions.generation_finished(current))
        return text

    def copy_result(self) -> bool:
        ok = copy_text(self._state.session.result_text, self._clipboard)
        if ok:
            self._apply(transitions.copy_finished(self._state, True))
        return ok
