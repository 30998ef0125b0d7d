"""
Purpose:
- Pure state transitions for the caption page: (AppState, payload, ClientContext) -> AppState.
- EVENTS maps UI event names to transitions so any front end can dispatch by name.

Notes:
- Nothing here does I/O. Validation failures become a toast in the returned state.
"""

from __future__ import annotations
from dataclasses import replace
from typing import Any, Callable, Dict, Optional

from ..core.errors import FormatError
from .i18n import initial_language, language_flag, language_menu, with_lang_param
from .state import AppState, ClientContext, Preview, SessionState, Toast, UIState
from .upload import ImageUpload, data_url, pixel_size, to_base64, validate_upload

Transition = Callable[[AppState, Any, ClientContext], AppState]

def _counter(text: str, ctx: ClientContext) -> str:
    return f"{len(text)} / {ctx.extra_max_chars}"

def _keep_or_first(current: str, options) -> str:
    values = [value for value, _text in options]
    if current in values:
        return current
    return values[0] if values else ""

def _localized(state: AppState, lang: str, ctx: ClientContext) -> AppState:
    t = ctx.translations
    lang = t.resolve(lang)
    language_options = tuple(t.language_options(lang))
    tone_options = tuple(t.tone_options(lang))
    ui = replace(
        state.ui,
        ui_language=lang,
        page_title=t.page_title(lang),
        language_options=language_options,
        tone_options=tone_options,
        language_menu=language_menu(),
        current_flag=language_flag(lang),
    )
    session = replace(
        state.session,
        language=_keep_or_first(state.session.language, language_options),
        tone=_keep_or_first(state.session.tone, tone_options),
    )
    return replace(state, ui=ui, session=session)

def initial_state(ctx: ClientContext, page_url: str = "", default_language: str = "zh") -> AppState:
    lang = initial_language(page_url, default_language)
    state = AppState(
        session=SessionState(),
        ui=UIState(ui_language=lang, page_url=page_url, char_counter=_counter("", ctx)),
    )
    return _localized(state, lang, ctx)

def show_error(state: AppState, key: str, ctx: ClientContext) -> AppState:
    message = ctx.translations.error_message(state.ui.ui_language, key)
    return replace(state, ui=replace(state.ui, toast=Toast(key=key, message=message)))

def accept_image(state: AppState, upload: ImageUpload, ctx: ClientContext) -> AppState:
    """Raises FormatError without building any new state."""
    validate_upload(upload, ctx.max_image_bytes)
    encoded = to_base64(upload.data)
    session = replace(
        state.session,
        image_base64=encoded,
        image_mime_type=upload.mime_type,
        image_name=upload.name,
    )
    ui = replace(
        state.ui,
        view="preview",
        preview=Preview(data_url=data_url(upload.mime_type, encoded), size=pixel_size(upload.data)),
        generate_enabled=True,
    )
    return replace(state, session=session, ui=ui)

def file_selected(state: AppState, upload: Optional[ImageUpload], ctx: ClientContext) -> AppState:
    if upload is None:
        return state
    try:
        return accept_image(state, upload, ctx)
    except FormatError:
        return show_error(state, "errorFormat", ctx)

def reset(state: AppState, _payload: Any, ctx: ClientContext) -> AppState:
    session = replace(
        state.session,
        image_base64=None,
        image_mime_type=None,
        image_name=None,
        result_text="",
    )
    ui = replace(
        state.ui,
        view="upload",
        preview=None,
        generate_enabled=False,
        loading=False,
        result_visible=False,
        copied=False,
    )
    return replace(state, session=session, ui=ui, request_id=state.request_id + 1)

def extra_changed(state: AppState, text: str, ctx: ClientContext) -> AppState:
    text = (text or "")[: ctx.extra_max_chars]
    return replace(
        state,
        session=replace(state.session, extra_instructions=text),
        ui=replace(state.ui, char_counter=_counter(text, ctx)),
    )

def language_changed(state: AppState, value: str, ctx: ClientContext) -> AppState:
    return replace(state, session=replace(state.session, language=value))

def tone_changed(state: AppState, value: str, ctx: ClientContext) -> AppState:
    return replace(state, session=replace(state.session, tone=value))

def ui_language_changed(state: AppState, lang: str, ctx: ClientContext) -> AppState:
    state = _localized(state, lang, ctx)
    return replace(state, ui=replace(state.ui, page_url=with_lang_param(state.ui.page_url, state.ui.ui_language)))

def toast_dismissed(state: AppState, _payload: Any, ctx: ClientContext) -> AppState:
    return replace(state, ui=replace(state.ui, toast=None))

# --- generation cycle ---

def generation_started(state: AppState) -> AppState:
    ui = replace(state.ui, loading=True, result_visible=False, generate_enabled=False, copied=False)
    return replace(state, ui=ui, request_id=state.request_id + 1)

def generation_succeeded(state: AppState, text: str) -> AppState:
    return replace(
        state,
        session=replace(state.session, result_text=text),
        ui=replace(state.ui, result_visible=True),
    )

def generation_failed(state: AppState, key: str, ctx: ClientContext) -> AppState:
    return show_error(state, key, ctx)

def generation_finished(state: AppState) -> AppState:
    return replace(state, ui=replace(state.ui, loading=False, generate_enabled=state.session.has_image))

def copy_finished(state: AppState, ok: bool) -> AppState:
    return replace(state, ui=replace(state.ui, copied=ok))

EVENTS: Dict[str, Transition] = {
    "file_selected": file_selected,
    "reset_clicked": reset,
    "extra_changed": extra_changed,
    "language_changed": language_changed,
    "tone_changed": tone_changed,
    "ui_language_changed": ui_language_changed,
    "toast_dismissed": toast_dismissed,
}
