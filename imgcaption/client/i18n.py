"""
Purpose:
- Per-language UI strings loaded from translations.json, with a minimal hardcoded fallback.
- Derives the language and tone select options from the loaded table.
- Reads and rewrites the `lang` query parameter on page URLs and nav links.

Notes:
- Tone options come from keys prefixed "tone" (except "toneLabel"); the option value is
  the key with its fifth character uppercased and the prefix dropped: toneFunny -> Funny.
"""

from __future__ import annotations
from typing import Dict, List, Optional, Tuple
from pathlib import Path
from urllib.parse import urlsplit, urlunsplit, parse_qsl, urlencode
import json
from loguru import logger

DEFAULT_PAGE_TITLE = "AI Image Caption Generator"
FALLBACK_LANGUAGE = "zh"

FALLBACK_TRANSLATIONS: Dict[str, Dict[str, object]] = {
    "en": {
        "errorGeneric": "An unexpected error occurred.",
        "errorAPI": "AI is on strike.",
        "errorFormat": "Unsupported file format.",
    },
    "zh": {
        "errorGeneric": "发生未知错误。",
        "errorAPI": "AI 罢工了。",
        "errorFormat": "不支持的文件格式。",
    },
}

# language switcher entries, in menu order
LANGUAGE_FLAGS = {
    "en": "🇺🇸", "es": "🇪🇸", "pt": "🇧🇷", "ru": "🇷🇺", "de": "🇩🇪",
    "fr": "🇫🇷", "ja": "🇯🇵", "ko": "🇰🇷", "zh": "🇨🇳",
}
LANGUAGE_NAMES = {
    "en": "English", "es": "Spanish", "pt": "Portuguese", "ru": "Russian", "de": "German",
    "fr": "French", "ja": "Japanese", "ko": "Korean", "zh": "中文 (简体)",
}

Option = Tuple[str, str]   # (value, display text)
MenuEntry = Tuple[str, str, str]   # (code, flag, name)

def tone_tag(key: str) -> str:
    return key[4:5].upper() + key[5:]

class Translations:
    def __init__(self, table: Dict[str, Dict[str, object]], fallback_language: str = FALLBACK_LANGUAGE):
        self._table = table
        self.fallback_language = fallback_language

    @classmethod
    def load(cls, path: Path, fallback_language: str = FALLBACK_LANGUAGE) -> "Translations":
        try:
            table = json.loads(Path(path).read_text(encoding="utf-8"))
            if not isinstance(table, dict):
                raise ValueError(f"expected a JSON object, got {type(table).__name__}")
        except (OSError, ValueError) as e:
            logger.error("Failed to load translations {}: {}", path, e)
            table = FALLBACK_TRANSLATIONS
        return cls(table, fallback_language)

    @property
    def languages(self) -> List[str]:
        return list(self._table)

    def resolve(self, lang: Optional[str]) -> str:
        """Known language code, or the fallback language."""
        return lang if lang and self._table.get(lang) else self.fallback_language

    def strings(self, lang: str) -> Dict[str, object]:
        return self._table.get(lang) or self._table.get(self.fallback_language) or {}

    def text(self, lang: str, key: str) -> Optional[str]:
        value = self.strings(lang).get(key)
        return value if isinstance(value, str) else None

    def error_message(self, lang: str, key: str) -> str:
        msgs = self.strings(lang)
        return msgs.get(key) or msgs.get("errorGeneric") or ""

    def page_title(self, lang: str) -> str:
        return self.text(lang, "pageTitle") or DEFAULT_PAGE_TITLE

    def language_options(self, lang: str) -> List[Option]:
        # languages without their own list borrow the English one
        options = self.strings(lang).get("languageOptions") or self._table.get("en", {}).get("languageOptions") or {}
        return [(value, text) for value, text in options.items()]

    def tone_options(self, lang: str) -> List[Option]:
        return [
            (tone_tag(key), value)
            for key, value in self.strings(lang).items()
            if key.startswith("tone") and key != "toneLabel"
        ]

def initial_language(page_url: str, default: str = FALLBACK_LANGUAGE) -> str:
    query = dict(parse_qsl(urlsplit(page_url).query))
    return query.get("lang") or default

def with_lang_param(page_url: str, lang: str) -> str:
    """Same URL with `lang` set, other query parameters kept in order."""
    parts = urlsplit(page_url)
    query = [(k, v) for k, v in parse_qsl(parts.query, keep_blank_values=True) if k != "lang"]
    query.append(("lang", lang))
    return urlunsplit(parts._replace(query=urlencode(query)))

def localize_link(href: str, lang: str) -> str:
    return f"{href.split('?')[0]}?lang={lang}"

def language_menu() -> Tuple[MenuEntry, ...]:
    return tuple((code, flag, LANGUAGE_NAMES[code]) for code, flag in LANGUAGE_FLAGS.items())

def language_flag(lang: str) -> str:
    return LANGUAGE_FLAGS.get(lang, "")
