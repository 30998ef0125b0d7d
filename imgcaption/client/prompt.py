"""
Purpose:
- Load the caption prompt template once and fill it per request.

Notes:
- Each placeholder is replaced at its first occurrence only. A template that repeats
  a placeholder keeps the later copies literal; templates must use each one once.
"""

from __future__ import annotations
from pathlib import Path
from loguru import logger

LANG = "{{lang}}"
TONE = "{{tone}}"
EXTRA = "{{extra_instructions}}"

FALLBACK_TEMPLATE = (
    "You are a social media expert. Your task is to generate a single, concise sentence "
    "for the following image. Do not provide multiple options. Language: {{lang}}. "
    "Tone: {{tone}}. {{extra_instructions}}. The output must be only one sentence."
)

def load_prompt_template(path: Path) -> str:
    try:
        return Path(path).read_text(encoding="utf-8")
    except OSError as e:
        logger.error("Failed to load prompt template {}: {}", path, e)
        return FALLBACK_TEMPLATE

def build_prompt(template: str, language: str, tone: str, extra: str = "") -> str:
    extra_instructions = f"Additional instructions: {extra}" if extra else ""
    return (
        template
        .replace(LANG, language, 1)
        .replace(TONE, tone, 1)
        .replace(EXTRA, extra_instructions.strip(), 1)
    )
