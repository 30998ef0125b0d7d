"""
Purpose:
- Command-line front end for the caption client: one image in, one caption out.
- Drives the same CaptionController a page would, so errors come back as the localized toasts.
"""

import argparse
import asyncio
import sys
from pathlib import Path
from typing import List, Optional

from .core.settings import settings
from .core.logging import setup_logger
from .client.controller import CaptionController
from .client.upload import ImageUpload

def _pick(value: Optional[str], options, flag: str, parser: argparse.ArgumentParser) -> Optional[str]:
    if value is None:
        return None
    values = [v for v, _text in options]
    if value not in values:
        parser.error(f"{flag} must be one of: {', '.join(values)}")
    return value

def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Generate a one-sentence caption for an image")
    parser.add_argument("image", type=str, help="Path to a PNG, JPEG, GIF, WEBP or HEIC file (max 10 MB)")
    parser.add_argument("--lang", type=str, help="Caption language (value from the language list)")
    parser.add_argument("--tone", type=str, help="Caption tone, e.g. Funny")
    parser.add_argument("--extra", type=str, default="", help="Additional instructions (max 128 chars)")
    parser.add_argument("--ui-lang", type=str, default=settings.default_ui_language, help="Language of messages")
    parser.add_argument("--relay-url", type=str, default=None, help="Override RELAY_URL")
    parser.add_argument("--copy", action="store_true", help="Copy the caption to the clipboard")
    args = parser.parse_args(argv)

    setup_logger()
    cfg = settings.model_copy(update={"relay_url": args.relay_url}) if args.relay_url else settings
    controller = CaptionController.from_settings(cfg, page_url=f"?lang={args.ui_lang}")
    ui = controller.state.ui

    lang = _pick(args.lang, ui.language_options, "--lang", parser)
    tone = _pick(args.tone, ui.tone_options, "--tone", parser)
    if lang:
        controller.dispatch("language_changed", lang)
    if tone:
        controller.dispatch("tone_changed", tone)
    controller.dispatch("extra_changed", args.extra)

    try:
        upload = ImageUpload.from_path(args.image)
    except OSError as e:
        print(f"Image file not readable: {Path(args.image)} ({e.strerror})", file=sys.stderr)
        return 1

    if not controller.accept_image(upload):
        print(controller.state.ui.toast.message, file=sys.stderr)
        return 1

    caption = asyncio.run(controller.generate())
    if caption is None:
        toast = controller.state.ui.toast
        print(toast.message if toast else "No caption generated", file=sys.stderr)
        return 1

    print(controller.state.session.result_text)
    if args.copy and controller.copy_result():
        print("(copied to clipboard)", file=sys.stderr)
    return 0

if __name__ == "__main__":
    sys.exit(main())
