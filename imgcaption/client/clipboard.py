"""
Purpose:
- Copy caption text to the system clipboard, best effort.
- Strategies are tried in order; each says whether it is usable here before it is tried.
  Primary: a native clipboard command on PATH. Fallback: Tk's selection clipboard.
- Failure of every strategy is logged and reported as False; it never raises.
"""

from __future__ import annotations
from typing import List, Optional, Protocol, Sequence
from functools import lru_cache
import shutil
import subprocess
from loguru import logger

class ClipboardStrategy(Protocol):
    name: str

    def available(self) -> bool: ...

    def copy(self, text: str) -> None: ...

class CommandClipboard:
    name = "command"
    candidates = (
        ("wl-copy",),
        ("xclip", "-selection", "clipboard"),
        ("xsel", "--clipboard", "--input"),
        ("pbcopy",),
        ("clip",),
    )

    def _command(self) -> Optional[Sequence[str]]:
        for cmd in self.candidates:
            if shutil.which(cmd[0]):
                return cmd
        return None

    def available(self) -> bool:
        return self._command() is not None

    def copy(self, text: str) -> None:
        cmd = self._command()
        if cmd is None:
            raise RuntimeError("no clipboard command on PATH")
        subprocess.run(list(cmd), input=text.encode("utf-8"), check=True, timeout=5)

class TkClipboard:
    """
    On X11 the clipboard is owned by whichever window set it and is served on request;
    destroying that window drops the text. The hidden root is therefore kept for the life
    of this object. Once the process exits, the text only survives if a clipboard
    manager has already taken it over.
    """

    name = "tk"

    def __init__(self) -> None:
        self._root = None

    def available(self) -> bool:
        try:
            import tkinter  # noqa: F401
        except ImportError:
            return False
        return True

    def copy(self, text: str) -> None:
        if self._root is None:
            import tkinter
            self._root = tkinter.Tk()
            self._root.withdraw()
        self._root.clipboard_clear()
        self._root.clipboard_append(text)
        self._root.update()

    def close(self) -> None:
        if self._root is not None:
            self._root.destroy()
            self._root = None

@lru_cache(maxsize=None)
def shared_tk_clipboard() -> TkClipboard:
    return TkClipboard()

def default_strategies() -> List[ClipboardStrategy]:
    return [CommandClipboard(), shared_tk_clipboard()]

def copy_text(text: str, strategies: Optional[Sequence[ClipboardStrategy]] = None) -> bool:
    for strategy in (default_strategies() if strategies is None else strategies):
        if not strategy.available():
            continue
        try:
            strategy.copy(text)
            return True
        except Exception as e:   # copy failures never reach the user
            logger.error("Clipboard copy via {} failed: {}", strategy.name, e)
    logger.error("Clipboard copy failed: no working strategy")
    return False
