"""
Purpose:
- One exception tree for both components.
- Client-side errors end up as one of three localized toasts; relay-side errors
  end up as a 500 "Worker error: ..." response.
"""

from __future__ import annotations
from typing import Any, Dict, Optional


class CaptionError(Exception):
    """Base class; carries a machine-readable code next to the message."""

    code: str = "CAPTION_ERROR"
    # translation key used when the error reaches the user
    message_key: str = "errorGeneric"

    def __init__(self, message: str, *, data: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.data = data or {}

    def to_dict(self) -> Dict[str, Any]:
        return {"code": self.code, "message": self.message, "data": self.data}

    def __str__(self) -> str:
        return self.message


class FormatError(CaptionError):
    """Unsupported media type or file over the size limit."""
    code = "FORMAT_ERROR"
    message_key = "errorFormat"


class ApplicationError(CaptionError):
    """Transport succeeded but the response has no usable caption text."""
    code = "APPLICATION_ERROR"
    message_key = "errorAPI"


class TransportError(CaptionError):
    """Network failure or non-2xx status from the relay."""
    code = "TRANSPORT_ERROR"
    message_key = "errorAPI"

    def __init__(self, message: str, *, status_code: Optional[int] = None, data: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message, data=data)
        self.status_code = status_code


class RelayUpstreamError(CaptionError):
    """The relay could not complete its forward call."""
    code = "RELAY_UPSTREAM_ERROR"
    message_key = "errorAPI"


class RelayInternalError(CaptionError):
    """Body parse failure or missing configuration inside the relay."""
    code = "RELAY_INTERNAL_ERROR"
    message_key = "errorAPI"
