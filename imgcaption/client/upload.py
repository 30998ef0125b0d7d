"""
Purpose:
- Represent a user-selected image and decide whether it may be captioned.
- Encode accepted bytes for the inlineData part and describe the preview.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Tuple
from pathlib import Path
from io import BytesIO
import base64
import mimetypes
from PIL import Image, UnidentifiedImageError

from ..core.errors import FormatError

ALLOWED_MIME_TYPES = ("image/png", "image/jpeg", "image/gif", "image/webp", "image/heic")
MAX_IMAGE_BYTES = 10 * 1024 * 1024

# extensions the stdlib table misses on some platforms
_EXTRA_TYPES = {".heic": "image/heic", ".webp": "image/webp"}

@dataclass(frozen=True)
class ImageUpload:
    name: str
    mime_type: str
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)

    @classmethod
    def from_path(cls, path: Path | str) -> "ImageUpload":
        p = Path(path)
        mime = _EXTRA_TYPES.get(p.suffix.lower()) or mimetypes.guess_type(p.name)[0] or "application/octet-stream"
        return cls(name=p.name, mime_type=mime, data=p.read_bytes())

def validate_upload(upload: ImageUpload, max_bytes: int = MAX_IMAGE_BYTES) -> None:
    """Raise FormatError for a disallowed media type or a file over max_bytes."""
    if upload.mime_type not in ALLOWED_MIME_TYPES:
        raise FormatError(f"Unsupported media type: {upload.mime_type}", data={"name": upload.name})
    if upload.size > max_bytes:
        raise FormatError(f"File too large: {upload.size} bytes", data={"name": upload.name, "limit": max_bytes})

def to_base64(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")

def data_url(mime_type: str, image_base64: str) -> str:
    return f"data:{mime_type};base64,{image_base64}"

def pixel_size(data: bytes) -> Optional[Tuple[int, int]]:
    # HEIC, truncated files and oversized canvases are fine to accept; the preview just has no dimensions
    try:
        with Image.open(BytesIO(data)) as img:
            return img.size
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError):
        return None
