"""Inline image payloads stored on pages as base64 data URIs."""

from __future__ import annotations

import base64
import binascii
import os
from dataclasses import dataclass

DEFAULT_MIME = "image/jpeg"

MIME_BY_EXTENSION = {
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "png": "image/png",
    "gif": "image/gif",
    "bmp": "image/bmp",
    "webp": "image/webp",
}

IMAGE_EXTENSIONS: tuple[str, ...] = tuple(MIME_BY_EXTENSION)


def is_image_path(path: str) -> bool:
    return os.path.splitext(path)[1].lower().lstrip(".") in MIME_BY_EXTENSION


def mime_for_path(path: str) -> str:
    """Return the MIME type for ``path`` by extension, defaulting to JPEG."""
    ext = os.path.splitext(path)[1].lower().lstrip(".")
    return MIME_BY_EXTENSION.get(ext, DEFAULT_MIME)


@dataclass(frozen=True)
class ImageData:
    """Raw image bytes paired with their MIME type."""

    mime: str
    """MIME type used in the data URI prefix, e.g. ``image/png``."""
    data: bytes = b""
    """Encoded image bytes exactly as read from disk."""

    def __post_init__(self) -> None:
        if not isinstance(self.mime, str) or not self.mime.startswith("image/"):
            raise ValueError(f"ImageData requires an image MIME type, got {self.mime!r}.")
        if not isinstance(self.data, (bytes, bytearray)):
            raise TypeError("ImageData.data must be bytes.")
        object.__setattr__(self, "data", bytes(self.data))

    def to_data_uri(self) -> str:
        encoded = base64.b64encode(self.data).decode("ascii")
        return f"data:{self.mime};base64,{encoded}"

    @classmethod
    def from_data_uri(cls, uri: str) -> "ImageData":
        """Parse ``data:<mime>;base64,<payload>``; raises ``ValueError`` when malformed."""
        if not isinstance(uri, str) or not uri.startswith("data:"):
            raise ValueError("Not a data URI.")
        header, sep, body = uri.partition(",")
        if not sep:
            raise ValueError("Data URI has no payload separator.")
        meta = header[len("data:"):]
        parts = meta.split(";")
        if "base64" not in parts[1:]:
            raise ValueError("Only base64 data URIs are supported.")
        mime = parts[0] or DEFAULT_MIME
        try:
            raw = base64.b64decode(body, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise ValueError(f"Invalid base64 payload: {exc}") from exc
        return cls(mime=mime, data=raw)

    @classmethod
    def from_file(cls, path: str) -> "ImageData":
        with open(path, "rb") as fh:
            return cls(mime=mime_for_path(path), data=fh.read())

    def __repr__(self) -> str:
        return f"ImageData(mime={self.mime!r}, size={len(self.data)})"


__all__ = ["DEFAULT_MIME", "IMAGE_EXTENSIONS", "ImageData", "MIME_BY_EXTENSION", "is_image_path", "mime_for_path"]
