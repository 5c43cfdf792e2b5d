"""Capture-year extraction from JPEG/EXIF metadata.

Only the first APP1 segment is inspected and only an ASCII-typed
DateTimeOriginal tag is read. Any malformed input yields ``None``.
"""

from __future__ import annotations

import logging
import re
import struct
from typing import Optional

from .images import ImageData

_log = logging.getLogger(__name__)

SOI = b"\xff\xd8"
MARKER_PREFIX = 0xFF
APP1 = 0xE1
EXIF_SIGNATURE = b"Exif\x00\x00"

TAG_EXIF_IFD = 0x8769
TAG_DATETIME_ORIGINAL = 0x9003
TYPE_ASCII = 2
_ENTRY_SIZE = 12

_YEAR_RE = re.compile(r"^([0-9]{4})")


class _TiffBlock:
    """Byte-order aware reader over the TIFF structure inside an APP1 payload."""

    def __init__(self, data: bytes) -> None:
        order = data[:2]
        if order == b"II":
            self._prefix = "<"
        elif order == b"MM":
            self._prefix = ">"
        else:
            raise ValueError("unknown TIFF byte order")
        self.data = data

    def u16(self, pos: int) -> int:
        self.ensure(pos, 2)
        return struct.unpack_from(self._prefix + "H", self.data, pos)[0]

    def u32(self, pos: int) -> int:
        self.ensure(pos, 4)
        return struct.unpack_from(self._prefix + "I", self.data, pos)[0]

    def ensure(self, pos: int, size: int) -> None:
        if pos < 0 or pos + size > len(self.data):
            raise ValueError(f"offset {pos} out of range")

    def find_entry(self, ifd_offset: int, wanted_tag: int) -> Optional[int]:
        """Return the position of the IFD entry for ``wanted_tag``."""
        count = self.u16(ifd_offset)
        for i in range(count):
            entry = ifd_offset + 2 + i * _ENTRY_SIZE
            if self.u16(entry) == wanted_tag:
                return entry
        return None

    def read_ascii(self, pos: int, count: int) -> str:
        chars = []
        for i in range(count):
            if pos + i >= len(self.data):
                break
            byte = self.data[pos + i]
            if byte == 0:
                break
            chars.append(chr(byte))
        return "".join(chars)


def parse_year(text: str) -> Optional[str]:
    """Leading four digits of an EXIF date (``YYYY:MM:DD HH:MM:SS``)."""
    match = _YEAR_RE.match(text or "")
    return match.group(1) if match else None


def _year_from_tiff(block: bytes) -> Optional[str]:
    tiff = _TiffBlock(block)
    ifd0 = tiff.u32(4)
    pointer = tiff.find_entry(ifd0, TAG_EXIF_IFD)
    if pointer is None:
        return None
    exif_ifd = tiff.u32(pointer + 8)
    entry = tiff.find_entry(exif_ifd, TAG_DATETIME_ORIGINAL)
    if entry is None:
        return None
    if tiff.u16(entry + 2) != TYPE_ASCII:
        return None
    count = tiff.u32(entry + 4)
    if count <= 4:
        value_pos = entry + 8
    else:
        value_pos = tiff.u32(entry + 8)
        tiff.ensure(value_pos, 1)
    return parse_year(tiff.read_ascii(value_pos, count))


def _scan_segments(data: bytes) -> Optional[str]:
    if data[:2] != SOI:
        return None
    offset = 2
    while offset + 4 < len(data):
        if data[offset] != MARKER_PREFIX:
            return None
        marker = data[offset + 1]
        size = struct.unpack_from(">H", data, offset + 2)[0]
        if marker == APP1:
            start = offset + 4
            end = start + size - 2
            payload = data[start:end]
            if payload[:6] == EXIF_SIGNATURE:
                return _year_from_tiff(payload[6:])
            # only the first APP1 segment is considered
            return None
        if size < 2:
            return None
        offset += 2 + size
    return None


def extract_capture_year(image_bytes: bytes) -> Optional[str]:
    """Return the capture year recorded in ``image_bytes`` or ``None``."""
    if not isinstance(image_bytes, (bytes, bytearray, memoryview)):
        return None
    try:
        return _scan_segments(bytes(image_bytes))
    except (ValueError, struct.error, IndexError) as exc:
        _log.debug("EXIF parse failed: %s", exc)
        return None


def extract_capture_year_from_data_uri(data_uri: str) -> Optional[str]:
    """Decode ``data_uri`` and extract the capture year from its bytes."""
    try:
        image = ImageData.from_data_uri(data_uri)
    except ValueError as exc:
        _log.debug("Cannot decode data URI for EXIF: %s", exc)
        return None
    return extract_capture_year(image.data)


__all__ = [
    "extract_capture_year",
    "extract_capture_year_from_data_uri",
    "parse_year",
]
