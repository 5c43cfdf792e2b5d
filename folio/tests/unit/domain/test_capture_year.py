from __future__ import annotations

import struct

from folio.domain.images import ImageData
from folio.domain.metadata import (
    extract_capture_year,
    extract_capture_year_from_data_uri,
    parse_year,
)

DATE = b"2019:04:02 10:11:12\x00"


def _tiff(order: str) -> bytes:
    """IFD0 -> Exif IFD -> DateTimeOriginal (ASCII, stored at an offset)."""
    p = "<" if order == "II" else ">"
    header = order.encode("ascii") + struct.pack(p + "HI", 42, 8)
    ifd0 = struct.pack(p + "H", 1) + struct.pack(p + "HHII", 0x8769, 4, 1, 26) + struct.pack(p + "I", 0)
    value_offset = 26 + 2 + 12 + 4
    exif_ifd = (
        struct.pack(p + "H", 1)
        + struct.pack(p + "HHII", 0x9003, 2, len(DATE), value_offset)
        + struct.pack(p + "I", 0)
    )
    return header + ifd0 + exif_ifd + DATE


def _jpeg(tiff: bytes, *, leading: bytes = b"") -> bytes:
    payload = b"Exif\x00\x00" + tiff
    app1 = b"\xff\xe1" + struct.pack(">H", len(payload) + 2) + payload
    return b"\xff\xd8" + leading + app1 + b"\xff\xd9"


def test_little_endian_year() -> None:
    assert extract_capture_year(_jpeg(_tiff("II"))) == "2019"


def test_big_endian_year() -> None:
    assert extract_capture_year(_jpeg(_tiff("MM"))) == "2019"


def test_segments_before_app1_are_skipped() -> None:
    app0 = b"\xff\xe0" + struct.pack(">H", 6) + b"JFIF"
    assert extract_capture_year(_jpeg(_tiff("II"), leading=app0)) == "2019"


def test_missing_soi_returns_none() -> None:
    assert extract_capture_year(_jpeg(_tiff("II"))[2:]) is None


def test_truncated_input_returns_none() -> None:
    data = _jpeg(_tiff("II"))
    for cut in (3, 10, 20, 40, len(data) - 25):
        assert extract_capture_year(data[:cut]) is None


def test_unknown_byte_order_returns_none() -> None:
    tiff = b"XX" + _tiff("II")[2:]
    assert extract_capture_year(_jpeg(tiff)) is None


def test_non_ascii_tag_type_returns_none() -> None:
    tiff = bytearray(_tiff("II"))
    # type field of the DateTimeOriginal entry inside the Exif IFD
    struct.pack_into("<H", tiff, 26 + 2 + 2, 7)
    assert extract_capture_year(_jpeg(bytes(tiff))) is None


def test_non_jpeg_and_non_bytes() -> None:
    assert extract_capture_year(b"\x89PNG\r\n\x1a\n") is None
    assert extract_capture_year(b"") is None
    assert extract_capture_year("not bytes") is None  # type: ignore[arg-type]


def test_from_data_uri() -> None:
    uri = ImageData(mime="image/jpeg", data=_jpeg(_tiff("MM"))).to_data_uri()
    assert extract_capture_year_from_data_uri(uri) == "2019"
    assert extract_capture_year_from_data_uri("data:image/jpeg;base64,%%%") is None


def test_parse_year() -> None:
    assert parse_year("2021:01:01 00:00:00") == "2021"
    assert parse_year("  2021") is None
    assert parse_year("") is None


def test_inline_ascii_value_is_read() -> None:
    # count <= 4 keeps the characters in the value field itself
    p = "<"
    header = b"II" + struct.pack(p + "HI", 42, 8)
    ifd0 = struct.pack(p + "H", 1) + struct.pack(p + "HHII", 0x8769, 4, 1, 26) + struct.pack(p + "I", 0)
    exif_ifd = struct.pack(p + "H", 1) + struct.pack(p + "HHI", 0x9003, 2, 4) + b"2019" + struct.pack(p + "I", 0)
    assert extract_capture_year(_jpeg(header + ifd0 + exif_ifd)) == "2019"


def test_only_first_app1_segment_is_inspected() -> None:
    xmp = b"http://ns.adobe.com/xap/1.0/\x00<x/>"
    leading = b"\xff\xe1" + struct.pack(">H", len(xmp) + 2) + xmp
    assert extract_capture_year(_jpeg(_tiff("II"), leading=leading)) is None
