"""Minimal reading and writing of the OpenType (sfnt) table directory."""

from __future__ import annotations

import struct
from collections.abc import Mapping

__all__ = ["SfntError", "build_font", "read_tables"]

_SFNT_VERSION = 0x00010000
_HEADER = struct.Struct(">IHHHH")
_RECORD = struct.Struct(">4sIII")


class SfntError(ValueError):
    """Raised when font data is malformed or a table tag is invalid."""


def _tag_bytes(tag: str | bytes) -> bytes:
    if isinstance(tag, str):
        try:
            raw = tag.encode("latin-1")
        except UnicodeEncodeError as exc:
            raise SfntError(f"Invalid table tag {tag!r}.") from exc
    elif isinstance(tag, (bytes, bytearray)):
        raw = bytes(tag)
    else:
        raise SfntError(f"Invalid table tag {tag!r}.")
    if len(raw) != 4:
        raise SfntError(f"Table tag {tag!r} must be exactly four bytes.")
    return raw


def _checksum(data: bytes) -> int:
    padded = data + b"\0" * (-len(data) % 4)
    words = struct.unpack(f">{len(padded) // 4}I", padded)
    return sum(words) & 0xFFFFFFFF


def build_font(tables: Mapping[str | bytes, bytes]) -> bytes:
    """Assemble a font file holding the given tables, keyed by four byte tag."""
    entries = sorted((_tag_bytes(tag), bytes(data)) for tag, data in tables.items())
    if len({tag for tag, _ in entries}) != len(entries):
        raise SfntError("Duplicate table tags.")
    count = len(entries)
    if count > 0xFFFF:
        raise SfntError("Too many tables.")

    entry_selector = count.bit_length() - 1 if count else 0
    search_range = (1 << entry_selector) * 16 if count else 0
    range_shift = count * 16 - search_range

    header = _HEADER.pack(_SFNT_VERSION, count, search_range, entry_selector, range_shift)
    offset = _HEADER.size + _RECORD.size * count
    records = []
    bodies = []
    for tag, data in entries:
        records.append(_RECORD.pack(tag, _checksum(data), offset, len(data)))
        padded = data + b"\0" * (-len(data) % 4)
        bodies.append(padded)
        offset += len(padded)
    return header + b"".join(records) + b"".join(bodies)


def read_tables(font: bytes) -> dict[str, bytes]:
    """Return the tables of a font file as a mapping of tag to table bytes."""
    font = bytes(font)
    if len(font) < _HEADER.size:
        raise SfntError("Font data is too short for an sfnt header.")
    _, count, _, _, _ = _HEADER.unpack_from(font, 0)
    directory_end = _HEADER.size + _RECORD.size * count
    if len(font) < directory_end:
        raise SfntError("Font data is too short for its table directory.")

    tables: dict[str, bytes] = {}
    for position in range(_HEADER.size, directory_end, _RECORD.size):
        tag, _, offset, length = _RECORD.unpack_from(font, position)
        if offset + length > len(font):
            raise SfntError(f"Table {tag!r} extends past the end of the font.")
        tables[tag.decode("latin-1")] = font[offset : offset + length]
    return tables