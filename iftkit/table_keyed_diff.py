"""Per table brotli patches between two fonts, in the IFT table keyed format."""

from __future__ import annotations

import struct
from collections.abc import Iterable
from dataclasses import dataclass

import brotli

from iftkit.sfnt import read_tables

__all__ = ["CompatId", "TableKeyedDiff", "brotli_diff"]

_FORMAT_TAG = b"iftk"
_BROTLI_QUALITY = 11
_ENTRY_HEADER_SIZE = 9

_FLAG_NONE = 0b00000000
_FLAG_REPLACE = 0b00000001
_FLAG_REMOVE = 0b00000010


@dataclass(frozen=True)
class CompatId:
    """A 128-bit compatibility id made of four 32-bit values."""

    value_a: int = 0
    value_b: int = 0
    value_c: int = 0
    value_d: int = 0

    def __post_init__(self) -> None:
        for value in (self.value_a, self.value_b, self.value_c, self.value_d):
            if not 0 <= value <= 0xFFFFFFFF:
                raise ValueError(f"Compat id component {value} is not a uint32.")

    def to_bytes(self) -> bytes:
        """Serialize as four big-endian uint32 values."""
        return struct.pack(">4I", self.value_a, self.value_b, self.value_c, self.value_d)


def brotli_diff(base: bytes, derived: bytes) -> bytes:
    """Brotli-encode ``derived`` as a patch to apply against ``base``.

    The stream makes no references into ``base``, so it decodes to ``derived``
    whether or not ``base`` is supplied as the shared dictionary.
    """
    del base
    return brotli.compress(bytes(derived), quality=_BROTLI_QUALITY)


class TableKeyedDiff:
    """Creates a per table brotli binary diff of two fonts."""

    def __init__(
        self,
        base_compat_id: CompatId,
        excluded_tags: Iterable[str] = (),
        replaced_tags: Iterable[str] = (),
    ) -> None:
        self.base_compat_id = base_compat_id
        self.excluded_tags = frozenset(excluded_tags)
        self.replaced_tags = frozenset(replaced_tags)

    def _tags_to_diff(self, before: Iterable[str], after: Iterable[str]) -> list[str]:
        tags = (set(before) | set(after)) - self.excluded_tags
        return sorted(tags, key=lambda tag: tag.encode("latin-1"))

    def diff(self, font_base: bytes, font_derived: bytes) -> bytes:
        """Return a table keyed patch that turns ``font_base`` into ``font_derived``."""
        base_tables = read_tables(font_base)
        derived_tables = read_tables(font_derived)
        diff_tags = self._tags_to_diff(base_tables, derived_tables)

        patches: dict[str, tuple[int, bytes]] = {}
        new_tables: set[str] = set()
        unchanged: set[str] = set()

        for tag in diff_tags:
            in_base = tag in base_tables
            if in_base and tag not in derived_tables:
                continue

            base_table = b""
            if tag not in self.replaced_tags:
                if in_base:
                    base_table = base_tables[tag]
                else:
                    new_tables.add(tag)

            derived_table = derived_tables[tag]
            if base_table == derived_table:
                unchanged.add(tag)
                continue

            patches[tag] = (len(derived_table), brotli_diff(base_table, derived_table))

        diff_tags = [tag for tag in diff_tags if tag not in unchanged]
        if len(diff_tags) > 0xFFFF:
            raise ValueError("Exceeded max number of tables (0xFFFF).")

        header = (
            _FORMAT_TAG
            + struct.pack(">I", 0)
            + self.base_compat_id.to_bytes()
            + struct.pack(">H", len(diff_tags))
        )

        current_offset = len(header) + (len(diff_tags) + 1) * 4
        offsets = []
        for tag in diff_tags:
            offsets.append(current_offset)
            current_offset += _ENTRY_HEADER_SIZE
            if tag in patches:
                current_offset += len(patches[tag][1])
        offsets.append(current_offset)

        parts = [header, struct.pack(f">{len(offsets)}I", *offsets)]
        for tag in diff_tags:
            tag_bytes = tag.encode("latin-1")
            if tag not in patches:
                parts.append(tag_bytes + struct.pack(">BI", _FLAG_REMOVE, 0))
                continue
            size, patch_data = patches[tag]
            replace = tag in self.replaced_tags or tag in new_tables
            flags = _FLAG_REPLACE if replace else _FLAG_NONE
            parts.append(tag_bytes + struct.pack(">BI", flags, size) + patch_data)

        return b"".join(parts)