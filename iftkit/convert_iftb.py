"""Conversion of an IFTB info dump into an encoder configuration."""

from __future__ import annotations

import re
import sys
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

__all__ = [
    "EncoderConfig",
    "next_token",
    "load_chunk_set",
    "load_gid_map",
    "create_config",
    "convert_iftb",
]

_LEADING_INT = re.compile(r"\s*([+-]?[0-9]+)")


def _to_int(text: str) -> int:
    """Parse the integer at the start of ``text``, ignoring leading whitespace."""
    match = _LEADING_INT.match(text)
    if match is None:
        raise ValueError(f"Expected an integer, got {text!r}.")
    return int(match.group(1))


def _values_block(name: str, values: Iterable[int], indent: str = "") -> str:
    lines = [f"{indent}{name} {{\n"]
    lines.extend(f"{indent}  values: {value}\n" for value in values)
    lines.append(f"{indent}}}\n")
    return "".join(lines)


@dataclass
class EncoderConfig:
    """The parts of an encoder configuration produced from an IFTB dump."""

    glyph_segments: dict[int, list[int]] = field(default_factory=dict)
    initial_glyph_patches: list[int] | None = None
    glyph_patch_groupings: list[list[int]] = field(default_factory=list)

    def to_text(self) -> str:
        """Render the configuration in protobuf text format."""
        parts = []
        for key in sorted(self.glyph_segments):
            parts.append("glyph_segments {\n")
            parts.append(f"  key: {key}\n")
            parts.append(_values_block("value", self.glyph_segments[key], "  "))
            parts.append("}\n")
        if self.initial_glyph_patches is not None:
            parts.append(_values_block("initial_glyph_patches", self.initial_glyph_patches))
        for grouping in self.glyph_patch_groupings:
            parts.append(_values_block("glyph_patch_groupings", grouping))
        return "".join(parts)


def next_token(line: str, delim: str) -> tuple[str, str]:
    """Split off the text before the first ``delim``; return (token, remainder)."""
    if not line:
        return "", line
    token, found, rest = line.partition(delim)
    if not found:
        return line, ""
    return token, rest


def load_chunk_set(line: str) -> set[int]:
    """Parse a ``", "`` separated list of chunk indices."""
    result: set[int] = set()
    while line:
        token, line = next_token(line, ", ")
        result.add(_to_int(token))
    return result


def load_gid_map(line: str) -> dict[int, int]:
    """Parse a ``", "`` separated list of ``gid:chunk`` pairs."""
    result: dict[int, int] = {}
    while line:
        entry, line = next_token(line, ", ")
        gid, entry = next_token(entry, ":")
        chunk, _ = next_token(entry, ":")
        result[_to_int(gid)] = _to_int(chunk)
    return result


def create_config(gid_map: Mapping[int, int], loaded_chunks: Iterable[int]) -> EncoderConfig:
    """Build an encoder config where each chunk becomes a glyph segment."""
    loaded = set(loaded_chunks)
    config = EncoderConfig()
    for gid, chunk in sorted(gid_map.items()):
        config.glyph_segments.setdefault(chunk, []).append(gid)

    if loaded:
        config.initial_glyph_patches = sorted(loaded)

    non_initial = {chunk for chunk in gid_map.values() if chunk not in loaded}
    config.glyph_patch_groupings.append(sorted(non_initial))
    return config


def convert_iftb(iftb_dump: str) -> EncoderConfig:
    """Convert the text of an IFTB info dump into an encoder config."""
    gid_map: dict[int, int] = {}
    loaded_chunks: set[int] = set()

    while iftb_dump:
        line, iftb_dump = next_token(iftb_dump, "\n")
        name, line = next_token(line, ": ")
        print(f">> {name}", file=sys.stderr)

        if name == "gidMap":
            gid_map = load_gid_map(line)
        elif name == "chunkSet indexes":
            loaded_chunks = load_chunk_set(line)

    return create_config(gid_map, loaded_chunks)