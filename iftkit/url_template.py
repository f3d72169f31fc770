"""URI template expansion and IFT patch URL substitution."""

from __future__ import annotations

import base64
import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any
from urllib.parse import quote

__all__ = ["expand", "patch_to_url"]

_RESERVED = ":/?#[]@!$&'()*+,;="
_PCT_ENCODED = re.compile(r"%[0-9A-Fa-f]{2}")
_EXPRESSION = re.compile(r"\{([^{}]*)\}")
_VARNAME = re.compile(
    r"(?:[A-Za-z0-9_]|%[0-9A-Fa-f]{2})(?:\.?(?:[A-Za-z0-9_]|%[0-9A-Fa-f]{2}))*"
)
_FUTURE_OPERATORS = "=,!@|"


@dataclass(frozen=True)
class _Operator:
    first: str
    sep: str
    named: bool
    ifemp: str
    allow_reserved: bool


_OPERATORS = {
    "": _Operator("", ",", False, "", False),
    "+": _Operator("", ",", False, "", True),
    ".": _Operator(".", ".", False, "", False),
    "/": _Operator("/", "/", False, "", False),
    ";": _Operator(";", ";", True, "", False),
    "?": _Operator("?", "&", True, "=", False),
    "&": _Operator("&", "&", True, "=", False),
    "#": _Operator("#", ",", False, "", True),
}


@dataclass(frozen=True)
class _VarSpec:
    name: str
    explode: bool
    prefix: int | None


def _encode(value: str, allow_reserved: bool) -> str:
    if not allow_reserved:
        return quote(value, safe="")
    pieces = []
    position = 0
    for match in _PCT_ENCODED.finditer(value):
        pieces.append(quote(value[position : match.start()], safe=_RESERVED))
        pieces.append(match.group())
        position = match.end()
    pieces.append(quote(value[position:], safe=_RESERVED))
    return "".join(pieces)


def _parse_varspec(text: str) -> _VarSpec:
    explode = text.endswith("*")
    if explode:
        text = text[:-1]
    prefix = None
    if ":" in text:
        text, _, length = text.partition(":")
        if not length.isdigit() or not 1 <= int(length) <= 9999 or length[0] == "0":
            raise ValueError(f"Invalid prefix modifier in {text!r}.")
        if explode:
            raise ValueError("A variable cannot have both prefix and explode modifiers.")
        prefix = int(length)
    if not _VARNAME.fullmatch(text):
        raise ValueError(f"Invalid variable name {text!r}.")
    return _VarSpec(text, explode, prefix)


def _expand_varspec(op: _Operator, spec: _VarSpec, value: Any) -> str | None:
    if value is None:
        return None

    def enc(text: str) -> str:
        return _encode(text, op.allow_reserved)

    if isinstance(value, Mapping):
        pairs = [(str(k), str(v)) for k, v in value.items() if v is not None]
        if not pairs:
            return None
        if spec.prefix is not None:
            raise ValueError(f"Prefix modifier applied to composite {spec.name!r}.")
        if spec.explode:
            return op.sep.join(
                enc(k) + ("=" + enc(v) if v or not op.named else op.ifemp)
                for k, v in pairs
            )
        joined = ",".join(f"{enc(k)},{enc(v)}" for k, v in pairs)
        return f"{spec.name}={joined}" if op.named else joined

    if isinstance(value, (list, tuple)):
        items = [str(v) for v in value if v is not None]
        if not items:
            return None
        if spec.prefix is not None:
            raise ValueError(f"Prefix modifier applied to composite {spec.name!r}.")
        if spec.explode:
            if op.named:
                return op.sep.join(
                    spec.name + ("=" + enc(v) if v else op.ifemp) for v in items
                )
            return op.sep.join(enc(v) for v in items)
        joined = ",".join(enc(v) for v in items)
        if op.named:
            return spec.name + ("=" + joined if joined else op.ifemp)
        return joined

    text = str(value)
    if spec.prefix is not None:
        text = text[: spec.prefix]
    encoded = enc(text)
    if op.named:
        return spec.name + ("=" + encoded if text else op.ifemp)
    return encoded


def _expand_expression(expression: str, variables: Mapping[str, Any]) -> str:
    if not expression:
        raise ValueError("Empty template expression.")
    if expression[0] in _FUTURE_OPERATORS:
        raise ValueError(f"Unsupported operator {expression[0]!r}.")
    if expression[0] in _OPERATORS and expression[0] != "":
        op = _OPERATORS[expression[0]]
        expression = expression[1:]
    else:
        op = _OPERATORS[""]

    expanded = []
    for text in expression.split(","):
        spec = _parse_varspec(text)
        result = _expand_varspec(op, spec, variables.get(spec.name))
        if result is not None:
            expanded.append(result)
    if not expanded:
        return ""
    return op.first + op.sep.join(expanded)


def _literal(text: str) -> str:
    if "{" in text or "}" in text:
        raise ValueError("Unbalanced braces in URI template.")
    return _encode(text, True)


def expand(template: str, variables: Mapping[str, Any]) -> str:
    """Expand a URI template with the given variables."""
    pieces = []
    position = 0
    for match in _EXPRESSION.finditer(template):
        pieces.append(_literal(template[position : match.start()]))
        pieces.append(_expand_expression(match.group(1), variables))
        position = match.end()
    pieces.append(_literal(template[position:]))
    return "".join(pieces)


def patch_to_url(url_template: str, patch_idx: int) -> str:
    """Substitute a patch index into an IFT URL template."""
    if not 0 <= patch_idx <= 0xFFFFFFFF:
        raise ValueError(f"Patch index {patch_idx} is not a uint32.")
    raw = patch_idx.to_bytes(4, "big")
    raw = raw.lstrip(b"\0") or b"\0"
    encoded = base64.b32hexencode(raw).decode("ascii").rstrip("=")

    variables = {"id": encoded}
    for depth in range(1, 5):
        variables[f"d{depth}"] = encoded[-depth] if len(encoded) >= depth else "_"
    return expand(url_template, variables)