# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# regfile/parser/decoder.py
"""
Value token decoding.

A raw token is whatever follows `name=` in the export, e.g.:

    "text"                      REG_SZ
    dword:0000002a              REG_DWORD
    hex:01,02,03                REG_BINARY
    hex(2):25,00,50,00,00,00    REG_EXPAND_SZ (wide string bytes)
    hex(7):61,00,00,00,00,00    REG_MULTI_SZ
    hex(b):2a,00,00,00,00,00,00,00   REG_QWORD (little-endian bytes)

The kind comes only from the literal prefix. Wide-string payloads
(hex(2)/hex(6)/hex(7)) are rebuilt from byte pairs; by default each
16-bit unit is rendered as its decimal value and each NUL terminator as a
line break, which is what downstream signature tooling compares against.
"""
from __future__ import annotations

import re
from typing import Callable, Dict, List, Tuple

from ..core.exceptions import decode_error
from .model import FileEncoding, RegistryKey, RegistryValue, ValueKind
from .values import CONTINUATION_RE

Decoded = Tuple[str, ValueKind]

_HEX_BYTE_RE = re.compile(r"^[0-9A-Fa-f]{1,2}$")
_HEX_PREFIX_RE = re.compile(r"^hex\(([0-9A-Fa-f]+)\):")


# ---------------------------------------------------------------------------
# Payload helpers
# ---------------------------------------------------------------------------


def _clean_payload(payload: str) -> str:
    """Remove continuation artifacts and whitespace between byte tokens."""
    return re.sub(r"\s+", "", CONTINUATION_RE.sub("", payload))


def _byte_tokens(token: str, payload: str) -> List[str]:
    cleaned = _clean_payload(payload).rstrip(",")
    if not cleaned:
        return []
    parts = cleaned.split(",")
    for p in parts:
        if not _HEX_BYTE_RE.match(p):
            raise decode_error(token, f"invalid hex byte {p!r}")
    return parts


def _decode_segments(units: List[bytes], codec: str) -> str:
    # Zero units end a string; each run between them is decoded as one piece
    # so multi-unit characters (surrogate pairs) survive.
    out: List[str] = []
    run = bytearray()
    for unit in units:
        if any(unit):
            run += unit
            continue
        out.append(bytes(run).decode(codec, errors="replace") + "\n")
        run = bytearray()
    out.append(bytes(run).decode(codec, errors="replace"))
    return "".join(out)


def reconstruct_wide_string(tokens: List[str], encoding: FileEncoding, *, as_text: bool = False) -> str:
    """
    Rebuild a string value from its hex byte tokens.

    UTF8 (version 5.00) exports store UTF-16LE: tokens are read as (low, high)
    pairs and "00,00" is a terminator. ANSI (REGEDIT4) exports store one byte
    per character in the cp1252 code page and "00" is the terminator.
    Terminators render as "\\n"; the final unit (the closing terminator) is
    not emitted. Other units render as their decimal value, or as text when
    `as_text` is set.
    """
    if len(tokens) < 2:
        return ""

    if encoding is FileEncoding.UTF8:
        units = [bytes((int(tokens[i], 16), int(tokens[i + 1], 16))) for i in range(0, len(tokens) - 2, 2)]
        codec = "utf-16le"
    else:
        units = [bytes((int(tok, 16),)) for tok in tokens[:-1]]
        codec = "cp1252"

    if as_text:
        return _decode_segments(units, codec)
    return "".join("\n" if not any(u) else str(int.from_bytes(u, "little")) for u in units)


def _parse_hex_int(token: str, payload: str) -> int:
    text = _clean_payload(payload)
    try:
        return int(text, 16)
    except ValueError as e:
        raise decode_error(token, f"not a hexadecimal number: {text!r}", e) from e


def _parse_qword(token: str, payload: str) -> int:
    # regedit writes 8 little-endian bytes; a bare literal is read as base-16.
    text = _clean_payload(payload).rstrip(",")
    if "," not in text:
        return _parse_hex_int(token, text)
    parts = _byte_tokens(token, text)
    if len(parts) > 8:
        raise decode_error(token, f"QWORD has {len(parts)} bytes")
    return int.from_bytes(bytes(int(p, 16) for p in parts), "little")


def _unquote(token: str) -> str:
    """
    Surrounding quotes are removed and regedit's escapes (doubled backslash,
    backslash-quote) undone. Tokens without quotes are returned trimmed of
    stray escape backslashes.
    """
    text = token.strip()
    if len(text) >= 2 and text.startswith('"') and text.endswith('"'):
        return re.sub(r"\\(.)", r"\1", text[1:-1])
    return text.strip("\\")


def _quote(value: str) -> str:
    return '"' + value.replace("\\", "\\\\").replace('"', '\\"') + '"'


# ---------------------------------------------------------------------------
# Prefix table
# ---------------------------------------------------------------------------

_Rule = Callable[[str, str, FileEncoding, bool], str]


def _passthrough(token: str, payload: str, encoding: FileEncoding, as_text: bool) -> str:
    return CONTINUATION_RE.sub("", payload)


def _qword(token: str, payload: str, encoding: FileEncoding, as_text: bool) -> str:
    return str(_parse_qword(token, payload))


def _dword(token: str, payload: str, encoding: FileEncoding, as_text: bool) -> str:
    return str(_parse_hex_int(token, payload))


def _wide(token: str, payload: str, encoding: FileEncoding, as_text: bool) -> str:
    return reconstruct_wide_string(_byte_tokens(token, payload), encoding, as_text=as_text)


def _binary(token: str, payload: str, encoding: FileEncoding, as_text: bool) -> str:
    return _clean_payload(payload).rstrip(",")


# First match wins; "hex:" must come after every "hex(N):".
PREFIX_TABLE: Tuple[Tuple[str, ValueKind, _Rule], ...] = (
    ("hex(a):", ValueKind.REG_RESOURCE_REQUIREMENTS_LIST, _passthrough),
    ("hex(b):", ValueKind.REG_QWORD, _qword),
    ("dword:", ValueKind.REG_DWORD, _dword),
    ("hex(7):", ValueKind.REG_MULTI_SZ, _wide),
    ("hex(6):", ValueKind.REG_LINK, _wide),
    ("hex(2):", ValueKind.REG_EXPAND_SZ, _wide),
    ("hex(0):", ValueKind.REG_NONE, _passthrough),
    ("hex(8):", ValueKind.REG_RESOURCE_LIST, _passthrough),
    ("hex(9):", ValueKind.REG_FULL_RESOURCE_DESCRIPTOR, _passthrough),
    ("hex:", ValueKind.REG_BINARY, _binary),
)

_KIND_TO_PREFIX: Dict[ValueKind, str] = {kind: prefix for prefix, kind, _ in PREFIX_TABLE}
_KIND_TO_PREFIX[ValueKind.REG_SZ] = ""


def decode(raw: str, encoding: FileEncoding = FileEncoding.UTF8, *, decode_wide_strings: bool = False) -> Decoded:
    token = (raw or "").strip()
    for prefix, kind, rule in PREFIX_TABLE:
        if token.startswith(prefix):
            return rule(token, token[len(prefix):], encoding, decode_wide_strings), kind

    m = _HEX_PREFIX_RE.match(token)
    if m is not None:
        raise decode_error(token, f"unsupported value type hex({m.group(1)})")

    return _unquote(token), ValueKind.REG_SZ


def encode_type_prefix(kind: ValueKind) -> str:
    return _KIND_TO_PREFIX[kind]


def to_export_line(key: RegistryKey, value: RegistryValue, *, include_root: bool = False) -> str:
    """
    One signature-style line: <keyPath>\\\\<entry>=<prefix><value>.

    REG_SZ values are quoted and escaped again, so a quoted string reads
    back exactly as it was written in the export.
    """
    path = key.full_path if include_root else key.path
    payload = _quote(value.value) if value.kind is ValueKind.REG_SZ else value.value
    return f"{path}\\\\{value.entry}={encode_type_prefix(value.kind)}{payload}"
