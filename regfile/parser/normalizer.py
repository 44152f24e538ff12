# SPDX-License-Identifier: LGPL-3.0-or-later
# regfile/parser/normalizer.py
from __future__ import annotations

import re
from typing import Optional

from ..core.exceptions import InputError
from .model import FileEncoding

# Letters, digits, whitespace and the punctuation the export grammar uses.
# ':' '-' '@' '^' are needed by type prefixes, delete markers, default values
# and key headers.
_ALLOWED = r'A-Za-z0-9\\\[\]%_=(),"\s.:\-@^'

_DISALLOWED_RE = re.compile(f"[^{_ALLOWED}]+")
_REGEDIT4_RE = re.compile(r"\s*REGEDIT4", re.IGNORECASE)


def _disallowed_re(extra: str) -> "re.Pattern[str]":
    if not extra:
        return _DISALLOWED_RE
    return re.compile(f"[^{_ALLOWED}{re.escape(extra)}]+")


def normalize(raw: Optional[str], extra_allowed_chars: str = "") -> str:
    """Drop every character outside the allow-set."""
    if raw is None or raw == "":
        raise InputError(msg="no content to normalize")
    return _disallowed_re(extra_allowed_chars).sub("", raw)


def detect_encoding(content: str) -> FileEncoding:
    if _REGEDIT4_RE.match(content or ""):
        return FileEncoding.ANSI
    return FileEncoding.UTF8
