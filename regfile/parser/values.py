# SPDX-License-Identifier: LGPL-3.0-or-later
# regfile/parser/values.py
from __future__ import annotations

import logging
import re
from typing import List, Tuple

from ..core.logger import Log

logger = logging.getLogger("regfile.parser.values")

# "\" at end of line, then the next line's indentation.
CONTINUATION_RE = re.compile(r"\\\r?\n[ \t]*")

# "name"=data  or  @=data
_VALUE_LINE_RE = re.compile(
    r"""
    ^[ \t]*
    (?:"(?P<name>(?:[^"\\]|\\.)+)"|(?P<default>@))
    [ \t]*=
    (?P<data>.*)$
    """,
    re.VERBOSE,
)


def join_continuations(text: str) -> str:
    return CONTINUATION_RE.sub("", text)


def extract(body: str) -> List[Tuple[str, str]]:
    """
    Return (entry, raw data) pairs in source order.

    The default value ("@") gets the empty entry name. Lines that are not
    value entries (blank lines, comments, junk) are skipped.
    """
    out: List[Tuple[str, str]] = []
    if not body:
        return out

    for line in join_continuations(body).splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("["):
            continue

        m = _VALUE_LINE_RE.match(line)
        if m is None:
            Log.trace(logger, "Skipping non-value line: %r", stripped[:120])
            continue

        data = m.group("data").strip()
        if data.startswith("="):
            data = data[1:]
        if not data:
            Log.trace(logger, "Skipping value line without data: %r", stripped[:120])
            continue

        entry = "" if m.group("default") else m.group("name")
        out.append((entry, data))

    return out
