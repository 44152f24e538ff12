# SPDX-License-Identifier: LGPL-3.0-or-later
# regfile/parser/segmenter.py
"""
Split export text into key blocks.

A block starts at a bracketed header line and runs up to the next header line:

    [HKEY_CURRENT_USER\\Software\\X]      <- header
    "A"="1"                              <- body
    "B"=dword:00000001                   <- body
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import List

logger = logging.getLogger("regfile.parser.segmenter")

# Header must be alone on its line; the body keeps '[' inside value data.
_HEADER_RE = re.compile(r"^[ \t]*\[([^\[\]\r\n]*)\][ \t]*(?:\r?\n|\Z)", re.MULTILINE)


@dataclass(frozen=True)
class KeyBlock:
    header: str
    body: str


def _clean_header(header: str) -> str:
    header = header.rstrip("\r\n")
    if header.endswith("="):
        header = header[:-1]
    if header == "@":
        return ""
    return header


def segment(content: str) -> List[KeyBlock]:
    matches = list(_HEADER_RE.finditer(content or ""))
    blocks: List[KeyBlock] = []
    for i, m in enumerate(matches):
        end = matches[i + 1].start() if i + 1 < len(matches) else len(content)
        blocks.append(KeyBlock(header=_clean_header(m.group(1)), body=content[m.end():end].strip()))
    logger.debug("Segmented %d key block(s)", len(blocks))
    return blocks
