# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# regfile/source.py
"""
Content provider: turn a path or a buffer into export text.

regedit writes "Version 5.00" exports as UTF-16LE with a BOM and REGEDIT4
exports in the ANSI code page. The parser itself only ever sees text.
"""
from __future__ import annotations

import codecs
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from .config.settings import ParserSettings
from .core.exceptions import InputError
from .parser.export import parse
from .parser.model import RegistryExport

logger = logging.getLogger("regfile.source")

PathLike = Union[str, Path]


@dataclass(frozen=True)
class RegSource:
    text: str
    filename: Optional[str] = None
    path: Optional[Path] = None


def decode_bytes(data: bytes) -> str:
    """Decode raw file bytes: BOM first, then UTF-8, then cp1252."""
    if data.startswith(codecs.BOM_UTF16_LE) or data.startswith(codecs.BOM_UTF16_BE):
        return data.decode("utf-16")
    if data.startswith(codecs.BOM_UTF8):
        return data.decode("utf-8-sig")
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError:
        logger.debug("Content is not UTF-8; falling back to cp1252")
        return data.decode("cp1252", errors="replace")


def read_reg_file(path: Optional[PathLike]) -> RegSource:
    if path is None or str(path) == "":
        raise InputError(msg="no file path specified")

    p = Path(path).expanduser()
    try:
        data = p.read_bytes()
    except FileNotFoundError as e:
        raise InputError(msg=f"file not found: {p}", cause=e, context={"path": str(p)}) from e
    except OSError as e:
        raise InputError(msg=f"cannot read {p}: {e.strerror or e}", cause=e, context={"path": str(p)}) from e

    if not data:
        raise InputError(msg=f"file is empty: {p}", context={"path": str(p)})

    logger.debug("Read %s (%d bytes)", p, len(data))
    return RegSource(text=decode_bytes(data), filename=p.name, path=p)


def load(
    source: Union[PathLike, bytes, bytearray, None],
    *,
    settings: Optional[ParserSettings] = None,
) -> RegistryExport:
    """
    Parse a .reg file given its path, or an in-memory buffer of its bytes.
    """
    if isinstance(source, (bytes, bytearray)):
        if not source:
            raise InputError(msg="empty buffer")
        return parse(decode_bytes(bytes(source)), settings=settings)

    src = read_reg_file(source)
    return parse(src.text, settings=settings, filename=src.filename)
