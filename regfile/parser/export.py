# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# regfile/parser/export.py
"""
parse(): .reg text -> RegistryExport.

    normalize -> detect encoding -> segment -> per block:
        resolve hive, extract value lines, decode each value

Pure: no filesystem access, no state kept between calls.
"""
from __future__ import annotations

import logging
from typing import List, Optional, Union

from ..config.settings import ParserSettings
from ..core.exceptions import DecodeError, InputError, NoKeysFoundError
from ..core.logger import Log
from .decoder import decode
from .hives import resolve
from .model import FileEncoding, RegistryExport, RegistryKey, RegistryValue, RootHive
from .normalizer import detect_encoding, normalize
from .segmenter import KeyBlock, segment
from .values import extract

logger = logging.getLogger("regfile.parser")


def _build_key(block: KeyBlock, encoding: FileEncoding, settings: ParserSettings) -> RegistryKey:
    match = resolve(block.header)
    if match.root is RootHive.UNKNOWN:
        logger.debug("Unrecognized hive in key header %r", block.header)

    values: List[RegistryValue] = []
    for entry, raw in extract(block.body):
        try:
            decoded, kind = decode(raw, encoding, decode_wide_strings=settings.decode_wide_strings)
        except DecodeError as e:
            e.with_context(key=block.header, entry=entry)
            raise
        values.append(RegistryValue(entry=entry, raw=raw, value=decoded, kind=kind, encoding=encoding))

    return RegistryKey(root=match.root, path=match.path, action=match.action, values=tuple(values))


def parse(
    content: Union[str, bytes, None],
    *,
    settings: Optional[ParserSettings] = None,
    filename: Optional[str] = None,
) -> RegistryExport:
    """
    Parse the full text of one .reg export.

    Bytes are decoded the same way files are (BOM sniffing, UTF-8, cp1252).

    Raises:
        InputError: content is None or empty.
        NoKeysFoundError: content holds no key headers.
        DecodeError: a value token cannot be decoded.
    """
    settings = settings or ParserSettings()

    if isinstance(content, (bytes, bytearray)):
        from ..source import decode_bytes  # local import: source depends on parser

        content = decode_bytes(bytes(content))

    if content is None or content == "":
        raise InputError(msg="no content to parse", context={"filename": filename} if filename else None)

    text = normalize(content, settings.extra_allowed_chars)
    encoding = detect_encoding(text)

    blocks = segment(text)
    if not blocks:
        raise NoKeysFoundError(context={"filename": filename} if filename else None)

    keys = tuple(_build_key(b, encoding, settings) for b in blocks)
    Log.trace(
        logger,
        "Parsed export",
        filename=filename,
        encoding=encoding.value,
        keys=len(keys),
        values=sum(len(k.values) for k in keys),
    )
    return RegistryExport(content=text, encoding=encoding, keys=keys, filename=filename)
