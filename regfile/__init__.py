# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# regfile/__init__.py
"""
regfile - Windows registry export (.reg) parser

Turns the text written by regedit's "Export" into typed keys and values.

Usage as a library:

    from regfile import parse, load, to_export_line

    export = load("putty.reg")            # path or bytes
    for key in export:
        print(key.root.name, key.path, key.action.value)
        for value in key.values:
            print(" ", value.entry or "@", value.kind.value, value.value)

    export = parse(text)                  # already-materialized text
"""

__version__ = "0.1.0"

from .config.settings import ParserSettings
from .core.exceptions import DecodeError, InputError, NoKeysFoundError, RegFileError
from .parser import (
    FileEncoding,
    KeyAction,
    RegistryExport,
    RegistryKey,
    RegistryValue,
    RootHive,
    ValueKind,
    decode,
    detect_encoding,
    encode_type_prefix,
    parse,
    to_export_line,
)
from .source import decode_bytes, load, read_reg_file

__all__ = [
    "__version__",

    # Entry points
    "parse",
    "load",
    "read_reg_file",
    "decode_bytes",
    "ParserSettings",

    # Model
    "RegistryExport",
    "RegistryKey",
    "RegistryValue",
    "RootHive",
    "KeyAction",
    "ValueKind",
    "FileEncoding",

    # Codec helpers
    "decode",
    "detect_encoding",
    "encode_type_prefix",
    "to_export_line",

    # Errors
    "RegFileError",
    "InputError",
    "NoKeysFoundError",
    "DecodeError",
]
