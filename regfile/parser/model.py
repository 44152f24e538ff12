# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# regfile/parser/model.py
"""
Typed model of a parsed .reg export.

RegistryExport owns its keys, keys own their values. Everything is frozen and
sequences are tuples in source order.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, Optional, Tuple

from ..core.exceptions import NoKeysFoundError


class RootHive(Enum):
    """Top-level registry namespaces. Values are the literals used in key headers."""
    HKLM = "HKEY_LOCAL_MACHINE"
    HKCR = "HKEY_CLASSES_ROOT"
    HKU = "HKEY_USERS"
    HKCU = "HKEY_CURRENT_USER"
    HKCC = "HKEY_CURRENT_CONFIG"
    HKPD = "HKEY_PERFORMANCE_DATA"  # not visible in regedit; API only
    HKDD = "HKEY_DYN_DATA"  # Windows 95/98/ME only
    UNKNOWN = ""


class KeyAction(Enum):
    IMPORT = "import"
    DELETE = "delete"  # header written as [-HKEY_...]


class FileEncoding(Enum):
    """
    Legacy exports starting with REGEDIT4 are ANSI; "Windows Registry Editor
    Version 5.00" exports are Unicode.
    """
    ANSI = "ANSI"
    UTF8 = "UTF8"


class ValueKind(Enum):
    """
    Registry value types.

    See https://docs.microsoft.com/en-us/windows/win32/sysinfo/registry-value-types
    """
    REG_SZ = "REG_SZ"
    REG_BINARY = "REG_BINARY"
    REG_DWORD = "REG_DWORD"
    REG_QWORD = "REG_QWORD"
    REG_EXPAND_SZ = "REG_EXPAND_SZ"
    REG_MULTI_SZ = "REG_MULTI_SZ"
    REG_LINK = "REG_LINK"
    REG_NONE = "REG_NONE"
    REG_RESOURCE_LIST = "REG_RESOURCE_LIST"
    REG_RESOURCE_REQUIREMENTS_LIST = "REG_RESOURCE_REQUIREMENTS_LIST"
    REG_FULL_RESOURCE_DESCRIPTOR = "REG_FULL_RESOURCE_DESCRIPTOR"


@dataclass(frozen=True)
class RegistryValue:
    entry: str  # "" is the default value ("@" in the file)
    raw: str
    value: str
    kind: ValueKind
    encoding: FileEncoding = FileEncoding.UTF8

    @property
    def is_default(self) -> bool:
        return self.entry == ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "entry": self.entry,
            "value": self.value,
            "kind": self.kind.value,
            "raw": self.raw,
        }


@dataclass(frozen=True)
class RegistryKey:
    root: RootHive
    path: str  # key path without the hive, no leading separator
    action: KeyAction = KeyAction.IMPORT
    values: Tuple[RegistryValue, ...] = ()

    @property
    def full_path(self) -> str:
        if self.root is RootHive.UNKNOWN:
            return self.path
        return f"{self.root.value}\\{self.path}" if self.path else self.root.value

    @property
    def default(self) -> Optional[RegistryValue]:
        return self.get("")

    def get(self, entry: str) -> Optional[RegistryValue]:
        """First value named `entry` (case-insensitive, like the registry itself)."""
        want = entry.lower()
        for v in self.values:
            if v.entry.lower() == want:
                return v
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "root": self.root.name,
            "path": self.path,
            "action": self.action.value,
            "values": [v.to_dict() for v in self.values],
        }


@dataclass(frozen=True)
class RegistryExport:
    content: str
    encoding: FileEncoding
    keys: Tuple[RegistryKey, ...]
    filename: Optional[str] = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if not self.keys:
            raise NoKeysFoundError(context={"filename": self.filename} if self.filename else None)

    def __iter__(self) -> Iterator[RegistryKey]:
        return iter(self.keys)

    def __len__(self) -> int:
        return len(self.keys)

    def values(self) -> Iterator[Tuple[RegistryKey, RegistryValue]]:
        for key in self.keys:
            for value in key.values:
                yield key, value

    def find(self, path: str) -> Optional[RegistryKey]:
        """
        Look up a key by path, with or without the hive literal
        (e.g. "HKEY_CURRENT_USER\\Software\\X" or "Software\\X").
        """
        want = path.strip().strip("\\").lower()
        for key in self.keys:
            if key.full_path.lower() == want or key.path.lower() == want:
                return key
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "filename": self.filename,
            "encoding": self.encoding.value,
            "keys": [k.to_dict() for k in self.keys],
        }
