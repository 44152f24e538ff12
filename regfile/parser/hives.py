# SPDX-License-Identifier: LGPL-3.0-or-later
# regfile/parser/hives.py
from __future__ import annotations

from typing import NamedTuple, Tuple

from .model import KeyAction, RootHive

# Order matters only for first-match-wins; no literal is a prefix of another.
HIVE_PREFIXES: Tuple[Tuple[str, RootHive], ...] = (
    ("HKEY_LOCAL_MACHINE", RootHive.HKLM),
    ("HKEY_CLASSES_ROOT", RootHive.HKCR),
    ("HKEY_USERS", RootHive.HKU),
    ("HKEY_CURRENT_CONFIG", RootHive.HKCC),
    ("HKEY_CURRENT_USER", RootHive.HKCU),
    ("HKEY_PERFORMANCE_DATA", RootHive.HKPD),
    ("HKEY_DYN_DATA", RootHive.HKDD),
)


class HiveMatch(NamedTuple):
    root: RootHive
    path: str
    action: KeyAction


def resolve(header: str) -> HiveMatch:
    """
    Map a key header (brackets already removed) to its hive, the path below
    the hive, and the import/delete action.

    "-HKEY_CURRENT_USER\\Software\\X" -> (HKCU, "Software\\X", DELETE).
    Unrecognized hives give (UNKNOWN, "", action).
    """
    key = (header or "").strip()
    action = KeyAction.IMPORT
    if key.startswith("-"):
        action = KeyAction.DELETE
        key = key[1:]

    for literal, root in HIVE_PREFIXES:
        if key.startswith(literal):
            rest = key[len(literal):]
            if rest.startswith("\\"):
                rest = rest[1:]
            return HiveMatch(root, rest, action)

    return HiveMatch(RootHive.UNKNOWN, "", action)
