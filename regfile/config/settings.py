# SPDX-License-Identifier: LGPL-3.0-or-later
# regfile/config/settings.py
"""Parser knobs that can be driven from YAML/JSON config or CLI flags."""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Dict, Mapping, Optional


DEFAULT_PARSER_CONFIG: Dict[str, Any] = {
    # Characters kept by the content normalizer on top of the built-in allow-set.
    # Example: "{}" keeps GUID braces in key paths.
    "extra_allowed_chars": "",
    # Render wide-string hex values (hex(2)/hex(6)/hex(7)) as text instead of
    # decimal code units.
    "decode_wide_strings": False,
}


def _as_bool(v: Any) -> bool:
    if isinstance(v, str):
        return v.strip().lower() in ("1", "true", "yes", "on")
    return bool(v)


@dataclass(frozen=True)
class ParserSettings:
    extra_allowed_chars: str = ""
    decode_wide_strings: bool = False

    @classmethod
    def from_mapping(cls, conf: Optional[Mapping[str, Any]]) -> "ParserSettings":
        """
        Build settings from a merged config mapping.

        Accepts either a `parser:` section or the same keys at top level;
        the section wins. Unknown keys are ignored.
        """
        if not conf:
            return cls()

        merged: Dict[str, Any] = dict(DEFAULT_PARSER_CONFIG)
        names = {f.name for f in fields(cls)}
        merged.update({k: v for k, v in conf.items() if k in names and v is not None})
        section = conf.get("parser")
        if isinstance(section, Mapping):
            section = {str(k).replace("-", "_"): v for k, v in section.items()}
            merged.update({k: v for k, v in section.items() if k in names and v is not None})

        return cls(
            extra_allowed_chars=str(merged["extra_allowed_chars"] or ""),
            decode_wide_strings=_as_bool(merged["decode_wide_strings"]),
        )
