# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# regfile/core/utils.py
from __future__ import annotations

import enum
import json
import logging
from typing import Any

from .exceptions import Fatal


def _json_default(obj: Any) -> Any:
    if isinstance(obj, enum.Enum):
        return obj.name
    to_dict = getattr(obj, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    return str(obj)


class U:
    @staticmethod
    def die(logger: logging.Logger, msg: str, code: int = 1) -> None:
        logger.error(msg)
        raise Fatal(code, msg)

    @staticmethod
    def json_dump(obj: Any, *, indent: int = 2, sort_keys: bool = False) -> str:
        return json.dumps(obj, indent=indent, sort_keys=sort_keys, ensure_ascii=False, default=_json_default)

    @staticmethod
    def one_line(text: str, limit: int = 80) -> str:
        """Collapse whitespace (multi-string line breaks included) for table cells."""
        s = " ".join((text or "").split())
        return s if len(s) <= limit else s[: limit - 1] + "…"

    @staticmethod
    def plural(n: int, word: str) -> str:
        return f"{n} {word}" if n == 1 else f"{n} {word}s"
