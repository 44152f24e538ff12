# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# regfile/cli/help_texts.py
from __future__ import annotations

YAML_EXAMPLE = r"""
# regfile --config regfile.yaml exported.reg
format: sig
include_root: true
parser:
  # keep GUID braces in key paths
  extra_allowed_chars: "{}"
  decode_wide_strings: false

# Multiple configs merge left to right:
# regfile --config base.yaml --config local.yaml exported.reg
"""

FORMAT_SUMMARY = r"""
  json   one JSON document per run: files -> keys -> values
  sig    one line per value: <key path>\\<entry>=<type prefix><value>
  table  human-readable table (rich)
"""

EXIT_CODES = r"""
  0    ok
  2    input error (missing/empty file)
  3    no keys found
  4    value could not be decoded
  130  interrupted
"""
