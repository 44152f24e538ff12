# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# regfile/config/config_loader.py
"""
YAML/JSON config loading for the CLI.

Flow:
  - expand_configs: resolve paths (globs allowed), keep order, drop duplicates
  - load_many: read each file, deep-merge (later overrides earlier)
  - apply_as_defaults: push config values into argparse defaults so CLI flags win
"""
from __future__ import annotations

import argparse
import glob
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Sequence

import yaml

from ..core.utils import U


def _read_structured_file(path: Path) -> Dict[str, Any]:
    """
    Read a JSON/YAML file into a dict.

    Supported:
      - *.json
      - *.yml / *.yaml
      - no suffix: JSON first, then YAML
    """
    sfx = path.suffix.lower()
    raw = path.read_text(encoding="utf-8", errors="replace")
    if sfx == ".json":
        parsed = json.loads(raw)
    elif sfx in (".yml", ".yaml"):
        parsed = yaml.safe_load(raw)
    else:
        try:
            parsed = json.loads(raw)
        except json.JSONDecodeError:
            parsed = yaml.safe_load(raw)
    if parsed is None:
        return {}
    if not isinstance(parsed, dict):
        raise ValueError("top-level config must be a mapping/object (dict)")
    return parsed


def _deep_merge(base: Dict[str, Any], extra: Dict[str, Any]) -> Dict[str, Any]:
    out = dict(base)
    for k, v in extra.items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = _deep_merge(out[k], v)
        else:
            out[k] = v
    return out


def _normalize_keys(conf: Dict[str, Any]) -> Dict[str, Any]:
    # YAML users write `log-file`, argparse dests are `log_file`.
    return {str(k).replace("-", "_"): v for k, v in conf.items()}


class Config:
    @staticmethod
    def expand_configs(logger: logging.Logger, cfgs: Sequence[str]) -> List[Path]:
        out: List[Path] = []
        seen = set()
        for item in cfgs:
            p = Path(item).expanduser()
            matches = sorted(glob.glob(str(p))) if glob.has_magic(str(p)) else [str(p)]
            if not matches:
                U.die(logger, f"Config pattern matched nothing: {item}", 2)
            for m in matches:
                mp = Path(m).resolve()
                if mp in seen:
                    continue
                if not mp.is_file():
                    U.die(logger, f"Config file not found: {mp}", 2)
                seen.add(mp)
                out.append(mp)
        return out

    @staticmethod
    def load_many(logger: logging.Logger, paths: Sequence[Path]) -> Dict[str, Any]:
        merged: Dict[str, Any] = {}
        for p in paths:
            try:
                conf = _read_structured_file(Path(p))
            except (OSError, ValueError, yaml.YAMLError) as e:
                U.die(logger, f"Failed to load config {p}: {e}", 2)
            logger.debug("Loaded config %s (%d keys)", p, len(conf))
            merged = _deep_merge(merged, _normalize_keys(conf))
        return merged

    @staticmethod
    def apply_as_defaults(logger: logging.Logger, parser: argparse.ArgumentParser, conf: Dict[str, Any]) -> None:
        """
        Every config key that matches an argparse dest becomes that option's default.
        Keys under `parser:` are flattened first so they can drive parser flags too.
        """
        flat = dict(conf)
        section = conf.get("parser")
        if isinstance(section, dict):
            flat.update(_normalize_keys(section))

        dests = {a.dest for a in parser._actions}
        defaults = {k: v for k, v in flat.items() if k in dests}
        unknown = sorted(k for k in flat if k not in dests and k != "parser")
        if unknown:
            logger.debug("Ignoring unknown config keys: %s", ", ".join(unknown))
        if defaults:
            parser.set_defaults(**defaults)
