# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# regfile/__main__.py
from __future__ import annotations

import argparse
import logging
import sys
import traceback
from pathlib import Path
from typing import List, Optional, Sequence

from .cli.args import parse_args_with_config
from .cli.render import render
from .config.settings import ParserSettings
from .core.exceptions import Fatal, RegFileError, format_exception_for_cli, wrap_fatal
from .core.logger import Log
from .parser.model import RegistryExport
from .source import load


def _print_stderr(msg: str) -> None:
    print(msg, file=sys.stderr)


def _settings_from_args(args: argparse.Namespace) -> ParserSettings:
    return ParserSettings.from_mapping(
        {
            "extra_allowed_chars": args.extra_allowed_chars,
            "decode_wide_strings": args.decode_wide_strings,
        }
    )


def run(logger: logging.Logger, args: argparse.Namespace) -> int:
    """Parse every input file and emit the requested output. Returns the exit code."""
    settings = _settings_from_args(args)
    files = [args.files] if isinstance(args.files, str) else list(args.files)

    exports: List[RegistryExport] = []
    rc = 0
    for f in files:
        log = Log.bind(logger, file=str(f))
        try:
            export = load(f, settings=settings)
        except RegFileError as e:
            if not args.keep_going:
                raise
            Log.fail(log, format_exception_for_cli(e, verbose=args.verbose))
            rc = rc or e.code
            continue
        Log.ok(log, "Parsed", keys=len(export), encoding=export.encoding.value)
        exports.append(export)

    if exports:
        text = render(exports, args.format, include_root=args.include_root)
        if args.output:
            out = Path(args.output).expanduser()
            try:
                out.parent.mkdir(parents=True, exist_ok=True)
                out.write_text(text + "\n", encoding="utf-8")
            except OSError as e:
                raise wrap_fatal(f"cannot write {out}: {e.strerror or e}", e, path=str(out)) from e
            Log.ok(logger, f"Wrote {out}")
        else:
            print(text)
    return rc


def main(argv: Optional[Sequence[str]] = None) -> None:
    # Phase 1: parse (Fatal can happen here)
    try:
        args, _conf, logger = parse_args_with_config(argv)
    except Fatal as e:
        # Already logged by U.die.
        raise SystemExit(e.code)
    except KeyboardInterrupt:
        _print_stderr("Interrupted by user (Ctrl+C).")
        raise SystemExit(130)

    # Phase 2: parse files
    try:
        rc = run(logger, args)
    except RegFileError as e:
        Log.fail(logger, format_exception_for_cli(e, verbose=args.verbose))
        rc = e.code
    except KeyboardInterrupt:
        logger.warning("Interrupted by user (Ctrl+C).")
        rc = 130
    except Exception as e:
        logger.error("💥 UNHANDLED %s: %s", type(e).__name__, e)
        logger.debug(traceback.format_exc())
        rc = 1

    raise SystemExit(rc)


if __name__ == "__main__":
    main()
