# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# regfile/cli/args.py
from __future__ import annotations

import argparse
import sys
from typing import Any, Dict, Optional, Sequence, Tuple

from ..config.config_loader import Config
from ..core.logger import Log, c
from ..core.utils import U
from .help_texts import EXIT_CODES, FORMAT_SUMMARY, YAML_EXAMPLE

OUTPUT_FORMATS = ("json", "sig", "table")


class HelpFormatter(argparse.RawDescriptionHelpFormatter, argparse.ArgumentDefaultsHelpFormatter):
    """Combines raw description formatting with default value display in help."""


def _build_epilog() -> str:
    return (
        c("Output formats:\n", "cyan", ["bold"])
        + c(FORMAT_SUMMARY, "cyan")
        + c("\nYAML example:\n", "cyan", ["bold"])
        + c(YAML_EXAMPLE, "cyan")
        + c("\nExit codes:\n", "cyan", ["bold"])
        + c(EXIT_CODES, "cyan")
    )


def _add_global_config_logging(p: argparse.ArgumentParser) -> None:
    from .. import __version__

    p.add_argument(
        "--config",
        action="append",
        default=[],
        help="YAML/JSON config file (repeatable; later overrides earlier).",
    )
    p.add_argument("--dump-config", action="store_true", help="Print merged config and exit.")
    p.add_argument("--dump-args", action="store_true", help="Print final parsed args and exit.")
    p.add_argument("--version", action="version", version=__version__)
    p.add_argument("-v", "--verbose", action="count", default=0, help="Verbosity: -v, -vv, -vvv (trace)")
    p.add_argument("-q", "--quiet", action="count", default=0, help="Only print errors.")
    p.add_argument("--log-file", dest="log_file", default=None, help="Write logs to file.")
    p.add_argument("--json-logs", dest="json_logs", action="store_true", help="Emit logs as NDJSON.")


def _add_output(p: argparse.ArgumentParser) -> None:
    p.add_argument("--format", dest="format", default="json", choices=OUTPUT_FORMATS, help="Output format.")
    p.add_argument(
        "--include-root",
        dest="include_root",
        action="store_true",
        help="Prefix key paths with the hive literal in sig/table output.",
    )
    p.add_argument("-o", "--output", dest="output", default=None, help="Write output to file instead of stdout.")


def _add_parser_knobs(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--decode-wide-strings",
        dest="decode_wide_strings",
        action="store_true",
        help="Render hex(2)/hex(6)/hex(7) values as text instead of decimal code units.",
    )
    p.add_argument(
        "--extra-chars",
        dest="extra_allowed_chars",
        default="",
        help="Extra characters the normalizer keeps (e.g. '{}' for GUID key paths).",
    )
    p.add_argument(
        "--keep-going",
        dest="keep_going",
        action="store_true",
        help="Report failing files and continue with the rest.",
    )


def _add_input_paths(p: argparse.ArgumentParser) -> None:
    p.add_argument("files", nargs="*", metavar="FILE", help=".reg files to parse.")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="regfile",
        description=c("regfile: Windows registry export (.reg) parser", "green", ["bold"]),
        formatter_class=HelpFormatter,
        epilog=_build_epilog(),
    )
    _add_global_config_logging(p)
    _add_output(p)
    _add_parser_knobs(p)
    _add_input_paths(p)
    return p


def _build_preparser() -> argparse.ArgumentParser:
    pre = argparse.ArgumentParser(add_help=False)
    pre.add_argument("--config", action="append", default=[])
    pre.add_argument("-v", "--verbose", action="count", default=0)
    pre.add_argument("-q", "--quiet", action="count", default=0)
    pre.add_argument("--log-file", dest="log_file", default=None)
    pre.add_argument("--json-logs", dest="json_logs", action="store_true")
    pre.add_argument("--dump-config", action="store_true")
    pre.add_argument("--dump-args", action="store_true")
    return pre


def _load_merged_config(logger: Any, cfgs: Sequence[str]) -> Dict[str, Any]:
    if not cfgs:
        return {}
    return Config.load_many(logger, Config.expand_configs(logger, list(cfgs)))


def parse_args_with_config(
    argv: Optional[Sequence[str]] = None,
    logger: Any = None,
) -> Tuple[argparse.Namespace, Dict[str, Any], Any]:
    """
    Flow:
      Phase 0: parse ONLY global flags needed to locate config/logging
      Phase 1: load+merge config files
      Phase 2: apply config as defaults onto the parser
      Phase 3: full parse to get final args
      Phase 4: validate
    """
    if argv is None:
        argv = sys.argv[1:]
    argv = list(argv)

    parser = build_parser()
    args0, _rest = _build_preparser().parse_known_args(argv)

    if logger is None:
        logger = Log.setup(args0.verbose, args0.log_file, quiet=args0.quiet, json_logs=args0.json_logs)

    conf = _load_merged_config(logger, args0.config or [])

    if args0.dump_config:
        print(U.json_dump(conf, sort_keys=True))
        raise SystemExit(0)

    Config.apply_as_defaults(logger, parser, conf)
    args = parser.parse_args(argv)

    if args0.dump_args:
        print(U.json_dump(vars(args), sort_keys=True))
        raise SystemExit(0)

    if not args.files:
        U.die(logger, "No input files given (pass FILE arguments or `files:` in config).", 2)

    return args, conf, logger
