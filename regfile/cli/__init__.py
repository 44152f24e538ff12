# regfile/cli/__init__.py
from .args import build_parser, parse_args_with_config
from .render import render

__all__ = ["build_parser", "parse_args_with_config", "render"]
