# regfile/config/__init__.py
from .settings import DEFAULT_PARSER_CONFIG, ParserSettings

__all__ = ["DEFAULT_PARSER_CONFIG", "ParserSettings"]
