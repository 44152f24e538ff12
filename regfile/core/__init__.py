# regfile/core/__init__.py
from .exceptions import DecodeError, Fatal, InputError, NoKeysFoundError, RegFileError
from .logger import Log

__all__ = ["DecodeError", "Fatal", "InputError", "NoKeysFoundError", "RegFileError", "Log"]
