# regfile/parser/__init__.py
from .decoder import decode, encode_type_prefix, to_export_line
from .export import parse
from .hives import resolve
from .model import FileEncoding, KeyAction, RegistryExport, RegistryKey, RegistryValue, RootHive, ValueKind
from .normalizer import detect_encoding, normalize
from .segmenter import KeyBlock, segment
from .values import extract

__all__ = [
    "decode",
    "encode_type_prefix",
    "to_export_line",
    "parse",
    "resolve",
    "FileEncoding",
    "KeyAction",
    "RegistryExport",
    "RegistryKey",
    "RegistryValue",
    "RootHive",
    "ValueKind",
    "detect_encoding",
    "normalize",
    "KeyBlock",
    "segment",
    "extract",
]
