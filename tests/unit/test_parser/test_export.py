# SPDX-License-Identifier: LGPL-3.0-or-later
"""End-to-end tests for parse(): text in, RegistryExport out."""
from __future__ import annotations

import codecs

import pytest

from regfile.config.settings import ParserSettings
from regfile.core.exceptions import DecodeError, InputError, NoKeysFoundError
from regfile.core.utils import U
from regfile.parser import parse
from regfile.parser.model import (
    FileEncoding,
    KeyAction,
    RegistryExport,
    RootHive,
    ValueKind,
)

from reg_samples import ANSI, GUID_KEY, MIXED, PUTTY

PUTTY_PATH = "Software\\SimonTatham\\PuTTY\\Sessions\\Default%20Settings"


@pytest.mark.unit
class TestSmallExports:

    def test_single_string_value(self):
        export = parse('Windows Registry Editor Version 5.00\r\n\r\n[HKEY_CURRENT_USER\\Software\\X]\r\n"A"="1"\r\n')
        assert export.encoding is FileEncoding.UTF8
        [key] = export.keys
        assert (key.root, key.path, key.action) == (RootHive.HKCU, "Software\\X", KeyAction.IMPORT)
        assert [(v.entry, v.value, v.kind) for v in key.values] == [("A", "1", ValueKind.REG_SZ)]

    def test_binary_and_dword(self):
        key = parse('[HKEY_CURRENT_USER\\Software\\X]\r\n"Bin"=hex:01,02,03,\r\n"Num"=dword:0000002a\r\n').keys[0]
        assert (key.get("Bin").value, key.get("Bin").kind) == ("01,02,03", ValueKind.REG_BINARY)
        assert (key.get("Num").value, key.get("Num").kind) == ("42", ValueKind.REG_DWORD)

    def test_delete_key_without_values(self):
        [key] = parse("[-HKEY_CURRENT_USER\\Software\\X]\r\n").keys
        assert key.action is KeyAction.DELETE
        assert key.values == ()


@pytest.mark.unit
class TestPuttyExport:

    def test_single_key(self):
        export = parse(PUTTY)
        assert export.encoding is FileEncoding.UTF8
        assert len(export) == 1

        key = export.keys[0]
        assert key.root is RootHive.HKCU
        assert key.path == PUTTY_PATH
        assert key.action is KeyAction.IMPORT
        assert len(key.values) == 8

    def test_values(self):
        key = parse(PUTTY).keys[0]
        assert key.values[0].entry == "Colour0"
        assert key.values[0].value == "131,148,150"
        assert key.values[0].kind is ValueKind.REG_SZ

        port = key.get("PortNumber")
        assert port.kind is ValueKind.REG_DWORD
        assert port.value == "22"
        assert port.raw == "dword:00000016"

        host = key.get("HostName")
        assert host.kind is ValueKind.REG_SZ
        assert host.value == ""

    def test_utf16_bytes_with_bom(self):
        data = codecs.BOM_UTF16_LE + PUTTY.encode("utf-16-le")
        export = parse(data)
        assert export.keys[0].path == PUTTY_PATH
        assert export.keys[0].get("PortNumber").value == "22"

    def test_content_is_normalized_text(self):
        assert parse(PUTTY).content == PUTTY


@pytest.mark.unit
class TestMixedExport:

    @pytest.fixture()
    def export(self):
        return parse(MIXED)

    def test_keys_in_source_order(self, export):
        assert [(k.root, k.path, k.action) for k in export] == [
            (RootHive.HKLM, "SOFTWARE\\Example", KeyAction.IMPORT),
            (RootHive.HKCU, "Software\\Old", KeyAction.DELETE),
            (RootHive.HKCR, ".txt", KeyAction.IMPORT),
        ]

    def test_every_value_kind(self, export):
        got = [(v.entry, v.kind, v.value) for v in export.keys[0].values]
        assert got == [
            ("", ValueKind.REG_SZ, "Default text"),
            ("Name", ValueKind.REG_SZ, "C:\\Program Files\\Example"),
            ("Count", ValueKind.REG_DWORD, "42"),
            ("Big", ValueKind.REG_QWORD, "42"),
            ("Blob", ValueKind.REG_BINARY, "01,02,03,04,05"),
            ("Path", ValueKind.REG_EXPAND_SZ, "3765"),
            ("List", ValueKind.REG_MULTI_SZ, "97\n98\n"),
            ("Link", ValueKind.REG_LINK, "65"),
            ("Nothing", ValueKind.REG_NONE, ""),
            ("Req", ValueKind.REG_RESOURCE_REQUIREMENTS_LIST, "01,02"),
        ]

    def test_delete_key_has_no_values(self, export):
        assert export.keys[1].values == ()

    def test_default_value(self, export):
        assert export.keys[2].default.value == "txtfile"
        assert export.keys[2].default.is_default
        assert export.keys[1].default is None

    def test_values_iterates_every_pair(self, export):
        pairs = list(export.values())
        assert len(pairs) == 11
        assert pairs[-1][0].path == ".txt"

    def test_values_carry_file_encoding(self, export):
        assert {v.encoding for _, v in export.values()} == {FileEncoding.UTF8}

    def test_find(self, export):
        assert export.find("HKEY_LOCAL_MACHINE\\SOFTWARE\\Example") is export.keys[0]
        assert export.find("software\\example") is export.keys[0]
        assert export.find("\\Software\\Old\\") is export.keys[1]
        assert export.find("Software\\Missing") is None

    def test_get_is_case_insensitive(self, export):
        assert export.keys[0].get("COUNT").value == "42"
        assert export.keys[0].get("nope") is None

    def test_to_dict(self, export):
        d = export.to_dict()
        assert d["encoding"] == "UTF8"
        assert d["filename"] is None
        assert d["keys"][1] == {
            "root": "HKCU",
            "path": "Software\\Old",
            "action": "delete",
            "values": [],
        }
        assert d["keys"][0]["values"][2] == {
            "entry": "Count",
            "value": "42",
            "kind": "REG_DWORD",
            "raw": "dword:0000002a",
        }

    def test_decode_wide_strings(self):
        key = parse(MIXED, settings=ParserSettings(decode_wide_strings=True)).keys[0]
        assert key.get("Path").value == "%A"
        assert key.get("List").value == "a\nb\n"
        assert key.get("Count").value == "42"

    def test_decoded_text_outside_bmp_serializes(self):
        content = '[HKEY_CURRENT_USER\\Software\\X]\r\n"Emoji"=hex(2):3d,d8,00,de,00,00\r\n'
        export = parse(content, settings=ParserSettings(decode_wide_strings=True))
        assert export.keys[0].get("Emoji").value == "\U0001F600"
        U.json_dump(export.to_dict()).encode("utf-8")


@pytest.mark.unit
class TestAnsiExport:

    def test_regedit4(self):
        export = parse(ANSI)
        assert export.encoding is FileEncoding.ANSI
        key = export.keys[0]
        assert key.path == "Software\\Legacy"
        assert key.get("Str").value == "abc"
        assert key.get("Exp").value == "3765"
        assert key.get("Exp").encoding is FileEncoding.ANSI


@pytest.mark.unit
class TestNormalization:

    def test_braces_are_stripped_by_default(self):
        key = parse(GUID_KEY).keys[0]
        assert key.path == "SYSTEM\\Class\\4D36E967-E325-11CE"
        assert key.get("Class").value == "DiskDrive"

    def test_extra_allowed_chars(self):
        key = parse(GUID_KEY, settings=ParserSettings(extra_allowed_chars="{}")).keys[0]
        assert key.path == "SYSTEM\\Class\\{4D36E967-E325-11CE}"

    def test_unknown_hive_is_kept(self):
        export = parse('[HKLM\\Software\\X]\r\n"A"="1"\r\n')
        assert export.keys[0].root is RootHive.UNKNOWN
        assert export.keys[0].path == ""
        assert export.keys[0].get("A").value == "1"


@pytest.mark.unit
class TestErrors:

    @pytest.mark.parametrize("content", [None, "", b""])
    def test_no_content(self, content):
        with pytest.raises(InputError):
            parse(content)

    @pytest.mark.parametrize(
        "content",
        [
            "Windows Registry Editor Version 5.00\r\n\r\n",
            '"A"="1"\r\n',
            "   ",
        ],
    )
    def test_no_keys(self, content):
        with pytest.raises(NoKeysFoundError) as ei:
            parse(content)
        assert ei.value.code == 3

    def test_no_keys_reports_filename(self):
        with pytest.raises(NoKeysFoundError) as ei:
            parse("REGEDIT4\r\n", filename="empty.reg")
        assert ei.value.context == {"filename": "empty.reg"}

    def test_decode_error_names_key_and_entry(self):
        with pytest.raises(DecodeError) as ei:
            parse('[HKEY_USERS\\x]\r\n"N"=dword:zz\r\n')
        err = ei.value
        assert err.token == "dword:zz"
        assert err.context["key"] == "HKEY_USERS\\x"
        assert err.context["entry"] == "N"

    def test_unknown_hex_type(self):
        with pytest.raises(DecodeError):
            parse('[HKEY_USERS\\x]\r\n"N"=hex(4):2a,00,00,00\r\n')

    def test_export_requires_keys(self):
        with pytest.raises(NoKeysFoundError):
            RegistryExport(content="", encoding=FileEncoding.UTF8, keys=())
