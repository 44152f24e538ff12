# SPDX-License-Identifier: LGPL-3.0-or-later
"""Tests for the error hierarchy and CLI formatting."""
from __future__ import annotations

import pytest

from regfile.core.exceptions import (
    DecodeError,
    Fatal,
    InputError,
    NoKeysFoundError,
    RegFileError,
    decode_error,
    format_exception_for_cli,
    wrap_fatal,
)


@pytest.mark.unit
class TestExceptionHierarchy:
    """Error classes, default codes and messages."""

    def test_base_exception_creation(self):
        err = RegFileError(code=1, msg="Test error")

        assert err.code == 1
        assert err.msg == "Test error"
        assert err.cause is None
        assert err.context == {}

    @pytest.mark.parametrize(
        "cls, code",
        [(InputError, 2), (NoKeysFoundError, 3), (DecodeError, 4)],
    )
    def test_parser_errors_have_distinct_codes(self, cls, code):
        err = cls()
        assert isinstance(err, RegFileError)
        assert err.code == code
        assert err.msg

    def test_no_keys_default_message(self):
        assert str(NoKeysFoundError()) == "no keys found to process"

    def test_fatal_exception(self):
        err = Fatal(code=2, msg="Fatal error")

        assert isinstance(err, RegFileError)
        assert err.code == 2
        assert err.msg == "Fatal error"

    @pytest.mark.parametrize("code, expected", [(-3, 1), (999, 255), ("7", 7), ("x", 1)])
    def test_exit_code_is_clamped(self, code, expected):
        assert RegFileError(code=code).code == expected

    def test_message_is_one_line(self):
        assert RegFileError(msg="a\r\n  b\n c").msg == "a b c"

    def test_exception_with_context(self):
        err = RegFileError(code=1, msg="Error").with_context(file="a.reg", key="HKEY_USERS\\x")

        assert err.context["file"] == "a.reg"
        assert err.context["key"] == "HKEY_USERS\\x"

    def test_exception_with_cause(self):
        cause = ValueError("Original error")
        err = RegFileError(code=1, msg="Wrapper", cause=cause)

        assert err.cause is cause

    def test_with_context_after_context_cleared(self):
        err = DecodeError()
        err.context = None

        assert err.with_context(entry="N") is err
        assert err.context == {"entry": "N"}

    def test_can_be_raised_and_caught_as_exception(self):
        with pytest.raises(RegFileError) as ei:
            raise DecodeError(msg="boom")
        assert ei.value.args == ("boom",)


@pytest.mark.unit
class TestHelpers:

    def test_decode_error_keeps_token(self):
        cause = ValueError("bad")
        err = decode_error("dword:zz", "not a number", cause)

        assert isinstance(err, DecodeError)
        assert err.token == "dword:zz"
        assert err.cause is cause
        assert "not a number" in err.msg

    def test_token_is_none_without_context(self):
        assert DecodeError().token is None

    def test_wrap_fatal(self):
        err = wrap_fatal("cannot write", OSError("disk"), code=5, path="/x")

        assert isinstance(err, Fatal)
        assert err.code == 5
        assert err.context == {"path": "/x"}

    def test_to_dict(self):
        err = decode_error("hex(4):00", "unsupported", ValueError("v"))
        d = err.to_dict(include_cause=True)

        assert d["type"] == "DecodeError"
        assert d["code"] == 4
        assert d["context"] == {"token": "hex(4):00"}
        assert d["cause"] == {"type": "ValueError", "message": "v"}
        assert "cause" not in err.to_dict()


@pytest.mark.unit
class TestFormatForCli:

    def test_verbosity_levels(self):
        err = InputError(msg="file not found: x.reg", cause=FileNotFoundError("x.reg"), context={"path": "x.reg"})

        assert format_exception_for_cli(err) == "file not found: x.reg"
        assert format_exception_for_cli(err, verbose=1) == "file not found: x.reg [path='x.reg']"
        assert "(cause: FileNotFoundError: x.reg)" in format_exception_for_cli(err, verbose=2)

    def test_plain_exception(self):
        assert format_exception_for_cli(KeyError("k")) == "'k'"
        assert format_exception_for_cli(RuntimeError(), verbose=0) == "RuntimeError"
        assert format_exception_for_cli(RuntimeError("x"), verbose=2) == "RuntimeError: x"
