# topmark:header:start
#
#   project      : DiagFmt
#   file         : test_converter.py
#   file_relpath : tests/unit/test_converter.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Unit tests for the external converters (subprocess and library are mocked)."""

from __future__ import annotations

import subprocess
from typing import Any

import pytest

from diagfmt import converter as conv_mod
from diagfmt.config.types import ConverterBackend
from diagfmt.converter import (
    NO_CBOR2DIAG_ERR,
    ConversionError,
    ConverterNotFoundError,
    PythonConverter,
    RubyConverter,
    convert,
    get_converter,
)
from tests.conftest import make_config

FAKE_PATH = "/opt/gems/bin/cbor2diag.rb"


class FakeRun:
    """Records ``subprocess.run`` calls and returns a canned result."""

    def __init__(self, returncode: int = 0, stdout: bytes = b"", stderr: bytes = b"") -> None:
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr
        self.calls: list[tuple[list[str], dict[str, Any]]] = []

    def __call__(self, argv: list[str], **kwargs: Any) -> subprocess.CompletedProcess[bytes]:
        self.calls.append((argv, kwargs))
        return subprocess.CompletedProcess(argv, self.returncode, self.stdout, self.stderr)


@pytest.fixture
def found(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(conv_mod.shutil, "which", lambda name: FAKE_PATH)


def test_missing_executable(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(conv_mod.shutil, "which", lambda name: None)
    with pytest.raises(ConverterNotFoundError) as excinfo:
        RubyConverter().convert(b"\x01")
    assert str(excinfo.value) == NO_CBOR2DIAG_ERR.format(executable="cbor2diag.rb")


def test_ruby_pipes_bytes_on_stdin(found: None, monkeypatch: pytest.MonkeyPatch) -> None:
    fake = FakeRun(stdout=b'{"a": 1}\n')
    monkeypatch.setattr(conv_mod.subprocess, "run", fake)

    out = RubyConverter(timeout=5.0).convert(b"\xa1\x61\x61\x01")

    assert out == '{"a": 1}'
    argv, kwargs = fake.calls[0]
    assert argv == [FAKE_PATH]
    assert kwargs["input"] == b"\xa1\x61\x61\x01"
    assert kwargs["timeout"] == 5.0


def test_ruby_embedded_flag(found: None, monkeypatch: pytest.MonkeyPatch) -> None:
    fake = FakeRun(stdout=b"<<1>>")
    monkeypatch.setattr(conv_mod.subprocess, "run", fake)

    RubyConverter().convert(b"\x41\x01", embedded=True)

    assert fake.calls[0][0] == [FAKE_PATH, "-e"]


def test_ruby_nonzero_exit(found: None, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(conv_mod.subprocess, "run", FakeRun(returncode=1, stderr=b"bad cbor\n"))
    with pytest.raises(ConversionError, match=r"exit status 1\): bad cbor"):
        RubyConverter().convert(b"\xff")


def test_ruby_timeout(found: None, monkeypatch: pytest.MonkeyPatch) -> None:
    def boom(argv: list[str], **kwargs: Any) -> None:
        raise subprocess.TimeoutExpired(argv, kwargs["timeout"])

    monkeypatch.setattr(conv_mod.subprocess, "run", boom)
    with pytest.raises(ConversionError, match="timed out after 0.5"):
        RubyConverter(timeout=0.5).convert(b"\x01")


def test_ruby_os_error(found: None, monkeypatch: pytest.MonkeyPatch) -> None:
    def boom(argv: list[str], **kwargs: Any) -> None:
        raise PermissionError("denied")

    monkeypatch.setattr(conv_mod.subprocess, "run", boom)
    with pytest.raises(ConversionError, match="failed to execute"):
        RubyConverter().convert(b"\x01")


def test_ruby_non_utf8_output(found: None, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(conv_mod.subprocess, "run", FakeRun(stdout=b"\xff\xfe"))
    with pytest.raises(ConversionError, match="not valid UTF-8"):
        RubyConverter().convert(b"\x01")


def test_python_backend_uses_cbor_diag(monkeypatch: pytest.MonkeyPatch) -> None:
    cbor_diag = pytest.importorskip("cbor_diag")
    calls: list[tuple[bytes, bool]] = []

    def fake(data: bytes, pretty: bool = True) -> str:
        calls.append((data, pretty))
        return "[1, 2]"

    monkeypatch.setattr(cbor_diag, "cbor2diag", fake)
    assert PythonConverter().convert(b"\x82\x01\x02") == "[1, 2]"
    assert calls == [(b"\x82\x01\x02", False)]


def test_python_backend_wraps_value_error(monkeypatch: pytest.MonkeyPatch) -> None:
    cbor_diag = pytest.importorskip("cbor_diag")

    def fake(data: bytes, pretty: bool = True) -> str:
        raise ValueError("truncated")

    monkeypatch.setattr(cbor_diag, "cbor2diag", fake)
    with pytest.raises(ConversionError, match="truncated"):
        PythonConverter().convert(b"\x82")


def test_get_converter_follows_config() -> None:
    assert isinstance(get_converter(), RubyConverter)
    assert isinstance(get_converter(make_config(backend=ConverterBackend.PYTHON)), PythonConverter)
    ruby = get_converter(make_config(executable="/x/cbor2diag.rb", timeout=3.0))
    assert ruby == RubyConverter(executable="/x/cbor2diag.rb", timeout=3.0)


def test_convert_uses_configured_executable(monkeypatch: pytest.MonkeyPatch) -> None:
    seen: list[str] = []

    def which(name: str) -> str:
        seen.append(name)
        return name

    monkeypatch.setattr(conv_mod.shutil, "which", which)
    monkeypatch.setattr(conv_mod.subprocess, "run", FakeRun(stdout=b"1"))
    assert convert(b"\x01", config=make_config(executable="my-cbor2diag")) == "1"
    assert seen == ["my-cbor2diag"]
