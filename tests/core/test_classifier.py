from __future__ import annotations

from pathlib import Path

import pytest

from mcp_error_scanner.core import classifier
from mcp_error_scanner.core.classifier import has_text_extension, is_text_file, looks_like_text


@pytest.mark.parametrize("name", ["app.log", "APP.LOG", "notes.Txt", "settings.yaml", "x.env"])
def test_known_extension_is_text_even_with_binary_content(tmp_path: Path, name: str, binary_blob: bytes) -> None:
    path = tmp_path / name
    path.write_bytes(binary_blob)
    assert is_text_file(path) is True


def test_known_extension_skips_content_read(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, binary_blob: bytes
) -> None:
    path = tmp_path / "garbage.log"
    path.write_bytes(binary_blob)

    def _boom(*args, **kwargs):
        raise AssertionError("content must not be read")

    monkeypatch.setattr(classifier.Path, "open", _boom)
    assert is_text_file(path) is True


def test_binary_without_extension_is_not_text(tmp_path: Path) -> None:
    path = tmp_path / "blob"
    path.write_bytes(b"\x00\x01\x02" * 50)
    assert is_text_file(path) is False


def test_non_ascii_heavy_file_is_not_text(tmp_path: Path, binary_blob: bytes) -> None:
    path = tmp_path / "image.dat"
    path.write_bytes(binary_blob)
    assert is_text_file(path) is False


def test_plain_text_without_extension_is_text(tmp_path: Path) -> None:
    path = tmp_path / "syslog"
    path.write_text("Dec 30 08:12:04 host kernel: error reading sector\n", encoding="utf-8")
    assert is_text_file(path) is True


@pytest.mark.parametrize("name", ["empty.txt", "empty"])
def test_empty_file_is_not_text(tmp_path: Path, name: str) -> None:
    path = tmp_path / name
    path.touch()
    assert is_text_file(path) is False


def test_missing_file_is_not_text(tmp_path: Path) -> None:
    assert is_text_file(tmp_path / "missing") is False


def test_only_first_512_bytes_are_sniffed(tmp_path: Path) -> None:
    path = tmp_path / "mixed"
    path.write_bytes(b"a" * 512 + b"\x00" * 4096)
    assert is_text_file(path) is True


def test_looks_like_text_thresholds() -> None:
    assert looks_like_text(b"") is False
    # exactly 1% NUL is too many
    assert looks_like_text(b"\x00" + b"a" * 99) is False
    assert looks_like_text(b"\x00" + b"a" * 199) is True
    # exactly 30% high bytes is too many
    assert looks_like_text(b"\xc3" * 30 + b"a" * 70) is False
    assert looks_like_text(b"\xc3" * 29 + b"a" * 71) is True


def test_has_text_extension() -> None:
    assert has_text_extension("a/b/c.LOG")
    assert not has_text_extension("a/b/c")
    assert not has_text_extension("a/b/c.bin")
    assert not has_text_extension("a/b/.log")
