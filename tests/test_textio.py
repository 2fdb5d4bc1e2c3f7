"""Tests for file helpers and encoding detection (Layer 0)."""

from unittest.mock import patch

import pytest

from tts_studio.errors import FileIOError
from tts_studio.textio import (
    decode_text,
    delete_file,
    ensure_dir,
    read_bytes,
    read_text_file,
    write_bytes,
)

CHINESE = "今天天气很好。我们去公园散步吧！"


def test_write_creates_parent_dirs(tmp_path):
    path = tmp_path / "a" / "b" / "out.wav"
    write_bytes(str(path), b"data")
    assert read_bytes(str(path)) == b"data"


def test_read_missing_file(tmp_path):
    with pytest.raises(FileIOError, match="Cannot read"):
        read_bytes(str(tmp_path / "missing.wav"))


def test_delete_is_idempotent(tmp_path):
    path = tmp_path / "seg.wav"
    path.write_bytes(b"x")
    delete_file(str(path))
    delete_file(str(path))
    assert not path.exists()


def test_ensure_dir_is_idempotent(tmp_path):
    target = tmp_path / "x" / "y"
    assert ensure_dir(str(target)) == str(target)
    ensure_dir(str(target))
    assert target.is_dir()


def test_read_utf8_text(tmp_path):
    path = tmp_path / "story.txt"
    path.write_text("Hello. " + CHINESE, encoding="utf-8")
    content, _ = read_text_file(str(path))
    assert content == "Hello. " + CHINESE


def test_read_utf8_bom(tmp_path):
    """A UTF-8 byte order mark is not part of the text."""
    path = tmp_path / "bom.txt"
    path.write_bytes(("\ufeff" + CHINESE).encode("utf-8"))
    content, _ = read_text_file(str(path))
    assert content == CHINESE


@patch("tts_studio.textio.chardet.detect", return_value={"encoding": "GB2312"})
def test_decode_detected_encoding(mock_detect):
    """Non-UTF-8 text is transcoded with the detected codec."""
    content, encoding = decode_text(CHINESE.encode("gb2312"))
    assert content == CHINESE
    assert encoding == "GB2312"


@patch("tts_studio.textio.chardet.detect", return_value={"encoding": "x-unknown-codec"})
def test_decode_falls_back_to_gbk(mock_detect):
    """An unusable detected codec falls back to GBK."""
    content, _ = decode_text(CHINESE.encode("gbk"))
    assert content == CHINESE


@patch("tts_studio.textio.chardet.detect", return_value={"encoding": None})
def test_decode_undetected_uses_utf8(mock_detect):
    content, encoding = decode_text("plain".encode("utf-8"))
    assert content == "plain"
    assert encoding is None
