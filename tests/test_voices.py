"""Tests for voices module (Layer 1b)."""

import os

import pytest

from tts_studio.errors import ValidationError
from tts_studio.models import BuiltInVoice, CustomVoice
from tts_studio.voices import list_custom_voices, parse_voice_filename, probe_duration, resolve_voice


# --- Filename parsing ---

def test_parse_name_and_reference_text():
    """First dash separates name from reference text."""
    voice = parse_voice_filename("alice-hello world.wav", "voices")
    assert voice == CustomVoice(
        name="alice",
        reference_text="hello world",
        file_path=os.path.join("voices", "alice-hello world.wav"),
        file_name="alice-hello world.wav",
    )


def test_parse_reference_text_keeps_later_dashes():
    """Reference text may itself contain dashes."""
    voice = parse_voice_filename("bob-well - it is what it is.flac")
    assert voice.name == "bob"
    assert voice.reference_text == "well - it is what it is"


def test_parse_empty_reference_text():
    """A "name-.ext" file is a cross-lingual voice with no transcript."""
    voice = parse_voice_filename("carol-.m4a")
    assert voice.name == "carol"
    assert voice.reference_text == ""


@pytest.mark.parametrize("file_name", ["nodash.wav", "-orphan.wav", "alice-hi.txt", "alice-hi"])
def test_parse_skips_non_matching(file_name):
    """No separator, no name, or a non-audio extension → skipped."""
    assert parse_voice_filename(file_name) is None


def test_parse_extension_case_insensitive():
    assert parse_voice_filename("dave-hi.WAV") is not None


# --- Directory enumeration ---

def test_list_custom_voices(voices_dir):
    """Valid samples are listed sorted; stray files are skipped."""
    voices = list_custom_voices(str(voices_dir))
    assert [v.file_name for v in voices] == ["alice-hello world.wav", "bob-.wav"]
    assert voices[0].file_path == os.path.join(str(voices_dir), "alice-hello world.wav")


def test_list_custom_voices_missing_dir(tmp_path):
    assert list_custom_voices(str(tmp_path / "nope")) == []


def test_list_custom_voices_reads_fresh(voices_dir):
    """New samples appear without any cache invalidation."""
    assert len(list_custom_voices(str(voices_dir))) == 2
    (voices_dir / "erin-good morning.wav").write_bytes(b"RIFF")
    assert len(list_custom_voices(str(voices_dir))) == 3


def test_list_ignores_subdirectories(voices_dir):
    (voices_dir / "old-archive.wav").mkdir()
    assert "old-archive.wav" not in [v.file_name for v in list_custom_voices(str(voices_dir))]


# --- Selection decoding ---

def test_resolve_builtin():
    assert resolve_voice("female1") == BuiltInVoice("female1")


def test_resolve_custom(voices_dir):
    voice = resolve_voice("custom:alice-hello world.wav", str(voices_dir))
    assert isinstance(voice, CustomVoice)
    assert voice.reference_text == "hello world"


def test_resolve_unknown_custom(voices_dir):
    with pytest.raises(ValidationError, match="Custom voice not found"):
        resolve_voice("custom:zed-hi.wav", str(voices_dir))


def test_resolve_empty_selection():
    with pytest.raises(ValidationError):
        resolve_voice("  ")


# --- Duration probe ---

def test_probe_duration(tiny_wav):
    """A 100ms sample reports 0.1 seconds."""
    assert probe_duration(str(tiny_wav)) == 0.1


def test_probe_duration_unreadable(tmp_path):
    """Missing files yield None instead of raising."""
    assert probe_duration(str(tmp_path / "missing.wav")) is None
