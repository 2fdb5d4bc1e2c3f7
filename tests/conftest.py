"""Shared fixtures for tts-studio tests."""

import os

import pytest
from pydub import AudioSegment

from tts_studio.errors import HTTPError


class FakeClient:
    """Stand-in for SynthesisClient that records every call.

    Call n (0-based) returns b"audio-n|" repeated n + 1 times, or raises
    `error` when n == fail_at.
    """

    def __init__(self, fail_at=None, error=None):
        self.calls = []
        self.fail_at = fail_at
        self.error = error or HTTPError(500, "Internal Server Error")

    def _respond(self, call):
        index = len(self.calls)
        self.calls.append(call)
        if index == self.fail_at:
            raise self.error
        return f"audio-{index}|".encode() * (index + 1)

    def synthesize_builtin(self, text, voice_name, speed, version):
        return self._respond({
            "kind": "builtin", "text": text, "voice": voice_name,
            "speed": speed, "version": version,
        })

    def synthesize_clone(self, text, reference_audio, reference_text, speed, version):
        return self._respond({
            "kind": "clone", "text": text, "reference_audio": reference_audio,
            "reference_exists": os.path.exists(reference_audio),
            "reference_text": reference_text, "speed": speed, "version": version,
        })


@pytest.fixture
def tiny_wav(tmp_path):
    """Generate a 100ms silent WAV for testing."""
    path = tmp_path / "sample.wav"
    AudioSegment.silent(duration=100).export(str(path), format="wav")
    return path


@pytest.fixture
def voices_dir(tmp_path):
    """Voice sample directory with two valid custom voices and one stray file."""
    directory = tmp_path / "voices"
    directory.mkdir()
    for name in ["alice-hello world.wav", "bob-.wav", "notes.wav"]:
        AudioSegment.silent(duration=200).export(str(directory / name), format="wav")
    return directory


@pytest.fixture
def fake_client():
    return FakeClient()
