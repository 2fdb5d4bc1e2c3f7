"""Single-shot synthesis with input validation."""

import os

from tts_studio.constants import DEFAULT_API_VERSION, DEFAULT_SPEED, MAX_TEXT_LENGTH
from tts_studio.errors import ValidationError
from tts_studio.models import CustomVoice, SynthesisRequest


def validate_text(text: str, max_length: int = MAX_TEXT_LENGTH) -> str:
    """Return stripped text, or raise ValidationError if empty or too long."""
    text = text.strip()
    if not text:
        raise ValidationError("Please enter the text to synthesize")
    if len(text) > max_length:
        raise ValidationError(f"Text must not exceed {max_length} characters (got {len(text)})")
    return text


def _validate_speed(speed: float) -> None:
    if speed <= 0:
        raise ValidationError(f"Speed must be positive, got {speed}")


def synthesize_text(client, request: SynthesisRequest) -> bytes:
    """Synthesize one request with a built-in or custom voice.

    Validation happens before any network call.
    """
    text = validate_text(request.text)
    _validate_speed(request.speed)
    if isinstance(request.voice, CustomVoice) and not os.path.isfile(request.voice.file_path):
        raise ValidationError(f"Reference audio not found: {request.voice.file_path}")
    return client.synthesize(
        SynthesisRequest(text=text, voice=request.voice, speed=request.speed, api_version=request.api_version)
    )


def clone_voice(
    client,
    text: str,
    reference_audio: str | None,
    reference_text: str | None = None,
    speed: float = DEFAULT_SPEED,
    version: str = DEFAULT_API_VERSION,
) -> bytes:
    """Clone the voice of reference_audio speaking text.

    Without reference_text the backend clones across languages.
    """
    if not reference_audio:
        raise ValidationError("Please select a reference audio file")
    if not os.path.isfile(reference_audio):
        raise ValidationError(f"Reference audio not found: {reference_audio}")
    text = validate_text(text)
    _validate_speed(speed)
    return client.synthesize_clone(text, reference_audio, reference_text or None, speed, version)
