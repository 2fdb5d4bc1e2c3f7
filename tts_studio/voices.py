"""Custom voice discovery and voice selection decoding."""

import logging
import os

from pydub import AudioSegment
from pydub.exceptions import CouldntDecodeError

from tts_studio.constants import AUDIO_EXTENSIONS, CUSTOM_VOICE_PREFIX, VOICES_DIR
from tts_studio.errors import ValidationError
from tts_studio.models import BuiltInVoice, CustomVoice, Voice

logger = logging.getLogger(__name__)


def parse_voice_filename(file_name: str, directory: str = VOICES_DIR) -> CustomVoice | None:
    """Parse "name-referenceText.ext" into a CustomVoice.

    The first "-" separates the name; the reference text may contain more.
    Returns None for non-audio files and names without a separator.
    """
    stem, ext = os.path.splitext(file_name)
    if ext.lower() not in AUDIO_EXTENSIONS:
        return None
    name, sep, reference_text = stem.partition("-")
    if not sep or not name:
        return None
    return CustomVoice(
        name=name,
        reference_text=reference_text,
        file_path=os.path.join(directory, file_name),
        file_name=file_name,
    )


def list_custom_voices(directory: str = VOICES_DIR) -> list[CustomVoice]:
    """Enumerate custom voices in the sample directory, sorted by filename.

    Read fresh on every call. A missing directory yields an empty list.
    """
    if not os.path.isdir(directory):
        return []
    voices = []
    for file_name in sorted(os.listdir(directory)):
        if not os.path.isfile(os.path.join(directory, file_name)):
            continue
        voice = parse_voice_filename(file_name, directory)
        if voice is not None:
            voices.append(voice)
    return voices


def resolve_voice(selection: str, directory: str = VOICES_DIR) -> Voice:
    """Decode a voice selection string into BuiltInVoice or CustomVoice.

    "custom:<fileName>" refers to a sample in the voice directory; anything
    else is the name of a built-in voice.
    """
    selection = selection.strip()
    if not selection:
        raise ValidationError("No voice selected")
    if not selection.startswith(CUSTOM_VOICE_PREFIX):
        return BuiltInVoice(selection)

    file_name = selection[len(CUSTOM_VOICE_PREFIX):]
    for voice in list_custom_voices(directory):
        if voice.file_name == file_name:
            return voice
    raise ValidationError(f"Custom voice not found: {file_name} (looked in {directory})")


def probe_duration(path: str) -> float | None:
    """Length of a reference sample in seconds, or None if it can't be decoded."""
    try:
        audio = AudioSegment.from_file(path)
    except (CouldntDecodeError, OSError, IndexError) as e:
        logger.warning("Could not read audio %s: %s", path, e)
        return None
    return round(len(audio) / 1000, 1)
