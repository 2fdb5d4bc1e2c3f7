"""Output locations for synthesized audio and batch scratch files."""

import os
from datetime import datetime

from tts_studio.constants import OUTPUT_DIR, TMP_DIR
from tts_studio.textio import ensure_dir


def default_save_dir(config: dict) -> str:
    """Configured save path, or data/txt_to_audio when none is set."""
    configured = (config.get("default_save_path") or "").strip()
    return configured or OUTPUT_DIR


def timestamped_filename(prefix: str, now: datetime | None = None, ext: str = ".wav") -> str:
    """Filename like tts_2025-01-31T12-30-05.wav for prefix "tts"."""
    now = now or datetime.now()
    return f"{prefix}_{now.strftime('%Y-%m-%dT%H-%M-%S')}{ext}"


def single_output_path(config: dict, prefix: str, now: datetime | None = None) -> str:
    """Path for a single-shot result; creates the save directory."""
    save_dir = ensure_dir(default_save_dir(config))
    return os.path.join(save_dir, timestamped_filename(prefix, now))


def batch_output_path(config: dict, source_path: str) -> str:
    """<save dir>/<source stem>.wav for a batch run over source_path."""
    stem = os.path.splitext(os.path.basename(source_path))[0]
    save_dir = ensure_dir(default_save_dir(config))
    return os.path.join(save_dir, f"{stem}.wav")


def scratch_dir(base: str = TMP_DIR) -> str:
    return ensure_dir(base)
