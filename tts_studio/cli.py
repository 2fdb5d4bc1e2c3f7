"""CLI interface: single-shot synthesis, cloning, batch runs and settings."""

import argparse
import logging
import os
import sys

from tts_studio.artifacts import batch_output_path, scratch_dir, single_output_path
from tts_studio.batch import batch_in_progress, run_batch
from tts_studio.client import SynthesisClient
from tts_studio.config import SETTING_KEYS, load_config, save_config
from tts_studio.constants import (
    API_VERSIONS,
    CONFIG_PATH,
    DEFAULT_API_VERSION,
    DEFAULT_SEGMENT_SIZE,
    DEFAULT_SPEED,
    DEFAULT_VOICE,
    TMP_DIR,
    VERSION,
    VOICES_DIR,
)
from tts_studio.errors import BatchError, TTSStudioError
from tts_studio.models import SynthesisRequest
from tts_studio.segmenter import split_text
from tts_studio.textio import read_text_file, write_bytes
from tts_studio.tts import clone_voice, synthesize_text
from tts_studio.voices import list_custom_voices, probe_duration, resolve_voice


def _fail(operation: str, cause) -> None:
    """Report a failure as one line on stderr and exit."""
    print(f"Error: {operation} failed: {cause}", file=sys.stderr)
    raise SystemExit(1)


def _make_client(args, config: dict) -> SynthesisClient:
    return SynthesisClient(args.api_url or config["api_url"])


def _print_progress(current: int, total: int, message: str) -> None:
    percent = round(current / total * 100)
    print(f"  [{current}/{total}] {percent:3d}% {message}")


def _read_input_text(args) -> str:
    if args.file:
        try:
            text, encoding = read_text_file(args.file)
        except TTSStudioError as e:
            _fail("Reading text file", e)
        print(f"Detected encoding: {encoding or 'UTF-8 (default)'}")
        return text
    return args.text or ""


def cmd_tts(args):
    """Synthesize text with a built-in or custom voice."""
    config = load_config(args.config)
    text = _read_input_text(args)
    try:
        voice = resolve_voice(args.voice, args.voices_dir)
        request = SynthesisRequest(text=text, voice=voice, speed=args.speed, api_version=args.api_version)
        print("Synthesizing... the first request may take a few minutes while models load.")
        audio = synthesize_text(_make_client(args, config), request)
        output_path = args.output or single_output_path(config, "tts")
        write_bytes(output_path, audio)
    except TTSStudioError as e:
        _fail("Synthesis", e)
    print(f"Saved {output_path}")


def cmd_clone(args):
    """Clone the voice of a reference recording."""
    config = load_config(args.config)
    text = _read_input_text(args)
    try:
        print("Cloning voice... the first request may take a few minutes while models load.")
        audio = clone_voice(
            _make_client(args, config),
            text,
            args.reference_audio,
            args.reference_text,
            speed=args.speed,
            version=args.api_version,
        )
        output_path = args.output or single_output_path(config, "clone")
        write_bytes(output_path, audio)
    except TTSStudioError as e:
        _fail("Voice cloning", e)
    print(f"Saved {output_path}")


def cmd_batch(args):
    """Synthesize a whole text file segment by segment into one audio file."""
    config = load_config(args.config)
    if not os.path.exists(args.file):
        _fail("Batch synthesis", f"File not found: {args.file}")
    if batch_in_progress():
        _fail("Batch synthesis", "Another batch synthesis is already running")

    try:
        text, encoding = read_text_file(args.file)
    except TTSStudioError as e:
        _fail("Reading text file", e)
    print(f"Detected encoding: {encoding or 'UTF-8 (default)'}")

    try:
        voice = resolve_voice(args.voice, args.voices_dir)
        segment_count = len(split_text(text, args.segment_size))
        print(f"Split {os.path.basename(args.file)} into {segment_count} segments")
        output_path = args.output or batch_output_path(config, args.file)
        result = run_batch(
            text,
            voice,
            _make_client(args, config),
            output_path,
            segment_size=args.segment_size,
            scratch_dir=scratch_dir(args.tmp_dir),
            speed=args.speed,
            api_version=args.api_version,
            progress=_print_progress,
        )
    except BatchError as e:
        _fail(f"Batch synthesis of segment {e.segment_number}", e.cause)
    except TTSStudioError as e:
        _fail("Batch synthesis", e)
    print(f"Batch synthesis complete: {result}")


def cmd_voices(args):
    """List custom voices found in the voice sample directory."""
    voices = list_custom_voices(args.voices_dir)
    if not voices:
        print(f"No custom voices found in {args.voices_dir}")
        print("Add samples named like 'name-reference text.wav'.")
        return
    print("Custom voices:")
    for voice in voices:
        duration = probe_duration(voice.file_path)
        length = f"{duration:.1f}s" if duration is not None else "?"
        reference = voice.reference_text or "(cross-lingual)"
        print(f"  custom:{voice.file_name:<30} {voice.name:<12} {length:>6}  {reference}")


def cmd_health(args):
    """Test the connection to the backend."""
    config = load_config(args.config)
    client = _make_client(args, config)
    try:
        payload = client.check_health()
    except TTSStudioError as e:
        _fail("Connection test", e)
    print(f"Connected to {client.base_url}: {payload}")


def cmd_config(args):
    """Show or update settings."""
    config = load_config(args.config)

    if args.action == "show":
        for key, value in config.items():
            print(f"  {key:<18} {value}")
        return

    if args.key not in SETTING_KEYS:
        print(f"Error: Invalid setting key: {args.key}", file=sys.stderr)
        print(f"Valid keys: {', '.join(sorted(SETTING_KEYS))}", file=sys.stderr)
        raise SystemExit(1)

    value = args.value or ""
    if args.key == "api-url" and not value.strip():
        print("Error: 'config set api-url' requires a URL", file=sys.stderr)
        raise SystemExit(1)

    config[SETTING_KEYS[args.key]] = value.strip()
    try:
        save_config(config, args.config)
    except TTSStudioError as e:
        _fail("Saving settings", e)
    print(f"Updated: {args.key} → {value.strip() or '(default)'}")


def _add_synthesis_options(parser, text_input: bool = True):
    if text_input:
        parser.add_argument("text", nargs="?", help="Text to synthesize")
        parser.add_argument("-f", "--file", help="Read the text from a file")
    parser.add_argument("--speed", type=float, default=DEFAULT_SPEED, help="Speech speed (default 1.0)")
    parser.add_argument("--api-version", choices=API_VERSIONS, default=DEFAULT_API_VERSION)
    parser.add_argument("-o", "--output", help="Output file (default: timestamped file in the save directory)")


def main():
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="tts-studio",
        description="TTS Studio: text-to-speech and voice cloning against a TTS backend",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")
    parser.add_argument("--api-url", help="Backend URL (overrides config.json)")
    parser.add_argument("--config", default=CONFIG_PATH, help="Settings file")
    parser.add_argument("--voices-dir", default=VOICES_DIR, help="Custom voice sample directory")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # tts
    tts_parser = subparsers.add_parser("tts", help="Synthesize text with a voice")
    _add_synthesis_options(tts_parser)
    tts_parser.add_argument("--voice", default=DEFAULT_VOICE, help="Built-in voice name or custom:<file>")
    tts_parser.set_defaults(func=cmd_tts)

    # clone
    clone_parser = subparsers.add_parser("clone", help="Clone a voice from reference audio")
    _add_synthesis_options(clone_parser)
    clone_parser.add_argument("-r", "--reference-audio", required=True, help="Reference audio file")
    clone_parser.add_argument("--reference-text", help="Transcript of the reference audio (same-language cloning)")
    clone_parser.set_defaults(func=cmd_clone)

    # batch
    batch_parser = subparsers.add_parser("batch", help="Synthesize a text file in segments")
    batch_parser.add_argument("file", help="Path to the text file")
    _add_synthesis_options(batch_parser, text_input=False)
    batch_parser.add_argument("--voice", default=DEFAULT_VOICE, help="Built-in voice name or custom:<file>")
    batch_parser.add_argument("--segment-size", type=int, default=DEFAULT_SEGMENT_SIZE, help="Max characters per segment")
    batch_parser.add_argument("--tmp-dir", default=TMP_DIR, help="Directory for intermediate segment files")
    batch_parser.set_defaults(func=cmd_batch)

    # voices
    voices_parser = subparsers.add_parser("voices", help="List custom voices")
    voices_parser.set_defaults(func=cmd_voices)

    # health
    health_parser = subparsers.add_parser("health", help="Test the backend connection")
    health_parser.set_defaults(func=cmd_health)

    # config
    config_parser = subparsers.add_parser("config", help="Show or change settings")
    config_parser.add_argument("action", choices=["show", "set"])
    config_parser.add_argument("key", nargs="?", help="Setting key (api-url, save-path)")
    config_parser.add_argument("value", nargs="?", help="New value (empty resets save-path)")
    config_parser.set_defaults(func=cmd_config)

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        return

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    args.func(args)
