"""File system helpers: bytes IO, idempotent mkdir/delete, encoded text reads."""

import logging
import os

import chardet

from tts_studio.errors import FileIOError

logger = logging.getLogger(__name__)


def ensure_dir(path: str) -> str:
    """Create a directory (and parents) if missing. Returns the path."""
    try:
        os.makedirs(path, exist_ok=True)
    except OSError as e:
        raise FileIOError(f"Cannot create directory {path}: {e}") from e
    return path


def read_bytes(path: str) -> bytes:
    try:
        with open(path, "rb") as f:
            return f.read()
    except OSError as e:
        raise FileIOError(f"Cannot read {path}: {e}") from e


def write_bytes(path: str, data: bytes) -> str:
    """Write data to path, creating the parent directory. Returns the path."""
    parent = os.path.dirname(path)
    if parent:
        ensure_dir(parent)
    try:
        with open(path, "wb") as f:
            f.write(data)
    except OSError as e:
        raise FileIOError(f"Cannot write {path}: {e}") from e
    return path


def delete_file(path: str) -> None:
    """Delete a file; a missing file is not an error."""
    if not os.path.exists(path):
        return
    try:
        os.remove(path)
    except OSError as e:
        raise FileIOError(f"Cannot delete {path}: {e}") from e


def decode_text(raw: bytes) -> tuple[str, str | None]:
    """Decode raw bytes using the detected encoding.

    Returns (content, detected_encoding). UTF-8, ASCII or an undetected
    encoding decode as UTF-8; anything else uses the detected codec, then
    GBK, then UTF-8 with replacement characters.
    """
    encoding = chardet.detect(raw).get("encoding")
    logger.debug("Detected encoding: %s", encoding)

    if not encoding or "utf-8" in encoding.lower() or "ascii" in encoding.lower():
        return raw.decode("utf-8", errors="replace").lstrip("\ufeff"), encoding

    for codec in (encoding, "gbk"):
        try:
            return raw.decode(codec), encoding
        except (UnicodeDecodeError, LookupError):
            logger.warning("Decoding as %s failed", codec)

    return raw.decode("utf-8", errors="replace"), encoding


def read_text_file(path: str) -> tuple[str, str | None]:
    """Read a text file of unknown encoding as a unicode string."""
    return decode_text(read_bytes(path))
