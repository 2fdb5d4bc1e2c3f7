"""Split long text into bounded-size segments at sentence boundaries."""

import re

from tts_studio.constants import SENTENCE_TERMINATORS
from tts_studio.errors import ValidationError

_SENTENCE_SPLIT_RE = re.compile(f"[{re.escape(SENTENCE_TERMINATORS)}]")


def _with_terminator(text: str, sentence: str) -> str:
    """Re-attach the character that follows the sentence in the source text.

    Looks the sentence up by its FIRST occurrence, so a repeated sentence gets
    the terminator of its earliest copy ("Go. Go! Go?" → "Go!" twice).
    """
    end = text.find(sentence) + len(sentence)
    return sentence + text[end:end + 1]


def split_text(text: str, max_length: int) -> list[str]:
    """Split text into segments of at most max_length characters.

    Sentences end at CJK or ASCII terminal punctuation and are accumulated
    greedily. A sentence longer than max_length becomes its own oversized
    segment; it is never truncated. Returns trimmed, non-empty segments.
    """
    if isinstance(max_length, bool) or not isinstance(max_length, int) or max_length < 1:
        raise ValidationError(f"Segment size must be a positive integer, got {max_length!r}")

    segments = []
    current = ""

    for sentence in _SENTENCE_SPLIT_RE.split(text):
        if not sentence.strip():
            continue
        sentence = _with_terminator(text, sentence)

        if len(current) + len(sentence) <= max_length:
            current += sentence
        else:
            if current.strip():
                segments.append(current.strip())
            current = sentence

    if current.strip():
        segments.append(current.strip())

    return segments
