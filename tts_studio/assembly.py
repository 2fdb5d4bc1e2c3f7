"""Merge per-segment audio buffers into a single output buffer."""


def merge_buffers(buffers: list[bytes]) -> bytes:
    """Concatenate audio buffers byte-for-byte in input order.

    No format parsing or header rewriting: for WAV input the result is a
    naively concatenated stream and the first header still describes only the
    first segment.
    """
    return b"".join(bytes(buffer) for buffer in buffers)
