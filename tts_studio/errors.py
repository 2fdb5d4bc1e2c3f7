"""Exceptions raised by the synthesis pipeline."""


class TTSStudioError(Exception):
    """Base exception for tts-studio errors."""

    pass


class ValidationError(TTSStudioError):
    """Raised before any network call when inputs are unusable."""

    pass


class SynthesisError(TTSStudioError):
    """Raised when the backend could not produce audio."""

    pass


class TransportError(SynthesisError):
    """Network unreachable, DNS failure, connection reset, ..."""

    pass


class HTTPError(SynthesisError):
    """Raised on a non-2xx response from the backend.

    The message is ``HTTP <status>: <reason>``, followed by `` - <body>``
    when the response carried a body.
    """

    def __init__(self, status_code: int, reason: str = "", body: str = ""):
        self.status_code = status_code
        self.reason = reason
        self.body = body
        message = f"HTTP {status_code}: {reason}"
        if body:
            message += f" - {body}"
        super().__init__(message)


class FileIOError(TTSStudioError):
    """Read, write, delete or mkdir failure."""

    pass


class BatchError(TTSStudioError):
    """Raised when a batch job aborts at a given segment (1-indexed)."""

    def __init__(self, segment_number: int, cause: Exception | str):
        self.segment_number = segment_number
        self.cause = cause
        super().__init__(f"Batch synthesis failed at segment {segment_number}: {cause}")


class BatchCancelledError(TTSStudioError):
    """Raised when a batch is cancelled at a segment boundary."""

    def __init__(self, segment_number: int):
        self.segment_number = segment_number
        super().__init__(f"Batch synthesis cancelled before segment {segment_number}")


class BatchInProgressError(TTSStudioError):
    """Raised when a second batch is started while one is still running."""

    pass
