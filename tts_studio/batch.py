"""Sequential, voice-consistent batch synthesis of segmented text."""

import logging
import os
import re
import threading
import time
from contextlib import contextmanager

from tts_studio.assembly import merge_buffers
from tts_studio.constants import (
    DEFAULT_API_VERSION,
    DEFAULT_SEGMENT_SIZE,
    DEFAULT_SPEED,
    SEGMENT_DELAY_SECONDS,
    TMP_DIR,
)
from tts_studio.errors import (
    BatchCancelledError,
    BatchError,
    BatchInProgressError,
    FileIOError,
    SynthesisError,
    TTSStudioError,
    ValidationError,
)
from tts_studio.models import (
    CANCELLED,
    COMPLETED,
    FAILED,
    RUNNING,
    BatchJob,
    CustomVoice,
    Voice,
)
from tts_studio.segmenter import split_text
from tts_studio.textio import delete_file, ensure_dir, read_bytes, write_bytes

logger = logging.getLogger(__name__)

# One batch per process: later segments clone the audio of earlier ones, and
# the scratch directory is shared.
_job_lock = threading.Lock()


def _no_progress(current: int, total: int, message: str) -> None:
    pass


@contextmanager
def scratch_files():
    """Yield a list that collects intermediate file paths.

    Every registered path is deleted on exit, whether the block succeeded or
    raised. Deletion failures are logged and never propagate.
    """
    paths: list[str] = []
    try:
        yield paths
    finally:
        for path in paths:
            try:
                delete_file(path)
            except FileIOError as e:
                logger.warning("Failed to clean up intermediate file %s: %s", path, e)


def batch_in_progress() -> bool:
    return _job_lock.locked()


class BatchSynthesizer:
    """Drives a BatchJob through the synthesis client one segment at a time.

    Segment 0 seeds the voice: a custom voice clones its own sample, a
    built-in voice is synthesized directly and its output becomes the
    reference sample. Every later segment is cloned from that fixed
    reference, so segments are never synthesized in parallel.
    """

    def __init__(self, client, delay: float = SEGMENT_DELAY_SECONDS, sleep=None):
        self.client = client
        self.delay = delay
        self.sleep = sleep or time.sleep

    def run(self, job: BatchJob, progress=None, cancel_event: threading.Event | None = None) -> str:
        """Run the job to completion or first failure. Returns the output path.

        progress is called as progress(current, total, message). Raises
        BatchError (1-indexed failing segment), BatchCancelledError or
        BatchInProgressError.
        """
        _validate_job(job)

        if not _job_lock.acquire(blocking=False):
            raise BatchInProgressError("Another batch synthesis is already running")
        try:
            return self._run(job, progress or _no_progress, cancel_event)
        finally:
            _job_lock.release()

    def _run(self, job: BatchJob, progress, cancel_event) -> str:
        total = job.total_steps
        count = len(job.segments)
        job.state = RUNNING
        logger.info("Batch %s: %d segments", job.job_id, count)

        try:
            ensure_dir(job.scratch_dir)
            with scratch_files() as intermediates:
                job.intermediates = intermediates

                for i in range(count):
                    if i > 0 and self.delay:
                        self.sleep(self.delay)
                    if cancel_event is not None and cancel_event.is_set():
                        raise BatchCancelledError(i + 1)

                    job.index = i
                    progress(i + 1, total, _segment_message(i, count))
                    path = os.path.join(job.scratch_dir, job.segment_filename(i))
                    try:
                        audio = self._synthesize_segment(job, i)
                        # Registered before writing so a partial file is removed too
                        intermediates.append(path)
                        write_bytes(path, audio)
                    except (SynthesisError, FileIOError) as e:
                        raise BatchError(i + 1, e) from e

                    if i == 0:
                        job.reference_audio = (
                            job.voice.file_path if isinstance(job.voice, CustomVoice) else path
                        )

                progress(count, total, "Merging audio files...")
                merged = merge_buffers([read_bytes(p) for p in intermediates])
                write_bytes(job.output_path, merged)
        except BatchCancelledError:
            job.state = CANCELLED
            logger.info("Batch %s cancelled", job.job_id)
            raise
        except TTSStudioError as e:
            job.state = FAILED
            job.error = str(e)
            logger.error("Batch %s failed: %s", job.job_id, e)
            raise

        job.state = COMPLETED
        progress(total, total, f"Saved {job.output_path}")
        return job.output_path

    def _synthesize_segment(self, job: BatchJob, index: int) -> bytes:
        request = job.request_for(index)
        voice = request.voice

        if index == 0:
            if isinstance(voice, CustomVoice):
                return self.client.synthesize_clone(
                    request.text, voice.file_path, voice.reference_text, request.speed, request.api_version
                )
            return self.client.synthesize_builtin(request.text, voice.name, request.speed, request.api_version)

        # Built-in voices reuse segment 0's literal text as the transcript of the seed audio
        reference_text = voice.reference_text if isinstance(voice, CustomVoice) else job.segments[0]
        return self.client.synthesize_clone(
            request.text, job.reference_audio, reference_text, request.speed, request.api_version
        )


def _segment_message(index: int, count: int) -> str:
    if index == 0:
        return f"Synthesizing segment 1/{count} (the first request may wait for model loading)"
    return f"Synthesizing segment {index + 1}/{count} (cloning for a consistent voice)"


def _validate_job(job: BatchJob) -> None:
    if not job.segments:
        raise ValidationError("No text segments to synthesize")
    if job.speed <= 0:
        raise ValidationError(f"Speed must be positive, got {job.speed}")
    if isinstance(job.voice, CustomVoice) and not os.path.isfile(job.voice.file_path):
        raise ValidationError(f"Reference audio not found: {job.voice.file_path}")


def job_name_from_path(path: str) -> str:
    """Filesystem-safe job name from an output or source filename."""
    stem = os.path.splitext(os.path.basename(path))[0]
    return re.sub(r"[^\w]+", "_", stem).strip("_") or "batch"


def run_batch(
    text: str,
    voice: Voice,
    client,
    output_path: str,
    segment_size: int = DEFAULT_SEGMENT_SIZE,
    scratch_dir: str = TMP_DIR,
    speed: float = DEFAULT_SPEED,
    api_version: str = DEFAULT_API_VERSION,
    progress=None,
    cancel_event: threading.Event | None = None,
    delay: float = SEGMENT_DELAY_SECONDS,
    sleep=None,
) -> str:
    """Segment text and synthesize it into a single file at output_path."""
    if not text.strip():
        raise ValidationError("Text is empty")
    segments = split_text(text, segment_size)

    job = BatchJob(
        segments=segments,
        voice=voice,
        output_path=output_path,
        scratch_dir=scratch_dir,
        name=job_name_from_path(output_path),
        speed=speed,
        api_version=api_version,
    )
    synthesizer = BatchSynthesizer(client, delay=delay, sleep=sleep)
    return synthesizer.run(job, progress=progress, cancel_event=cancel_event)
