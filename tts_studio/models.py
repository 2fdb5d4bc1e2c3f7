"""Data models for voice selection and batch jobs."""

import uuid
from dataclasses import dataclass, field

from tts_studio.constants import DEFAULT_API_VERSION, DEFAULT_SPEED
from tts_studio.errors import ValidationError


@dataclass(frozen=True)
class BuiltInVoice:
    name: str          # server-side preset, e.g. "female1"


@dataclass(frozen=True)
class CustomVoice:
    name: str
    reference_text: str    # empty → cross-lingual cloning
    file_path: str         # reference audio sample
    file_name: str = ""

    def __post_init__(self):
        if not self.file_path:
            raise ValidationError(f"Custom voice '{self.name}' has no reference audio")


Voice = BuiltInVoice | CustomVoice


@dataclass
class SynthesisRequest:
    text: str
    voice: Voice
    speed: float = DEFAULT_SPEED
    api_version: str = DEFAULT_API_VERSION


# Batch job states
PENDING = "pending"
RUNNING = "running"
COMPLETED = "completed"
FAILED = "failed"
CANCELLED = "cancelled"


@dataclass
class BatchJob:
    """Context for one end-to-end segment → synthesize → merge run.

    Mutated by the orchestrator as it advances; `reference_audio` is set once
    after segment 0 and never changes afterwards.
    """

    segments: list[str]
    voice: Voice
    output_path: str
    scratch_dir: str
    name: str = "batch"
    speed: float = DEFAULT_SPEED
    api_version: str = DEFAULT_API_VERSION
    job_id: str = field(default_factory=lambda: uuid.uuid4().hex[:8])
    state: str = PENDING
    index: int = 0
    reference_audio: str | None = None
    intermediates: list[str] = field(default_factory=list)
    error: str | None = None

    @property
    def total_steps(self) -> int:
        """Segment count plus one step for the merge."""
        return len(self.segments) + 1

    def request_for(self, index: int) -> SynthesisRequest:
        return SynthesisRequest(
            text=self.segments[index],
            voice=self.voice,
            speed=self.speed,
            api_version=self.api_version,
        )

    def segment_filename(self, index: int) -> str:
        """Intermediate filename, namespaced per job (1-indexed segment)."""
        return f"{self.name}_{self.job_id}_segment_{index + 1}.wav"
