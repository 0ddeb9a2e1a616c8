"""Framework-agnostic domain models for Meeting Scribe.

Remote payloads (pydantic DTOs in models.py) are converted into these at the
adapter boundary; nothing past the adapters sees an untyped response.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Literal, Optional, Union

import numpy as np


class TranscriptionVariant(str, Enum):
    """Which remote transcription protocol to drive."""

    LEGACY = "legacy"
    DIARIZE = "diarize"


@dataclass(frozen=True)
class DecodedAudio:
    """Uncompressed audio as float32 samples shaped (frames, channels)."""
    samples: np.ndarray
    sample_rate: int

    @property
    def channels(self) -> int:
        return 1 if self.samples.ndim == 1 else self.samples.shape[1]


@dataclass(frozen=True)
class AudioChunk:
    """An API-sized slice of audio.

    ``duration`` is 0.0 when the chunk came from the fast path and its real
    length is unknown.
    """
    data: bytes
    duration: float
    extension: str = "wav"


@dataclass
class TranscriptSegment:
    """A single transcribed speech segment in recording-global time."""
    id: int
    start: float
    end: float
    text: str
    speaker: Optional[str] = None


@dataclass
class TranscriptionResult:
    text: str
    segments: list[TranscriptSegment] = field(default_factory=list)
    chunks: int = 0


@dataclass(frozen=True)
class RawSegment:
    """A segment as returned for one chunk, in chunk-local time."""
    start: float
    end: float
    text: str


@dataclass(frozen=True)
class DiarizedRawSegment:
    start: float
    end: float
    text: str
    speaker: str


@dataclass(frozen=True)
class LegacyChunkResult:
    text: str
    segments: list[RawSegment] = field(default_factory=list)
    kind: Literal["legacy"] = "legacy"


@dataclass(frozen=True)
class DiarizedChunkResult:
    text: str
    segments: list[DiarizedRawSegment] = field(default_factory=list)
    kind: Literal["diarized"] = "diarized"


ChunkResult = Union[LegacyChunkResult, DiarizedChunkResult]


@dataclass(frozen=True)
class SummarizationResult:
    """Outcome of a summarization call: ``success``, ``refused`` or ``error``."""
    state: Literal["success", "refused", "error"]
    response: Optional[str] = None
    refusal: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def success(cls, response: str) -> "SummarizationResult":
        return cls(state="success", response=response)

    @classmethod
    def refused(cls, refusal: str) -> "SummarizationResult":
        return cls(state="refused", refusal=refusal)

    @classmethod
    def failed(cls, error: str) -> "SummarizationResult":
        return cls(state="error", error=error)
