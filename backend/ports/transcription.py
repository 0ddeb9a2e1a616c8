"""TranscriptionPort — abstract interface for remote speech-to-text services."""

from abc import ABC, abstractmethod
from typing import Optional

from domain.models import AudioChunk, DiarizedChunkResult, LegacyChunkResult


class TranscriptionPort(ABC):
    @abstractmethod
    def transcribe(
        self,
        chunk: AudioChunk,
        index: int,
        prompt: Optional[str] = None,
    ) -> LegacyChunkResult:
        """Transcribe one chunk with a rolling context prompt. Timestamps are chunk-local."""

    @abstractmethod
    def transcribe_diarized(self, chunk: AudioChunk, index: int) -> DiarizedChunkResult:
        """Transcribe one chunk with speaker tags. Timestamps are chunk-local."""

    @abstractmethod
    def model_name(self, diarize: bool = False) -> str:
        """Return the model name used for the given variant."""
