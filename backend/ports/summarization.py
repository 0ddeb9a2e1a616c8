"""SummarizationPort — abstract interface for transcript summarization."""

from abc import ABC, abstractmethod

from domain.models import SummarizationResult


class SummarizationPort(ABC):
    @abstractmethod
    def summarize(self, instructions: str, transcript: str) -> SummarizationResult:
        """Summarize a transcript. Failures come back as an ``error`` result, never raised."""
