"""ProgressPort — abstract interface for reporting pipeline progress."""

from abc import ABC, abstractmethod
from typing import Optional


class ProgressPort(ABC):
    @abstractmethod
    def report(
        self,
        job_id: str,
        stage: str,
        progress: float = 0.0,
        detail: Optional[str] = None,
    ) -> None:
        """Report progress. stage: decoding (slow path only), chunking, transcribing, assembling."""

    def chunk_started(self, job_id: str, index: int, total: int) -> None:
        """Called right before chunk ``index`` (0-based) of ``total`` is sent."""
        self.report(
            job_id, "transcribing",
            progress=index / total if total else 0.0,
            detail=f"chunk {index + 1}/{total}" if total > 1 else None,
        )
