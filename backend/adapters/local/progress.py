"""Local progress adapters: log lines, or a plain ``(index, total)`` callback."""

import logging
from typing import Callable, Optional

from ports.progress import ProgressPort

logger = logging.getLogger(__name__)

ChunkCallback = Callable[[int, int], None]


class LogProgressAdapter(ProgressPort):
    def report(
        self,
        job_id: str,
        stage: str,
        progress: float = 0.0,
        detail: Optional[str] = None,
    ) -> None:
        msg = f"[{job_id}] {stage}"
        if progress > 0:
            msg += f" {progress:.0%}"
        if detail:
            msg += f" — {detail}"
        logger.info(msg)


class CallbackProgressAdapter(LogProgressAdapter):
    """Logs like LogProgressAdapter and also forwards chunk starts to ``on_chunk_start``.

    The callback is observational: anything it raises is logged and dropped
    so a broken listener cannot abort a transcription.
    """

    def __init__(self, on_chunk_start: ChunkCallback):
        self._on_chunk_start = on_chunk_start

    def chunk_started(self, job_id: str, index: int, total: int) -> None:
        super().chunk_started(job_id, index, total)
        try:
            self._on_chunk_start(index, total)
        except Exception as e:
            logger.warning(f"[{job_id}] progress callback failed: {e}")
