"""TranscribeAudioUseCase — orchestrates the chunked transcription pipeline.

raw bytes -> chunk_audio -> one remote call per chunk, strictly in order ->
fold_chunk -> TranscriptionResult.

Chunks are never sent concurrently: the legacy variant's prompt for chunk
i+1 is built from the transcript folded in after chunk i, and both variants
shift timestamps by the durations of all earlier chunks.
"""

import logging
import uuid
from dataclasses import dataclass
from typing import Optional

from assembly import SegmentAccumulator, finish, fold_chunk
from chunking import DEFAULT_MAX_CHUNK_BYTES, chunk_audio
from domain.errors import TranscriptionServiceError
from domain.models import AudioChunk, ChunkResult, TranscriptionResult, TranscriptionVariant
from ports.audio import AudioDecoderPort
from ports.progress import ProgressPort
from ports.transcription import TranscriptionPort
from prompting import TiktokenTokenizer, Tokenizer, build_context_prompt

logger = logging.getLogger(__name__)


@dataclass
class TranscribeRequest:
    """All parameters for a transcription request."""
    audio: bytes
    variant: TranscriptionVariant = TranscriptionVariant.DIARIZE
    hint: str = ""
    max_chunk_bytes: int = DEFAULT_MAX_CHUNK_BYTES
    extension: str = "wav"


class TranscribeAudioUseCase:
    def __init__(
        self,
        transcription: TranscriptionPort,
        decoder: AudioDecoderPort,
        progress: ProgressPort,
        tokenizer: Optional[Tokenizer] = None,
    ):
        self._transcription = transcription
        self._decoder = decoder
        self._progress = progress
        self._tokenizer = tokenizer

    @property
    def tokenizer(self) -> Tokenizer:
        if self._tokenizer is None:
            self._tokenizer = TiktokenTokenizer()
        return self._tokenizer

    def model_name(self, variant: TranscriptionVariant) -> str:
        return self._transcription.model_name(diarize=variant is TranscriptionVariant.DIARIZE)

    def execute(self, req: TranscribeRequest) -> TranscriptionResult:
        """Run the full pipeline. Any DecodeError, EncodingError or
        TranscriptionServiceError propagates; no partial result is returned."""
        job_id = uuid.uuid4().hex[:12]

        if len(req.audio) > req.max_chunk_bytes:
            self._progress.report(job_id, "decoding", detail=f"{len(req.audio)} bytes")
        self._progress.report(job_id, "chunking", detail=f"{len(req.audio)} bytes")
        chunks = chunk_audio(req.audio, req.max_chunk_bytes, self._decoder, extension=req.extension)

        return self.transcribe_chunks(chunks, req.variant, hint=req.hint, job_id=job_id)

    def transcribe_chunks(
        self,
        chunks: list[AudioChunk],
        variant: TranscriptionVariant,
        hint: str = "",
        job_id: Optional[str] = None,
    ) -> TranscriptionResult:
        job_id = job_id or uuid.uuid4().hex[:12]
        total = len(chunks)
        acc = SegmentAccumulator()

        for i, chunk in enumerate(chunks):
            self._progress.chunk_started(job_id, i, total)
            logger.info(f"[{job_id}] Processing chunk {i + 1}/{total} ({len(chunk.data)} bytes, {variant.value})")
            try:
                result = self._transcribe_one(chunk, i, variant, hint, acc.full_text)
            except TranscriptionServiceError:
                logger.error(f"[{job_id}] Chunk {i + 1}/{total} failed, aborting remaining chunks")
                raise
            acc = fold_chunk(acc, result, chunk.duration)

        self._progress.report(job_id, "assembling", progress=1.0, detail=f"{acc.next_id} segments")
        return finish(acc, variant)

    def _transcribe_one(
        self,
        chunk: AudioChunk,
        index: int,
        variant: TranscriptionVariant,
        hint: str,
        transcript_so_far: str,
    ) -> ChunkResult:
        if variant is TranscriptionVariant.DIARIZE:
            return self._transcription.transcribe_diarized(chunk, index)

        prompt = build_context_prompt(hint, transcript_so_far, self.tokenizer) if transcript_so_far else hint
        return self._transcription.transcribe(chunk, index, prompt=prompt or None)
