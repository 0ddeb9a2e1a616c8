"""HTTP surface: upload a recording, get back an assembled transcript."""

import asyncio
import logging
from functools import lru_cache
from typing import Annotated, Optional

from fastapi import Depends, FastAPI, File, Form, HTTPException, Request, UploadFile
from fastapi.responses import JSONResponse

from adapters.local.progress import LogProgressAdapter
from config import (
    get_config,
    create_audio_adapter,
    create_summarization_adapter,
    create_tokenizer,
    create_transcription_adapter,
)
from domain.errors import DecodeError, EncodingError, TranscriptionServiceError
from domain.models import TranscriptionVariant
from mappers import dto_to_segment, segment_to_dto, summary_to_dto
from models import HealthResponse, SummaryRequest, SummaryResponse, TranscriptionResponse
from ports.summarization import SummarizationPort
from summarization import summarize_segments
from use_cases.transcribe import TranscribeAudioUseCase, TranscribeRequest

logger = logging.getLogger(__name__)

# Error type -> HTTP status. Decode failures are the client's fault, a chunk
# budget that cannot hold one sample is ours, remote failures are upstream.
ERROR_STATUS = {
    DecodeError: 400,
    EncodingError: 500,
    TranscriptionServiceError: 502,
}


@lru_cache(maxsize=1)
def get_transcribe_use_case() -> TranscribeAudioUseCase:
    cfg = get_config()
    return TranscribeAudioUseCase(
        transcription=create_transcription_adapter(cfg),
        decoder=create_audio_adapter(cfg),
        progress=LogProgressAdapter(),
        tokenizer=create_tokenizer(cfg),
    )


@lru_cache(maxsize=1)
def get_summarizer() -> SummarizationPort:
    return create_summarization_adapter(get_config())


def _extension(filename: Optional[str]) -> str:
    if filename and "." in filename:
        return filename.rsplit(".", 1)[-1].lower()
    return "wav"


def create_app() -> FastAPI:
    app = FastAPI(title="Meeting Scribe")

    for error_type, status in ERROR_STATUS.items():
        def handler(request: Request, exc: Exception, status: int = status) -> JSONResponse:
            logger.error(f"{request.method} {request.url.path} failed: {exc}")
            return JSONResponse(status_code=status, content={"detail": str(exc)})

        app.add_exception_handler(error_type, handler)

    @app.get("/health", response_model=HealthResponse)
    def health() -> HealthResponse:
        cfg = get_config()
        model = cfg.diarize_model if cfg.variant is TranscriptionVariant.DIARIZE else cfg.legacy_model
        return HealthResponse(model=model, variant=cfg.variant.value)

    @app.post("/v1/audio/transcriptions", response_model=TranscriptionResponse)
    async def transcribe(
        file: Annotated[UploadFile, File(...)],
        use_case: Annotated[TranscribeAudioUseCase, Depends(get_transcribe_use_case)],
        prompt: Annotated[Optional[str], Form()] = None,
        variant: Annotated[Optional[str], Form()] = None,
    ) -> TranscriptionResponse:
        cfg = get_config()
        try:
            selected = TranscriptionVariant(variant) if variant else cfg.variant
        except ValueError:
            raise HTTPException(status_code=422, detail=f"Unknown variant: {variant!r}. Valid options: legacy, diarize")

        raw = await file.read()
        if not raw:
            raise HTTPException(status_code=400, detail="Empty audio upload")

        req = TranscribeRequest(
            audio=raw,
            variant=selected,
            hint=cfg.transcription_hint if prompt is None else prompt,
            max_chunk_bytes=cfg.max_chunk_bytes,
            extension=_extension(file.filename),
        )
        # The pipeline is synchronous and blocks on network calls.
        result = await asyncio.to_thread(use_case.execute, req)

        return TranscriptionResponse(
            text=result.text,
            segments=[segment_to_dto(seg) for seg in result.segments],
            model=use_case.model_name(selected),
            variant=selected.value,
            chunks=result.chunks,
        )

    @app.post("/v1/summaries", response_model=SummaryResponse)
    async def summarize(
        body: SummaryRequest,
        summarizer: Annotated[SummarizationPort, Depends(get_summarizer)],
    ) -> SummaryResponse:
        segments = [dto_to_segment(dto) for dto in body.segments]
        result = await asyncio.to_thread(
            summarize_segments, summarizer, body.instructions, segments, body.speaker_names,
        )
        return summary_to_dto(result)

    return app
