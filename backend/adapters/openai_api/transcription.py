"""OpenAITranscriptionAdapter — speech-to-text through the OpenAI audio API.

Two protocol variants:

* legacy: ``whisper-1`` with ``verbose_json`` segment timestamps and a
  rolling context ``prompt``.
* diarize: ``gpt-4o-transcribe-diarize`` with ``diarized_json``; each segment
  carries a speaker tag. The model takes no prompt.

Both return timestamps relative to the start of the uploaded chunk.
"""

import logging
from typing import Any, Optional

import openai
from pydantic import BaseModel, ValidationError

from domain.errors import TranscriptionServiceError
from domain.models import AudioChunk, DiarizedChunkResult, LegacyChunkResult
from mappers import diarized_to_chunk_result, verbose_to_chunk_result
from models import DiarizedTranscriptionPayload, VerboseTranscriptionPayload
from ports.transcription import TranscriptionPort

logger = logging.getLogger(__name__)

DEFAULT_LEGACY_MODEL = "whisper-1"
DEFAULT_DIARIZE_MODEL = "gpt-4o-transcribe-diarize"


def chunk_file_name(index: int, extension: str) -> str:
    return f"audio_{index:03d}.{extension}"


class OpenAITranscriptionAdapter(TranscriptionPort):
    def __init__(
        self,
        client: "openai.OpenAI",
        legacy_model: str = DEFAULT_LEGACY_MODEL,
        diarize_model: str = DEFAULT_DIARIZE_MODEL,
    ):
        self._client = client
        self._legacy_model = legacy_model
        self._diarize_model = diarize_model

    def transcribe(
        self,
        chunk: AudioChunk,
        index: int,
        prompt: Optional[str] = None,
    ) -> LegacyChunkResult:
        params: dict[str, Any] = {
            "model": self._legacy_model,
            "file": (chunk_file_name(index, chunk.extension), chunk.data),
            "response_format": "verbose_json",
            "timestamp_granularities": ["segment"],
        }
        if prompt:
            params["prompt"] = prompt

        response = self._create(params, index)
        payload = self._validate(VerboseTranscriptionPayload, response, index)
        return verbose_to_chunk_result(payload)

    def transcribe_diarized(self, chunk: AudioChunk, index: int) -> DiarizedChunkResult:
        params: dict[str, Any] = {
            "model": self._diarize_model,
            "file": (chunk_file_name(index, chunk.extension), chunk.data),
            "response_format": "diarized_json",
            "chunking_strategy": "auto",
        }

        response = self._create(params, index)
        payload = self._validate(DiarizedTranscriptionPayload, response, index)
        return diarized_to_chunk_result(payload)

    def model_name(self, diarize: bool = False) -> str:
        return self._diarize_model if diarize else self._legacy_model

    def _create(self, params: dict[str, Any], index: int) -> Any:
        logger.debug(f"Chunk {index}: POST audio/transcriptions model={params['model']}")
        try:
            return self._client.audio.transcriptions.create(**params)
        except openai.OpenAIError as e:
            logger.error(f"Transcription of chunk {index} failed: {e}")
            raise TranscriptionServiceError(f"Transcription of chunk {index} failed: {e}") from e

    @staticmethod
    def _validate(model: type[BaseModel], response: Any, index: int):
        data = response.model_dump() if hasattr(response, "model_dump") else response
        try:
            return model.model_validate(data)
        except ValidationError as e:
            logger.error(f"Unexpected transcription payload for chunk {index}: {e}")
            raise TranscriptionServiceError(f"Unexpected transcription payload for chunk {index}") from e
