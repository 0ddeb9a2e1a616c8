"""Tests for the OpenAI transcription and summarization adapters (SDK mocked)."""

from __future__ import annotations

from types import SimpleNamespace
from unittest.mock import MagicMock

import openai
import pytest

from adapters.openai_api import OpenAISummarizationAdapter, OpenAITranscriptionAdapter
from adapters.openai_api.transcription import chunk_file_name
from domain.errors import TranscriptionServiceError
from domain.models import AudioChunk, DiarizedChunkResult, LegacyChunkResult


@pytest.fixture
def client() -> MagicMock:
    return MagicMock()


class TestLegacyTranscription:
    def test_request_shape(self, client: MagicMock) -> None:
        client.audio.transcriptions.create.return_value = {"text": "hi", "segments": []}
        adapter = OpenAITranscriptionAdapter(client)

        adapter.transcribe(AudioChunk(data=b"RIFF", duration=1.0), 3, prompt="Acme … hello")

        kwargs = client.audio.transcriptions.create.call_args.kwargs
        assert kwargs["model"] == "whisper-1"
        assert kwargs["file"] == ("audio_003.wav", b"RIFF")
        assert kwargs["response_format"] == "verbose_json"
        assert kwargs["timestamp_granularities"] == ["segment"]
        assert kwargs["prompt"] == "Acme … hello"

    def test_empty_prompt_is_omitted(self, client: MagicMock) -> None:
        client.audio.transcriptions.create.return_value = {"text": ""}
        OpenAITranscriptionAdapter(client).transcribe(AudioChunk(b"x", 0.0, "webm"), 0, prompt=None)
        kwargs = client.audio.transcriptions.create.call_args.kwargs
        assert "prompt" not in kwargs
        assert kwargs["file"][0] == "audio_000.webm"

    def test_response_mapping(self, client: MagicMock) -> None:
        client.audio.transcriptions.create.return_value = {
            "text": " Hello world. ",
            "language": "english",
            "segments": [
                {"id": 0, "start": 0.0, "end": 1.5, "text": " Hello", "avg_logprob": -0.2},
                {"id": 1, "start": 1.5, "end": 2.0, "text": " world. "},
            ],
        }
        result = OpenAITranscriptionAdapter(client).transcribe(AudioChunk(b"x", 2.0), 0)

        assert isinstance(result, LegacyChunkResult)
        assert result.kind == "legacy"
        assert result.text == "Hello world."
        assert [(s.start, s.end, s.text) for s in result.segments] == [(0.0, 1.5, "Hello"), (1.5, 2.0, "world.")]

    def test_sdk_objects_are_dumped(self, client: MagicMock) -> None:
        response = MagicMock()
        response.model_dump.return_value = {"text": "ok", "segments": None}
        client.audio.transcriptions.create.return_value = response
        result = OpenAITranscriptionAdapter(client).transcribe(AudioChunk(b"x", 1.0), 0)
        assert result.text == "ok"
        assert result.segments == []

    def test_sdk_error_becomes_service_error(self, client: MagicMock) -> None:
        client.audio.transcriptions.create.side_effect = openai.OpenAIError("rate limited")
        with pytest.raises(TranscriptionServiceError) as exc_info:
            OpenAITranscriptionAdapter(client).transcribe(AudioChunk(b"x", 1.0), 2)
        assert isinstance(exc_info.value.__cause__, openai.OpenAIError)
        assert "chunk 2" in str(exc_info.value)

    def test_malformed_payload_becomes_service_error(self, client: MagicMock) -> None:
        client.audio.transcriptions.create.return_value = {"segments": [{"text": "no times"}]}
        with pytest.raises(TranscriptionServiceError):
            OpenAITranscriptionAdapter(client).transcribe(AudioChunk(b"x", 1.0), 0)


class TestDiarizedTranscription:
    def test_request_and_mapping(self, client: MagicMock) -> None:
        client.audio.transcriptions.create.return_value = {
            "text": "Hi. Hello.",
            "segments": [
                {"id": "seg_0", "type": "transcript.text.segment", "start": 0.0, "end": 1.0,
                 "text": "Hi.", "speaker": "A"},
                {"id": "seg_1", "type": "transcript.text.segment", "start": 1.0, "end": 2.0,
                 "text": " Hello.", "speaker": "B"},
            ],
        }
        adapter = OpenAITranscriptionAdapter(client, diarize_model="custom-diarize")

        result = adapter.transcribe_diarized(AudioChunk(b"x", 2.0), 1)

        kwargs = client.audio.transcriptions.create.call_args.kwargs
        assert kwargs["model"] == "custom-diarize"
        assert kwargs["response_format"] == "diarized_json"
        assert kwargs["chunking_strategy"] == "auto"
        assert "prompt" not in kwargs
        assert isinstance(result, DiarizedChunkResult)
        assert [(s.speaker, s.text) for s in result.segments] == [("A", "Hi."), ("B", "Hello.")]

    def test_missing_speaker_is_rejected(self, client: MagicMock) -> None:
        client.audio.transcriptions.create.return_value = {
            "text": "x", "segments": [{"start": 0.0, "end": 1.0, "text": "x"}],
        }
        with pytest.raises(TranscriptionServiceError):
            OpenAITranscriptionAdapter(client).transcribe_diarized(AudioChunk(b"x", 1.0), 0)

    def test_model_names(self, client: MagicMock) -> None:
        adapter = OpenAITranscriptionAdapter(client)
        assert adapter.model_name() == "whisper-1"
        assert adapter.model_name(diarize=True) == "gpt-4o-transcribe-diarize"


class TestChunkFileName:
    def test_zero_padded(self) -> None:
        assert chunk_file_name(7, "wav") == "audio_007.wav"
        assert chunk_file_name(123, "mp3") == "audio_123.mp3"


def _completion(content, refusal=None):
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content, refusal=refusal))])


class TestSummarizationAdapter:
    def test_success(self, client: MagicMock) -> None:
        client.chat.completions.create.return_value = _completion("## Summary")
        result = OpenAISummarizationAdapter(client, model="gpt-4o-mini").summarize("Be brief", "[0] hi")

        assert result.state == "success"
        assert result.response == "## Summary"
        kwargs = client.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == "gpt-4o-mini"
        assert kwargs["messages"] == [
            {"role": "system", "content": "Be brief"},
            {"role": "user", "content": "[0] hi"},
        ]

    def test_refusal(self, client: MagicMock) -> None:
        client.chat.completions.create.return_value = _completion(None, refusal="cannot help")
        result = OpenAISummarizationAdapter(client).summarize("x", "y")
        assert (result.state, result.refusal) == ("refused", "cannot help")

    def test_refusal_without_reason(self, client: MagicMock) -> None:
        client.chat.completions.create.return_value = _completion("")
        assert OpenAISummarizationAdapter(client).summarize("x", "y").refusal == "no refusal reason"

    def test_error_is_returned_not_raised(self, client: MagicMock) -> None:
        client.chat.completions.create.side_effect = openai.OpenAIError("down")
        result = OpenAISummarizationAdapter(client).summarize("x", "y")
        assert result.state == "error"
        assert "down" in result.error
