"""Shared fakes for pipeline tests."""

from __future__ import annotations

import io
from collections import deque
from typing import Optional

import numpy as np
import pytest
import soundfile

from domain.errors import DecodeError
from domain.models import (
    AudioChunk,
    DecodedAudio,
    DiarizedChunkResult,
    LegacyChunkResult,
    SummarizationResult,
)
from ports.audio import AudioDecoderPort
from ports.summarization import SummarizationPort
from ports.transcription import TranscriptionPort


class WordTokenizer:
    """Whitespace tokenizer: one token per word, ids assigned on first sight."""

    def __init__(self) -> None:
        self.vocab: list[str] = []
        self._ids: dict[str, int] = {}

    def encode(self, text: str) -> list[int]:
        ids = []
        for word in text.split():
            if word not in self._ids:
                self._ids[word] = len(self.vocab)
                self.vocab.append(word)
            ids.append(self._ids[word])
        return ids

    def decode(self, tokens: list[int]) -> str:
        return " ".join(self.vocab[t] for t in tokens)


class FakeDecoder(AudioDecoderPort):
    def __init__(self, audio: Optional[DecodedAudio] = None) -> None:
        self.audio = audio
        self.calls = 0

    def decode(self, data: bytes) -> DecodedAudio:
        self.calls += 1
        if self.audio is None:
            raise DecodeError("unparseable")
        return self.audio


class FakeTranscription(TranscriptionPort):
    """Returns queued results in order and records every call."""

    def __init__(self, results: list, events: Optional[list] = None) -> None:
        self._results = deque(results)
        self.calls: list[tuple[str, int, Optional[str]]] = []
        self.events = events if events is not None else []

    def _next(self):
        result = self._results.popleft()
        if isinstance(result, Exception):
            raise result
        return result

    def transcribe(self, chunk: AudioChunk, index: int, prompt: Optional[str] = None) -> LegacyChunkResult:
        self.calls.append(("legacy", index, prompt))
        self.events.append(("call", index))
        return self._next()

    def transcribe_diarized(self, chunk: AudioChunk, index: int) -> DiarizedChunkResult:
        self.calls.append(("diarize", index, None))
        self.events.append(("call", index))
        return self._next()

    def model_name(self, diarize: bool = False) -> str:
        return "fake-diarize" if diarize else "fake-legacy"


def make_wav(samples: np.ndarray, sample_rate: int = 8000) -> bytes:
    buffer = io.BytesIO()
    soundfile.write(buffer, samples, sample_rate, format="WAV", subtype="PCM_16")
    return buffer.getvalue()


@pytest.fixture
def tokenizer() -> WordTokenizer:
    return WordTokenizer()


class RecordingSummarizer(SummarizationPort):
    def __init__(self, result: SummarizationResult) -> None:
        self.result = result
        self.received: list[tuple[str, str]] = []

    def summarize(self, instructions: str, transcript: str) -> SummarizationResult:
        self.received.append((instructions, transcript))
        return self.result
