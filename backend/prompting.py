"""Rolling context prompt for the legacy (whisper-1) transcription variant.

Whisper only reads the last 224 tokens of a prompt. Each chunk is sent with
the user's hint plus as much of the transcript so far as still fits, which
keeps spelling and terminology consistent across chunk boundaries.
See https://platform.openai.com/docs/guides/speech-to-text/prompting
"""

from typing import Protocol

import tiktoken

PROMPT_TOKEN_LIMIT = 224

# Visible break between the hint and the carried-over transcript.
CONTEXT_DELIMITER = " … "


class Tokenizer(Protocol):
    def encode(self, text: str) -> list[int]: ...

    def decode(self, tokens: list[int]) -> str: ...


def build_context_prompt(
    hint: str,
    transcript: str,
    tokenizer: Tokenizer,
    limit: int = PROMPT_TOKEN_LIMIT,
) -> str:
    """Return the hint followed by the trailing tokens of ``transcript``.

    The transcript tail gets whatever the hint (with its delimiter) leaves of
    ``limit``. Before any text has been transcribed the hint is sent alone.
    """
    if not transcript:
        return hint

    prefix_tokens = tokenizer.encode(hint + CONTEXT_DELIMITER)
    available = limit - len(prefix_tokens)
    if available <= 0:
        return tokenizer.decode(prefix_tokens[:limit])

    transcript_tokens = tokenizer.encode(transcript)
    return tokenizer.decode(prefix_tokens + transcript_tokens[-available:])


class TiktokenTokenizer:
    """tiktoken encoding that treats special-token text as plain text."""

    def __init__(self, encoding_name: str = "cl100k_base"):
        self._encoding = tiktoken.get_encoding(encoding_name)

    def encode(self, text: str) -> list[int]:
        return self._encoding.encode(text, disallowed_special=())

    def decode(self, tokens: list[int]) -> str:
        return self._encoding.decode(tokens)
