"""OpenAI adapters for remote transcription and summarization."""

from .summarization import OpenAISummarizationAdapter
from .transcription import OpenAITranscriptionAdapter

__all__ = ["OpenAISummarizationAdapter", "OpenAITranscriptionAdapter"]
