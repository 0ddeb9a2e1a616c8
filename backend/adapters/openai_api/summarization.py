"""OpenAISummarizationAdapter — chat-completions summaries of a transcript."""

import logging

import openai

from domain.models import SummarizationResult
from ports.summarization import SummarizationPort

logger = logging.getLogger(__name__)

DEFAULT_SUMMARY_MODEL = "gpt-4o"


class OpenAISummarizationAdapter(SummarizationPort):
    def __init__(self, client: "openai.OpenAI", model: str = DEFAULT_SUMMARY_MODEL):
        self._client = client
        self._model = model

    def summarize(self, instructions: str, transcript: str) -> SummarizationResult:
        try:
            response = self._client.chat.completions.create(
                model=self._model,
                messages=[
                    {"role": "system", "content": instructions},
                    {"role": "user", "content": transcript},
                ],
            )
        except openai.OpenAIError as e:
            logger.error(f"Summarization failed: {e}")
            return SummarizationResult.failed(str(e))

        message = response.choices[0].message
        if message.content:
            return SummarizationResult.success(message.content)
        return SummarizationResult.refused(getattr(message, "refusal", None) or "no refusal reason")
