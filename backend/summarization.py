"""Transcript-to-text rendering for the summarizer.

Each line starts with the segment id in brackets so summary points can cite
the segments they came from, e.g. ``{3,4,7}``.
"""

import logging
from typing import Dict, Optional

from domain.models import SummarizationResult, TranscriptSegment
from ports.summarization import SummarizationPort
from speaker_labels import apply_speaker_names, display_name

logger = logging.getLogger(__name__)


def format_segments_for_summary(
    segments: list[TranscriptSegment],
    names: Optional[Dict[str, str]] = None,
) -> str:
    lines = []
    for seg in segments:
        if seg.speaker:
            lines.append(f"[{seg.id}] {display_name(seg.speaker, names)}: {seg.text}")
        else:
            lines.append(f"[{seg.id}] {seg.text}")
    return "\n".join(lines)


def summarize_segments(
    summarizer: SummarizationPort,
    instructions: str,
    segments: list[TranscriptSegment],
    names: Optional[Dict[str, str]] = None,
) -> SummarizationResult:
    """Summarize a transcript and substitute user speaker names into the result."""
    transcript = format_segments_for_summary(segments, names)
    logger.info(f"Summarizing {len(segments)} segments ({len(transcript)} characters)")
    result = summarizer.summarize(instructions, transcript)
    if result.state == "success" and names:
        return SummarizationResult.success(apply_speaker_names(result.response, names))
    return result
