"""Domain <-> DTO mappers.

Remote payloads become the discriminated chunk results here, and assembled
segments become API DTOs. Nothing else touches the pydantic shapes.
"""

from typing import Dict, Optional

from domain.models import (
    DiarizedChunkResult,
    DiarizedRawSegment,
    LegacyChunkResult,
    RawSegment,
    SummarizationResult,
    TranscriptSegment,
)
from models import (
    DiarizedTranscriptionPayload,
    Segment,
    SummaryResponse,
    VerboseTranscriptionPayload,
)
from speaker_labels import display_name


def verbose_to_chunk_result(payload: VerboseTranscriptionPayload) -> LegacyChunkResult:
    return LegacyChunkResult(
        text=payload.text.strip(),
        segments=[
            RawSegment(start=seg.start, end=seg.end, text=seg.text.strip())
            for seg in payload.segments or []
        ],
    )


def diarized_to_chunk_result(payload: DiarizedTranscriptionPayload) -> DiarizedChunkResult:
    return DiarizedChunkResult(
        text=payload.text.strip(),
        segments=[
            DiarizedRawSegment(start=seg.start, end=seg.end, text=seg.text.strip(), speaker=seg.speaker)
            for seg in payload.segments or []
        ],
    )


def segment_to_dto(seg: TranscriptSegment, names: Optional[Dict[str, str]] = None) -> Segment:
    """Convert a domain TranscriptSegment to a Segment DTO."""
    return Segment(
        id=seg.id,
        start=seg.start,
        end=seg.end,
        text=seg.text,
        speaker=seg.speaker,
        speaker_label=display_name(seg.speaker, names) if seg.speaker else None,
    )


def dto_to_segment(dto: Segment) -> TranscriptSegment:
    """Convert a Segment DTO to a domain TranscriptSegment."""
    return TranscriptSegment(
        id=dto.id,
        start=dto.start,
        end=dto.end,
        text=dto.text,
        speaker=dto.speaker,
    )


def summary_to_dto(result: SummarizationResult) -> SummaryResponse:
    return SummaryResponse(
        state=result.state,
        response=result.response,
        refusal=result.refusal,
        error=result.error,
    )
