"""Fold per-chunk transcription results into one recording-global transcript.

Every chunk's timestamps start at zero. Assembly shifts them by the summed
durations of the chunks before it and renumbers segments so ids run
0..N-1 across the whole recording.
"""

from dataclasses import dataclass
from functools import reduce
from typing import Iterable

from domain.models import (
    ChunkResult,
    TranscriptSegment,
    TranscriptionResult,
    TranscriptionVariant,
)


@dataclass(frozen=True)
class SegmentAccumulator:
    """State threaded through the chunk fold. Each step returns a new value."""
    next_id: int = 0
    time_offset: float = 0.0
    full_text: str = ""
    segments: tuple[TranscriptSegment, ...] = ()
    chunks_seen: int = 0


def fold_chunk(acc: SegmentAccumulator, result: ChunkResult, duration: float) -> SegmentAccumulator:
    """Append one chunk's segments, shifted by ``acc.time_offset``.

    ``duration`` is the encoder's duration for the chunk, not anything the
    service reported.
    """
    new_segments = tuple(
        TranscriptSegment(
            id=acc.next_id + j,
            start=raw.start + acc.time_offset,
            end=max(raw.end, raw.start) + acc.time_offset,
            text=raw.text.strip(),
            speaker=getattr(raw, "speaker", None),
        )
        for j, raw in enumerate(result.segments)
    )

    chunk_text = result.text.strip()
    full_text = chunk_text if acc.chunks_seen == 0 else f"{acc.full_text} {chunk_text}"

    return SegmentAccumulator(
        next_id=acc.next_id + len(new_segments),
        time_offset=acc.time_offset + duration,
        full_text=full_text,
        segments=acc.segments + new_segments,
        chunks_seen=acc.chunks_seen + 1,
    )


def finish(acc: SegmentAccumulator, variant: TranscriptionVariant) -> TranscriptionResult:
    # The diarized text is rebuilt from segments; the legacy text is the running transcript.
    if variant is TranscriptionVariant.DIARIZE:
        text = " ".join(seg.text for seg in acc.segments)
    else:
        text = acc.full_text
    return TranscriptionResult(text=text, segments=list(acc.segments), chunks=acc.chunks_seen)


def assemble(
    results: Iterable[tuple[ChunkResult, float]],
    variant: TranscriptionVariant = TranscriptionVariant.LEGACY,
) -> TranscriptionResult:
    """Assemble ``(chunk_result, chunk_duration)`` pairs given in chunk order."""
    acc = reduce(lambda a, item: fold_chunk(a, item[0], item[1]), results, SegmentAccumulator())
    return finish(acc, variant)
