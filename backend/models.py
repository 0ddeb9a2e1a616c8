from typing import List, Optional, Dict, Literal
from pydantic import BaseModel


# Remote payloads. Only the fields the pipeline reads are declared; the rest
# of the OpenAI response is ignored.

class VerboseSegmentPayload(BaseModel):
    """One segment of a whisper-1 ``verbose_json`` response."""
    start: float
    end: float
    text: str = ""


class VerboseTranscriptionPayload(BaseModel):
    text: str = ""
    segments: Optional[List[VerboseSegmentPayload]] = None


class DiarizedSegmentPayload(BaseModel):
    """One segment of a ``diarized_json`` response."""
    start: float
    end: float
    text: str = ""
    speaker: str


class DiarizedTranscriptionPayload(BaseModel):
    text: str = ""
    segments: Optional[List[DiarizedSegmentPayload]] = None


# HTTP API

class Segment(BaseModel):
    """Represents a segment in the transcription"""
    id: int
    start: float
    end: float
    text: str
    speaker: Optional[str] = None
    speaker_label: Optional[str] = None


class TranscriptionResponse(BaseModel):
    """Response format for transcription"""
    text: str
    segments: List[Segment] = []
    model: Optional[str] = None
    variant: Optional[str] = None
    chunks: int = 1


class SummaryRequest(BaseModel):
    instructions: str
    segments: List[Segment]
    speaker_names: Dict[str, str] = {}


class SummaryResponse(BaseModel):
    state: Literal["success", "refused", "error"]
    response: Optional[str] = None
    refusal: Optional[str] = None
    error: Optional[str] = None


class HealthResponse(BaseModel):
    status: str = "ok"
    model: str
    variant: str
