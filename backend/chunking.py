"""Split audio into API-sized, independently decodable chunks.

Two paths:

* fast path: the original bytes already fit the payload limit and are sent
  as a single chunk, untouched. Its duration is unknown and reported as 0.0.
* slow path: decode, downmix to mono, slice into runs of samples that fit the
  limit once wrapped as 16-bit PCM WAV, and re-encode each run on its own.
"""

import io
import math
import wave
import logging

import numpy as np

from domain.errors import EncodingError
from domain.models import AudioChunk
from normalization import normalize_audio
from ports.audio import AudioDecoderPort

logger = logging.getLogger(__name__)

WAV_HEADER_BYTES = 44
BYTES_PER_SAMPLE = 2

# 25MB upload limit of the OpenAI speech-to-text endpoints.
DEFAULT_MAX_CHUNK_BYTES = 25 * 1024 * 1024


def samples_per_chunk(max_chunk_bytes: int) -> int:
    """Largest mono sample count whose WAV encoding fits in ``max_chunk_bytes``."""
    chunk_samples = (max_chunk_bytes - WAV_HEADER_BYTES) // BYTES_PER_SAMPLE
    if chunk_samples < 1:
        raise EncodingError(
            f"max_chunk_bytes={max_chunk_bytes} cannot hold a {WAV_HEADER_BYTES}-byte "
            f"header plus one {BYTES_PER_SAMPLE}-byte sample"
        )
    return chunk_samples


def float_to_pcm16(samples: np.ndarray) -> np.ndarray:
    """Convert [-1.0, 1.0] floats to little-endian int16, saturating out-of-range values."""
    scaled = np.round(np.asarray(samples, dtype=np.float64) * 32767)
    return np.clip(scaled, -32768, 32767).astype("<i2")


def encode_wav(samples: np.ndarray, sample_rate: int) -> bytes:
    """Wrap mono float samples in a canonical 44-byte-header PCM WAV container."""
    buffer = io.BytesIO()
    with wave.open(buffer, "wb") as wf:
        wf.setnchannels(1)
        wf.setsampwidth(BYTES_PER_SAMPLE)
        wf.setframerate(int(sample_rate))
        wf.writeframes(float_to_pcm16(samples).tobytes())
    return buffer.getvalue()


def split_samples(mono: np.ndarray, sample_rate: int, max_chunk_bytes: int) -> list[AudioChunk]:
    """Slice a mono sample buffer into WAV chunks, each no larger than ``max_chunk_bytes``."""
    chunk_samples = samples_per_chunk(max_chunk_bytes)
    total = len(mono)
    num_chunks = math.ceil(total / chunk_samples)
    logger.info(
        f"Splitting {total} samples @ {sample_rate}Hz into {num_chunks} chunks "
        f"of up to {chunk_samples} samples"
    )

    chunks: list[AudioChunk] = []
    for i in range(num_chunks):
        start_sample = i * chunk_samples
        end_sample = min((i + 1) * chunk_samples, total)
        piece = mono[start_sample:end_sample]
        chunks.append(AudioChunk(
            data=encode_wav(piece, sample_rate),
            duration=len(piece) / sample_rate,
        ))
    return chunks


def chunk_audio(
    data: bytes,
    max_chunk_bytes: int,
    decoder: AudioDecoderPort,
    extension: str = "wav",
) -> list[AudioChunk]:
    """Produce the ordered chunk list for a raw recording.

    ``extension`` names the container of ``data``; it is only used for the
    fast-path chunk, since re-encoded chunks are always WAV.
    """
    if len(data) <= max_chunk_bytes:
        logger.info(f"Audio fits in one chunk ({len(data)} <= {max_chunk_bytes} bytes), sending as-is")
        return [AudioChunk(data=data, duration=0.0, extension=extension)]

    # Validate the budget before paying for a decode.
    samples_per_chunk(max_chunk_bytes)

    audio = normalize_audio(data, decoder)
    return split_samples(audio.samples, audio.sample_rate, max_chunk_bytes)
