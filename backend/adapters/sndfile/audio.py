"""SoundfileAudioDecoder — in-memory decoding through libsndfile.

Handles WAV, FLAC, OGG/Vorbis/Opus and (libsndfile >= 1.1) MP3 without
touching disk. Containers libsndfile does not know (WebM, M4A) need the
ffmpeg decoder instead.
"""

import io
import logging

import soundfile

from domain.errors import DecodeError
from domain.models import DecodedAudio
from ports.audio import AudioDecoderPort

logger = logging.getLogger(__name__)


class SoundfileAudioDecoder(AudioDecoderPort):
    def decode(self, data: bytes) -> DecodedAudio:
        try:
            samples, sample_rate = soundfile.read(io.BytesIO(data), dtype="float32", always_2d=True)
        except (soundfile.LibsndfileError, RuntimeError, TypeError) as e:
            logger.error(f"Could not decode audio ({len(data)} bytes): {e}")
            raise DecodeError(f"Failed to decode audio: {e}") from e

        return DecodedAudio(samples=samples, sample_rate=int(sample_rate))
