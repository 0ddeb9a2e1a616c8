"""FFmpegAudioDecoder — decodes any container ffmpeg understands (WebM, M4A, ...)."""

import os
import logging
import tempfile
import subprocess
from typing import Optional

import soundfile

from domain.errors import DecodeError
from domain.models import DecodedAudio
from ports.audio import AudioDecoderPort

logger = logging.getLogger(__name__)


class FFmpegAudioDecoder(AudioDecoderPort):
    def __init__(self, temp_dir: Optional[str] = None):
        self._temp_dir = temp_dir

    def decode(self, data: bytes) -> DecodedAudio:
        input_file = tempfile.NamedTemporaryFile(suffix=".bin", dir=self._temp_dir, delete=False)
        input_file.write(data)
        input_file.close()
        output_file = tempfile.NamedTemporaryFile(suffix=".wav", dir=self._temp_dir, delete=False)
        output_file.close()

        try:
            # Keep source channels and sample rate; downmixing is done by the caller.
            cmd = [
                "ffmpeg", "-y",
                "-hide_banner",
                "-loglevel", "error",
                "-i", input_file.name,
                "-c:a", "pcm_f32le",
                output_file.name,
            ]
            try:
                result = subprocess.run(cmd, capture_output=True, text=True)
            except FileNotFoundError as e:
                raise DecodeError("ffmpeg executable not found") from e
            if result.returncode != 0:
                logger.error(f"Error decoding audio: {result.stderr}")
                raise DecodeError(f"Failed to decode audio: {result.stderr.strip()}")

            try:
                samples, sample_rate = soundfile.read(output_file.name, dtype="float32", always_2d=True)
            except RuntimeError as e:
                raise DecodeError(f"Failed to read ffmpeg output: {e}") from e
            return DecodedAudio(samples=samples, sample_rate=int(sample_rate))

        finally:
            for path in (input_file.name, output_file.name):
                if os.path.exists(path):
                    os.unlink(path)
