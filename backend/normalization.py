"""Channel flattening for decoded audio.

No resampling or chunking happens here.
"""

import logging

import numpy as np

from domain.models import DecodedAudio
from ports.audio import AudioDecoderPort

logger = logging.getLogger(__name__)


def downmix_to_mono(samples: np.ndarray) -> np.ndarray:
    """Average all channels per frame (arithmetic mean).

    Accepts a 1-D array (already mono, returned as-is) or a (frames, channels)
    array. Returns a 1-D float32 array.
    """
    if samples.ndim == 1:
        return samples
    if samples.shape[1] == 1:
        return samples[:, 0]
    return samples.mean(axis=1, dtype=np.float64).astype(np.float32)


def normalize_audio(data: bytes, decoder: AudioDecoderPort) -> DecodedAudio:
    """Decode ``data`` and flatten it to a mono stream at the source sample rate."""
    decoded = decoder.decode(data)
    logger.info(
        f"Decoded {decoded.samples.shape[0]} frames, "
        f"{decoded.channels} channel(s) @ {decoded.sample_rate}Hz"
    )
    return DecodedAudio(samples=downmix_to_mono(decoded.samples), sample_rate=decoded.sample_rate)
