"""AudioDecoderPort — abstract interface for turning encoded bytes into samples."""

from abc import ABC, abstractmethod

from domain.models import DecodedAudio


class AudioDecoderPort(ABC):
    @abstractmethod
    def decode(self, data: bytes) -> DecodedAudio:
        """Decode a container/codec byte buffer. Raises DecodeError on failure."""
