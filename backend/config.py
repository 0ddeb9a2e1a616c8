import os
import logging
from typing import Dict, Optional, Any
from pathlib import Path

from dotenv import load_dotenv

from chunking import DEFAULT_MAX_CHUNK_BYTES
from domain.models import TranscriptionVariant

logger = logging.getLogger(__name__)

load_dotenv()

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8001
DEFAULT_LEGACY_MODEL = "whisper-1"
DEFAULT_DIARIZE_MODEL = "gpt-4o-transcribe-diarize"
DEFAULT_SUMMARY_MODEL = "gpt-4o"
DEFAULT_TOKENIZER_ENCODING = "cl100k_base"


class Config:
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(Config, cls).__new__(cls)
            cls._instance._initialize()
        return cls._instance

    def _initialize(self):
        self.host = os.environ.get("HOST", DEFAULT_HOST)
        self.port = int(os.environ.get("PORT", DEFAULT_PORT))
        self.debug = os.environ.get("DEBUG", "0") == "1"
        self.openai_api_key = os.environ.get("OPENAI_API_KEY", "")
        self.openai_base_url = os.environ.get("OPENAI_BASE_URL") or None
        self.max_chunk_bytes = int(os.environ.get("MAX_CHUNK_BYTES", DEFAULT_MAX_CHUNK_BYTES))
        self.legacy_model = os.environ.get("LEGACY_MODEL", DEFAULT_LEGACY_MODEL)
        self.diarize_model = os.environ.get("DIARIZE_MODEL", DEFAULT_DIARIZE_MODEL)
        self.summary_model = os.environ.get("SUMMARY_MODEL", DEFAULT_SUMMARY_MODEL)
        self.transcription_hint = os.environ.get("TRANSCRIPTION_HINT", "")
        self.tokenizer_encoding = os.environ.get("TOKENIZER_ENCODING", DEFAULT_TOKENIZER_ENCODING)
        self.decoder = os.environ.get("DECODER", "soundfile").lower()
        self.temp_dir = os.environ.get("TEMP_DIR", "/tmp/meeting-scribe")

        variant = os.environ.get("TRANSCRIPTION_VARIANT", TranscriptionVariant.DIARIZE.value).lower()
        try:
            self.variant = TranscriptionVariant(variant)
        except ValueError:
            raise ValueError(f"Unknown TRANSCRIPTION_VARIANT: {variant!r}. Valid options: legacy, diarize") from None

        Path(self.temp_dir).mkdir(parents=True, exist_ok=True)

    def get_openai_api_key(self) -> Optional[str]:
        return self.openai_api_key or None

    def as_dict(self) -> Dict[str, Any]:
        return {
            "host": self.host,
            "port": self.port,
            "debug": self.debug,
            "max_chunk_bytes": self.max_chunk_bytes,
            "legacy_model": self.legacy_model,
            "diarize_model": self.diarize_model,
            "summary_model": self.summary_model,
            "variant": self.variant.value,
            "decoder": self.decoder,
            "tokenizer_encoding": self.tokenizer_encoding,
            "has_openai_key": bool(self.openai_api_key),
        }


config = Config()


def get_config() -> Config:
    return config


def create_openai_client(cfg: Config):
    from openai import OpenAI

    return OpenAI(api_key=cfg.get_openai_api_key(), base_url=cfg.openai_base_url)


def create_transcription_adapter(cfg: Config, client=None):
    """Create the remote transcription adapter.

    Uses lazy imports so the OpenAI SDK is only loaded when needed.
    """
    from adapters.openai_api.transcription import OpenAITranscriptionAdapter

    adapter = OpenAITranscriptionAdapter(
        client or create_openai_client(cfg),
        legacy_model=cfg.legacy_model,
        diarize_model=cfg.diarize_model,
    )
    logger.info(f"Transcription adapter: legacy={cfg.legacy_model}, diarize={cfg.diarize_model}")
    return adapter


def create_summarization_adapter(cfg: Config, client=None):
    from adapters.openai_api.summarization import OpenAISummarizationAdapter

    return OpenAISummarizationAdapter(client or create_openai_client(cfg), model=cfg.summary_model)


def create_audio_adapter(cfg: Config):
    """Create the audio decoder based on DECODER env var."""
    decoder = cfg.decoder

    if decoder == "soundfile":
        from adapters.sndfile.audio import SoundfileAudioDecoder
        adapter = SoundfileAudioDecoder()
    elif decoder == "ffmpeg":
        from adapters.ffmpeg.audio import FFmpegAudioDecoder
        adapter = FFmpegAudioDecoder(temp_dir=cfg.temp_dir)
    else:
        raise ValueError(f"Unknown DECODER: {decoder!r}. Valid options: soundfile, ffmpeg")

    logger.info(f"Audio decoder: {type(adapter).__name__}")
    return adapter


def create_tokenizer(cfg: Config):
    from prompting import TiktokenTokenizer

    return TiktokenTokenizer(cfg.tokenizer_encoding)
