"""Pipeline failure taxonomy. None of these are retried internally."""


class PipelineError(RuntimeError):
    pass


class DecodeError(PipelineError):
    """The input container/codec could not be parsed."""


class EncodingError(PipelineError):
    """The configuration makes chunking impossible."""


class TranscriptionServiceError(PipelineError):
    """A remote transcription call failed; the whole attempt is aborted."""
