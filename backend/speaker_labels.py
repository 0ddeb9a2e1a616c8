"""Speaker label formatting.

Diarization services tag speakers as ``speaker_0``, ``speaker_1``, ... or as
single letters ``A``, ``B``, ... These helpers turn such tags into
``Speaker N`` labels. User renames are keyed by the raw tag, never by the
formatted label.
"""

import re
from typing import Dict, Optional

_NUMERIC_TAG = re.compile(r"^speaker_(\d+)$", re.IGNORECASE)
_LETTER_TAG = re.compile(r"^[A-Z]$", re.IGNORECASE)


def format_speaker_label(raw: str) -> str:
    """Map a raw diarization tag to a display label.

    ``speaker_0`` -> ``Speaker 1`` (zero-indexed), ``A`` -> ``Speaker 1``
    (alphabet position). Anything else is returned unchanged.
    """
    match = _NUMERIC_TAG.match(raw)
    if match:
        return f"Speaker {int(match.group(1)) + 1}"
    if _LETTER_TAG.match(raw):
        return f"Speaker {ord(raw.upper()) - ord('A') + 1}"
    return raw


def display_name(raw: str, names: Optional[Dict[str, str]] = None) -> str:
    """User-supplied name for ``raw`` if one is set, else its formatted label."""
    if names and names.get(raw):
        return names[raw]
    return format_speaker_label(raw)


def apply_speaker_names(text: str, names: Dict[str, str]) -> str:
    """Replace speaker references in free text (e.g. a summary) with user names.

    The formatted label is always replaced. The raw tag is replaced only when
    it is longer than one character: a bare ``A`` would match ordinary words.
    """
    for raw, name in names.items():
        if not name:
            continue
        formatted = format_speaker_label(raw)
        # (?!\d) keeps "Speaker 1" from matching inside "Speaker 12".
        text = re.sub(re.escape(formatted) + r"(?!\d)", lambda _: name, text, flags=re.IGNORECASE)
        if formatted != raw and len(raw) > 1:
            text = re.sub(re.escape(raw) + r"(?!\d)", lambda _: name, text, flags=re.IGNORECASE)
    return text
