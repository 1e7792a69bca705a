"""Summary text cleanup: models still open with "Here is a summary:" despite the prompt."""

from __future__ import annotations

import re

_PREFIX_PATTERNS = [
    re.compile(p, re.IGNORECASE)
    for p in (
        r"^based on the following notes[,:]?\s*",
        r"^here is a summary of the notes in \d+-\d+ sentences?[,:]?\s*",
        r"^here is a summary[,:]?\s*",
        r"^summary[,:]?\s*",
        r"^the summary is[,:]?\s*",
        r"^here is the summary[,:]?\s*",
        r"^summary of the notes[,:]?\s*",
        r"^this summary[,:]?\s*",
        r"^the following summary[,:]?\s*",
        r"^in summary[,:]?\s*",
        r"^to summarize[,:]?\s*",
        r"^summarizing[,:]?\s*",
    )
]
_LEADING_MARK = re.compile(r"^[\"'`\-—–]\s*")
_TRAILING_MARK = re.compile(r"\s*[\"'`\-—–]$")
_LEADING_COLON = re.compile(r"^[:;]\s*")

# First paragraph of a note, capped, is enough context per note
NOTE_EXCERPT_CHARS = 500


def clean_summary(text: str | None) -> str:
    """Strip preamble phrases and stray quotes. Empty string if nothing is left."""
    if not text:
        return ""
    summary = text.strip()
    for pattern in _PREFIX_PATTERNS:
        summary = pattern.sub("", summary).strip()
    summary = _LEADING_MARK.sub("", summary)
    summary = _TRAILING_MARK.sub("", summary)
    summary = _LEADING_COLON.sub("", summary).strip()
    return summary


def note_excerpt(content: str, limit: int = NOTE_EXCERPT_CHARS) -> str:
    """First paragraph (blank-line separated), at most ``limit`` characters."""
    first = content.split("\n\n")[0] or content[:limit]
    return first[:limit]
