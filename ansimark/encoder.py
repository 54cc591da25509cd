"""Serialize a document into an ``ansi`` fenced block of escape-coded spans."""

from __future__ import annotations

from typing import Optional

from .constants import AnsiConstants
from .model import Document, Segment


def segment_codes(segment: Segment) -> list[str]:
    """Numeric codes for ``segment``: styles, then foreground, then background."""
    codes = list(segment.styles)
    if segment.foreground:
        codes.append(segment.foreground)
    if segment.background:
        codes.append(segment.background)
    return codes


def encode_segment(segment: Segment) -> str:
    codes = segment_codes(segment)
    if not codes:
        return segment.text
    return (
        AnsiConstants.ESCAPE_INTRODUCER
        + AnsiConstants.CODE_SEPARATOR.join(codes)
        + AnsiConstants.CODE_TERMINATOR
        + segment.text
        + AnsiConstants.RESET
    )


def encode(document: Document, raw_text: Optional[str] = None) -> str:
    """Encode ``document`` for pasting into a chat client.

    Args:
        document: The styled segments, in order.
        raw_text: The raw input text used for the emptiness check. Defaults
            to the document's own text.

    Returns:
        The fenced block, or an empty string when the raw text is blank or
        the document has no segments.
    """
    if raw_text is None:
        raw_text = document.text
    if not raw_text.strip() or not document:
        return ""

    spans = [encode_segment(s) for s in document if s.text]
    return AnsiConstants.FENCE_OPEN + "".join(spans) + AnsiConstants.FENCE_CLOSE
