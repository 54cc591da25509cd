"""Segment model: the styled partition of a text into runs.

A :class:`Document` is an immutable, ordered sequence of :class:`Segment`
objects whose texts concatenate to the current full text. Every operation
returns a new document; nothing is mutated in place.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Iterable, Iterator, Optional

from .constants import AnsiConstants

logger = logging.getLogger(__name__)


class DocumentInvariantError(AssertionError):
    """Raised when a document no longer matches the text it describes."""


def normalize_styles(codes: Iterable[str]) -> tuple[str, ...]:
    """Deduplicate style codes and put them in declared encoding order.

    Codes outside the declared order keep their first-seen order after the
    known ones.
    """
    seen: list[str] = []
    for code in codes:
        if code not in seen:
            seen.append(code)
    order = AnsiConstants.STYLE_CODE_ORDER
    known = [c for c in order if c in seen]
    unknown = [c for c in seen if c not in order]
    return tuple(known + unknown)


@dataclass(frozen=True)
class Segment:
    text: str
    foreground: Optional[str] = None
    background: Optional[str] = None
    styles: tuple[str, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "styles", normalize_styles(self.styles))

    def __len__(self) -> int:
        return len(self.text)

    @property
    def is_plain(self) -> bool:
        """True when the segment carries no attribute at all."""
        return not (self.foreground or self.background or self.styles)

    def same_style(self, other: "Segment") -> bool:
        return (
            self.foreground == other.foreground
            and self.background == other.background
            and self.styles == other.styles
        )

    def with_text(self, text: str) -> "Segment":
        return replace(self, text=text)


@dataclass(frozen=True)
class Selection:
    """Half-open character range ``[start, end)`` over the full text."""

    start: int
    end: int

    @classmethod
    def between(cls, a: int, b: int) -> "Selection":
        """Build a selection from two endpoints in either order."""
        return cls(min(a, b), max(a, b))

    @property
    def is_empty(self) -> bool:
        return self.start >= self.end

    def clamp(self, length: int) -> "Selection":
        start = max(0, min(self.start, length))
        end = max(start, min(self.end, length))
        return Selection(start, end)

    def __len__(self) -> int:
        return max(0, self.end - self.start)


@dataclass(frozen=True)
class StyleChange:
    """Attributes to override on a selection.

    ``None`` (or an empty ``styles``) means "keep each segment's own value".
    """

    foreground: Optional[str] = None
    background: Optional[str] = None
    styles: Optional[tuple[str, ...]] = None

    @property
    def is_empty(self) -> bool:
        return not (self.foreground or self.background or self.styles)

    def apply_to(self, segment: Segment) -> Segment:
        return Segment(
            text=segment.text,
            foreground=self.foreground or segment.foreground,
            background=self.background or segment.background,
            styles=tuple(self.styles) if self.styles else segment.styles,
        )


@dataclass(frozen=True)
class Document:
    segments: tuple[Segment, ...] = ()

    @classmethod
    def from_text(cls, text: str) -> "Document":
        """A document holding ``text`` as a single unstyled run."""
        if not text:
            return cls()
        return cls((Segment(text),))

    def __iter__(self) -> Iterator[Segment]:
        return iter(self.segments)

    def __len__(self) -> int:
        return sum(len(s) for s in self.segments)

    def __bool__(self) -> bool:
        return bool(self.segments)

    @property
    def text(self) -> str:
        return "".join(s.text for s in self.segments)

    @property
    def has_styling(self) -> bool:
        return any(not s.is_plain for s in self.segments)


def check_document(document: Document, full_text: str) -> None:
    """Assert that ``document`` is a well-formed partition of ``full_text``."""
    for i, segment in enumerate(document.segments):
        if not segment.text:
            raise DocumentInvariantError(f"segment {i} is empty")
    total = len(document)
    if total != len(full_text):
        raise DocumentInvariantError(
            f"segments cover {total} characters but the text has {len(full_text)}"
        )


def _resync(segments: list[Segment], text: str) -> tuple[Segment, ...]:
    """Re-slice ``text`` into the given segments' boundaries."""
    out = []
    pos = 0
    for segment in segments:
        piece = text[pos:pos + len(segment)]
        pos += len(segment)
        if piece:
            out.append(segment.with_text(piece))
    return tuple(out)


def reconcile_edit(document: Document, new_text: str) -> Document:
    """Fit ``document`` to ``new_text`` after a single edit.

    Growth extends the last segment, shrinking truncates from the tail. A
    document that is empty or a single unstyled run is simply replaced.
    """
    segments = list(document.segments)
    if not segments or (len(segments) == 1 and segments[0].is_plain):
        return Document.from_text(new_text)

    old_length = len(document)
    delta = len(new_text) - old_length

    if delta > 0:
        last = segments[-1]
        segments[-1] = last.with_text(last.text + new_text[old_length:])
    elif delta < 0:
        remaining = len(new_text)
        kept: list[Segment] = []
        for segment in segments:
            if remaining <= 0:
                break
            if remaining >= len(segment):
                kept.append(segment)
                remaining -= len(segment)
            else:
                kept.append(segment.with_text(segment.text[:remaining]))
                remaining = 0
        segments = kept

    logger.debug(f"reconcile_edit: delta={delta}, {len(segments)} segments")
    return Document(_resync(segments, new_text))


def apply_style(
    document: Document,
    selection: Optional[Selection],
    change: StyleChange,
) -> Document:
    """Restyle the characters in ``selection``, splitting boundary segments.

    Characters outside the selection keep their text and style. Segments are
    not merged, so original boundaries inside the selection survive.
    """
    if selection is None:
        return document
    selection = selection.clamp(len(document))
    if selection.is_empty:
        return document

    start, end = selection.start, selection.end
    out: list[Segment] = []
    pos = 0
    for segment in document.segments:
        seg_end = pos + len(segment)
        if seg_end <= start or pos >= end:
            out.append(segment)
        else:
            if pos < start:
                out.append(segment.with_text(segment.text[:start - pos]))
            lo = max(0, start - pos)
            hi = min(len(segment), end - pos)
            overlap = segment.text[lo:hi]
            if overlap:
                out.append(change.apply_to(segment.with_text(overlap)))
            if seg_end > end:
                out.append(segment.with_text(segment.text[end - pos:]))
        pos = seg_end

    logger.debug(
        f"apply_style: [{start}, {end}) -> {len(out)} segments ({change})"
    )
    return Document(tuple(out))


def clear(document: Document, full_text: str) -> Document:
    """Drop all styling; the result is one unstyled run of ``full_text``."""
    return Document.from_text(full_text)


def coalesce(document: Document) -> Document:
    """Merge adjacent segments that share an identical style."""
    merged: list[Segment] = []
    for segment in document.segments:
        if merged and merged[-1].same_style(segment):
            merged[-1] = merged[-1].with_text(merged[-1].text + segment.text)
        else:
            merged.append(segment)
    return Document(tuple(merged))
