"""Terminal preview of a styled document using Blessed."""

from __future__ import annotations

from typing import Optional

import blessed

from .model import Document, Segment, Selection
from .palette import BACKGROUND_COLORS, FOREGROUND_COLORS, TEXT_STYLES


class TerminalPreview:
    """Renders documents the way the chat client will show them."""

    def __init__(self, terminal: Optional[blessed.Terminal] = None):
        self.term = terminal or blessed.Terminal()

    def _prefix(self, segment: Segment) -> str:
        term = self.term
        parts = []
        for code in segment.styles:
            if code == "1":
                parts.append(term.bold)
            elif code == "4":
                parts.append(term.underline)
        # 3x/4x map onto the terminal's first eight colors
        if segment.foreground:
            parts.append(term.color(int(segment.foreground) - 30))
        if segment.background:
            parts.append(term.on_color(int(segment.background) - 40))
        return "".join(parts)

    def render_segment(self, segment: Segment) -> str:
        if segment.is_plain:
            return segment.text
        return self._prefix(segment) + segment.text + self.term.normal

    def render_document(self, document: Document) -> str:
        return "".join(self.render_segment(s) for s in document)

    def render_selection(self, text: str, selection: Optional[Selection]) -> str:
        """A ruler line marking the selected characters under the text."""
        if selection is None or selection.is_empty:
            return ""
        selection = selection.clamp(len(text))
        return " " * selection.start + "^" * len(selection)

    def render_segments_table(self, document: Document) -> list[str]:
        lines = []
        pos = 0
        for i, segment in enumerate(document):
            attrs = []
            if segment.styles:
                attrs.append("styles=" + ",".join(segment.styles))
            if segment.foreground:
                attrs.append(f"fg={segment.foreground}")
            if segment.background:
                attrs.append(f"bg={segment.background}")
            end = pos + len(segment)
            lines.append(f"{i:>3} [{pos}, {end}) {segment.text!r} {' '.join(attrs)}".rstrip())
            pos = end
        return lines

    def render_palette(self) -> list[str]:
        term = self.term
        lines = ["Styles:"]
        for style in TEXT_STYLES:
            sample = self.render_segment(Segment(style.name, styles=(style.code,)))
            lines.append(f"  {style.code:>2}  {sample}")
        lines.append("Text colors:")
        for color in FOREGROUND_COLORS:
            swatch = term.color(int(color.code) - 30) + "###" + term.normal
            lines.append(f"  {color.code}  {swatch}  {color.name} {color.preview}")
        lines.append("Background colors:")
        for color in BACKGROUND_COLORS:
            swatch = term.on_color(int(color.code) - 40) + "   " + term.normal
            lines.append(f"  {color.code}  {swatch}  {color.name} {color.preview}")
        return lines
