"""Editing session: the state behind one ansimark editor.

The session is the explicit context object that ties the current text,
the styled document, the selection and the user's style picks together.
Every mutation replaces the document wholesale and checks it against the
text before returning.
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Optional

from .clipboard import ClipboardManager
from .constants import EditorConstants
from .encoder import encode
from .model import (
    Document,
    Selection,
    StyleChange,
    apply_style,
    check_document,
    clear,
    coalesce,
    reconcile_edit,
)
from .palette import (
    ColorOption,
    find_background,
    find_foreground,
    find_style,
    style_name,
)
from .settings_persistence import Settings

logger = logging.getLogger(__name__)


class EditingSession:
    text: str
    document: Document
    selection: Optional[Selection]

    def __init__(
        self,
        settings: Optional[Settings] = None,
        clipboard: Optional[ClipboardManager] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.settings = settings or Settings()
        self.clipboard = clipboard or ClipboardManager()
        self._clock = clock
        self.text = ""
        self.document = Document()
        self.selection = None
        self.foreground: Optional[ColorOption] = None
        self.background: Optional[ColorOption] = None
        self.styles: list[str] = []
        self._copied_at: Optional[float] = None

    def _commit(self, document: Document, text: str) -> None:
        if self.settings.coalesce_segments:
            document = coalesce(document)
        check_document(document, text)
        self.document = document
        self.text = text

    # --- Text ---

    def set_text(self, new_text: str) -> None:
        """Replace the full text after an edit and reconcile the segments."""
        self._commit(reconcile_edit(self.document, new_text), new_text)
        if self.selection is not None and self.selection.end > len(new_text):
            self.selection = None

    def type_text(self, added: str) -> None:
        self.set_text(self.text + added)

    def backspace(self, count: int = 1) -> None:
        if count < 0:
            raise ValueError(f"cannot delete {count} characters")
        self.set_text(self.text[:max(0, len(self.text) - count)])

    # --- Selection ---

    def select(self, start: int, end: int) -> Optional[Selection]:
        """Select ``[start, end)``; a zero-width range clears the selection."""
        selection = Selection.between(start, end).clamp(len(self.text))
        self.selection = None if selection.is_empty else selection
        return self.selection

    def clear_selection(self) -> None:
        self.selection = None

    @property
    def has_selection(self) -> bool:
        return self.selection is not None and not self.selection.is_empty

    @property
    def selected_text(self) -> str:
        if not self.has_selection:
            return ""
        return self.text[self.selection.start:self.selection.end]

    # --- Style picks ---

    def pick_foreground(self, key: Optional[str]) -> Optional[ColorOption]:
        """Pick a foreground color; picking the current one again unpicks it."""
        option = find_foreground(key) if key else None
        if option is None or option == self.foreground:
            self.foreground = None
        else:
            self.foreground = option
        return self.foreground

    def pick_background(self, key: Optional[str]) -> Optional[ColorOption]:
        option = find_background(key) if key else None
        if option is None or option == self.background:
            self.background = None
        else:
            self.background = option
        return self.background

    def toggle_style(self, key: str) -> bool:
        """Toggle a text style pick. Returns True if it is now picked."""
        code = find_style(key).code
        if code in self.styles:
            self.styles.remove(code)
            return False
        self.styles.append(code)
        return True

    @property
    def style_change(self) -> StyleChange:
        return StyleChange(
            foreground=self.foreground.code if self.foreground else None,
            background=self.background.code if self.background else None,
            styles=tuple(self.styles) or None,
        )

    def describe_choices(self) -> str:
        lines = []
        if self.styles:
            names = [style_name(c) or c for c in self.styles]
            lines.append(f"Style: {', '.join(names)}")
        if self.foreground:
            lines.append(f"Text Color: {self.foreground.name} ({self.foreground.preview})")
        if self.background:
            lines.append(f"Background: {self.background.name} ({self.background.preview})")
        return "\n".join(lines) or EditorConstants.NOTHING_PICKED_MESSAGE

    # --- Formatting ---

    def apply_formatting(self) -> bool:
        """Apply the current picks to the selection.

        Returns:
            False if there was no selection to apply to.
        """
        if not self.has_selection:
            return False
        selection = self.selection
        self.restyle(selection, self.style_change)
        self.selection = None
        return True

    def restyle(self, selection: Selection, change: StyleChange) -> None:
        """Apply ``change`` to ``selection`` without touching the picks."""
        self._commit(apply_style(self.document, selection, change), self.text)
        logger.debug(f"Applied {change} to [{selection.start}, {selection.end})")

    def clear_all(self) -> None:
        """Remove all styling and reset the picks."""
        self._commit(clear(self.document, self.text), self.text)
        self.foreground = None
        self.background = None
        self.styles = []

    @property
    def has_styling(self) -> bool:
        return self.document.has_styling

    # --- Output ---

    @property
    def output(self) -> str:
        return encode(self.document, self.text)

    def copy_output(self) -> bool:
        """Hand the encoded output to the clipboard."""
        output = self.output
        if not output:
            return False
        if not self.clipboard.copy_text(output):
            return False
        self._copied_at = self._clock()
        return True

    @property
    def copied(self) -> bool:
        """True for a short while after a successful copy."""
        if self._copied_at is None:
            return False
        return self._clock() - self._copied_at < EditorConstants.COPIED_INDICATOR_SECONDS
