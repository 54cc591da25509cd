"""Interactive line editor for building ANSI-colored chat messages."""

from __future__ import annotations

import logging
from typing import Callable, Optional

from .commands import CommandError, CommandRegistry
from .constants import EditorConstants
from .session import EditingSession
from .settings_persistence import Settings, SettingsPersistence, get_persistence
from .view import TerminalPreview

logger = logging.getLogger(__name__)


class Editor:
    """Reads command lines, dispatches them and shows the result."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        preview: Optional[TerminalPreview] = None,
        session: Optional[EditingSession] = None,
        write: Callable[[str], None] = print,
        persistence: Optional[SettingsPersistence] = None,
    ):
        self.persistence = persistence or get_persistence()
        self.settings = settings or self.persistence.load()
        self.session = session or EditingSession(self.settings)
        self.preview = preview or TerminalPreview()
        self.commands = CommandRegistry()
        self.write = write
        self.running = False
        self.status_message = ""

    def show(self) -> None:
        """Write the preview, the selection ruler and the encoded output."""
        session = self.session
        self.write(self.preview.render_document(session.document))
        ruler = self.preview.render_selection(session.text, session.selection)
        if ruler:
            self.write(ruler)
        self.write(session.output or EditorConstants.EMPTY_OUTPUT_MESSAGE)

    def copy_output(self) -> bool:
        if self.session.copy_output():
            self.status_message = "Copied!"
            return True
        if not self.session.output:
            self.status_message = "Nothing to copy"
        else:
            self.status_message = "Could not copy to clipboard"
        return False

    def handle_line(self, line: str) -> bool:
        """Run one command line and report its status.

        Returns:
            True if the document was modified
        """
        self.status_message = ""
        try:
            modified = self.commands.execute(self, line)
        except CommandError as e:
            self.status_message = f"Error: {e}"
            modified = False
        if modified and self.settings.show_preview:
            self.write(self.preview.render_document(self.session.document))
        if self.status_message:
            self.write(self.status_message)
        return modified

    def run(self, read_line: Callable[[str], str] = input) -> None:
        """Loop until ``quit`` or end of input."""
        self.running = True
        self.write("Type 'help' for commands.")
        while self.running:
            try:
                line = read_line(EditorConstants.PROMPT)
            except (EOFError, KeyboardInterrupt):
                break
            self.handle_line(line)
        logger.debug("Editor loop finished")
