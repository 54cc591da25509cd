"""System clipboard hand-off for the encoded output."""

import logging

import pyperclip

logger = logging.getLogger(__name__)


class ClipboardManager:
    """Copies encoded output to the system clipboard.

    The copy is fire-and-forget: failures are logged and reported through
    the return value, never raised, and never retried.
    """

    @staticmethod
    def copy_text(text: str) -> bool:
        """Copy text to the system clipboard.

        Args:
            text: The encoded block to copy

        Returns:
            True if the clipboard accepted the text
        """
        try:
            pyperclip.copy(text)
        except pyperclip.PyperclipException as e:
            logger.warning(f"Could not copy to clipboard: {e}")
            return False
        logger.debug(f"Copied {len(text)} characters to clipboard")
        return True

    @staticmethod
    def paste_text() -> str:
        """Read plain text back from the system clipboard ("" on failure)."""
        try:
            return pyperclip.paste() or ""
        except pyperclip.PyperclipException as e:
            logger.warning(f"Could not read clipboard: {e}")
            return ""
