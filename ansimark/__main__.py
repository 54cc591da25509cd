"""ansimark CLI entry point.

Allows running via `python -m ansimark` and provides the console script
defined in `pyproject.toml`.

Usage:
    ansimark                               interactive editor
    ansimark --encode TEXT [START:END=CODES ...] [--copy]
    ansimark --palette
    ansimark --version

Each START:END=CODES argument styles a range, e.g. 0:5=bold,red or 6:11=45.
"""

from __future__ import annotations

import logging
import os
import sys

from .constants import EditorConstants
from .version import get_version_string


def _configure_logging() -> None:
    debug = os.environ.get(EditorConstants.DEBUG_ENV_VAR) == "1"
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(name)s: %(levelname)s: %(message)s",
    )


def run_encode(args: list[str]) -> int:
    """Encode TEXT with the given range styles and print the block."""
    from .commands import CommandError, parse_range_style
    from .session import EditingSession
    from .settings_persistence import get_persistence

    if not args:
        print("usage: ansimark --encode TEXT [START:END=CODES ...] [--copy]", file=sys.stderr)
        return 2
    text, rest = args[0], args[1:]
    copy = "--copy" in rest
    rest = [a for a in rest if a != "--copy"]

    session = EditingSession(get_persistence().load())
    session.set_text(text)
    try:
        for arg in rest:
            selection, change = parse_range_style(arg)
            session.restyle(selection, change)
    except CommandError as e:
        print(f"ansimark: {e}", file=sys.stderr)
        return 2

    output = session.output
    print(output)
    if copy and output and not session.copy_output():
        print("ansimark: could not copy to clipboard", file=sys.stderr)
        return 1
    return 0


def main() -> None:
    # Very small arg parsing: version, palette, one-shot encode, or editor
    _configure_logging()
    args = sys.argv[1:]
    if args and args[0] in ("--version", "-V"):
        print(get_version_string())
        return
    if args and args[0] == "--palette":
        from .view import TerminalPreview
        for line in TerminalPreview().render_palette():
            print(line)
        return
    if args and args[0] == "--encode":
        sys.exit(run_encode(args[1:]))

    # Lazy import to avoid importing UI deps for --version
    from .editor import Editor
    Editor().run()
    print("\nGoodbye!")


if __name__ == "__main__":  # pragma: no cover
    main()
