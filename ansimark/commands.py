"""Command pattern implementation for editor actions."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import fields
from typing import TYPE_CHECKING, Dict, Optional

from .model import Selection, StyleChange
from .palette import ColorKind, ColorOption, UnknownStyleError, classify
from .settings_persistence import Settings

if TYPE_CHECKING:
    from .editor import Editor


class CommandError(ValueError):
    """Raised for unknown commands or bad command arguments."""


def parse_int(value: str, what: str) -> int:
    try:
        return int(value)
    except ValueError:
        raise CommandError(f"{what} must be an integer, got {value!r}") from None


def parse_range_style(arg: str) -> tuple[Selection, StyleChange]:
    """Parse ``START:END=CODE[,CODE...]`` into a selection and a style change.

    Codes may be palette codes or names, e.g. ``0:5=bold,red,45``.
    """
    range_part, sep, codes_part = arg.partition("=")
    if not sep or not codes_part.strip():
        raise CommandError(f"expected START:END=CODES, got {arg!r}")
    start_s, sep, end_s = range_part.partition(":")
    if not sep:
        raise CommandError(f"expected START:END before '=', got {range_part!r}")
    selection = Selection.between(parse_int(start_s, "start"), parse_int(end_s, "end"))

    foreground = background = None
    styles: list[str] = []
    for key in codes_part.split(","):
        if not key.strip():
            continue
        try:
            option = classify(key)
        except UnknownStyleError as e:
            raise CommandError(str(e.args[0])) from None
        if isinstance(option, ColorOption) and option.kind is ColorKind.FOREGROUND:
            foreground = option.code
        elif isinstance(option, ColorOption):
            background = option.code
        else:
            styles.append(option.code)
    return selection, StyleChange(foreground, background, tuple(styles) or None)


class EditorCommand(ABC):
    """Base class for editor commands."""

    usage = ""
    help = ""

    @abstractmethod
    def execute(self, editor: 'Editor', args: str) -> bool:
        """Execute the command.

        Args:
            editor: Editor instance
            args: Everything after the command name, unstripped

        Returns:
            True if the command modified the document
        """


class EditCommand(EditorCommand):
    """Base class for commands that change the text or styling."""

    def execute(self, editor: 'Editor', args: str) -> bool:
        self._edit(editor, args)
        return True

    @abstractmethod
    def _edit(self, editor: 'Editor', args: str):
        pass


class SystemCommand(EditorCommand):
    """Base class for commands that leave the document alone."""

    def execute(self, editor: 'Editor', args: str) -> bool:
        self._execute_system(editor, args)
        return False

    @abstractmethod
    def _execute_system(self, editor: 'Editor', args: str):
        pass


class SetTextCommand(EditCommand):
    usage = "text <string>"
    help = "replace the whole text"

    def _edit(self, editor, args):
        editor.session.set_text(args)


class TypeTextCommand(EditCommand):
    usage = "type <string>"
    help = "append to the text"

    def _edit(self, editor, args):
        if not args:
            raise CommandError("nothing to type")
        editor.session.type_text(args)


class BackspaceCommand(EditCommand):
    usage = "backspace [n]"
    help = "delete n characters from the end"

    def _edit(self, editor, args):
        count = parse_int(args.strip(), "count") if args.strip() else 1
        if count < 0:
            raise CommandError(f"count must not be negative, got {count}")
        editor.session.backspace(count)


class PasteCommand(EditCommand):
    usage = "paste"
    help = "replace the text with the clipboard contents"

    def _edit(self, editor, args):
        editor.session.set_text(editor.session.clipboard.paste_text())


class SelectCommand(SystemCommand):
    usage = "select <start> <end>"
    help = "select characters [start, end)"

    def _execute_system(self, editor, args):
        parts = args.split()
        if len(parts) != 2:
            raise CommandError(f"usage: {self.usage}")
        selection = editor.session.select(
            parse_int(parts[0], "start"), parse_int(parts[1], "end")
        )
        if selection is None:
            editor.status_message = "Selection cleared"
        else:
            editor.status_message = f"Selected {editor.session.selected_text!r}"


class PickColorCommand(SystemCommand):
    def __init__(self, kind: ColorKind):
        self.kind = kind
        self.usage = f"{'fg' if kind is ColorKind.FOREGROUND else 'bg'} <code|name|none>"
        self.help = f"pick the {kind.value} color (again to unpick)"

    def _execute_system(self, editor, args):
        key: Optional[str] = args.strip()
        if key.lower() in ("", "none"):
            key = None
        session = editor.session
        try:
            if self.kind is ColorKind.FOREGROUND:
                option = session.pick_foreground(key)
            else:
                option = session.pick_background(key)
        except UnknownStyleError as e:
            raise CommandError(str(e.args[0])) from None
        picked = option.name if option else "none"
        editor.status_message = f"{self.kind.value.capitalize()}: {picked}"


class ToggleStyleCommand(SystemCommand):
    def __init__(self, code: str, name: str):
        self.code = code
        self.usage = name.lower()
        self.help = f"toggle {name.lower()}"

    def _execute_system(self, editor, args):
        on = editor.session.toggle_style(self.code)
        editor.status_message = f"{self.usage.capitalize()} {'on' if on else 'off'}"


class ApplyCommand(EditCommand):
    usage = "apply"
    help = "apply the picked colors and styles to the selection"

    def _edit(self, editor, args):
        if not editor.session.apply_formatting():
            raise CommandError("select some text first")
        if editor.settings.auto_copy:
            editor.copy_output()


class ClearCommand(EditCommand):
    usage = "clear"
    help = "remove all styling"

    def _edit(self, editor, args):
        editor.session.clear_all()


class ShowCommand(SystemCommand):
    usage = "show"
    help = "show the preview and the encoded output"

    def _execute_system(self, editor, args):
        editor.show()


class SegmentsCommand(SystemCommand):
    usage = "segments"
    help = "list the styled segments"

    def _execute_system(self, editor, args):
        for line in editor.preview.render_segments_table(editor.session.document):
            editor.write(line)


class PicksCommand(SystemCommand):
    usage = "picks"
    help = "show the current color and style picks"

    def _execute_system(self, editor, args):
        editor.write(editor.session.describe_choices())


class CopyCommand(SystemCommand):
    usage = "copy"
    help = "copy the encoded output to the clipboard"

    def _execute_system(self, editor, args):
        editor.copy_output()


class SetSettingCommand(SystemCommand):
    usage = "set <name> on|off"
    help = "change and save a preference"

    _values = {"on": True, "true": True, "yes": True,
               "off": False, "false": False, "no": False}

    def _execute_system(self, editor, args):
        parts = args.split()
        if not parts:
            for field in fields(Settings):
                value = getattr(editor.settings, field.name)
                editor.write(f"  {field.name} = {'on' if value else 'off'}")
            return
        if len(parts) != 2:
            raise CommandError(f"usage: {self.usage}")
        name, raw = parts
        if name not in {f.name for f in fields(Settings)}:
            raise CommandError(f"unknown setting: {name}")
        value = self._values.get(raw.lower())
        if value is None:
            raise CommandError(f"expected on or off, got {raw!r}")
        setattr(editor.settings, name, value)
        if editor.persistence.update(name, value):
            editor.status_message = f"{name} = {raw.lower()}"
        else:
            editor.status_message = f"{name} = {raw.lower()} (not saved)"


class PaletteCommand(SystemCommand):
    usage = "palette"
    help = "list the available colors and styles"

    def _execute_system(self, editor, args):
        for line in editor.preview.render_palette():
            editor.write(line)


class HelpCommand(SystemCommand):
    usage = "help"
    help = "show this help"

    def _execute_system(self, editor, args):
        for name, command in editor.commands.items():
            editor.write(f"  {command.usage:<26} {command.help}")


class QuitCommand(SystemCommand):
    usage = "quit"
    help = "leave the editor"

    def _execute_system(self, editor, args):
        editor.running = False


class CommandRegistry:
    """Registry mapping command names to commands."""

    def __init__(self):
        self._commands: Dict[str, EditorCommand] = {}
        self._setup_default_commands()

    def _setup_default_commands(self):
        # Text
        self.register("text", SetTextCommand())
        self.register("type", TypeTextCommand())
        self.register("backspace", BackspaceCommand())
        self.register("paste", PasteCommand())

        # Selection and picks
        self.register("select", SelectCommand())
        self.register("fg", PickColorCommand(ColorKind.FOREGROUND))
        self.register("bg", PickColorCommand(ColorKind.BACKGROUND))
        self.register("bold", ToggleStyleCommand("1", "Bold"))
        self.register("underline", ToggleStyleCommand("4", "Underline"))

        # Styling
        self.register("apply", ApplyCommand())
        self.register("clear", ClearCommand())

        # Output and info
        self.register("show", ShowCommand())
        self.register("segments", SegmentsCommand())
        self.register("picks", PicksCommand())
        self.register("copy", CopyCommand())
        self.register("palette", PaletteCommand())
        self.register("set", SetSettingCommand())
        self.register("help", HelpCommand())
        self.register("quit", QuitCommand())

    def register(self, name: str, command: EditorCommand):
        self._commands[name] = command

    def get_command(self, name: str) -> Optional[EditorCommand]:
        return self._commands.get(name)

    def items(self):
        return self._commands.items()

    def execute(self, editor: 'Editor', line: str) -> bool:
        """Parse and run one command line.

        Returns:
            True if the document was modified
        """
        name, _, args = line.lstrip().partition(" ")
        if not name:
            return False
        command = self.get_command(name.lower())
        if command is None:
            raise CommandError(f"unknown command: {name} (try 'help')")
        return command.execute(editor, args)
