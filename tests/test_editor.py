"""Tests for the interactive editor loop."""

import shutil
import tempfile
import unittest
from pathlib import Path
from unittest.mock import Mock, patch

from ansimark.editor import Editor
from ansimark.model import Segment
from ansimark.session import EditingSession
from ansimark.settings_persistence import Settings, SettingsPersistence
from ansimark.view import TerminalPreview


class FakeTerm:
    bold = "<b>"
    underline = "<u>"
    normal = "</>"

    def color(self, n):
        return f"<fg{n}>"

    def on_color(self, n):
        return f"<bg{n}>"


class TestEditor(unittest.TestCase):

    def setUp(self):
        self.lines = []
        self.clipboard = Mock()
        self.clipboard.copy_text.return_value = True
        self.clipboard.paste_text.return_value = "pasted text"
        self.temp_dir = tempfile.mkdtemp()
        self.persistence = SettingsPersistence(config_dir=Path(self.temp_dir) / "ansimark")
        self.settings = Settings()
        self.session = EditingSession(self.settings, clipboard=self.clipboard)
        self.editor = Editor(
            settings=self.settings,
            preview=TerminalPreview(FakeTerm()),
            session=self.session,
            write=self.lines.append,
            persistence=self.persistence,
        )

    def tearDown(self):
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def run_lines(self, *lines):
        for line in lines:
            self.editor.handle_line(line)

    def test_text_and_style_workflow(self):
        self.run_lines(
            "text hello world",
            "select 0 5",
            "bold",
            "fg red",
            "apply",
            "select 6 11",
            "bold",
            "fg red",
            "bg 45",
            "apply",
        )
        self.assertEqual(self.session.document.segments, (
            Segment("hello", foreground="31", styles=("1",)),
            Segment(" "),
            Segment("world", background="45"),
        ))
        self.assertEqual(
            self.session.output,
            "```ansi\n\u001b[1;31mhello\u001b[0m \u001b[45mworld\u001b[0m\n```",
        )

    def test_modified_commands_show_preview(self):
        self.run_lines("text hi")
        self.assertEqual(self.lines, ["hi"])

    def test_preview_can_be_disabled(self):
        self.settings.show_preview = False
        self.run_lines("text hi")
        self.assertEqual(self.lines, [])

    def test_type_and_backspace(self):
        self.run_lines("text hello", "type  there", "backspace 2")
        self.assertEqual(self.session.text, "hello the")

    def test_apply_without_selection_reports_error(self):
        self.run_lines("text hello", "fg red", "apply")
        self.assertIn("Error: select some text first", self.lines)
        self.assertFalse(self.session.has_styling)

    def test_bad_arguments_report_errors(self):
        self.run_lines("select 1", "select a b", "fg mauve", "backspace x", "bogus")
        errors = [line for line in self.lines if line.startswith("Error:")]
        self.assertEqual(len(errors), 5)

    def test_unpick_color(self):
        self.run_lines("fg red", "fg none")
        self.assertIsNone(self.session.foreground)
        self.assertEqual(self.lines[-1], "Foreground: none")

    def test_show_writes_preview_ruler_and_output(self):
        self.run_lines("text hello", "select 1 3")
        self.lines.clear()
        self.run_lines("show")
        self.assertEqual(self.lines, ["hello", " ^^", "```ansi\nhello\n```"])

    def test_show_empty(self):
        self.run_lines("show")
        self.assertEqual(self.lines[-1], "(type some text to see the output)")

    def test_copy(self):
        self.run_lines("text hi", "copy")
        self.clipboard.copy_text.assert_called_once_with("```ansi\nhi\n```")
        self.assertEqual(self.lines[-1], "Copied!")

    def test_copy_nothing(self):
        self.run_lines("copy")
        self.assertEqual(self.lines[-1], "Nothing to copy")

    def test_copy_failure(self):
        self.clipboard.copy_text.return_value = False
        self.run_lines("text hi", "copy")
        self.assertEqual(self.lines[-1], "Could not copy to clipboard")

    def test_auto_copy_after_apply(self):
        self.settings.auto_copy = True
        self.run_lines("text hi", "select 0 1", "underline", "apply")
        self.clipboard.copy_text.assert_called_once_with(
            "```ansi\n\u001b[4mh\u001b[0mi\n```"
        )

    def test_negative_backspace_is_rejected(self):
        self.run_lines("text hello", "backspace -3")
        self.assertEqual(self.lines[-1], "Error: count must not be negative, got -3")
        self.assertEqual(self.session.text, "hello")

    def test_set_auto_copy_then_apply(self):
        self.run_lines("set auto_copy on")
        self.assertEqual(self.lines[-1], "auto_copy = on")
        self.assertTrue(self.settings.auto_copy)
        self.assertTrue(self.persistence.load().auto_copy)

        self.run_lines("text hi", "select 0 1", "underline", "apply")
        self.clipboard.copy_text.assert_called_once_with(
            "```ansi\n\u001b[4mh\u001b[0mi\n```"
        )

    def test_set_persists_across_editors(self):
        self.run_lines("set show_preview off")
        other = SettingsPersistence(config_dir=self.persistence._config_dir)
        self.assertFalse(other.load().show_preview)
        self.run_lines("text hi")
        self.assertEqual(self.lines[-1], "show_preview = off")

    def test_set_lists_settings(self):
        self.run_lines("set")
        self.assertEqual(self.lines, [
            "  coalesce_segments = off",
            "  auto_copy = off",
            "  show_preview = on",
        ])

    def test_set_rejects_unknown_names_and_values(self):
        self.run_lines("set sparkles on", "set auto_copy maybe", "set auto_copy")
        errors = [line for line in self.lines if line.startswith("Error:")]
        self.assertEqual(errors, [
            "Error: unknown setting: sparkles",
            "Error: expected on or off, got 'maybe'",
            "Error: usage: set <name> on|off",
        ])
        self.assertFalse(self.settings.auto_copy)
        self.assertEqual(self.persistence.load(), Settings())

    def test_paste_replaces_text(self):
        self.run_lines("paste")
        self.assertEqual(self.session.text, "pasted text")

    def test_clear(self):
        self.run_lines("text abc", "select 0 2", "bg 41", "apply", "clear")
        self.assertFalse(self.session.has_styling)
        self.assertEqual(self.session.document.segments, (Segment("abc"),))

    def test_segments_and_picks(self):
        self.run_lines("text ab", "bold")
        self.lines.clear()
        self.run_lines("segments", "picks")
        self.assertEqual(self.lines, ["  0 [0, 2) 'ab'", "Style: Bold"])

    def test_help_lists_commands(self):
        self.run_lines("help")
        self.assertTrue(any(line.strip().startswith("apply") for line in self.lines))

    def test_run_until_quit(self):
        inputs = iter(["text hi", "quit", "text never"])
        self.editor.run(read_line=lambda prompt: next(inputs))
        self.assertFalse(self.editor.running)
        self.assertEqual(self.session.text, "hi")

    def test_run_stops_on_eof(self):
        def read_line(prompt):
            raise EOFError
        self.editor.run(read_line=read_line)
        self.assertEqual(self.lines, ["Type 'help' for commands."])

    def test_default_settings_come_from_persistence(self):
        with patch('ansimark.editor.get_persistence') as mock_get:
            mock_get.return_value.load.return_value = Settings(auto_copy=True)
            editor = Editor(preview=TerminalPreview(FakeTerm()), write=self.lines.append)
        self.assertTrue(editor.settings.auto_copy)
        self.assertIs(editor.session.settings, editor.settings)


if __name__ == '__main__':
    unittest.main()
