"""Tests for command parsing and the command registry."""

import pytest

from ansimark.commands import (
    ApplyCommand,
    CommandError,
    CommandRegistry,
    parse_range_style,
)
from ansimark.model import Selection, StyleChange


def test_parse_range_style_with_names_and_codes():
    selection, change = parse_range_style("0:5=bold,red,45")
    assert selection == Selection(0, 5)
    assert change == StyleChange(foreground="31", background="45", styles=("1",))


def test_parse_range_style_orders_range():
    selection, change = parse_range_style("8:3=underline")
    assert selection == Selection(3, 8)
    assert change == StyleChange(styles=("4",))


def test_parse_range_style_color_only_keeps_styles():
    _, change = parse_range_style("0:1=teal")
    assert change.styles is None
    assert change.foreground == "36"


@pytest.mark.parametrize("arg", [
    "0:5",
    "0:5=",
    "5=red",
    "a:5=red",
    "0:5=sparkly",
])
def test_parse_range_style_errors(arg):
    with pytest.raises(CommandError):
        parse_range_style(arg)


def test_registry_lookup():
    registry = CommandRegistry()
    assert isinstance(registry.get_command("apply"), ApplyCommand)
    assert registry.get_command("nope") is None
    names = [name for name, _ in registry.items()]
    for name in ("text", "type", "select", "fg", "bg", "bold", "underline",
                 "apply", "clear", "show", "copy", "set", "quit"):
        assert name in names


def test_registry_unknown_command_raises():
    with pytest.raises(CommandError):
        CommandRegistry().execute(None, "frobnicate now")


def test_registry_blank_line_is_noop():
    assert CommandRegistry().execute(None, "   ") is False
