"""Color and style vocabulary understood by the chat renderer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence


class UnknownStyleError(KeyError):
    """Raised when a code or name is not in the palette."""


class ColorKind(Enum):
    FOREGROUND = "foreground"
    BACKGROUND = "background"


@dataclass(frozen=True)
class ColorOption:
    name: str
    code: str
    preview: str  # hex swatch as shown by the renderer
    kind: ColorKind


@dataclass(frozen=True)
class StyleOption:
    name: str
    code: str


FOREGROUND_COLORS: tuple[ColorOption, ...] = (
    ColorOption("Dark Gray", "30", "#4f545c", ColorKind.FOREGROUND),
    ColorOption("Red", "31", "#dc322f", ColorKind.FOREGROUND),
    ColorOption("Yellowish Green", "32", "#859900", ColorKind.FOREGROUND),
    ColorOption("Gold", "33", "#b58900", ColorKind.FOREGROUND),
    ColorOption("Light Blue", "34", "#268bd2", ColorKind.FOREGROUND),
    ColorOption("Pink", "35", "#d33682", ColorKind.FOREGROUND),
    ColorOption("Teal", "36", "#2aa198", ColorKind.FOREGROUND),
    ColorOption("White", "37", "#ffffff", ColorKind.FOREGROUND),
)

BACKGROUND_COLORS: tuple[ColorOption, ...] = (
    ColorOption("Blueish Black", "40", "#002b36", ColorKind.BACKGROUND),
    ColorOption("Rust Brown", "41", "#cb4b16", ColorKind.BACKGROUND),
    ColorOption("Gray 40%", "42", "#586e75", ColorKind.BACKGROUND),
    ColorOption("Gray 45%", "43", "#657b83", ColorKind.BACKGROUND),
    ColorOption("Light Gray 55%", "44", "#839496", ColorKind.BACKGROUND),
    ColorOption("Blurple", "45", "#6c71c4", ColorKind.BACKGROUND),
    ColorOption("Light Gray 60%", "46", "#93a1a1", ColorKind.BACKGROUND),
    ColorOption("Cream White", "47", "#fdf6e3", ColorKind.BACKGROUND),
)

TEXT_STYLES: tuple[StyleOption, ...] = (
    StyleOption("Bold", "1"),
    StyleOption("Underline", "4"),
)


def _normalize_name(name: str) -> str:
    return " ".join(name.lower().replace("-", " ").replace("_", " ").split())


def _find(options: Sequence, key: str, what: str):
    key = key.strip()
    for option in options:
        if option.code == key:
            return option
    wanted = _normalize_name(key)
    for option in options:
        if _normalize_name(option.name) == wanted:
            return option
    raise UnknownStyleError(f"unknown {what}: {key!r}")


def find_foreground(key: str) -> ColorOption:
    """Look up a foreground color by code (``"31"``) or name (``"red"``)."""
    return _find(FOREGROUND_COLORS, key, "foreground color")


def find_background(key: str) -> ColorOption:
    return _find(BACKGROUND_COLORS, key, "background color")


def find_style(key: str) -> StyleOption:
    return _find(TEXT_STYLES, key, "text style")


def classify(key: str) -> ColorOption | StyleOption:
    """Resolve a bare code or name against every table.

    Codes and names do not collide across tables, so ``"bold"``, ``"31"``
    and ``"blurple"`` each resolve to exactly one option.
    """
    for finder in (find_style, find_foreground, find_background):
        try:
            return finder(key)
        except UnknownStyleError:
            continue
    raise UnknownStyleError(f"unknown color or style: {key!r}")


def style_name(code: str) -> Optional[str]:
    for option in TEXT_STYLES:
        if option.code == code:
            return option.name
    return None
