"""ANSI colour codes and two-pass rendering of prompt templates.

A template is any callable taking ``(data, color)`` and returning the text to
show.  ``color`` tells the template whether it may emit ANSI escape codes.
"""

from __future__ import annotations

import os
from typing import Any, Callable, Tuple

#: Set to True to suppress colour in user-facing output (useful in tests).
DISABLE_COLOR = False

Template = Callable[[Any, bool], str]

_ESCAPE = "\x1b["
_RESET = "\x1b[0m"

_COLORS = {
    "black": 0,
    "red": 1,
    "green": 2,
    "yellow": 3,
    "blue": 4,
    "magenta": 5,
    "cyan": 6,
    "white": 7,
    "default": 9,
}

_ATTRIBUTES = (
    ("b", "1;"),
    ("B", "5;"),
    ("u", "4;"),
    ("i", "7;"),
    ("s", "9;"),
)


def _split_part(part: str) -> Tuple[str, str]:
    pieces = part.split("+")
    return pieces[0], pieces[1] if len(pieces) > 1 else ""


def _is_palette_index(key: str) -> bool:
    return key.isascii() and key.isdigit()


def color_code(style: str) -> str:
    """Return the ANSI escape sequence for a style such as ``"cyan"`` or ``"red+b:white"``.

    The style is ``foreground+attributes:background+attributes``; attributes are
    ``b`` bold, ``B`` blink, ``u`` underline, ``i`` inverse, ``s`` strikethrough
    and ``h`` high intensity.  Colours may be names or 256-colour palette indices.
    """
    if style in ("", "off"):
        return ""
    if style == "reset":
        return _RESET

    halves = style.split(":")
    fg_key, fg_attrs = _split_part(halves[0])
    bg_key, bg_attrs = _split_part(halves[1]) if len(halves) > 1 else ("", "")

    codes = "".join(code for flag, code in _ATTRIBUTES if flag in fg_attrs)

    fg_base = 90 if "h" in fg_attrs else 30
    if _is_palette_index(fg_key):
        codes += f"38;5;{int(fg_key)};"
    elif fg_key:
        codes += f"{fg_base + _COLORS.get(fg_key, 0)};"

    bg_base = 100 if "h" in bg_attrs else 40
    if _is_palette_index(bg_key):
        codes += f"48;5;{int(bg_key)};"
    elif bg_key:
        codes += f"{bg_base + _COLORS.get(bg_key, 0)};"

    if not codes:
        return ""
    return f"{_ESCAPE}{codes[:-1]}m"


def _env_color_disabled() -> bool:
    return os.environ.get("NO_COLOR", "") != "" or os.environ.get("CLICOLOR") == "0"


def _env_color_forced() -> bool:
    return "CLICOLOR_FORCE" in os.environ and os.environ["CLICOLOR_FORCE"] != "0"


def colors_enabled() -> bool:
    """Whether user-facing output may contain colour codes."""
    if DISABLE_COLOR:
        return False
    return not (_env_color_disabled() and not _env_color_forced())


def run_template(template: Template, data: Any) -> Tuple[str, str]:
    """Render ``template`` twice and return ``(user_output, layout_output)``.

    The first string is meant for the user and carries colour codes when
    colours are enabled; the second never does and serves layout purposes.
    """
    user_output = template(data, colors_enabled())
    layout_output = template(data, False)
    return user_output, layout_output