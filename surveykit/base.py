"""Terminal plumbing shared by all prompts, and the password prompt."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional, Sequence, TextIO, Tuple, TypeVar

from .templates import Template, color_code, colors_enabled, run_template

try:
    import termios
    import tty
except ImportError:  # pragma: no cover - non-POSIX platforms
    termios = None
    tty = None

T = TypeVar("T")

_ERASE_LINE = "\x1b[2K"
_CURSOR_UP = "\x1b[1A"
_HIDE_CURSOR = "\x1b[?25l"
_SHOW_CURSOR = "\x1b[?25h"


class Key:
    """Key codes as delivered by :meth:`KeyReader.read_key`."""

    ARROW_LEFT = "\x02"
    ARROW_RIGHT = "\x06"
    ARROW_UP = "\x10"
    ARROW_DOWN = "\x0e"
    SPACE = " "
    ENTER = "\r"
    BACKSPACE = "\b"
    DELETE = "\x7f"
    INTERRUPT = "\x03"
    END_TRANSMISSION = "\x04"
    ESCAPE = "\x1b"
    DELETE_WORD = "\x17"
    DELETE_LINE = "\x18"
    TAB = "\t"


class InterruptError(Exception):
    """The user pressed Ctrl-C while a prompt was waiting for input."""

    def __init__(self) -> None:
        super().__init__("interrupt")


@dataclass
class Icon:
    text: str
    format: str


@dataclass
class IconSet:
    help: Icon = field(default_factory=lambda: Icon("?", "cyan"))
    error: Icon = field(default_factory=lambda: Icon("X", "red"))
    question: Icon = field(default_factory=lambda: Icon("?", "green+hb"))
    marked_option: Icon = field(default_factory=lambda: Icon("[x]", "green"))
    unmarked_option: Icon = field(default_factory=lambda: Icon("[ ]", "default+hb"))
    select_focus: Icon = field(default_factory=lambda: Icon(">", "cyan+b"))


def default_icons() -> IconSet:
    return IconSet()


def _default_filter(filter_text: str, value: str, index: int) -> bool:
    return filter_text.lower() in value.lower()


@dataclass
class PromptConfig:
    page_size: int = 7
    icons: IconSet = field(default_factory=default_icons)
    help_input: str = "?"
    suggest_input: str = "tab"
    filter: Callable[[str, str, int], bool] = _default_filter
    keep_filter: bool = False
    show_cursor: bool = False
    hide_character: str = "*"
    remove_select_all: bool = False
    remove_select_none: bool = False


def default_prompt_config() -> PromptConfig:
    return PromptConfig()


def paginate(page_size: int, choices: Sequence[T], selected: int) -> Tuple[List[T], int]:
    """Return the visible window of ``choices`` and the selection's index in it."""
    count = len(choices)
    if count < page_size:
        start, end, cursor = 0, count, selected
    elif selected < page_size // 2:
        start, end, cursor = 0, page_size, selected
    elif count - selected - 1 < page_size // 2:
        start, end = count - page_size, count
        cursor = selected - start
    else:
        above = page_size // 2
        below = page_size - above
        cursor = page_size // 2
        start, end = selected - above, selected + below
    return list(choices[start:end]), cursor


def _colorizer(color: bool) -> Callable[[str], str]:
    return color_code if color else (lambda style: "")


def _header(c: Callable[[str], str], config: PromptConfig, help_text: str,
            show_help: bool, message: str, after_message: str = " ") -> str:
    icons = config.icons
    out = ""
    if show_help:
        out += f"{c(icons.help.format)}{icons.help.text} {help_text}{c('reset')}\n"
    out += f"{c(icons.question.format)}{icons.question.text} {c('reset')}"
    out += f"{c('default+hb')}{message}{after_message}{c('reset')}"
    return out


class KeyReader:
    """Reads keys and edited lines from an input stream, echoing to an output stream."""

    _ESCAPES = {"A": Key.ARROW_UP, "B": Key.ARROW_DOWN, "C": Key.ARROW_RIGHT, "D": Key.ARROW_LEFT}

    def __init__(self, stdin: TextIO, stdout: TextIO) -> None:
        self.stdin = stdin
        self.stdout = stdout
        self._pending: List[str] = []
        self._saved_mode: Any = None

    def __enter__(self) -> "KeyReader":
        if termios is not None and self.stdin.isatty():
            fd = self.stdin.fileno()
            self._saved_mode = termios.tcgetattr(fd)
            tty.setcbreak(fd)
        return self

    def __exit__(self, *exc_info: Any) -> None:
        if self._saved_mode is not None:
            termios.tcsetattr(self.stdin.fileno(), termios.TCSADRAIN, self._saved_mode)
            self._saved_mode = None

    def _read_char(self) -> str:
        if self._pending:
            return self._pending.pop()
        return self.stdin.read(1)

    def _echo(self, text: str) -> None:
        if text:
            self.stdout.write(text)
            if hasattr(self.stdout, "flush"):
                self.stdout.flush()

    def read_key(self) -> str:
        """Return the next key; escape sequences become :class:`Key` codes."""
        while True:
            char = self._read_char()
            if char == "":
                raise EOFError("end of input")
            if char != Key.ESCAPE:
                return char
            following = self._read_char()
            if following != "[":
                if following:
                    self._pending.append(following)
                return Key.ESCAPE
            code = self._read_char()
            if code in self._ESCAPES:
                return self._ESCAPES[code]
            if code == "3":
                if self._read_char() == "~":
                    return Key.DELETE
            # unknown sequence: skip it

    def read_line(self, mask: str = "", initial: str = "",
                  on_key: Optional[Callable[[str, str], Optional[Tuple[str, bool]]]] = None) -> str:
        """Read a line with simple editing.

        ``mask`` replaces echoed characters.  ``on_key`` sees each key with the
        current line first; returning ``(line, done)`` replaces the line and,
        if ``done``, ends the read.
        """
        line = list(initial)
        cursor = len(line)

        def shown(chars: Sequence[str]) -> str:
            return mask * len(chars) if mask else "".join(chars)

        self._echo(shown(line))
        while True:
            try:
                key = self.read_key()
            except EOFError:
                if line:
                    break
                raise
            if on_key is not None:
                result = on_key(key, "".join(line))
                if result is not None:
                    text, done = result
                    line = list(text)
                    cursor = len(line)
                    if done:
                        break
                    continue
            if key in (Key.ENTER, "\n"):
                break
            if key == Key.INTERRUPT:
                raise InterruptError()
            if key == Key.END_TRANSMISSION:
                raise EOFError("end of transmission")
            if key in (Key.BACKSPACE, Key.DELETE):
                if cursor > 0:
                    del line[cursor - 1]
                    cursor -= 1
                    tail = shown(line[cursor:])
                    self._echo("\b" + tail + " " + "\b" * (len(tail) + 1))
            elif key == Key.ARROW_LEFT:
                if cursor > 0:
                    cursor -= 1
                    self._echo("\b")
            elif key == Key.ARROW_RIGHT:
                if cursor < len(line):
                    self._echo(shown(line[cursor]))
                    cursor += 1
            elif key >= Key.SPACE and key != Key.DELETE:
                line.insert(cursor, key)
                cursor += 1
                tail = shown(line[cursor:])
                self._echo(shown(key) + tail + "\b" * len(tail))
        self._echo("\n")
        return "".join(line)


@dataclass
class Renderer:
    """Writes prompt templates to the terminal, replacing the previous rendering."""

    stdin: Optional[TextIO] = field(default=None, kw_only=True, repr=False, compare=False)
    stdout: Optional[TextIO] = field(default=None, kw_only=True, repr=False, compare=False)
    stderr: Optional[TextIO] = field(default=None, kw_only=True, repr=False, compare=False)
    _rendered: str = field(default="", init=False, repr=False, compare=False)

    def output(self) -> TextIO:
        """The stream prompts write to."""
        return self.stdout if self.stdout is not None else sys.stdout

    def _write(self, text: str) -> None:
        out = self.output()
        out.write(text)
        if hasattr(out, "flush"):
            out.flush()

    def _key_reader(self) -> KeyReader:
        return KeyReader(self.stdin if self.stdin is not None else sys.stdin, self.output())

    def _erase_rendered(self) -> None:
        lines = self._rendered.count("\n")
        self._write("\r" + _ERASE_LINE + (_CURSOR_UP + _ERASE_LINE) * lines)
        self._rendered = ""

    def _previous_line(self, count: int) -> None:
        self._write(f"\x1b[{count}F")

    def _hide_cursor(self) -> None:
        self._write(_HIDE_CURSOR)

    def _show_cursor(self) -> None:
        self._write(_SHOW_CURSOR)

    def render(self, template: Template, data: Any) -> None:
        """Replace whatever was rendered before with ``template`` applied to ``data``."""
        user_output, layout_output = run_template(template, data)
        self._erase_rendered()
        self._write(user_output)
        self._rendered = layout_output

    def append_rendered_text(self, text: str) -> None:
        """Count ``text`` as part of the current rendering."""
        self._rendered += text

    def _show_error(self, config: PromptConfig, message: str) -> None:
        icon = config.icons.error

        def template(data: str, color: bool) -> str:
            c = _colorizer(color)
            return f"{c(icon.format)}{icon.text} Sorry, your reply was invalid: {data}{c('reset')}\n"

        user_output, _ = run_template(template, message)
        self._erase_rendered()
        self._write(user_output)


@dataclass
class Password(Renderer):
    """A text input whose characters are masked; it has no default."""

    message: str = ""
    help: str = ""

    def prompt(self, config: PromptConfig) -> str:
        user_output, _ = run_template(password_template, PasswordTemplateData(self, config=config))
        self._write(user_output)
        with self._key_reader() as reader:
            if not self.help:
                return reader.read_line(config.hide_character)
            while True:
                line = reader.read_line(config.hide_character)
                if line != config.help_input:
                    break
                self._previous_line(1)
                self.render(password_template,
                            PasswordTemplateData(self, show_help=True, config=config))
        self.append_rendered_text(config.hide_character * len(line))
        return line

    def cleanup(self, config: PromptConfig, value: Any) -> None:
        return None


@dataclass
class PasswordTemplateData:
    password: Password
    show_help: bool = False
    config: PromptConfig = field(default_factory=default_prompt_config)


def password_template(data: PasswordTemplateData, color: bool) -> str:
    c = _colorizer(color)
    prompt = data.password
    out = _header(c, data.config, prompt.help, data.show_help, prompt.message)
    if prompt.help and not data.show_help:
        out += f"{c('cyan')}[{data.config.help_input} for help]{c('reset')} "
    return out