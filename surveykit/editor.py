"""Prompt that opens the user's editor on a temporary file."""

from __future__ import annotations

import os
import shlex
import subprocess
import sys
import tempfile
from dataclasses import dataclass, field
from typing import Any, Optional

from .base import InterruptError, Key, PromptConfig, Renderer, _colorizer, _header, default_prompt_config

_BOM = b"\xef\xbb\xbf"


def default_editor() -> str:
    """The editor from $VISUAL or $EDITOR, else notepad on Windows and vim elsewhere."""
    for variable in ("VISUAL", "EDITOR"):
        value = os.environ.get(variable, "")
        if value:
            return value
    return "notepad" if sys.platform.startswith("win") else "vim"


def _stream_arg(stream: Any) -> Optional[Any]:
    if stream is None:
        return None
    try:
        stream.fileno()
    except (AttributeError, OSError):
        return None
    return stream


@dataclass
class Editor(Renderer):
    """Launches an editor when Enter is pressed; the answer is the file's text."""

    message: str = ""
    default: str = ""
    help: str = ""
    editor: str = ""
    hide_default: bool = False
    append_default: bool = False
    file_name: str = ""

    def prompt(self, config: PromptConfig) -> str:
        initial = self.default if self.default and self.append_default else ""
        return self._edit(initial, config)

    def prompt_again(self, config: PromptConfig, invalid: str, error: Exception) -> str:
        return self._edit(invalid, config)

    def _wait_for_enter(self, config: PromptConfig) -> None:
        with self._key_reader() as reader:
            self._hide_cursor()
            try:
                while True:
                    key = reader.read_key()
                    if key in (Key.ENTER, "\n", Key.END_TRANSMISSION):
                        return
                    if key == Key.INTERRUPT:
                        raise InterruptError()
                    if key == config.help_input and self.help:
                        self.render(editor_template,
                                    EditorTemplateData(self, show_help=True, config=config))
            finally:
                self._show_cursor()

    def _edit(self, initial: str, config: PromptConfig) -> str:
        self.render(editor_template, EditorTemplateData(self, config=config))
        self._wait_for_enter(config)

        pattern = self.file_name or "survey*.txt"
        prefix, star, suffix = pattern.rpartition("*")
        if not star:
            prefix, suffix = pattern, ""
        handle, path = tempfile.mkstemp(prefix=prefix, suffix=suffix)
        try:
            with os.fdopen(handle, "wb") as file:
                file.write(_BOM + initial.encode("utf-8"))
            args = shlex.split(self.editor or default_editor()) + [path]
            subprocess.run(
                args,
                stdin=_stream_arg(self.stdin),
                stdout=_stream_arg(self.stdout),
                stderr=_stream_arg(self.stderr),
                check=True,
            )
            with open(path, "rb") as file:
                raw = file.read()
        finally:
            os.remove(path)

        text = raw.removeprefix(_BOM).decode("utf-8")
        if not text and not self.append_default:
            return self.default
        return text

    def cleanup(self, config: PromptConfig, value: Any) -> None:
        self.render(editor_template, EditorTemplateData(
            self, answer="<Received>", show_answer=True, config=config))


@dataclass
class EditorTemplateData:
    editor: Editor
    answer: str = ""
    show_answer: bool = False
    show_help: bool = False
    config: PromptConfig = field(default_factory=default_prompt_config)


def editor_template(data: EditorTemplateData, color: bool) -> str:
    c = _colorizer(color)
    prompt = data.editor
    out = _header(c, data.config, prompt.help, data.show_help, prompt.message)
    if data.show_answer:
        return out + f"{c('cyan')}{data.answer}{c('reset')}\n"
    if prompt.help and not data.show_help:
        out += f"{c('cyan')}[{data.config.help_input} for help]{c('reset')} "
    if prompt.default and not prompt.hide_default:
        out += f"{c('white')}({prompt.default}) {c('reset')}"
    return out + f"{c('cyan')}[Enter to launch editor] {c('reset')}"