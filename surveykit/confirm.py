"""Yes/no question answered with a bool."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Optional

from .base import PromptConfig, Renderer, _colorizer, _header, default_prompt_config

_YES = re.compile(r"y(?:es)?", re.IGNORECASE)
_NO = re.compile(r"no?", re.IGNORECASE)


def parse_yes_no(text: str) -> Optional[bool]:
    """True for y/yes, False for n/no (any case), None otherwise."""
    if _YES.fullmatch(text):
        return True
    if _NO.fullmatch(text):
        return False
    return None


@dataclass
class Confirm(Renderer):
    """A text input accepting yes/no answers."""

    message: str = ""
    default: bool = False
    help: str = ""

    def _read_answer(self, show_help: bool, config: PromptConfig) -> bool:
        with self._key_reader() as reader:
            while True:
                text = reader.read_line()
                self._previous_line(1)
                answer = parse_yes_no(text)
                if answer is not None:
                    return answer
                if text == "":
                    return self.default
                if text == config.help_input and self.help:
                    self.render(confirm_template,
                                ConfirmTemplateData(self, show_help=True, config=config))
                    show_help = True
                    continue
                self._show_error(config, f'"{text}" is not a valid answer, please try again.')
                self.render(confirm_template,
                            ConfirmTemplateData(self, show_help=show_help, config=config))

    def prompt(self, config: PromptConfig) -> bool:
        self.render(confirm_template, ConfirmTemplateData(self, config=config))
        return self._read_answer(False, config)

    def cleanup(self, config: PromptConfig, value: bool) -> None:
        answer = "Yes" if value else "No"
        self.render(confirm_template,
                    ConfirmTemplateData(self, answer=answer, config=config))


@dataclass
class ConfirmTemplateData:
    confirm: Confirm
    answer: str = ""
    show_help: bool = False
    config: PromptConfig = field(default_factory=default_prompt_config)


def confirm_template(data: ConfirmTemplateData, color: bool) -> str:
    c = _colorizer(color)
    prompt = data.confirm
    out = _header(c, data.config, prompt.help, data.show_help, prompt.message)
    if data.answer:
        return out + f"{c('cyan')}{data.answer}{c('reset')}\n"
    if prompt.help and not data.show_help:
        out += f"{c('cyan')}[{data.config.help_input} for help]{c('reset')} "
    out += f"{c('white')}{'(Y/n) ' if prompt.default else '(y/N) '}{c('reset')}"
    return out