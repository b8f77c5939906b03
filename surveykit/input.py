"""Single-line text input with optional suggestions."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, List, Optional, Tuple

from .answers import OptionAnswer, option_answer_list
from .base import (
    Key,
    PromptConfig,
    Renderer,
    _colorizer,
    _header,
    default_prompt_config,
    paginate,
)


@dataclass
class Input(Renderer):
    """A text input echoing what is typed; Enter accepts the line.

    With ``suggest`` set, the suggest key lists completions for the current
    text; arrows or the suggest key move through them and Enter picks one.
    """

    message: str = ""
    default: str = ""
    help: str = ""
    suggest: Optional[Callable[[str], List[str]]] = field(default=None, compare=False)
    _answer: str = field(default="", init=False, repr=False, compare=False)
    _typed_answer: str = field(default="", init=False, repr=False, compare=False)
    _options: Optional[List[OptionAnswer]] = field(
        default=None, init=False, repr=False, compare=False
    )
    _selected_index: int = field(default=0, init=False, repr=False, compare=False)
    _showing_help: bool = field(default=False, init=False, repr=False, compare=False)

    def on_key(self, key: str, line: str, config: PromptConfig) -> Optional[Tuple[str, bool]]:
        """Handle suggestion keys.

        Returns None when the key is left to ordinary line editing, otherwise
        ``(new_line, done)``.
        """
        options = self._options
        if options is not None and key in (Key.ENTER, "\n"):
            return self._answer, True
        if options is not None and key == Key.ESCAPE:
            self._answer = self._typed_answer
            self._options = None
        elif key == Key.ARROW_UP and options:
            if self._selected_index == 0:
                self._selected_index = len(options) - 1
            else:
                self._selected_index -= 1
            self._answer = options[self._selected_index].value
        elif key in (Key.ARROW_DOWN, Key.TAB) and options:
            if self._selected_index == len(options) - 1:
                self._selected_index = 0
            else:
                self._selected_index += 1
            self._answer = options[self._selected_index].value
        elif key == Key.TAB and self.suggest is not None:
            self._answer = line
            self._typed_answer = line
            suggestions = list(self.suggest(line))
            self._selected_index = 0
            if not suggestions:
                return None
            self._answer = suggestions[0]
            if len(suggestions) == 1:
                self._typed_answer = self._answer
                self._options = None
            else:
                self._options = option_answer_list(suggestions)
        else:
            if options is None:
                return None
            if key >= Key.SPACE and key != Key.DELETE:
                self._answer += key
            self._typed_answer = self._answer
            self._options = None

        page, index = paginate(config.page_size, self._options or [], self._selected_index)
        self.render(
            input_template,
            InputTemplateData(
                self,
                answer=self._answer,
                show_help=self._showing_help,
                selected_index=index,
                page_entries=page,
                config=config,
            ),
        )
        if self._options is not None:
            return "", False
        self._write(self._typed_answer)
        return self._typed_answer, False

    def prompt(self, config: PromptConfig) -> str:
        self._options = None
        self.render(
            input_template,
            InputTemplateData(self, show_help=self._showing_help, config=config),
        )
        with self._key_reader() as reader:
            if not config.show_cursor:
                self._hide_cursor()
            try:
                line = reader.read_line(
                    on_key=lambda key, text: self.on_key(key, text, config)
                )
            finally:
                if not config.show_cursor:
                    self._show_cursor()

        self._answer = line
        if line == config.help_input and self.help:
            self._showing_help = True
            return self.prompt(config)
        if not line:
            return self.default
        self.append_rendered_text(line)
        return line

    def cleanup(self, config: PromptConfig, value: str) -> None:
        self.render(
            input_template,
            InputTemplateData(self, show_answer=True, answer=value, config=config),
        )


@dataclass
class InputTemplateData:
    input: Input
    show_answer: bool = False
    show_help: bool = False
    answer: str = ""
    page_entries: List[OptionAnswer] = field(default_factory=list)
    selected_index: int = 0
    config: PromptConfig = field(default_factory=default_prompt_config)


def input_template(data: InputTemplateData, color: bool) -> str:
    c = _colorizer(color)
    prompt = data.input
    config = data.config
    out = _header(c, config, prompt.help, data.show_help, prompt.message)
    if data.show_answer:
        return out + f"{c('cyan')}{data.answer}{c('reset')}\n"
    if data.page_entries:
        out += f"{data.answer} [Use arrows to move, enter to select, type to continue]\n"
        focus = config.icons.select_focus
        for index, choice in enumerate(data.page_entries):
            if index == data.selected_index:
                out += f"{c(focus.format)}{focus.text} "
            else:
                out += f"{c('default')}  "
            out += f"{choice.value}{c('reset')}\n"
        return out
    offer_help = bool(prompt.help) and not data.show_help
    if offer_help or prompt.suggest is not None:
        out += f"{c('cyan')}["
        if offer_help:
            out += f"{config.help_input} for help"
            if prompt.suggest is not None:
                out += ", "
        if prompt.suggest is not None:
            out += f"{c('cyan')}{config.suggest_input} for suggestions"
        out += f"]{c('reset')} "
    if prompt.default:
        out += f"{c('white')}({prompt.default}) {c('reset')}"
    return out