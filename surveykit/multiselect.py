"""Choosing any number of options from a filterable list."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from .answers import OptionAnswer, option_answer_list
from .base import (
    InterruptError,
    Key,
    PromptConfig,
    Renderer,
    _colorizer,
    _header,
    default_prompt_config,
    paginate,
)


@dataclass
class MultiSelect(Renderer):
    """Presents options to toggle with space; Enter accepts the checked ones.

    ``default`` may be a list of option texts or of option indices.
    """

    message: str = ""
    options: List[str] = field(default_factory=list)
    default: Any = None
    help: str = ""
    page_size: int = 0
    vim_mode: bool = False
    filter_message: str = ""
    filter: Optional[Callable[[str, str, int], bool]] = field(default=None, compare=False)
    description: Optional[Callable[[str, int], str]] = field(default=None, compare=False)
    _filter_text: str = field(default="", init=False, repr=False, compare=False)
    _selected_index: int = field(default=0, init=False, repr=False, compare=False)
    _checked: Dict[int, bool] = field(default_factory=dict, init=False, repr=False, compare=False)
    _showing_help: bool = field(default=False, init=False, repr=False, compare=False)

    def _page_size(self, config: PromptConfig) -> int:
        return self.page_size or config.page_size

    def filter_options(self, config: PromptConfig) -> List[OptionAnswer]:
        """The options matching the current filter text."""
        if not self._filter_text:
            return option_answer_list(self.options)
        keep = self.filter or config.filter
        return [
            OptionAnswer(option, index)
            for index, option in enumerate(self.options)
            if keep(self._filter_text, option, index)
        ]

    def on_change(self, key: str, config: PromptConfig) -> None:
        """Update the selection state for one key press and re-render."""
        options = self.filter_options(config)
        old_filter = self._filter_text

        if key == Key.ARROW_UP or (self.vim_mode and key == "k"):
            if self._selected_index == 0:
                self._selected_index = len(options) - 1
            else:
                self._selected_index -= 1
        elif key in (Key.TAB, Key.ARROW_DOWN) or (self.vim_mode and key == "j"):
            if self._selected_index == len(options) - 1:
                self._selected_index = 0
            else:
                self._selected_index += 1
        elif key == Key.SPACE:
            if self._selected_index < len(options):
                chosen = options[self._selected_index]
                self._checked[chosen.index] = not self._checked.get(chosen.index, False)
                if not config.keep_filter:
                    self._filter_text = ""
        elif key == config.help_input and self.help:
            self._showing_help = True
        elif key == Key.ESCAPE:
            self.vim_mode = not self.vim_mode
        elif key in (Key.DELETE_WORD, Key.DELETE_LINE):
            self._filter_text = ""
        elif key in (Key.DELETE, Key.BACKSPACE):
            self._filter_text = self._filter_text[:-1]
        elif key >= Key.SPACE:
            self._filter_text += key
            self.vim_mode = False
        elif not config.remove_select_all and key == Key.ARROW_RIGHT:
            for option in options:
                self._checked[option.index] = True
            if not config.keep_filter:
                self._filter_text = ""
        elif not config.remove_select_none and key == Key.ARROW_LEFT:
            for option in options:
                self._checked[option.index] = False
            if not config.keep_filter:
                self._filter_text = ""

        self.filter_message = f" {self._filter_text}" if self._filter_text else ""
        if old_filter != self._filter_text:
            options = self.filter_options(config)
            if 0 < len(options) <= self._selected_index:
                self._selected_index = len(options) - 1

        page, index = paginate(self._page_size(config), options, self._selected_index)
        self.render(
            multiselect_template,
            MultiSelectTemplateData(
                self,
                selected_index=index,
                checked=self._checked,
                show_help=self._showing_help,
                description=self.description,
                page_entries=page,
                config=config,
            ),
        )

    def _initial_checked(self) -> Dict[int, bool]:
        checked: Dict[int, bool] = {}
        if not isinstance(self.default, (list, tuple)):
            return checked
        for item in self.default:
            if isinstance(item, str):
                found = next((i for i, option in enumerate(self.options) if option == item), None)
                if found is not None:
                    checked[found] = True
            elif isinstance(item, int) and not isinstance(item, bool):
                checked[item] = True
        return checked

    def prompt(self, config: PromptConfig) -> List[OptionAnswer]:
        self._checked = self._initial_checked()
        if not self.options:
            raise ValueError("please provide options to select from")

        page, index = paginate(
            self._page_size(config), option_answer_list(self.options), self._selected_index
        )
        self._hide_cursor()
        try:
            self.render(
                multiselect_template,
                MultiSelectTemplateData(
                    self,
                    selected_index=index,
                    description=self.description,
                    checked=self._checked,
                    page_entries=page,
                    config=config,
                ),
            )
            with self._key_reader() as reader:
                while True:
                    key = reader.read_key()
                    if key in (Key.ENTER, "\n", Key.END_TRANSMISSION):
                        break
                    if key == Key.INTERRUPT:
                        raise InterruptError()
                    self.on_change(key, config)
        finally:
            self._show_cursor()

        self._filter_text = ""
        self.filter_message = ""
        return [
            OptionAnswer(option, index)
            for index, option in enumerate(self.options)
            if self._checked.get(index)
        ]

    def cleanup(self, config: PromptConfig, value: List[OptionAnswer]) -> None:
        """Replace the option list with a one-line summary of the answer."""
        answer = ", ".join(option.value for option in value)
        self.render(
            multiselect_template,
            MultiSelectTemplateData(
                self,
                selected_index=self._selected_index,
                checked=self._checked,
                answer=answer,
                show_answer=True,
                description=self.description,
                config=config,
            ),
        )


@dataclass
class MultiSelectTemplateData:
    multiselect: MultiSelect
    answer: str = ""
    show_answer: bool = False
    checked: Dict[int, bool] = field(default_factory=dict)
    selected_index: int = 0
    show_help: bool = False
    description: Optional[Callable[[str, int], str]] = None
    page_entries: List[OptionAnswer] = field(default_factory=list)
    config: PromptConfig = field(default_factory=default_prompt_config)

    def description_for(self, option: OptionAnswer) -> str:
        """The description shown next to ``option``, or an empty string."""
        if self.description is None:
            return ""
        return self.description(option.value, option.index)


def _render_option(c: Callable[[str], str], data: MultiSelectTemplateData,
                   position: int, option: OptionAnswer) -> str:
    icons = data.config.icons
    if position == data.selected_index:
        out = f"{c(icons.select_focus.format)}{icons.select_focus.text}{c('reset')}"
    else:
        out = " "
    if data.checked.get(option.index, False):
        out += f"{c(icons.marked_option.format)} {icons.marked_option.text} "
    else:
        out += f"{c(icons.unmarked_option.format)} {icons.unmarked_option.text} "
    out += c("reset")
    out += f" {option.value}"
    description = data.description_for(option)
    if description:
        out += f" - {c('cyan')}{description}{c('reset')}"
    return out + "\n"


def multiselect_template(data: MultiSelectTemplateData, color: bool) -> str:
    c = _colorizer(color)
    prompt = data.multiselect
    config = data.config
    out = _header(c, config, prompt.help, data.show_help, prompt.message, prompt.filter_message)
    if data.show_answer:
        return out + f"{c('cyan')} {data.answer}{c('reset')}\n"
    hint = "[Use arrows to move, space to select,"
    if not config.remove_select_all:
        hint += " <right> to all,"
    if not config.remove_select_none:
        hint += " <left> to none,"
    hint += " type to filter"
    if prompt.help and not data.show_help:
        hint += f", {config.help_input} for more help"
    out += f"  {c('cyan')}{hint}]{c('reset')}\n"
    for position, option in enumerate(data.page_entries):
        out += _render_option(c, data, position, option)
    return out