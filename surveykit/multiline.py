"""Free text spanning several lines, ended by two empty lines."""

from __future__ import annotations

from dataclasses import dataclass, field

from .base import PromptConfig, Renderer, _colorizer, _header, default_prompt_config


@dataclass
class Multiline(Renderer):
    message: str = ""
    default: str = ""
    help: str = ""

    def prompt(self, config: PromptConfig) -> str:
        self.render(multiline_template, MultilineTemplateData(self, config=config))
        lines = []
        empty_once = False
        with self._key_reader() as reader:
            while True:
                line = reader.read_line()
                if line == "":
                    if empty_once:
                        count = len(lines) + 2
                        self._previous_line(count)
                        self._write("\x1b[2K\x1b[1E" * count)
                        self._previous_line(count)
                        break
                    empty_once = True
                else:
                    empty_once = False
                lines.append(line)
        value = "\n".join(lines).strip()
        if not value:
            return self.default
        self.append_rendered_text(value)
        return value

    def cleanup(self, config: PromptConfig, value: str) -> None:
        self.render(multiline_template,
                    MultilineTemplateData(self, answer=value, show_answer=True, config=config))


@dataclass
class MultilineTemplateData:
    multiline: Multiline
    answer: str = ""
    show_answer: bool = False
    show_help: bool = False
    config: PromptConfig = field(default_factory=default_prompt_config)


def multiline_template(data: MultilineTemplateData, color: bool) -> str:
    c = _colorizer(color)
    prompt = data.multiline
    out = _header(c, data.config, prompt.help, data.show_help, prompt.message)
    if data.show_answer:
        out += f"\n{c('cyan')}{data.answer}{c('reset')}"
        return out + ("\n" if data.answer else "")
    if prompt.default:
        out += f"{c('white')}({prompt.default}) {c('reset')}"
    return out + f"{c('cyan')}[Enter 2 empty lines to finish]{c('reset')}"