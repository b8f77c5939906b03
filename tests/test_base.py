import io

import pytest

from surveykit import templates
from surveykit.base import (
    InterruptError,
    Key,
    KeyReader,
    Password,
    PasswordTemplateData,
    Renderer,
    default_icons,
    default_prompt_config,
    paginate,
    password_template,
)


@pytest.fixture(autouse=True)
def no_color(monkeypatch):
    monkeypatch.setattr(templates, "DISABLE_COLOR", True)


def reader_for(text):
    return KeyReader(io.StringIO(text), io.StringIO())


@pytest.mark.parametrize(
    "sequence,key",
    [("\x1b[A", Key.ARROW_UP), ("\x1b[B", Key.ARROW_DOWN),
     ("\x1b[C", Key.ARROW_RIGHT), ("\x1b[D", Key.ARROW_LEFT), ("\x1b[3~", Key.DELETE)],
)
def test_read_key_escape_sequences(sequence, key):
    assert reader_for(sequence).read_key() == key


def test_read_key_lone_escape_keeps_next_char():
    reader = reader_for("\x1bx")
    assert reader.read_key() == Key.ESCAPE
    assert reader.read_key() == "x"


def test_read_key_end_of_input():
    with pytest.raises(EOFError):
        reader_for("").read_key()


def test_read_line_plain_and_editing():
    assert reader_for("abc\n").read_line() == "abc"
    assert reader_for("abx\b c\n".replace(" ", "")).read_line() == "abc"
    assert reader_for("ac\x1b[Db\n").read_line() == "abc"


def test_read_line_masks_echo():
    out = io.StringIO()
    typed = "secret"
    line = KeyReader(io.StringIO(typed + "\n"), out).read_line("*")
    assert line == typed
    assert typed not in out.getvalue()
    assert "*" * len(typed) in out.getvalue()


def test_read_line_interrupt():
    with pytest.raises(InterruptError):
        reader_for("ab\x03").read_line()


def test_read_line_on_key_can_finish():
    def on_key(key, line):
        if key == "x":
            return line.upper(), True
        return None

    assert reader_for("abx").read_line(on_key=on_key) == "AB"


@pytest.mark.parametrize("size,count,selected", [(3, 10, s) for s in range(10)] + [(4, 9, 5)])
def test_paginate_keeps_selection_visible(size, count, selected):
    choices = list(range(count))
    page, index = paginate(size, choices, selected)
    assert len(page) == size
    assert page[index] == selected


def test_paginate_short_list_is_whole():
    choices = ["a", "b"]
    assert paginate(7, choices, 1) == (choices, 1)


def test_renderer_replaces_previous_output():
    out = io.StringIO()
    renderer = Renderer(stdout=out)
    renderer.render(lambda data, color: f"{data}\n", "first")
    renderer.render(lambda data, color: f"{data}\n", "second")
    text = out.getvalue()
    assert text.endswith("second\n")
    assert text.index("first") < text.rindex("\x1b[1A\x1b[2K")
    assert renderer.output() is out


def test_default_config_help_input():
    assert default_prompt_config().help_input == "?"


def test_password_template_help_hint():
    config = default_prompt_config()
    prompt = Password("Please type your password", "Keep it safe")
    hidden = password_template(PasswordTemplateData(prompt, config=config), False)
    shown = password_template(PasswordTemplateData(prompt, show_help=True, config=config), False)
    assert f"[{config.help_input} for help]" in hidden
    assert f"{default_icons().help.text} Keep it safe\n" in shown
    assert "for help]" not in shown


def test_password_prompt_returns_line():
    out = io.StringIO()
    typed = "secret"
    prompt = Password("Please type your password", stdin=io.StringIO(typed + "\n"), stdout=out)
    assert prompt.prompt(default_prompt_config()) == typed
    assert "Please type your password" in out.getvalue()
    assert typed not in out.getvalue()


def test_password_prompt_shows_help():
    out = io.StringIO()
    typed = "secret"
    prompt = Password("Please type your password", "Keep it safe",
                      stdin=io.StringIO("?\n" + typed + "\n"), stdout=out)
    assert prompt.prompt(default_prompt_config()) == typed
    assert "Keep it safe" in out.getvalue()


def test_password_cleanup_writes_nothing():
    out = io.StringIO()
    prompt = Password("Please type your password", stdout=out)
    assert prompt.cleanup(default_prompt_config(), "x") is None
    assert out.getvalue() == ""