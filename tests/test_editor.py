import io
import shlex
import sys
import textwrap

import pytest

from surveykit import templates
from surveykit.base import InterruptError, default_icons, default_prompt_config
from surveykit.editor import Editor, EditorTemplateData, default_editor, editor_template


@pytest.fixture(autouse=True)
def no_color(monkeypatch):
    monkeypatch.setattr(templates, "DISABLE_COLOR", True)


Q = default_icons().question.text
H = default_icons().help.text
HI = default_prompt_config().help_input
MSG = "What is your favorite month:"
LAUNCH = "[Enter to launch editor] "


@pytest.mark.parametrize(
    "prompt,answer,show_answer,show_help,expected",
    [
        (Editor(MSG), "", False, False, f"{Q} {MSG} {LAUNCH}"),
        (Editor(MSG, "April"), "", False, False, f"{Q} {MSG} (April) {LAUNCH}"),
        (Editor(MSG, "April", hide_default=True), "", False, False, f"{Q} {MSG} {LAUNCH}"),
        (Editor(MSG), "October", True, False, f"{Q} {MSG} October\n"),
        (Editor(MSG, help="This is helpful"), "", False, False, f"{Q} {MSG} [{HI} for help] {LAUNCH}"),
        (Editor(MSG, "April", "This is helpful"), "", False, False,
         f"{Q} {MSG} [{HI} for help] (April) {LAUNCH}"),
        (Editor(MSG, help="This is helpful"), "", False, True,
         f"{H} This is helpful\n{Q} {MSG} {LAUNCH}"),
        (Editor(MSG, "April", "This is helpful"), "", False, True,
         f"{H} This is helpful\n{Q} {MSG} (April) {LAUNCH}"),
    ],
)
def test_editor_render(prompt, answer, show_answer, show_help, expected):
    out = io.StringIO()
    prompt.stdout = out
    prompt.render(editor_template, EditorTemplateData(
        prompt, answer=answer, show_answer=show_answer, show_help=show_help,
        config=default_prompt_config()))
    assert expected in out.getvalue()


@pytest.fixture
def fake_editor(tmp_path):
    script = tmp_path / "fake_editor.py"
    script.write_text(textwrap.dedent("""
        import os, sys
        mode, path = sys.argv[1], sys.argv[-1]
        if mode == "write":
            with open(path, "ab") as f:
                f.write(sys.argv[2].encode("utf-8"))
        elif mode == "clear":
            open(path, "wb").close()
        elif mode == "inspect":
            with open(path, "rb") as f:
                data = f.read()
            with open(path, "wb") as f:
                f.write(repr(data).encode("utf-8") + b"|" + os.path.basename(path).encode())
    """))

    def command(*args):
        return " ".join(shlex.quote(a) for a in (sys.executable, str(script), *args))

    return command


def run(prompt, typed="\n"):
    out = io.StringIO()
    prompt.stdin = io.StringIO(typed)
    prompt.stdout = out
    return prompt.prompt(default_prompt_config()), out.getvalue()


def test_editor_interaction(fake_editor):
    text = "Add editor prompt tests\n"
    answer, out = run(Editor("Edit git commit message", editor=fake_editor("write", text)))
    assert answer == text
    assert "Edit git commit message [Enter to launch editor]" in out


def test_editor_unchanged_returns_default(fake_editor):
    prompt = Editor("Edit git commit message", "No comment", editor=fake_editor("noop"))
    answer, out = run(prompt)
    assert answer == "No comment"
    assert "Edit git commit message (No comment) [Enter to launch editor]" in out


def test_editor_hiding_default(fake_editor):
    prompt = Editor("Edit git commit message", "No comment", hide_default=True,
                    editor=fake_editor("noop"))
    answer, out = run(prompt)
    assert answer == "No comment"
    assert "(No comment)" not in out


def test_editor_help(fake_editor):
    text = "Add editor prompt tests\n"
    prompt = Editor("Edit git commit message", help="Describe your git commit",
                    editor=fake_editor("write", text))
    answer, out = run(prompt, "?\n")
    assert answer == text
    assert "Describe your git commit" in out


def test_editor_append_default_cleared(fake_editor):
    prompt = Editor("Edit git commit message", "No comment", append_default=True,
                    editor=fake_editor("clear"))
    answer, _ = run(prompt)
    assert answer == ""


def test_editor_file_gets_bom_and_pattern(fake_editor):
    prompt = Editor("m", "No comment", append_default=True, file_name="note*.md",
                    editor=fake_editor("inspect"))
    answer, _ = run(prompt)
    content, name = answer.split("|")
    assert content == repr(b"\xef\xbb\xbfNo comment")
    assert name.startswith("note") and name.endswith(".md")


def test_editor_prompt_again_uses_invalid_text(fake_editor):
    prompt = Editor("m", editor=fake_editor("noop"), stdin=io.StringIO("\n"), stdout=io.StringIO())
    assert prompt.prompt_again(default_prompt_config(), "draft", ValueError("bad")) == "draft"


def test_editor_interrupt():
    prompt = Editor("m", editor="unused", stdin=io.StringIO("\x03"), stdout=io.StringIO())
    with pytest.raises(InterruptError):
        prompt.prompt(default_prompt_config())


def test_default_editor_from_env(monkeypatch):
    monkeypatch.setenv("VISUAL", "nano")
    monkeypatch.setenv("EDITOR", "emacs")
    assert default_editor() == "nano"
    monkeypatch.delenv("VISUAL")
    assert default_editor() == "emacs"


def test_editor_cleanup():
    out = io.StringIO()
    Editor(MSG, stdout=out).cleanup(default_prompt_config(), "x")
    assert out.getvalue().endswith(f"{Q} {MSG} <Received>\n")