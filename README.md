# surveykit

Interactive prompts for terminal programs. Ask the user a question, read the
answer from the keyboard, and redraw the screen afterwards so that only the
question and its final answer remain.

## Prompts

| Prompt        | Module                  | Answer                                         |
|---------------|-------------------------|------------------------------------------------|
| `Input`       | `surveykit.input`       | a string, with optional suggestions            |
| `Confirm`     | `surveykit.confirm`     | `True` or `False`                              |
| `Multiline`   | `surveykit.multiline`   | a string, ended by two empty lines             |
| `Editor`      | `surveykit.editor`      | the text written in an external editor         |
| `Password`    | `surveykit.base`        | a string, echoed as mask characters            |
| `MultiSelect` | `surveykit.multiselect` | a list of `surveykit.answers.OptionAnswer`     |

Every prompt is a dataclass with a `prompt(config)` method that asks the
question and returns the answer, and a `cleanup(config, value)` method that
redraws the question with the answer filled in (`Password.cleanup` does
nothing). Each prompt also takes keyword-only `stdin`, `stdout` and `stderr`
streams; they default to the process's own.

The settings shared by all prompts live in a `surveykit.base.PromptConfig`:
page size, icons, the help key (`?`), the label shown for the suggest key,
the default filter, `keep_filter`, `show_cursor`, the mask character (`*`),
and `remove_select_all` / `remove_select_none`. `default_prompt_config()`
returns the standard one.

## Example

```python
from surveykit.base import default_prompt_config
from surveykit.confirm import Confirm
from surveykit.multiselect import MultiSelect

config = default_prompt_config()

question = Confirm(message="Is pizza your favorite food?", default=True)
likes_pizza = question.prompt(config)
question.cleanup(config, likes_pizza)

days = MultiSelect(
    message="What days do you prefer:",
    options=["Sunday", "Monday", "Tuesday", "Wednesday",
             "Thursday", "Friday", "Saturday"],
    default=["Tuesday"],
)
chosen = days.prompt(config)
days.cleanup(config, chosen)
print([answer.value for answer in chosen])
```

## Keys

- Typing the help key shows a prompt's help text when it has one.
- `Confirm` accepts `y`, `yes`, `n`, `no` in any case; an empty line gives the
  default, anything else shows an error and asks again.
- `Input` with a `suggest` callable: Tab lists completions for the current
  text, arrows or Tab move through them, Enter picks one, Escape goes back to
  what was typed. Left and right arrows move the cursor while editing.
- `MultiSelect`: arrows (or `j`/`k` in `vim_mode`) move, space toggles, right
  arrow checks every option shown, left arrow unchecks them, typing filters
  (case-insensitive by default, or through a `filter` callable), Escape
  toggles vim mode. A `description` callable adds text after each option.
- `Editor` opens `editor`, or `$VISUAL`, or `$EDITOR`, or `vim` (`notepad`
  on Windows) on a temporary file when Enter is pressed. An empty file gives
  the default unless `append_default` is set, in which case the default is
  written into the file first.
- Ctrl-C raises `surveykit.base.InterruptError`.

## Storing answers

`surveykit.answers.write_answer(target, name, value)` stores an answer in a
dictionary, a list, an `OptionAnswer`, or on an object's attribute. Attributes
are matched by name case-insensitively; a dataclass field with
`metadata={"survey": "<name>"}` wins over names. Strings are converted to
`bool`, `int`, `float` or `timedelta` (durations such as `"30s"`) where the
field is declared so, and an `OptionAnswer` becomes its text or index for
`str` or `int` fields; `convert_value(value, target_type)` does the
conversion on its own. A missing field raises `FieldNotMatchError`, and
`is_field_not_match(error)` returns the question name that could not be
placed. Objects implementing `Settable` (a `write_answer(name, value)`
method) receive the answer themselves.

## Colour

Output is coloured unless `NO_COLOR` is set or `CLICOLOR` is `0`; setting
`CLICOLOR_FORCE` to anything other than `0` turns colour back on. Setting
`surveykit.templates.DISABLE_COLOR = True` turns it off in code.
`surveykit.templates.color_code(style)` gives the escape sequence for a style
such as `"cyan"` or `"red+b:white"`.

## What it does not do

There is no single-choice select prompt and no runner that asks a list of
questions with validation and transformation; call each prompt's `prompt` and
`cleanup` yourself and store answers with `write_answer`. There is no command
line program. Keys are read in cbreak mode only where `termios` is available.

## Tests

```
pip install -e ".[test]"
pytest
```