"""Writing prompt answers into user-supplied targets.

A target may be an object implementing :class:`Settable`, a mutable mapping,
a list, an :class:`OptionAnswer`, or any object (typically a dataclass) whose
attributes receive answers by name.  Dataclass fields may carry a
``metadata={"survey": "<question name>"}`` tag that takes precedence over the
attribute name.
"""

from __future__ import annotations

import dataclasses
import re
import types
import typing
from collections.abc import MutableMapping, MutableSequence
from datetime import timedelta
from decimal import Decimal
from fractions import Fraction
from typing import Any, List, Optional, Protocol, Tuple, runtime_checkable

TAG_NAME = "survey"


@dataclasses.dataclass
class OptionAnswer:
    """A chosen option: its text and its position in the option list."""

    value: str
    index: int


def option_answer_list(options) -> List[OptionAnswer]:
    """Pair every option with its index."""
    return [OptionAnswer(value, index) for index, value in enumerate(options)]


@runtime_checkable
class Settable(Protocol):
    """An object that decides itself how to store an answer."""

    def write_answer(self, name: str, value: Any) -> None:
        ...


class FieldNotMatchError(LookupError):
    """No attribute of the target matches the question name."""

    def __init__(self, question_name: str) -> None:
        super().__init__(f"could not find field matching {question_name}")
        self.question_name = question_name


def is_field_not_match(error: BaseException) -> Optional[str]:
    """Return the unmatched question name if ``error`` is a field mismatch, else None."""
    if isinstance(error, FieldNotMatchError):
        return error.question_name
    return None


# --- string conversions -------------------------------------------------------

_TRUE_WORDS = {"1", "t", "T", "TRUE", "true", "True"}
_FALSE_WORDS = {"0", "f", "F", "FALSE", "false", "False"}
_INT_RE = re.compile(r"[+-]?[0-9]+")

_DURATION_UNITS = {
    "ns": 1,
    "us": 1_000,
    "µs": 1_000,
    "μs": 1_000,
    "ms": 1_000_000,
    "s": 1_000_000_000,
    "m": 60 * 1_000_000_000,
    "h": 3600 * 1_000_000_000,
}
_DURATION_PART = r"([0-9]+(?:\.[0-9]*)?|\.[0-9]+)(ns|us|µs|μs|ms|s|m|h)"
_DURATION_RE = re.compile(f"(?:{_DURATION_PART})+")
_DURATION_PART_RE = re.compile(_DURATION_PART)
_MAX_DURATION_NS = 2**63 - 1


def _parse_bool(text: str) -> bool:
    if text in _TRUE_WORDS:
        return True
    if text in _FALSE_WORDS:
        return False
    raise ValueError(f"parsing {text!r} as bool: invalid syntax")


def _parse_int(text: str) -> int:
    if not _INT_RE.fullmatch(text):
        raise ValueError(f"parsing {text!r} as int: invalid syntax")
    return int(text)


def _parse_float(text: str) -> float:
    if text != text.strip() or "_" in text:
        raise ValueError(f"parsing {text!r} as float: invalid syntax")
    try:
        return float(text)
    except ValueError:
        raise ValueError(f"parsing {text!r} as float: invalid syntax") from None


def _parse_duration(text: str) -> timedelta:
    body = text
    sign = 1
    if body and body[0] in "+-":
        sign = -1 if body[0] == "-" else 1
        body = body[1:]
    if body == "0":
        return timedelta(0)
    if not _DURATION_RE.fullmatch(body):
        raise ValueError(f"invalid duration {text!r}")
    total = Fraction(0)
    for number, unit in _DURATION_PART_RE.findall(body):
        total += Fraction(Decimal(number)) * _DURATION_UNITS[unit]
    nanoseconds = int(total)
    if nanoseconds > _MAX_DURATION_NS:
        raise ValueError(f"invalid duration {text!r}")
    return timedelta(microseconds=sign * (nanoseconds // 1000))


_STRING_CONVERTERS = {
    bool: _parse_bool,
    int: _parse_int,
    float: _parse_float,
    timedelta: _parse_duration,
}


def _type_name(target_type: Any) -> str:
    return getattr(target_type, "__name__", None) or repr(target_type)


def _convert_string(text: str, target_type: Any) -> Any:
    converter = _STRING_CONVERTERS.get(target_type)
    if converter is None:
        raise TypeError(f"Unable to convert from string to type {_type_name(target_type)}")
    return converter(text)


def _convert_option(option: OptionAnswer, target_type: Any) -> Any:
    if target_type is str:
        return option.value
    if target_type is int:
        return option.index
    if target_type is OptionAnswer:
        return dataclasses.replace(option)
    raise TypeError(f"Unable to convert from OptionAnswer to type {_type_name(target_type)}")


def _convert_sequence(value: Any, container: type, args: tuple) -> Any:
    if not isinstance(value, (list, tuple)):
        raise TypeError(
            f"Unable to convert from {type(value).__name__} to type {container.__name__}"
        )
    if container is list:
        item_type = args[0] if args else None
        return [convert_value(item, item_type) for item in value]
    if not args:
        return tuple(value)
    if len(args) == 2 and args[1] is Ellipsis:
        return tuple(convert_value(item, args[0]) for item in value)
    if len(value) > len(args):
        raise ValueError(f"cannot fit {len(value)} items into a tuple of {len(args)}")
    return tuple(convert_value(item, item_type) for item, item_type in zip(value, args))


def _convert_union(value: Any, args: tuple) -> Any:
    candidates = [arg for arg in args if arg is not type(None)]
    if value is None and len(candidates) < len(args):
        return None
    if len(candidates) == 1:
        return convert_value(value, candidates[0])
    if any(isinstance(arg, type) and isinstance(value, arg) for arg in candidates):
        return value
    last_error: Exception = TypeError(f"cannot convert {value!r}")
    for candidate in candidates:
        try:
            return convert_value(value, candidate)
        except (TypeError, ValueError) as error:
            last_error = error
    raise last_error


def convert_value(value: Any, target_type: Any) -> Any:
    """Convert an answer to ``target_type`` the way it would be stored.

    Strings are parsed into bool, int, float and timedelta targets;
    option answers become their text (str), index (int) or a copy;
    lists and tuples are converted element by element.
    """
    if (
        target_type is None
        or target_type is Any
        or target_type is object
        or isinstance(target_type, (str, typing.ForwardRef))
    ):
        return value

    origin = typing.get_origin(target_type)
    if origin is typing.Union or origin is types.UnionType:
        return _convert_union(value, typing.get_args(target_type))

    if isinstance(value, str) and target_type is not str:
        return _convert_string(value, target_type)

    if isinstance(value, OptionAnswer):
        return _convert_option(value, target_type)

    container = origin if origin in (list, tuple) else target_type
    if container in (list, tuple):
        return _convert_sequence(value, container, typing.get_args(target_type))

    if isinstance(target_type, type):
        if target_type is float and isinstance(value, int) and not isinstance(value, bool):
            return float(value)
        if not isinstance(value, target_type):
            raise TypeError(
                f"cannot assign {type(value).__name__} to type {_type_name(target_type)}"
            )
    return value


# --- field lookup -------------------------------------------------------------

_KNOWN_TYPES = {
    "str": str,
    "int": int,
    "float": float,
    "bool": bool,
    "timedelta": timedelta,
    "datetime.timedelta": timedelta,
    "OptionAnswer": OptionAnswer,
    "Any": Any,
    "typing.Any": Any,
    "object": object,
}


def _resolve(hint: Any) -> Any:
    """Turn simple string annotations into types; leave others as written."""
    if isinstance(hint, str):
        return _KNOWN_TYPES.get(hint.strip(), hint)
    return hint


def _is_class_var(hint: Any) -> bool:
    if isinstance(hint, str):
        return hint.strip().startswith(("ClassVar", "typing.ClassVar"))
    return hint is typing.ClassVar or typing.get_origin(hint) is typing.ClassVar


def _type_hints(cls: type) -> dict:
    hints: dict = {}
    for klass in reversed(cls.__mro__):
        for name, hint in vars(klass).get("__annotations__", {}).items():
            hints[name] = _resolve(hint)
    return hints


def _fields(target: Any) -> List[Tuple[str, Any, Optional[str]]]:
    hints = _type_hints(type(target))
    if dataclasses.is_dataclass(target):
        return [
            (f.name, hints.get(f.name, _resolve(f.type)), f.metadata.get(TAG_NAME))
            for f in dataclasses.fields(target)
            if not f.name.startswith("_")
        ]
    names = [
        name
        for name, hint in hints.items()
        if not name.startswith("_") and not _is_class_var(hint)
    ]
    names += [
        name
        for name in getattr(target, "__dict__", {})
        if name not in hints and not name.startswith("_")
    ]
    return [(name, hints.get(name), None) for name in names]


def find_field(target: Any, name: str) -> Tuple[str, Any]:
    """Find the attribute receiving the answer to question ``name``.

    Tagged fields win over attribute names; names match case-insensitively.
    Returns ``(attribute_name, declared_type)``; the type is None when unknown.
    """
    fields = _fields(target)
    for field_name, field_type, tag in fields:
        if tag and tag == name:
            return field_name, field_type
    folded = name.casefold()
    for field_name, field_type, _ in fields:
        if field_name.casefold() == folded:
            return field_name, field_type
    raise FieldNotMatchError(name)


# --- writing ------------------------------------------------------------------

_IMMUTABLE = (bool, int, float, complex, str, bytes, tuple, frozenset, type(None))


def _write_mapping(target: MutableMapping, name: str, value: Any) -> None:
    if any(not isinstance(key, str) for key in target):
        raise TypeError("answer maps key must be of type string")
    # An existing entry's type stands in for the map's declared value type.
    if isinstance(value, OptionAnswer) and name in target:
        existing = target[name]
        if isinstance(existing, str):
            value = value.value
        elif isinstance(existing, int) and not isinstance(existing, bool):
            value = value.index
    target[name] = value


def write_answer(target: Any, name: str, value: Any) -> None:
    """Store ``value``, the answer to question ``name``, into ``target``."""
    if isinstance(target, Settable):
        target.write_answer(name, value)
        return
    if isinstance(target, _IMMUTABLE):
        raise TypeError(
            f"the target of a write must be mutable, not {type(target).__name__}"
        )
    if isinstance(target, OptionAnswer):
        copied = convert_value(value, OptionAnswer)
        target.value, target.index = copied.value, copied.index
        return
    if isinstance(target, MutableMapping):
        _write_mapping(target, name, value)
        return
    if isinstance(target, MutableSequence):
        target[:] = convert_value(value, list)
        return

    field_name, field_type = find_field(target, name)
    current = getattr(target, field_name, None)
    if isinstance(current, Settable):
        current.write_answer(name, value)
        return
    if field_type is None and current is not None:
        field_type = type(current)
    setattr(target, field_name, convert_value(value, field_type))