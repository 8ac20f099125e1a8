"""Argument validation utilities for LocalTodo.

Command arguments arrive as raw strings; these helpers turn them into typed
values and raise InvalidValueError with the offending field when they can't.
"""

import logging
import re
from typing import Any, Union

logger = logging.getLogger(__name__)


TRUE_VALUES = frozenset({"1", "t", "T", "TRUE", "true", "True"})
FALSE_VALUES = frozenset({"0", "f", "F", "FALSE", "false", "False"})
INTEGER_RE = re.compile(r"[+-]?[0-9]+")


def clean_text(value: str) -> str:
    """Make free text safe to store as UTF-8.

    Undecodable command-line bytes reach Python as lone surrogates; each
    one is replaced with U+FFFD so the text can always be written.
    """
    try:
        raw = value.encode("utf-8", "surrogateescape")
    except UnicodeEncodeError:
        raw = value.encode("utf-8", "surrogatepass")
    return raw.decode("utf-8", "replace")


class InvalidValueError(ValueError):
    """Exception raised when a command argument cannot be parsed."""

    def __init__(self, message: str, field_name: str, value: Any):
        self.field_name = field_name
        self.value = value
        super().__init__(message)


def parse_bool(value: str, field_name: str = "completed") -> bool:
    """Parse a boolean the way the command line spells it.

    Accepts 1, t, T, TRUE, true, True and 0, f, F, FALSE, false, False.

    Raises:
        InvalidValueError: for anything else, including the empty string.
    """
    if value in TRUE_VALUES:
        return True
    if value in FALSE_VALUES:
        return False

    logger.debug("Rejected boolean value %r for %s", value, field_name)
    raise InvalidValueError(
        f"invalid {field_name} value: {value!r} is not a boolean",
        field_name,
        value,
    )


def parse_todo_id(value: Union[int, str], field_name: str = "id") -> int:
    """Parse a todo id given as an int or a decimal string.

    Raises:
        InvalidValueError: if the value is not a non-negative integer.
    """
    if isinstance(value, bool):
        raise InvalidValueError(f"invalid ID: {value!r}", field_name, value)

    if isinstance(value, int):
        todo_id = value
    else:
        # int() alone would also take whitespace, underscores and non-ASCII digits
        if not INTEGER_RE.fullmatch(str(value)):
            raise InvalidValueError(
                f"invalid ID: {value!r} is not an integer", field_name, value
            )
        todo_id = int(str(value), 10)

    if todo_id < 0:
        raise InvalidValueError(
            f"invalid ID: {value!r} must not be negative", field_name, value
        )
    return todo_id
