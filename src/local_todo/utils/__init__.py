"""Utility helpers for LocalTodo."""

from .validation import InvalidValueError, parse_bool, parse_todo_id

__all__ = ["InvalidValueError", "parse_bool", "parse_todo_id"]
