"""Editor command domain models.

The agent sends commands as an open-ended ``input`` dict. ``parse_command``
turns that dict into one of the closed command variants below, so the
editor engine only ever sees fully validated arguments.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

from editbench.errors import InvalidArgumentError, MissingArgumentError, UnknownCommandError


class CommandName(str, Enum):
    VIEW = "view"
    STR_REPLACE = "str_replace"
    INSERT = "insert"
    CREATE = "create"
    UNDO_EDIT = "undo_edit"


@dataclass(frozen=True)
class ViewCommand:
    """Show a file with 1-based line numbers, optionally limited to a range."""

    path: str
    view_range: tuple[int, int] | None = None

    name = CommandName.VIEW


@dataclass(frozen=True)
class ReplaceCommand:
    """Replace the single occurrence of ``old`` with ``new``."""

    path: str
    old: str
    new: str

    name = CommandName.STR_REPLACE


@dataclass(frozen=True)
class InsertCommand:
    """Insert ``text`` as a new line before zero-based offset ``line``."""

    path: str
    line: int
    text: str

    name = CommandName.INSERT


@dataclass(frozen=True)
class CreateCommand:
    path: str
    text: str

    name = CommandName.CREATE


@dataclass(frozen=True)
class UndoCommand:
    path: str

    name = CommandName.UNDO_EDIT


EditorCommand = Union[ViewCommand, ReplaceCommand, InsertCommand, CreateCommand, UndoCommand]


def _require_str(arguments: dict, key: str, command: str, allow_empty: bool = True) -> str:
    value = arguments.get(key)
    if value is None:
        raise MissingArgumentError(key, command)
    if not isinstance(value, str):
        raise InvalidArgumentError(f"Argument '{key}' for {command} must be a string")
    if not value and not allow_empty:
        raise MissingArgumentError(key, command)
    return value


def _require_int(arguments: dict, key: str, command: str) -> int:
    value = arguments.get(key)
    if value is None:
        raise MissingArgumentError(key, command)
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgumentError(f"Argument '{key}' for {command} must be an integer")
    return value


def _parse_view_range(value, command: str) -> tuple[int, int] | None:
    if value is None:
        return None
    if (
        not isinstance(value, (list, tuple))
        or len(value) != 2
        or any(isinstance(v, bool) or not isinstance(v, int) for v in value)
    ):
        raise InvalidArgumentError(
            f"Argument 'view_range' for {command} must be a pair of integers [start, end]"
        )
    return (value[0], value[1])


def parse_command(arguments: dict) -> EditorCommand:
    """Validate a raw tool ``input`` dict into a typed editor command.

    Raises:
        UnknownCommandError: ``command`` is not one of the five supported.
        MissingArgumentError: a required argument is absent.
        InvalidArgumentError: an argument has the wrong type or shape.
    """
    raw_command = arguments.get("command") or ""
    try:
        command = CommandName(raw_command)
    except ValueError:
        raise UnknownCommandError(str(raw_command)) from None

    path = _require_str(arguments, "path", command.value, allow_empty=False)

    if command == CommandName.VIEW:
        return ViewCommand(
            path=path,
            view_range=_parse_view_range(arguments.get("view_range"), command.value),
        )
    if command == CommandName.STR_REPLACE:
        return ReplaceCommand(
            path=path,
            old=_require_str(arguments, "old_str", command.value, allow_empty=False),
            new=_require_str(arguments, "new_str", command.value),
        )
    if command == CommandName.INSERT:
        return InsertCommand(
            path=path,
            line=_require_int(arguments, "insert_line", command.value),
            text=_require_str(arguments, "new_str", command.value),
        )
    if command == CommandName.CREATE:
        return CreateCommand(
            path=path,
            text=_require_str(arguments, "file_text", command.value),
        )
    return UndoCommand(path=path)
