"""Editor error taxonomy.

Every failure inside the editor engine is raised as an ``EditorError``
subclass and rendered into a result string by ``format_error()``. Result
strings for failures always start with ``ERROR_PREFIX`` so callers can
detect them without parsing.
"""

from __future__ import annotations

from enum import Enum

ERROR_PREFIX = "Error:"


class ErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    MISSING_ARGUMENT = "missing_argument"
    INVALID_ARGUMENT = "invalid_argument"
    NO_MATCH = "no_match"
    AMBIGUOUS_MATCH = "ambiguous_match"
    INVALID_RANGE = "invalid_range"
    NO_BACKUP = "no_backup"
    STORAGE = "storage"
    UNKNOWN_COMMAND = "unknown_command"


class EditorError(Exception):
    """Base class for editor command failures."""

    kind: ErrorKind = ErrorKind.STORAGE


class NotFoundError(EditorError):
    kind = ErrorKind.NOT_FOUND

    def __init__(self, path: str) -> None:
        super().__init__(f"File not found: {path}")
        self.path = path


class MissingArgumentError(EditorError):
    kind = ErrorKind.MISSING_ARGUMENT

    def __init__(self, argument: str, command: str) -> None:
        super().__init__(f"Missing required argument '{argument}' for {command}")
        self.argument = argument
        self.command = command


class InvalidArgumentError(EditorError):
    kind = ErrorKind.INVALID_ARGUMENT


class NoMatchError(EditorError):
    kind = ErrorKind.NO_MATCH

    def __init__(self) -> None:
        super().__init__(
            "No match found for replacement. Please check your text and try again."
        )


class AmbiguousMatchError(EditorError):
    kind = ErrorKind.AMBIGUOUS_MATCH

    def __init__(self, count: int) -> None:
        super().__init__(
            f"Found {count} matches for replacement text. "
            "Please provide more context to make a unique match."
        )
        self.count = count


class InvalidRangeError(EditorError):
    kind = ErrorKind.INVALID_RANGE

    def __init__(self, line: int, line_count: int) -> None:
        super().__init__(
            f"Invalid insert line {line}. The file has {line_count} lines."
        )
        self.line = line
        self.line_count = line_count


class NoBackupError(EditorError):
    kind = ErrorKind.NO_BACKUP

    def __init__(self, path: str) -> None:
        super().__init__(f"No backup found for {path}")
        self.path = path


class StorageError(EditorError):
    kind = ErrorKind.STORAGE


class UnknownCommandError(EditorError):
    kind = ErrorKind.UNKNOWN_COMMAND

    def __init__(self, command: str) -> None:
        super().__init__(f"Unknown command '{command}'")
        self.command = command


def format_error(error: EditorError) -> str:
    """Render an editor error as a result string."""
    return f"{ERROR_PREFIX} {error}"


def is_error_result(result: str) -> bool:
    return result.startswith(ERROR_PREFIX)
