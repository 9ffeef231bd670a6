"""Editor command engine: view, replace, insert, create and undo on one file.

Each operation re-reads the file from disk and holds no state between
calls apart from the single-generation backup written next to the file.
Every outcome, including failures, is returned as a result string; failure
strings start with ``ERROR_PREFIX``.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from pathlib import Path

from editbench.config import EditorConfig
from editbench.errors import (
    AmbiguousMatchError,
    EditorError,
    InvalidRangeError,
    MissingArgumentError,
    NoBackupError,
    NoMatchError,
    NotFoundError,
    StorageError,
    format_error,
)
from editbench.infra import fs
from editbench.models.command import (
    CommandName,
    CreateCommand,
    EditorCommand,
    InsertCommand,
    ReplaceCommand,
    UndoCommand,
    ViewCommand,
)

logger = logging.getLogger(__name__)


def _split_lines(content: str) -> list[str]:
    return content.split("\n")


def _number_lines(lines: list[str], first_line: int = 1) -> str:
    return "\n".join(f"{first_line + idx}: {line}" for idx, line in enumerate(lines))


class EditorService:
    """Applies one editor command to one file with validation and backups."""

    def __init__(self, config: EditorConfig | None = None) -> None:
        self._config = config or EditorConfig()
        self._handlers: dict[type, Callable[..., Awaitable[str]]] = {
            ViewCommand: self._view,
            ReplaceCommand: self._replace,
            InsertCommand: self._insert,
            CreateCommand: self._create,
            UndoCommand: self._undo,
        }

    def backup_path(self, path: str | Path) -> Path:
        return Path(f"{path}{self._config.backup_suffix}")

    # --- Public operations ---

    async def execute(self, command: EditorCommand) -> str:
        """Run a typed command and return its result string. Never raises."""
        handler = self._handlers[type(command)]
        logger.info("Executing %s on %s", command.name.value, command.path)
        try:
            result = await handler(command)
        except EditorError as e:
            logger.warning(
                "%s on %s failed [%s]: %s", command.name.value, command.path, e.kind.value, e
            )
            return format_error(e)
        except (OSError, UnicodeError) as e:
            error = StorageError(f"{command.name.value} failed on {command.path}: {e}")
            logger.warning(
                "%s on %s failed [%s]", command.name.value, command.path, error.kind.value,
                exc_info=True,
            )
            return format_error(error)
        logger.debug("%s on %s succeeded", command.name.value, command.path)
        return result

    async def view(self, path: str, view_range: tuple[int, int] | None = None) -> str:
        return await self.execute(ViewCommand(path=path, view_range=view_range))

    async def replace(self, path: str, old: str, new: str | None = None) -> str:
        if new is None:
            return format_error(MissingArgumentError("new_str", CommandName.STR_REPLACE.value))
        return await self.execute(ReplaceCommand(path=path, old=old, new=new))

    async def insert(self, path: str, line: int, text: str) -> str:
        return await self.execute(InsertCommand(path=path, line=line, text=text))

    async def create(self, path: str, text: str) -> str:
        return await self.execute(CreateCommand(path=path, text=text))

    async def undo(self, path: str) -> str:
        return await self.execute(UndoCommand(path=path))

    # --- Helpers ---

    async def _read(self, path: str) -> str:
        try:
            return await fs.read_text(Path(path), self._config.encoding)
        except FileNotFoundError:
            raise NotFoundError(path) from None

    async def _write(self, path: str, content: str) -> None:
        await fs.write_text(Path(path), content, self._config.encoding)

    async def _backup(self, path: str) -> None:
        """Snapshot the current file content, overwriting any older backup."""
        backup = self.backup_path(path)
        await fs.copy_file(Path(path), backup)
        logger.info("Created backup at %s", backup)

    # --- Command handlers ---

    async def _view(self, command: ViewCommand) -> str:
        lines = _split_lines(await self._read(command.path))

        if command.view_range is None:
            return _number_lines(lines)

        start, end = command.view_range
        start_idx = max(0, start - 1)
        end_idx = len(lines) if end == -1 else min(len(lines), end)
        return _number_lines(lines[start_idx:end_idx], first_line=start_idx + 1)

    async def _replace(self, command: ReplaceCommand) -> str:
        content = await self._read(command.path)

        match_count = content.count(command.old)
        if match_count == 0:
            raise NoMatchError()
        if match_count > 1:
            raise AmbiguousMatchError(match_count)

        await self._backup(command.path)
        await self._write(command.path, content.replace(command.old, command.new, 1))
        return "Successfully replaced text at exactly one location."

    async def _insert(self, command: InsertCommand) -> str:
        lines = _split_lines(await self._read(command.path))

        if command.line < 0 or command.line > len(lines):
            raise InvalidRangeError(command.line, len(lines))

        new_lines = [*lines[: command.line], command.text, *lines[command.line :]]

        await self._backup(command.path)
        await self._write(command.path, "\n".join(new_lines))
        return f"Successfully inserted text at line {command.line}"

    async def _create(self, command: CreateCommand) -> str:
        target = Path(command.path)
        await fs.ensure_dir(target.parent)

        if await fs.exists(target):
            await self._backup(command.path)

        await self._write(command.path, command.text)
        return f"Successfully created file at {command.path}"

    async def _undo(self, command: UndoCommand) -> str:
        backup = self.backup_path(command.path)
        if not await fs.exists(backup):
            raise NoBackupError(command.path)

        await fs.copy_file(backup, Path(command.path))
        logger.info("Restored %s from %s", command.path, backup)
        return f"Successfully restored {command.path} from backup"
