"""Async file helpers for the editor engine.

Blocking filesystem calls run in a worker thread via ``asyncio.to_thread``.
Text is read and written without newline translation so that ``\\r\\n``
files round-trip unchanged. Replacing an existing file goes through a
temporary sibling and ``os.replace``, leaving the target either fully
written or untouched. Symlinks are followed so the linked file is the one
edited, and the target's permission bits carry over to the new content.
"""

from __future__ import annotations

import asyncio
import logging
import os
import shutil
import tempfile
from collections.abc import Callable
from pathlib import Path

logger = logging.getLogger(__name__)


def _replace_via_temp(target: Path, fill: Callable[[Path], None]) -> None:
    """Fill a temp sibling of ``target`` and move it into place."""
    fd, tmp_name = tempfile.mkstemp(
        dir=target.parent, prefix=f".{target.name}.", suffix=".tmp"
    )
    os.close(fd)
    tmp = Path(tmp_name)
    try:
        fill(tmp)
        shutil.copymode(target, tmp)
        os.replace(tmp, target)
    except Exception:
        tmp.unlink(missing_ok=True)
        raise


def _read_text(path: Path, encoding: str) -> str:
    with open(path, encoding=encoding, newline="") as f:
        return f.read()


def _write_text_atomic(path: Path, content: str, encoding: str) -> None:
    target = Path(os.path.realpath(path))

    def fill(tmp: Path) -> None:
        with open(tmp, "w", encoding=encoding, newline="") as f:
            f.write(content)

    if not target.exists():
        # New file: nothing to protect, and the default mode applies
        fill(target)
        return
    _replace_via_temp(target, fill)


def _copy_atomic(source: Path, target: Path) -> None:
    resolved = Path(os.path.realpath(target))
    if not resolved.exists():
        shutil.copyfile(source, resolved)
        return
    _replace_via_temp(resolved, lambda tmp: shutil.copyfile(source, tmp))


async def exists(path: Path) -> bool:
    return await asyncio.to_thread(path.is_file)


async def read_text(path: Path, encoding: str = "utf-8") -> str:
    """Read a whole text file. Raises FileNotFoundError if it is missing."""
    return await asyncio.to_thread(_read_text, path, encoding)


async def write_text(path: Path, content: str, encoding: str = "utf-8") -> None:
    """Replace the content of ``path`` (or the file it links to)."""
    await asyncio.to_thread(_write_text_atomic, path, content, encoding)
    logger.debug("Wrote %d chars to %s", len(content), path)


async def copy_file(source: Path, target: Path) -> None:
    """Replace ``target`` (or the file it links to) with a byte copy of ``source``."""
    await asyncio.to_thread(_copy_atomic, source, target)
    logger.debug("Copied %s -> %s", source, target)


async def ensure_dir(path: Path) -> None:
    await asyncio.to_thread(path.mkdir, parents=True, exist_ok=True)
