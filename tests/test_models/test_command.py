"""Tests for editor command parsing."""

import pytest

from editbench.errors import InvalidArgumentError, MissingArgumentError, UnknownCommandError
from editbench.models.command import (
    CommandName,
    CreateCommand,
    InsertCommand,
    ReplaceCommand,
    UndoCommand,
    ViewCommand,
    parse_command,
)


class TestParseCommand:
    def test_view_without_range(self):
        cmd = parse_command({"command": "view", "path": "a.py"})
        assert cmd == ViewCommand(path="a.py")
        assert cmd.name == CommandName.VIEW

    def test_view_with_range(self):
        cmd = parse_command({"command": "view", "path": "a.py", "view_range": [3, -1]})
        assert cmd == ViewCommand(path="a.py", view_range=(3, -1))

    def test_view_bad_range(self):
        with pytest.raises(InvalidArgumentError, match="view_range"):
            parse_command({"command": "view", "path": "a.py", "view_range": [1]})

    def test_str_replace(self):
        cmd = parse_command({
            "command": "str_replace", "path": "a.py", "old_str": "foo", "new_str": "bar",
        })
        assert cmd == ReplaceCommand(path="a.py", old="foo", new="bar")

    def test_str_replace_allows_empty_new(self):
        cmd = parse_command({
            "command": "str_replace", "path": "a.py", "old_str": "foo", "new_str": "",
        })
        assert isinstance(cmd, ReplaceCommand)
        assert cmd.new == ""

    def test_str_replace_missing_new(self):
        with pytest.raises(MissingArgumentError, match="new_str"):
            parse_command({"command": "str_replace", "path": "a.py", "old_str": "foo"})

    def test_str_replace_empty_old(self):
        with pytest.raises(MissingArgumentError, match="old_str"):
            parse_command({
                "command": "str_replace", "path": "a.py", "old_str": "", "new_str": "x",
            })

    def test_insert(self):
        cmd = parse_command({
            "command": "insert", "path": "a.py", "insert_line": 2, "new_str": "X",
        })
        assert cmd == InsertCommand(path="a.py", line=2, text="X")

    def test_insert_line_must_be_int(self):
        with pytest.raises(InvalidArgumentError, match="insert_line"):
            parse_command({
                "command": "insert", "path": "a.py", "insert_line": "2", "new_str": "X",
            })

    def test_insert_missing_line(self):
        with pytest.raises(MissingArgumentError, match="insert_line"):
            parse_command({"command": "insert", "path": "a.py", "new_str": "X"})

    def test_create(self):
        cmd = parse_command({"command": "create", "path": "a.py", "file_text": "x = 1\n"})
        assert cmd == CreateCommand(path="a.py", text="x = 1\n")

    def test_create_missing_text(self):
        with pytest.raises(MissingArgumentError, match="file_text"):
            parse_command({"command": "create", "path": "a.py"})

    def test_undo(self):
        assert parse_command({"command": "undo_edit", "path": "a.py"}) == UndoCommand(path="a.py")

    def test_missing_path(self):
        with pytest.raises(MissingArgumentError, match="path"):
            parse_command({"command": "view"})

    def test_unknown_command(self):
        with pytest.raises(UnknownCommandError, match="delete"):
            parse_command({"command": "delete", "path": "a.py"})

    def test_missing_command(self):
        with pytest.raises(UnknownCommandError):
            parse_command({"path": "a.py"})
