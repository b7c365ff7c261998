"""Tests for command groups and path registration."""

from __future__ import annotations

from typing import Any

import pytest

from cloudmcp.core.command import BaseCommandWithoutArgs
from cloudmcp.core.context import CommandContext
from cloudmcp.core.group import CommandGroup
from cloudmcp.errors import CommandNotFoundError, DuplicateCommandError, SubgroupNotFoundError
from cloudmcp.models.arguments import BaseArguments


class _Noop(BaseCommandWithoutArgs):
    name = "noop"
    description = "Does nothing."

    async def execute_async(self, context: CommandContext, args: BaseArguments) -> Any:
        return None


class TestAddCommand:
    """Tests for CommandGroup.add_command."""

    def test_adds_leaf_at_root(self) -> None:
        root = CommandGroup("root", "Root")
        command = _Noop()
        root.add_command("noop", command)

        assert root.commands == {"noop": command}

    def test_adds_under_registered_subgroups(self) -> None:
        root = CommandGroup("root", "Root")
        storage = root.add_sub_group(CommandGroup("storage", "Storage"))
        storage.add_sub_group(CommandGroup("blobs", "Blobs"))
        command = _Noop()

        root.add_command("storage.blobs.list", command)

        assert root.get_command("storage.blobs.list") is command

    def test_missing_group_fails_and_is_not_created(self) -> None:
        root = CommandGroup("root", "Root")
        root.add_sub_group(CommandGroup("storage", "Storage"))

        with pytest.raises(SubgroupNotFoundError) as exc_info:
            root.add_command("storage.blobs.list", _Noop())

        assert exc_info.value.group_name == "blobs"
        assert root.find_sub_group("storage").sub_groups == []  # type: ignore[union-attr]

    def test_missing_top_level_group_fails(self) -> None:
        root = CommandGroup("root", "Root")

        with pytest.raises(SubgroupNotFoundError):
            root.add_command("cosmos.list", _Noop())

        assert root.sub_groups == []

    def test_duplicate_leaf_fails(self) -> None:
        root = CommandGroup("root", "Root")
        root.add_command("noop", _Noop())

        with pytest.raises(DuplicateCommandError):
            root.add_command("noop", _Noop())

    @pytest.mark.parametrize("name", ["", "has-hyphen", "has space"])
    def test_rejects_reserved_characters(self, name: str) -> None:
        root = CommandGroup("root", "Root")

        with pytest.raises(ValueError):
            root.add_command(name, _Noop())


class TestSubGroups:
    """Tests for sub-group attachment and lookup."""

    def test_add_sub_group_is_idempotent_per_name(self) -> None:
        root = CommandGroup("root", "Root")
        first = root.add_sub_group(CommandGroup("storage", "Storage"))
        second = root.add_sub_group(CommandGroup("storage", "Other description"))

        assert second is first
        assert len(root.sub_groups) == 1

    def test_group_name_cannot_contain_separator(self) -> None:
        with pytest.raises(ValueError):
            CommandGroup("a.b", "Bad")

    def test_get_command_missing_leaf(self) -> None:
        root = CommandGroup("root", "Root")
        root.add_sub_group(CommandGroup("storage", "Storage"))

        with pytest.raises(CommandNotFoundError):
            root.get_command("storage.list")

    def test_get_command_missing_group(self) -> None:
        root = CommandGroup("root", "Root")

        with pytest.raises(SubgroupNotFoundError):
            root.get_command("storage.list")
