"""Command groups: the internal nodes of the command tree."""

from __future__ import annotations

from typing import Any

from cloudmcp.core.command import BaseCommand
from cloudmcp.errors import CommandNotFoundError, DuplicateCommandError, SubgroupNotFoundError

PATH_SEPARATOR = "."
RESERVED_CHARACTERS = (".", "-", " ")


def validate_segment(name: str) -> str:
    if not name or any(char in name for char in RESERVED_CHARACTERS):
        raise ValueError(
            f"Invalid command tree segment {name!r}: must be non-empty and must not "
            f"contain any of {RESERVED_CHARACTERS!r}"
        )
    return name


class CommandGroup:
    """A named node holding sub-groups and commands.

    Groups must be attached before commands are added beneath them; a
    dotted path never creates a missing group.
    """

    def __init__(self, name: str, description: str) -> None:
        self.name = validate_segment(name)
        self.description = description
        self.sub_groups: list[CommandGroup] = []
        self.commands: dict[str, BaseCommand[Any]] = {}

    def __repr__(self) -> str:
        return f"CommandGroup({self.name!r})"

    def find_sub_group(self, name: str) -> CommandGroup | None:
        return next((group for group in self.sub_groups if group.name == name), None)

    def add_sub_group(self, group: CommandGroup) -> CommandGroup:
        """Attach ``group``; a second group with the same name is not added.

        Returns the group that is attached under that name.
        """
        existing = self.find_sub_group(group.name)
        if existing is not None:
            return existing
        self.sub_groups.append(group)
        return group

    def add_command(self, path: str, command: BaseCommand[Any]) -> None:
        head, _, rest = path.partition(PATH_SEPARATOR)
        if not rest:
            validate_segment(head)
            if head in self.commands:
                raise DuplicateCommandError(head)
            self.commands[head] = command
            return

        sub_group = self.find_sub_group(head)
        if sub_group is None:
            raise SubgroupNotFoundError(head, path)
        sub_group.add_command(rest, command)

    def get_command(self, path: str) -> BaseCommand[Any]:
        head, _, rest = path.partition(PATH_SEPARATOR)
        if not rest:
            command = self.commands.get(head)
            if command is None:
                raise CommandNotFoundError(path)
            return command

        sub_group = self.find_sub_group(head)
        if sub_group is None:
            raise SubgroupNotFoundError(head, path)
        return sub_group.get_command(rest)
