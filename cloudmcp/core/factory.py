"""The command registry: builds the tree once and flattens it by name."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from types import MappingProxyType
from typing import Any

from cloudmcp import CLI_NAME
from cloudmcp.core.command import BaseCommand
from cloudmcp.core.group import CommandGroup
from cloudmcp.errors import CloudMCPError, CommandRegistrationError

logger = logging.getLogger(__name__)

SEPARATOR = "-"

Registrar = Callable[["CommandFactory"], None]


def _join(prefix: str, name: str) -> str:
    return f"{prefix}{SEPARATOR}{name}" if prefix else name


def flatten_commands(
    group: CommandGroup,
    prefix: str = "",
    *,
    problems: list[str] | None = None,
) -> dict[str, BaseCommand[Any]]:
    """Depth-first walk mapping hyphenated names to commands.

    A name reached twice is reported in ``problems`` (or raised when no
    list is given) instead of overwriting the first registration.
    """
    aggregated: dict[str, BaseCommand[Any]] = {}
    collected = problems if problems is not None else []
    updated_prefix = _join(prefix, group.name)

    def add(key: str, command: BaseCommand[Any]) -> None:
        if key in aggregated:
            collected.append(f"Duplicate command name '{key}'")
            return
        aggregated[key] = command

    for name, command in group.commands.items():
        add(_join(updated_prefix, name), command)

    for sub_group in group.sub_groups:
        for key, command in flatten_commands(
            sub_group, updated_prefix, problems=collected
        ).items():
            add(key, command)

    if problems is None and collected:
        raise CommandRegistrationError(collected)
    return aggregated


def default_registrars() -> list[Registrar]:
    from cloudmcp.commands import REGISTRARS

    return list(REGISTRARS)


class CommandFactory:
    """Single source of truth for which commands exist.

    Registrars declare topology first and attach commands second; every
    registration problem is collected and raised together once the build
    finishes.
    """

    def __init__(
        self,
        registrars: Iterable[Registrar] | None = None,
        *,
        root_name: str = CLI_NAME,
        root_description: str = "Cloud resource operations for the command line and MCP clients.",
    ) -> None:
        self.root_group = CommandGroup(root_name, root_description)
        self._problems: list[str] = []

        for registrar in registrars if registrars is not None else default_registrars():
            registrar(self)

        command_map = flatten_commands(self.root_group, problems=self._problems)
        if self._problems:
            raise CommandRegistrationError(self._problems)

        for key, command in command_map.items():
            command.set_command_path(key.replace(SEPARATOR, " "))
        self._command_map = command_map
        logger.debug("Registered %s commands", len(command_map))

    # -- registration ------------------------------------------------------

    def add_group(
        self,
        name: str,
        description: str,
        parent: CommandGroup | None = None,
    ) -> CommandGroup:
        return (parent or self.root_group).add_sub_group(CommandGroup(name, description))

    def add_command(self, path: str, command: BaseCommand[Any]) -> None:
        """Attach ``command`` at a dotted path relative to the root group."""
        try:
            self.root_group.add_command(path, command)
        except (CloudMCPError, ValueError) as exc:
            self._problems.append(str(exc))

    # -- lookup ------------------------------------------------------------

    @property
    def all_commands(self) -> Mapping[str, BaseCommand[Any]]:
        return MappingProxyType(self._command_map)

    def find_command_by_name(self, hyphenated_name: str) -> BaseCommand[Any] | None:
        return self._command_map.get(hyphenated_name)

    @staticmethod
    def command_path_for(hyphenated_name: str) -> str:
        return hyphenated_name.replace(SEPARATOR, " ")

    @staticmethod
    def name_segments(hyphenated_name: str) -> list[str]:
        return hyphenated_name.split(SEPARATOR)
