"""Introspection over the command registry."""

from __future__ import annotations

from typing import Any

from cloudmcp.core.command import BaseCommandWithoutArgs
from cloudmcp.core.context import CommandContext
from cloudmcp.core.factory import CommandFactory
from cloudmcp.models.argument import ArgumentInfo
from cloudmcp.models.arguments import BaseArguments
from cloudmcp.models.response import CommandInfo
from cloudmcp.utils.settings import Settings


class ToolsListCommand(BaseCommandWithoutArgs):
    name = "list"
    description = (
        "List all available commands and their tools in a hierarchical structure. "
        "Returns each command's name, description, full command path, and arguments."
    )
    hidden = True

    async def execute_async(self, context: CommandContext, args: BaseArguments) -> Any:
        factory = context.get_service(CommandFactory)
        hidden_groups = (
            set(context.get_service(Settings).hidden_groups)
            if Settings in context.services
            else set(Settings().hidden_groups)
        )

        infos: list[dict[str, Any]] = []
        for name, command in factory.all_commands.items():
            segments = factory.name_segments(name)
            if command.hidden or hidden_groups.intersection(segments):
                continue
            infos.append(
                CommandInfo(
                    name=command.name,
                    description=command.description,
                    command=factory.command_path_for(name),
                    arguments=[
                        ArgumentInfo(
                            name=entry.name,
                            description=entry.description,
                            command=entry.command,
                            default=entry.default_text,
                            required=entry.required,
                        )
                        for entry in command.get_argument_chain()
                    ],
                ).to_payload()
            )
        return infos


def register_tools_commands(factory: CommandFactory) -> None:
    factory.add_group(
        "tools",
        "CLI tools operations - Commands for discovering and exploring the "
        "functionality available in this CLI tool.",
    )
    factory.add_command("tools.list", ToolsListCommand())
