"""Commands that start the MCP server over the same registry."""

from __future__ import annotations

from typing import Any

from cloudmcp.core.command import BaseCommandWithoutArgs
from cloudmcp.core.context import CommandContext
from cloudmcp.core.factory import CommandFactory
from cloudmcp.mcp.server import CloudMCPServer
from cloudmcp.models.arguments import BaseArguments
from cloudmcp.utils.settings import Settings


class ServerStartCommand(BaseCommandWithoutArgs):
    name = "start"
    description = (
        "Start the MCP server over stdio, exposing every registered command as a tool."
    )
    hidden = True

    async def execute_async(self, context: CommandContext, args: BaseArguments) -> Any:
        factory = context.get_service(CommandFactory)
        settings = (
            context.get_service(Settings) if Settings in context.services else Settings()
        )
        server = CloudMCPServer(factory, context.services, settings)
        await server.run_stdio()
        return None


def register_server_commands(factory: CommandFactory) -> None:
    factory.add_group("server", "MCP server operations - Commands for running the MCP server.")
    factory.add_command("server.start", ServerStartCommand())
