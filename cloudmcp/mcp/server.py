"""MCP server exposing the command registry as tools."""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Mapping, Sequence
from typing import Any

import mcp.server.stdio as mcp_stdio
from mcp import types
from mcp.server.lowlevel import NotificationOptions, Server
from mcp.server.models import InitializationOptions

from cloudmcp import __version__
from cloudmcp.core.arguments import ArgumentChain
from cloudmcp.core.command import BaseCommand, execute_command
from cloudmcp.core.context import CommandContext, ServiceProvider
from cloudmcp.core.factory import CommandFactory
from cloudmcp.utils.settings import Settings

logger = logging.getLogger(__name__)


def build_input_schema(chain: Sequence[ArgumentChain[Any]]) -> dict[str, Any]:
    """JSON schema for a tool's input; an empty chain yields a bare object."""
    schema: dict[str, Any] = {"type": "object"}
    if not chain:
        return schema
    schema["properties"] = {
        entry.name: {"type": entry.value_type, "description": entry.description}
        for entry in chain
    }
    required = [entry.name for entry in chain if entry.required]
    if required:
        schema["required"] = required
    return schema


def _token_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    # JSON clients may send 24.0 for an integer argument.
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def build_tool_tokens(arguments: Mapping[str, Any] | None) -> list[str]:
    """Flatten a tool-call map into CLI-style ``--key value`` tokens.

    Values are passed as single tokens, so embedded whitespace and quotes
    survive verbatim. ``None`` values are treated as absent.
    """
    tokens: list[str] = []
    for key, value in (arguments or {}).items():
        if value is None:
            continue
        tokens.extend([f"--{key}", _token_value(value)])
    return tokens


def _text_result(payload: Any, *, is_error: bool = False) -> types.CallToolResult:
    text = payload if isinstance(payload, str) else json.dumps(payload)
    return types.CallToolResult(
        content=[types.TextContent(type="text", text=text)],
        isError=is_error,
    )


class CloudMCPServer:
    """MCP server that routes tool calls into the command registry."""

    def __init__(
        self,
        factory: CommandFactory,
        services: ServiceProvider,
        settings: Settings | None = None,
    ) -> None:
        self.factory = factory
        self.services = services
        self.settings = settings or Settings()

        self.server = Server(self.settings.server_name)
        self._register_handlers()

        logger.info(
            "Initialized cloudmcp MCP server with %s tools",
            len(self.visible_commands()),
        )

    def visible_commands(self) -> dict[str, BaseCommand[Any]]:
        hidden_groups = set(self.settings.hidden_groups)
        return {
            name: command
            for name, command in self.factory.all_commands.items()
            if not command.hidden
            and not hidden_groups.intersection(self.factory.name_segments(name))
        }

    def list_tools(self) -> list[types.Tool]:
        return [
            types.Tool(
                name=name,
                description=command.description,
                inputSchema=build_input_schema(command.get_argument_chain()),
                annotations=types.ToolAnnotations(
                    readOnlyHint=command.read_only,
                    destructiveHint=not command.read_only,
                ),
            )
            for name, command in self.visible_commands().items()
        ]

    async def call_tool(
        self,
        name: str,
        arguments: Mapping[str, Any] | None,
    ) -> types.CallToolResult:
        command = self.visible_commands().get(name)
        if command is None:
            logger.debug("Tool call for unknown command %s", name)
            return _text_result(
                {"error": f"Could not find command: {name}", "name": name},
                is_error=True,
            )

        tokens = build_tool_tokens(arguments)
        logger.debug("Dispatching %s with %s argument tokens", name, len(tokens))
        context = CommandContext(
            self.services,
            loader_timeout=self.settings.loader_timeout_seconds,
        )
        response = await execute_command(command, context, tokens=tokens)

        if response.status >= 400:
            return _text_result(
                {"status": response.status, "message": response.message},
                is_error=True,
            )
        return _text_result(response.results_json())

    def _register_handlers(self) -> None:
        @self.server.list_tools()  # type: ignore
        async def handle_list_tools() -> list[types.Tool]:
            return self.list_tools()

        # Arguments are bound and validated by the command itself so that an
        # incomplete call can still come back with suggestions.
        @self.server.call_tool(validate_input=False)  # type: ignore
        async def handle_call_tool(
            name: str,
            arguments: dict[str, Any] | None,
        ) -> types.CallToolResult:
            return await self.call_tool(name, arguments)

    async def run_stdio(self) -> None:
        async with mcp_stdio.stdio_server() as (read_stream, write_stream):
            await self.server.run(
                read_stream,
                write_stream,
                InitializationOptions(
                    server_name=self.settings.server_name,
                    server_version=__version__,
                    capabilities=self.server.get_capabilities(
                        notification_options=NotificationOptions(),
                        experimental_capabilities={},
                    ),
                ),
            )


def run_mcp_server(
    factory: CommandFactory,
    services: ServiceProvider,
    settings: Settings | None = None,
) -> None:
    """Run the cloudmcp MCP server over stdio."""
    server = CloudMCPServer(factory, services, settings)
    asyncio.run(server.run_stdio())
