"""Command registry, argument chain, and resolution engine."""

from cloudmcp.core.arguments import ArgumentChain, ArgumentDefinition, ArgumentDefinitions
from cloudmcp.core.command import BaseCommand, BaseCommandWithoutArgs, execute_command
from cloudmcp.core.context import CommandContext, ServiceProvider
from cloudmcp.core.factory import CommandFactory, flatten_commands
from cloudmcp.core.group import CommandGroup
from cloudmcp.core.resolution import process_argument_chain

__all__ = [
    "ArgumentChain",
    "ArgumentDefinition",
    "ArgumentDefinitions",
    "BaseCommand",
    "BaseCommandWithoutArgs",
    "CommandContext",
    "CommandFactory",
    "CommandGroup",
    "ServiceProvider",
    "execute_command",
    "flatten_commands",
    "process_argument_chain",
]
