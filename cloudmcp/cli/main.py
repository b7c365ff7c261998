"""Main CLI entry point for cloudmcp.

The click tree is generated from the command registry: every group becomes
a ``click.Group`` and every command a ``click.Command`` sharing the same
option definitions the tool-call path parses with.
"""

from __future__ import annotations

import asyncio
import json
import logging
import sys
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import click

from cloudmcp import CLI_NAME, __version__
from cloudmcp.core.command import BaseCommand, execute_command
from cloudmcp.core.context import CommandContext, ServiceProvider
from cloudmcp.core.factory import CommandFactory
from cloudmcp.core.group import CommandGroup
from cloudmcp.services import Inventory, register_inventory_services
from cloudmcp.ui.console import err_console
from cloudmcp.utils.logging import configure_logging
from cloudmcp.utils.settings import Settings, load_settings

logger = logging.getLogger(__name__)


@dataclass
class CliState:
    """Lifecycle-scoped objects shared by every command in one process."""

    settings: Settings
    services: ServiceProvider


def build_services(factory: CommandFactory, settings: Settings) -> ServiceProvider:
    """Register the service collaborators plus the registry and settings."""
    inventory = (
        Inventory.from_path(settings.inventory_path)
        if settings.inventory_path is not None
        else Inventory()
    )
    services = register_inventory_services(ServiceProvider(), inventory)
    services.register(CommandFactory, factory)
    services.register(Settings, settings)
    return services


def _make_callback(command: BaseCommand[Any]) -> Callable[..., None]:
    @click.pass_obj
    def callback(state: CliState, **params: Any) -> None:
        context = CommandContext(
            state.services,
            loader_timeout=state.settings.loader_timeout_seconds,
        )
        response = asyncio.run(execute_command(command, context, params=params))
        click.echo(response.to_json())

    return callback


def _attach(group: click.Group, node: CommandGroup) -> None:
    for command in node.commands.values():
        click_command = command.get_command(callback=_make_callback(command))
        click_command.hidden = command.hidden
        group.add_command(click_command)

    for sub_group in node.sub_groups:
        click_group = click.Group(sub_group.name, help=sub_group.description)
        _attach(click_group, sub_group)
        group.add_command(click_group)


def build_cli(factory: CommandFactory) -> click.Group:
    """Build the click command tree for a registry."""

    @click.group(name=factory.root_group.name, help=factory.root_group.description)
    @click.version_option(version=__version__, prog_name=CLI_NAME)
    @click.option(
        "--config",
        "config_path",
        type=click.Path(dir_okay=False, path_type=Path),
        default=None,
        help="YAML settings file (defaults to $CLOUDMCP_CONFIG)",
    )
    @click.option(
        "--inventory",
        "inventory_path",
        type=click.Path(exists=True, dir_okay=False, path_type=Path),
        default=None,
        help="YAML inventory answering service requests offline",
    )
    @click.option(
        "--log-level",
        type=click.Choice(["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"], case_sensitive=False),
        default=None,
        help="Diagnostic log level (written to stderr)",
    )
    @click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
    @click.pass_context
    def cli(
        ctx: click.Context,
        config_path: Path | None,
        inventory_path: Path | None,
        log_level: str | None,
        verbose: bool,
    ) -> None:
        settings = load_settings(config_path)
        updates: dict[str, Any] = {}
        if inventory_path is not None:
            updates["inventory_path"] = inventory_path
        if verbose:
            updates["log_level"] = "DEBUG"
        elif log_level:
            updates["log_level"] = log_level.upper()
        if updates:
            settings = settings.model_copy(update=updates)

        configure_logging(settings.log_level)
        ctx.obj = CliState(settings=settings, services=build_services(factory, settings))

    _attach(cli, factory.root_group)
    return cli


def error_envelope(exc: BaseException) -> dict[str, Any]:
    return {"status": 500, "message": str(exc), "arguments": [], "durationMs": 0}


def main(argv: Sequence[str] | None = None) -> None:
    """Run the CLI; exit 0 on handled completion and 1 on unhandled errors."""
    try:
        factory = CommandFactory()
        result = build_cli(factory).main(
            args=list(argv) if argv is not None else None,
            prog_name=CLI_NAME,
            standalone_mode=False,
        )
    except click.ClickException as exc:
        exc.show()
        sys.exit(exc.exit_code)
    except click.Abort:
        err_console.print("[error]Aborted![/error]")
        sys.exit(1)
    except Exception as exc:
        logger.debug("Unhandled error", exc_info=True)
        click.echo(json.dumps(error_envelope(exc), indent=2))
        sys.exit(1)
    sys.exit(result if isinstance(result, int) else 0)


if __name__ == "__main__":
    main()
