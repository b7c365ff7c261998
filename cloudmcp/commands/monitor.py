"""Log Analytics workspace, table, and log query commands."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, TypeVar

from cloudmcp.core.arguments import ArgumentChain, ArgumentDefinitions
from cloudmcp.core.command import BaseCommand
from cloudmcp.core.context import CommandContext
from cloudmcp.models.argument import ArgumentOption
from cloudmcp.models.arguments import (
    LogQueryArguments,
    MonitorTableListArguments,
    SubscriptionArguments,
)
from cloudmcp.services.interfaces import MonitorService

if TYPE_CHECKING:
    from cloudmcp.core.factory import CommandFactory

TMonitorArgs = TypeVar("TMonitorArgs", bound=SubscriptionArguments)


class BaseMonitorCommand(BaseCommand[TMonitorArgs]):
    async def get_workspace_options(
        self, context: CommandContext, args: Any
    ) -> list[ArgumentOption]:
        if not args.subscription_id:
            return []
        service = context.get_service(MonitorService)
        workspaces = await service.list_workspaces(
            args.subscription_id, tenant=args.tenant_id, retry_policy=args.retry_policy
        )
        return [
            ArgumentOption(id=workspace["name"], name=workspace["name"])
            for workspace in workspaces
        ]

    def create_workspace_argument(self) -> ArgumentChain[TMonitorArgs]:
        return (
            ArgumentChain.from_definition(ArgumentDefinitions.WORKSPACE_NAME)
            .with_value_accessor(lambda args: args.workspace_name)
            .with_value_loader(self.get_workspace_options)
        )


class WorkspaceListCommand(BaseMonitorCommand[SubscriptionArguments]):
    name = "list"
    description = (
        "List Log Analytics workspaces in a subscription. Returns each workspace's "
        "name, resource group, and customer ID."
    )
    arguments_model = SubscriptionArguments

    async def execute_async(self, context: CommandContext, args: SubscriptionArguments) -> Any:
        service = context.get_service(MonitorService)
        workspaces = await service.list_workspaces(
            args.subscription_id, tenant=args.tenant_id, retry_policy=args.retry_policy
        )
        return {"workspaces": workspaces} if workspaces else None


class TableListCommand(BaseMonitorCommand[MonitorTableListArguments]):
    name = "list"
    description = (
        "List tables of a given type in a Log Analytics workspace. Table type "
        "defaults to 'CustomLog'."
    )
    arguments_model = MonitorTableListArguments

    def argument_chain(self) -> list[ArgumentChain[MonitorTableListArguments]]:
        return [
            self.create_resource_group_argument(),
            self.create_workspace_argument(),
            ArgumentChain.from_definition(ArgumentDefinitions.TABLE_TYPE).with_value_accessor(
                lambda args: args.table_type
            ),
        ]

    async def execute_async(
        self, context: CommandContext, args: MonitorTableListArguments
    ) -> Any:
        service = context.get_service(MonitorService)
        tables = await service.list_tables(
            args.subscription_id,
            args.resource_group,
            args.workspace_name,
            args.table_type,
            tenant=args.tenant_id,
            retry_policy=args.retry_policy,
        )
        return {"tables": tables} if tables else None


class LogQueryCommand(BaseMonitorCommand[LogQueryArguments]):
    name = "query"
    description = (
        "Execute a KQL query against a table in a Log Analytics workspace. Looks back "
        "'hours' hours (default 24) and returns at most 'limit' rows (default 20)."
    )
    arguments_model = LogQueryArguments

    async def get_table_options(self, context: CommandContext, args: Any) -> list[ArgumentOption]:
        if not args.subscription_id or not args.workspace_name:
            return []
        service = context.get_service(MonitorService)
        workspaces = await service.list_workspaces(
            args.subscription_id, tenant=args.tenant_id, retry_policy=args.retry_policy
        )
        workspace = next((w for w in workspaces if w["name"] == args.workspace_name), None)
        if workspace is None:
            return []
        tables = await service.list_tables(
            args.subscription_id,
            workspace.get("resourceGroup"),
            args.workspace_name,
            str(ArgumentDefinitions.TABLE_TYPE.default_value),
            tenant=args.tenant_id,
            retry_policy=args.retry_policy,
        )
        return [ArgumentOption(id=table, name=table) for table in tables]

    def argument_chain(self) -> list[ArgumentChain[LogQueryArguments]]:
        return [
            self.create_workspace_argument(),
            ArgumentChain.from_definition(ArgumentDefinitions.TABLE_NAME)
            .with_value_accessor(lambda args: args.table_name)
            .with_value_loader(self.get_table_options),
            ArgumentChain.from_definition(ArgumentDefinitions.LOG_QUERY).with_value_accessor(
                lambda args: args.query
            ),
            ArgumentChain.from_definition(ArgumentDefinitions.HOURS).with_value_accessor(
                lambda args: args.hours
            ),
            ArgumentChain.from_definition(ArgumentDefinitions.LIMIT).with_value_accessor(
                lambda args: args.limit
            ),
        ]

    async def execute_async(self, context: CommandContext, args: LogQueryArguments) -> Any:
        service = context.get_service(MonitorService)
        rows = await service.query_logs(
            args.subscription_id,
            args.workspace_name,
            args.query,
            args.table_name,
            int(args.hours),
            int(args.limit),
            tenant=args.tenant_id,
            retry_policy=args.retry_policy,
        )
        return rows or None


def register_monitor_commands(factory: CommandFactory) -> None:
    monitor = factory.add_group(
        "monitor",
        "Monitor operations - Commands for querying and analyzing Log Analytics data.",
    )
    factory.add_group("logs", "Log Analytics query operations using KQL.", monitor)
    factory.add_group("workspaces", "Log Analytics workspace operations.", monitor)
    factory.add_group("tables", "Log Analytics workspace table operations.", monitor)

    factory.add_command("monitor.logs.query", LogQueryCommand())
    factory.add_command("monitor.workspaces.list", WorkspaceListCommand())
    factory.add_command("monitor.tables.list", TableListCommand())
