"""Cosmos DB account, database, container, and item commands."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, TypeVar

from cloudmcp.core.arguments import ArgumentChain, ArgumentDefinitions
from cloudmcp.core.command import BaseCommand
from cloudmcp.core.context import CommandContext
from cloudmcp.models.argument import ArgumentOption
from cloudmcp.models.arguments import (
    CosmosArguments,
    CosmosDatabaseArguments,
    CosmosItemQueryArguments,
    SubscriptionArguments,
)
from cloudmcp.services.interfaces import CosmosService

if TYPE_CHECKING:
    from cloudmcp.core.factory import CommandFactory

TCosmosArgs = TypeVar("TCosmosArgs", bound=SubscriptionArguments)


def _options(names: list[str]) -> list[ArgumentOption]:
    return [ArgumentOption(id=name, name=name) for name in names]


class BaseCosmosCommand(BaseCommand[TCosmosArgs]):
    async def get_account_options(self, context: CommandContext, args: Any) -> list[ArgumentOption]:
        if not args.subscription_id:
            return []
        service = context.get_service(CosmosService)
        return _options(
            await service.list_accounts(
                args.subscription_id, tenant=args.tenant_id, retry_policy=args.retry_policy
            )
        )

    async def get_database_options(
        self, context: CommandContext, args: Any
    ) -> list[ArgumentOption]:
        if not args.account_name or not args.subscription_id:
            return []
        service = context.get_service(CosmosService)
        return _options(
            await service.list_databases(
                args.account_name,
                args.subscription_id,
                tenant=args.tenant_id,
                retry_policy=args.retry_policy,
            )
        )

    async def get_container_options(
        self, context: CommandContext, args: Any
    ) -> list[ArgumentOption]:
        if not args.account_name or not args.database_name or not args.subscription_id:
            return []
        service = context.get_service(CosmosService)
        return _options(
            await service.list_containers(
                args.account_name,
                args.database_name,
                args.subscription_id,
                tenant=args.tenant_id,
                retry_policy=args.retry_policy,
            )
        )

    def create_account_argument(self) -> ArgumentChain[TCosmosArgs]:
        return (
            ArgumentChain.from_definition(ArgumentDefinitions.COSMOS_ACCOUNT)
            .with_value_accessor(lambda args: args.account_name)
            .with_value_loader(self.get_account_options)
        )

    def create_database_argument(self) -> ArgumentChain[TCosmosArgs]:
        return (
            ArgumentChain.from_definition(ArgumentDefinitions.COSMOS_DATABASE)
            .with_value_accessor(lambda args: args.database_name)
            .with_value_loader(self.get_database_options)
        )

    def create_container_argument(self) -> ArgumentChain[TCosmosArgs]:
        return (
            ArgumentChain.from_definition(ArgumentDefinitions.COSMOS_CONTAINER)
            .with_value_accessor(lambda args: args.container_name)
            .with_value_loader(self.get_container_options)
        )


class AccountListCommand(BaseCosmosCommand[SubscriptionArguments]):
    name = "list"
    description = (
        "List all Cosmos DB accounts in a subscription. Returns account names as a "
        "JSON array."
    )
    arguments_model = SubscriptionArguments

    async def execute_async(self, context: CommandContext, args: SubscriptionArguments) -> Any:
        service = context.get_service(CosmosService)
        accounts = await service.list_accounts(
            args.subscription_id, tenant=args.tenant_id, retry_policy=args.retry_policy
        )
        return {"accounts": accounts} if accounts else None


class DatabaseListCommand(BaseCosmosCommand[CosmosArguments]):
    name = "list"
    description = "List all databases in a Cosmos DB account."
    arguments_model = CosmosArguments

    def argument_chain(self) -> list[ArgumentChain[CosmosArguments]]:
        return [self.create_account_argument()]

    async def execute_async(self, context: CommandContext, args: CosmosArguments) -> Any:
        service = context.get_service(CosmosService)
        databases = await service.list_databases(
            args.account_name,
            args.subscription_id,
            tenant=args.tenant_id,
            retry_policy=args.retry_policy,
        )
        return {"databases": databases} if databases else None


class ContainerListCommand(BaseCosmosCommand[CosmosDatabaseArguments]):
    name = "list"
    description = "List all containers in a Cosmos DB database."
    arguments_model = CosmosDatabaseArguments

    def argument_chain(self) -> list[ArgumentChain[CosmosDatabaseArguments]]:
        return [self.create_account_argument(), self.create_database_argument()]

    async def execute_async(self, context: CommandContext, args: CosmosDatabaseArguments) -> Any:
        service = context.get_service(CosmosService)
        containers = await service.list_containers(
            args.account_name,
            args.database_name,
            args.subscription_id,
            tenant=args.tenant_id,
            retry_policy=args.retry_policy,
        )
        return {"containers": containers} if containers else None


class ItemQueryCommand(BaseCosmosCommand[CosmosItemQueryArguments]):
    name = "query"
    description = (
        "Execute a SQL query against items in a Cosmos DB container. Defaults to "
        "'SELECT * FROM c' when no query is given. Returns matching items as a JSON array."
    )
    arguments_model = CosmosItemQueryArguments

    def argument_chain(self) -> list[ArgumentChain[CosmosItemQueryArguments]]:
        return [
            self.create_account_argument(),
            self.create_database_argument(),
            self.create_container_argument(),
            ArgumentChain.from_definition(ArgumentDefinitions.COSMOS_QUERY).with_value_accessor(
                lambda args: args.query
            ),
        ]

    async def execute_async(self, context: CommandContext, args: CosmosItemQueryArguments) -> Any:
        service = context.get_service(CosmosService)
        items = await service.query_items(
            args.account_name,
            args.database_name,
            args.container_name,
            args.query or str(ArgumentDefinitions.COSMOS_QUERY.default_value),
            args.subscription_id,
            tenant=args.tenant_id,
            retry_policy=args.retry_policy,
        )
        return {"items": items} if items else None


def register_cosmos_commands(factory: CommandFactory) -> None:
    cosmos = factory.add_group(
        "cosmos",
        "Cosmos DB operations - Commands for listing and querying Cosmos DB accounts, "
        "databases, containers, and items.",
    )
    factory.add_group("accounts", "Cosmos DB accounts operations.", cosmos)
    databases = factory.add_group("databases", "Cosmos DB databases operations.", cosmos)
    containers = factory.add_group(
        "containers", "Cosmos DB containers operations.", databases
    )
    factory.add_group("items", "Cosmos DB items operations.", containers)

    factory.add_command("cosmos.accounts.list", AccountListCommand())
    factory.add_command("cosmos.databases.list", DatabaseListCommand())
    factory.add_command("cosmos.databases.containers.list", ContainerListCommand())
    factory.add_command("cosmos.databases.containers.items.query", ItemQueryCommand())
