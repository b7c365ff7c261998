"""Storage account, table, container, and blob commands."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, TypeVar

from cloudmcp.core.arguments import ArgumentChain, ArgumentDefinitions
from cloudmcp.core.command import BaseCommand
from cloudmcp.core.context import CommandContext
from cloudmcp.models.argument import ArgumentOption
from cloudmcp.models.arguments import (
    StorageArguments,
    StorageContainerArguments,
    SubscriptionArguments,
)
from cloudmcp.services.interfaces import StorageService

if TYPE_CHECKING:
    from cloudmcp.core.factory import CommandFactory

TStorageArgs = TypeVar("TStorageArgs", bound=SubscriptionArguments)


class BaseStorageCommand(BaseCommand[TStorageArgs]):
    """Shared argument builders and suggestion loaders for storage commands."""

    async def get_account_options(
        self, context: CommandContext, args: Any
    ) -> list[ArgumentOption]:
        if not args.subscription_id:
            return []
        service = context.get_service(StorageService)
        accounts = await service.list_accounts(
            args.subscription_id, tenant=args.tenant_id, retry_policy=args.retry_policy
        )
        return [ArgumentOption(id=account, name=account) for account in accounts]

    async def get_container_options(
        self, context: CommandContext, args: Any
    ) -> list[ArgumentOption]:
        if not args.account_name or not args.subscription_id:
            return []
        service = context.get_service(StorageService)
        containers = await service.list_containers(
            args.account_name,
            args.subscription_id,
            tenant=args.tenant_id,
            retry_policy=args.retry_policy,
        )
        return [ArgumentOption(id=container, name=container) for container in containers]

    def create_account_argument(self) -> ArgumentChain[TStorageArgs]:
        return (
            ArgumentChain.from_definition(ArgumentDefinitions.STORAGE_ACCOUNT)
            .with_value_accessor(lambda args: args.account_name)
            .with_value_loader(self.get_account_options)
        )

    def create_container_argument(self) -> ArgumentChain[TStorageArgs]:
        return (
            ArgumentChain.from_definition(ArgumentDefinitions.STORAGE_CONTAINER)
            .with_value_accessor(lambda args: args.container_name)
            .with_value_loader(self.get_container_options)
        )


class AccountListCommand(BaseStorageCommand[SubscriptionArguments]):
    name = "list"
    description = (
        "List all Storage accounts in a subscription. Returns the account names "
        "as a JSON array. Use this to find the account to pass to other storage commands."
    )
    arguments_model = SubscriptionArguments

    async def execute_async(self, context: CommandContext, args: SubscriptionArguments) -> Any:
        service = context.get_service(StorageService)
        accounts = await service.list_accounts(
            args.subscription_id, tenant=args.tenant_id, retry_policy=args.retry_policy
        )
        return {"accounts": accounts} if accounts else None


class TableListCommand(BaseStorageCommand[StorageArguments]):
    name = "list"
    description = (
        "List all tables in a Storage account. Returns the table names as a JSON "
        "array. Requires the account name and subscription."
    )
    arguments_model = StorageArguments

    def argument_chain(self) -> list[ArgumentChain[StorageArguments]]:
        return [self.create_account_argument()]

    async def execute_async(self, context: CommandContext, args: StorageArguments) -> Any:
        service = context.get_service(StorageService)
        tables = await service.list_tables(
            args.account_name,
            args.subscription_id,
            tenant=args.tenant_id,
            retry_policy=args.retry_policy,
        )
        return {"tables": tables} if tables else None


class ContainerListCommand(BaseStorageCommand[StorageArguments]):
    name = "list"
    description = (
        "List all blob containers in a Storage account. Returns container names as "
        "a JSON array. Use this to explore an account before listing its blobs."
    )
    arguments_model = StorageArguments

    def argument_chain(self) -> list[ArgumentChain[StorageArguments]]:
        return [self.create_account_argument()]

    async def execute_async(self, context: CommandContext, args: StorageArguments) -> Any:
        service = context.get_service(StorageService)
        containers = await service.list_containers(
            args.account_name,
            args.subscription_id,
            tenant=args.tenant_id,
            retry_policy=args.retry_policy,
        )
        return {"containers": containers} if containers else None


class ContainerDetailsCommand(BaseStorageCommand[StorageContainerArguments]):
    name = "details"
    description = (
        "Get the properties of a blob container: last modified time, lease state, "
        "public access level, and metadata."
    )
    arguments_model = StorageContainerArguments

    def argument_chain(self) -> list[ArgumentChain[StorageContainerArguments]]:
        return [self.create_account_argument(), self.create_container_argument()]

    async def execute_async(
        self, context: CommandContext, args: StorageContainerArguments
    ) -> Any:
        service = context.get_service(StorageService)
        details = await service.get_container_details(
            args.account_name,
            args.container_name,
            args.subscription_id,
            tenant=args.tenant_id,
            retry_policy=args.retry_policy,
        )
        return {"details": details}


class BlobListCommand(BaseStorageCommand[StorageContainerArguments]):
    name = "list"
    description = (
        "List all blobs in a Storage container. You must specify both an account "
        "name and a container name. Results are blob names as a JSON array."
    )
    arguments_model = StorageContainerArguments

    def argument_chain(self) -> list[ArgumentChain[StorageContainerArguments]]:
        return [self.create_account_argument(), self.create_container_argument()]

    async def execute_async(
        self, context: CommandContext, args: StorageContainerArguments
    ) -> Any:
        service = context.get_service(StorageService)
        blobs = await service.list_blobs(
            args.account_name,
            args.container_name,
            args.subscription_id,
            tenant=args.tenant_id,
            retry_policy=args.retry_policy,
        )
        return {"blobs": blobs} if blobs else None


def register_storage_commands(factory: CommandFactory) -> None:
    storage = factory.add_group(
        "storage",
        "Storage operations - Commands for managing and accessing Storage resources, "
        "including accounts, tables, containers, and blobs.",
    )
    factory.add_group(
        "accounts", "Storage accounts operations - List Storage accounts.", storage
    )
    factory.add_group(
        "tables", "Storage tables operations - Work with Table Storage.", storage
    )
    blobs = factory.add_group(
        "blobs", "Storage blobs operations - Inspect blobs in your Storage accounts.", storage
    )
    factory.add_group(
        "containers", "Storage blob containers operations - Inspect blob containers.", blobs
    )

    factory.add_command("storage.accounts.list", AccountListCommand())
    factory.add_command("storage.tables.list", TableListCommand())
    factory.add_command("storage.blobs.list", BlobListCommand())
    factory.add_command("storage.blobs.containers.list", ContainerListCommand())
    factory.add_command("storage.blobs.containers.details", ContainerDetailsCommand())
