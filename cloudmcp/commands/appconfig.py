"""App Configuration store and key-value commands."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, TypeVar

from cloudmcp.core.arguments import ArgumentChain, ArgumentDefinitions
from cloudmcp.core.command import BaseCommand
from cloudmcp.core.context import CommandContext
from cloudmcp.models.argument import ArgumentOption
from cloudmcp.models.arguments import (
    AppConfigArguments,
    KeyValueArguments,
    KeyValueSetArguments,
    SubscriptionArguments,
)
from cloudmcp.services.interfaces import AppConfigService

if TYPE_CHECKING:
    from cloudmcp.core.factory import CommandFactory

TAppConfigArgs = TypeVar("TAppConfigArgs", bound=SubscriptionArguments)


class BaseAppConfigCommand(BaseCommand[TAppConfigArgs]):
    async def get_account_options(
        self, context: CommandContext, args: Any
    ) -> list[ArgumentOption]:
        if not args.subscription_id:
            return []
        service = context.get_service(AppConfigService)
        accounts = await service.list_accounts(
            args.subscription_id, tenant=args.tenant_id, retry_policy=args.retry_policy
        )
        return [ArgumentOption(id=account["name"], name=account["name"]) for account in accounts]

    def create_account_argument(self) -> ArgumentChain[TAppConfigArgs]:
        return (
            ArgumentChain.from_definition(ArgumentDefinitions.APPCONFIG_ACCOUNT)
            .with_value_accessor(lambda args: args.account_name)
            .with_value_loader(self.get_account_options)
        )

    def create_key_argument(self) -> ArgumentChain[TAppConfigArgs]:
        return ArgumentChain.from_definition(ArgumentDefinitions.KEY).with_value_accessor(
            lambda args: args.key
        )

    def create_label_argument(self) -> ArgumentChain[TAppConfigArgs]:
        return ArgumentChain.from_definition(ArgumentDefinitions.LABEL).with_value_accessor(
            lambda args: args.label
        )


class AccountListCommand(BaseAppConfigCommand[SubscriptionArguments]):
    name = "list"
    description = (
        "List all App Configuration stores in a subscription. Returns each store's "
        "name and endpoint."
    )
    arguments_model = SubscriptionArguments

    async def execute_async(self, context: CommandContext, args: SubscriptionArguments) -> Any:
        service = context.get_service(AppConfigService)
        accounts = await service.list_accounts(
            args.subscription_id, tenant=args.tenant_id, retry_policy=args.retry_policy
        )
        return {"accounts": accounts} if accounts else None


class KeyValueListCommand(BaseAppConfigCommand[KeyValueArguments]):
    name = "list"
    description = (
        "List key-values in an App Configuration store, optionally filtered by key "
        "and label."
    )
    arguments_model = KeyValueArguments

    def argument_chain(self) -> list[ArgumentChain[KeyValueArguments]]:
        return [
            self.create_account_argument(),
            self.create_key_argument().with_is_required(False),
            self.create_label_argument(),
        ]

    async def execute_async(self, context: CommandContext, args: KeyValueArguments) -> Any:
        service = context.get_service(AppConfigService)
        settings = await service.list_key_values(
            args.account_name,
            args.subscription_id,
            key=args.key,
            label=args.label,
            tenant=args.tenant_id,
            retry_policy=args.retry_policy,
        )
        return {"settings": settings} if settings else None


class BaseKeyValueCommand(BaseAppConfigCommand[KeyValueArguments]):
    """Commands addressing a single key (and optional label) in a store."""

    arguments_model = KeyValueArguments

    def argument_chain(self) -> list[ArgumentChain[KeyValueArguments]]:
        return [
            self.create_account_argument(),
            self.create_key_argument(),
            self.create_label_argument(),
        ]


class KeyValueShowCommand(BaseKeyValueCommand):
    name = "show"
    description = "Show a specific key-value setting in an App Configuration store."

    async def execute_async(self, context: CommandContext, args: KeyValueArguments) -> Any:
        service = context.get_service(AppConfigService)
        setting = await service.get_key_value(
            args.account_name,
            args.key,
            args.subscription_id,
            label=args.label,
            tenant=args.tenant_id,
            retry_policy=args.retry_policy,
        )
        return {"setting": setting}


class KeyValueSetCommand(BaseAppConfigCommand[KeyValueSetArguments]):
    name = "set"
    description = (
        "Set a key-value setting in an App Configuration store. Creates the key when "
        "it does not exist; fails when the key is locked."
    )
    arguments_model = KeyValueSetArguments
    read_only = False

    def argument_chain(self) -> list[ArgumentChain[KeyValueSetArguments]]:
        return [
            self.create_account_argument(),
            self.create_key_argument(),
            ArgumentChain.from_definition(ArgumentDefinitions.VALUE).with_value_accessor(
                lambda args: args.value
            ),
            self.create_label_argument(),
        ]

    async def execute_async(self, context: CommandContext, args: KeyValueSetArguments) -> Any:
        service = context.get_service(AppConfigService)
        setting = await service.set_key_value(
            args.account_name,
            args.key,
            args.value,
            args.subscription_id,
            label=args.label,
            tenant=args.tenant_id,
            retry_policy=args.retry_policy,
        )
        return {"setting": setting}


class KeyValueDeleteCommand(BaseKeyValueCommand):
    name = "delete"
    description = "Delete a key-value setting from an App Configuration store."
    read_only = False

    async def execute_async(self, context: CommandContext, args: KeyValueArguments) -> Any:
        service = context.get_service(AppConfigService)
        await service.delete_key_value(
            args.account_name,
            args.key,
            args.subscription_id,
            label=args.label,
            tenant=args.tenant_id,
            retry_policy=args.retry_policy,
        )
        return {"key": args.key, "label": args.label}


class KeyValueLockCommand(BaseKeyValueCommand):
    name = "lock"
    description = "Lock a key-value setting, making it read-only."
    read_only = False
    locked: bool = True

    async def execute_async(self, context: CommandContext, args: KeyValueArguments) -> Any:
        service = context.get_service(AppConfigService)
        setting = await service.set_key_value_read_only(
            args.account_name,
            args.key,
            self.locked,
            args.subscription_id,
            label=args.label,
            tenant=args.tenant_id,
            retry_policy=args.retry_policy,
        )
        return {"setting": setting}


class KeyValueUnlockCommand(KeyValueLockCommand):
    name = "unlock"
    description = "Unlock a key-value setting, making it editable again."
    locked = False


def register_appconfig_commands(factory: CommandFactory) -> None:
    appconfig = factory.add_group(
        "appconfig",
        "App Configuration operations - Commands for managing App Configuration stores "
        "and their key-value settings.",
    )
    factory.add_group("accounts", "App Configuration store operations.", appconfig)
    factory.add_group("kv", "App Configuration key-value setting operations.", appconfig)

    factory.add_command("appconfig.accounts.list", AccountListCommand())
    factory.add_command("appconfig.kv.list", KeyValueListCommand())
    factory.add_command("appconfig.kv.show", KeyValueShowCommand())
    factory.add_command("appconfig.kv.set", KeyValueSetCommand())
    factory.add_command("appconfig.kv.delete", KeyValueDeleteCommand())
    factory.add_command("appconfig.kv.lock", KeyValueLockCommand())
    factory.add_command("appconfig.kv.unlock", KeyValueUnlockCommand())
