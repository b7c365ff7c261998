"""Subscription commands."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from cloudmcp.core.command import BaseCommand
from cloudmcp.core.context import CommandContext
from cloudmcp.models.arguments import BaseArguments
from cloudmcp.services.interfaces import SubscriptionService

if TYPE_CHECKING:
    from cloudmcp.core.factory import CommandFactory


class SubscriptionListCommand(BaseCommand[BaseArguments]):
    name = "list"
    description = (
        "List all subscriptions the current credentials can access. Returns each "
        "subscription's ID and display name."
    )
    arguments_model = BaseArguments

    async def execute_async(self, context: CommandContext, args: BaseArguments) -> Any:
        service = context.get_service(SubscriptionService)
        subscriptions = await service.list_subscriptions(
            tenant=args.tenant_id, retry_policy=args.retry_policy
        )
        if not subscriptions:
            return None
        return {"subscriptions": [option.model_dump() for option in subscriptions]}


def register_subscription_commands(factory: CommandFactory) -> None:
    factory.add_group(
        "subscriptions",
        "Subscription operations - Commands for listing and managing subscriptions.",
    )
    factory.add_command("subscriptions.list", SubscriptionListCommand())
