"""Resource group commands."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from cloudmcp.core.command import BaseCommand
from cloudmcp.core.context import CommandContext
from cloudmcp.models.arguments import SubscriptionArguments
from cloudmcp.services.interfaces import ResourceGroupService

if TYPE_CHECKING:
    from cloudmcp.core.factory import CommandFactory


class ResourceGroupListCommand(BaseCommand[SubscriptionArguments]):
    name = "list"
    description = (
        "List all resource groups in a subscription. Returns each group's ID and name."
    )
    arguments_model = SubscriptionArguments

    async def execute_async(self, context: CommandContext, args: SubscriptionArguments) -> Any:
        service = context.get_service(ResourceGroupService)
        groups = await service.list_resource_groups(
            args.subscription_id, tenant=args.tenant_id, retry_policy=args.retry_policy
        )
        return {"groups": groups} if groups else None


def register_group_commands(factory: CommandFactory) -> None:
    factory.add_group(
        "groups",
        "Resource group operations - Commands for listing and managing resource groups.",
    )
    factory.add_command("groups.list", ResourceGroupListCommand())
