"""The operation catalog, one registrar per area."""

from cloudmcp.commands.appconfig import register_appconfig_commands
from cloudmcp.commands.cosmos import register_cosmos_commands
from cloudmcp.commands.groups import register_group_commands
from cloudmcp.commands.monitor import register_monitor_commands
from cloudmcp.commands.server import register_server_commands
from cloudmcp.commands.storage import register_storage_commands
from cloudmcp.commands.subscriptions import register_subscription_commands
from cloudmcp.commands.tools import register_tools_commands

REGISTRARS = [
    register_tools_commands,
    register_server_commands,
    register_subscription_commands,
    register_group_commands,
    register_storage_commands,
    register_cosmos_commands,
    register_monitor_commands,
    register_appconfig_commands,
]

__all__ = ["REGISTRARS"]
