"""Pydantic data models for CloudMCP."""

from cloudmcp.models.argument import (
    ArgumentInfo,
    ArgumentOption,
    AuthMethod,
    RetryMode,
    sort_arguments,
)
from cloudmcp.models.arguments import (
    AppConfigArguments,
    BaseArguments,
    CosmosArguments,
    CosmosContainerArguments,
    CosmosDatabaseArguments,
    CosmosItemQueryArguments,
    KeyValueArguments,
    KeyValueSetArguments,
    LogQueryArguments,
    MonitorTableListArguments,
    MonitorWorkspaceArguments,
    RetryPolicyArguments,
    StorageArguments,
    StorageContainerArguments,
    SubscriptionArguments,
)
from cloudmcp.models.response import CommandInfo, CommandResponse

__all__ = [
    # Argument
    "ArgumentInfo",
    "ArgumentOption",
    "AuthMethod",
    "RetryMode",
    "sort_arguments",
    # Bound arguments
    "BaseArguments",
    "RetryPolicyArguments",
    "SubscriptionArguments",
    "StorageArguments",
    "StorageContainerArguments",
    "CosmosArguments",
    "CosmosDatabaseArguments",
    "CosmosContainerArguments",
    "CosmosItemQueryArguments",
    "MonitorWorkspaceArguments",
    "MonitorTableListArguments",
    "LogQueryArguments",
    "AppConfigArguments",
    "KeyValueArguments",
    "KeyValueSetArguments",
    # Response
    "CommandInfo",
    "CommandResponse",
]
