"""Typed argument objects bound from CLI flags or tool-call parameters.

Field names are the argument names with hyphens replaced by underscores, so
``--account-name`` binds to ``account_name``.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from cloudmcp.models.argument import RetryMode


class RetryPolicyArguments(BaseModel):
    """Retry tuning passed through to service collaborators untouched."""

    delay_seconds: float = 2.0
    max_delay_seconds: float = 10.0
    max_retries: int = 3
    mode: RetryMode = RetryMode.EXPONENTIAL
    network_timeout_seconds: float = 100.0


class BaseArguments(BaseModel):
    """Arguments every command accepts."""

    model_config = ConfigDict(extra="ignore")

    tenant_id: str | None = None
    auth_method: str | None = None
    retry_policy: RetryPolicyArguments | None = None


class SubscriptionArguments(BaseArguments):
    subscription_id: str | None = None


class StorageArguments(SubscriptionArguments):
    account_name: str | None = None


class StorageContainerArguments(StorageArguments):
    container_name: str | None = None


class CosmosArguments(SubscriptionArguments):
    account_name: str | None = None


class CosmosDatabaseArguments(CosmosArguments):
    database_name: str | None = None


class CosmosContainerArguments(CosmosDatabaseArguments):
    container_name: str | None = None


class CosmosItemQueryArguments(CosmosContainerArguments):
    query: str | None = None


class MonitorWorkspaceArguments(SubscriptionArguments):
    workspace_name: str | None = None


class MonitorTableListArguments(MonitorWorkspaceArguments):
    resource_group: str | None = None
    table_type: str | None = None


class LogQueryArguments(MonitorWorkspaceArguments):
    table_name: str | None = None
    query: str | None = None
    hours: int | None = None
    limit: int | None = None


class AppConfigArguments(SubscriptionArguments):
    account_name: str | None = None


class KeyValueArguments(AppConfigArguments):
    key: str | None = None
    label: str | None = None


class KeyValueSetArguments(KeyValueArguments):
    value: str | None = None
