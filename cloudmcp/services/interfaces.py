"""Collaborator interfaces.

Commands only ever talk to these protocols. Authentication, retry, and
caching are the implementation's concern; ``tenant`` and ``retry_policy``
are forwarded exactly as the caller supplied them.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from cloudmcp.models.argument import ArgumentOption
from cloudmcp.models.arguments import RetryPolicyArguments


@runtime_checkable
class SubscriptionService(Protocol):
    async def list_subscriptions(
        self,
        *,
        tenant: str | None = None,
        retry_policy: RetryPolicyArguments | None = None,
    ) -> list[ArgumentOption]:
        """Return subscriptions visible to the caller as ``{id, name}``."""
        ...


@runtime_checkable
class ResourceGroupService(Protocol):
    async def list_resource_groups(
        self,
        subscription: str,
        *,
        tenant: str | None = None,
        retry_policy: RetryPolicyArguments | None = None,
    ) -> list[dict[str, Any]]:
        """Return resource groups, each with at least ``id`` and ``name``."""
        ...


@runtime_checkable
class StorageService(Protocol):
    async def list_accounts(
        self,
        subscription: str,
        *,
        tenant: str | None = None,
        retry_policy: RetryPolicyArguments | None = None,
    ) -> list[str]: ...

    async def list_tables(
        self,
        account: str,
        subscription: str,
        *,
        tenant: str | None = None,
        retry_policy: RetryPolicyArguments | None = None,
    ) -> list[str]: ...

    async def list_containers(
        self,
        account: str,
        subscription: str,
        *,
        tenant: str | None = None,
        retry_policy: RetryPolicyArguments | None = None,
    ) -> list[str]: ...

    async def get_container_details(
        self,
        account: str,
        container: str,
        subscription: str,
        *,
        tenant: str | None = None,
        retry_policy: RetryPolicyArguments | None = None,
    ) -> dict[str, Any]: ...

    async def list_blobs(
        self,
        account: str,
        container: str,
        subscription: str,
        *,
        tenant: str | None = None,
        retry_policy: RetryPolicyArguments | None = None,
    ) -> list[str]: ...


@runtime_checkable
class CosmosService(Protocol):
    async def list_accounts(
        self,
        subscription: str,
        *,
        tenant: str | None = None,
        retry_policy: RetryPolicyArguments | None = None,
    ) -> list[str]: ...

    async def list_databases(
        self,
        account: str,
        subscription: str,
        *,
        tenant: str | None = None,
        retry_policy: RetryPolicyArguments | None = None,
    ) -> list[str]: ...

    async def list_containers(
        self,
        account: str,
        database: str,
        subscription: str,
        *,
        tenant: str | None = None,
        retry_policy: RetryPolicyArguments | None = None,
    ) -> list[str]: ...

    async def query_items(
        self,
        account: str,
        database: str,
        container: str,
        query: str,
        subscription: str,
        *,
        tenant: str | None = None,
        retry_policy: RetryPolicyArguments | None = None,
    ) -> list[dict[str, Any]]: ...


@runtime_checkable
class MonitorService(Protocol):
    async def list_workspaces(
        self,
        subscription: str,
        *,
        tenant: str | None = None,
        retry_policy: RetryPolicyArguments | None = None,
    ) -> list[dict[str, Any]]: ...

    async def list_tables(
        self,
        subscription: str,
        resource_group: str,
        workspace: str,
        table_type: str,
        *,
        tenant: str | None = None,
        retry_policy: RetryPolicyArguments | None = None,
    ) -> list[str]: ...

    async def query_logs(
        self,
        subscription: str,
        workspace: str,
        query: str,
        table: str,
        hours: int,
        limit: int,
        *,
        tenant: str | None = None,
        retry_policy: RetryPolicyArguments | None = None,
    ) -> list[dict[str, Any]]: ...


@runtime_checkable
class AppConfigService(Protocol):
    async def list_accounts(
        self,
        subscription: str,
        *,
        tenant: str | None = None,
        retry_policy: RetryPolicyArguments | None = None,
    ) -> list[dict[str, Any]]: ...

    async def list_key_values(
        self,
        account: str,
        subscription: str,
        *,
        key: str | None = None,
        label: str | None = None,
        tenant: str | None = None,
        retry_policy: RetryPolicyArguments | None = None,
    ) -> list[dict[str, Any]]: ...

    async def get_key_value(
        self,
        account: str,
        key: str,
        subscription: str,
        *,
        label: str | None = None,
        tenant: str | None = None,
        retry_policy: RetryPolicyArguments | None = None,
    ) -> dict[str, Any]: ...

    async def set_key_value(
        self,
        account: str,
        key: str,
        value: str,
        subscription: str,
        *,
        label: str | None = None,
        tenant: str | None = None,
        retry_policy: RetryPolicyArguments | None = None,
    ) -> dict[str, Any]: ...

    async def delete_key_value(
        self,
        account: str,
        key: str,
        subscription: str,
        *,
        label: str | None = None,
        tenant: str | None = None,
        retry_policy: RetryPolicyArguments | None = None,
    ) -> None: ...

    async def set_key_value_read_only(
        self,
        account: str,
        key: str,
        read_only: bool,
        subscription: str,
        *,
        label: str | None = None,
        tenant: str | None = None,
        retry_policy: RetryPolicyArguments | None = None,
    ) -> dict[str, Any]: ...
