"""Inventory-backed service collaborators.

Answers every service interface from a YAML snapshot of cloud resources,
so the command catalog can be exercised without live credentials. The
inventory shape, per subscription::

    subscriptions:
      - id: sub-1
        name: Development
        resource_groups: [rg-app]
        storage:
          <account>:
            tables: [<table>]
            containers:
              <container>: {properties: {...}, blobs: [<blob>]}
        cosmos:
          <account>:
            databases:
              <database>:
                containers:
                  <container>: {items: [{...}]}
        monitor:
          workspaces:
            <workspace>:
              resource_group: rg-app
              tables: {<table-type>: [<table>]}
              logs: {<table>: [{...}]}
        appconfig:
          <account>:
            key_values: [{key, value, label, locked}]

Queries are not evaluated: item and log queries return the stored rows
(log rows capped at ``limit``).
"""

from __future__ import annotations

import copy
from pathlib import Path
from typing import Any

import yaml

from cloudmcp.core.context import ServiceProvider
from cloudmcp.errors import ServiceRequestError
from cloudmcp.models.argument import ArgumentOption
from cloudmcp.models.arguments import RetryPolicyArguments
from cloudmcp.services.interfaces import (
    AppConfigService,
    CosmosService,
    MonitorService,
    ResourceGroupService,
    StorageService,
    SubscriptionService,
)


def _lookup(mapping: dict[str, Any] | None, key: str, kind: str) -> dict[str, Any]:
    if not mapping or key not in mapping:
        raise ServiceRequestError(404, f"{kind} '{key}' not found")
    if mapping[key] is None:
        mapping[key] = {}
    return mapping[key]


class Inventory:
    """A mutable snapshot of subscriptions and the resources inside them."""

    def __init__(self, payload: dict[str, Any] | None = None) -> None:
        self.payload: dict[str, Any] = copy.deepcopy(payload) if payload else {}

    @classmethod
    def from_path(cls, path: str | Path) -> Inventory:
        with open(path) as f:
            payload = yaml.safe_load(f) or {}
        if not isinstance(payload, dict):
            raise ValueError(f"Inventory file {path} must contain a mapping")
        return cls(payload)

    @property
    def subscriptions(self) -> list[dict[str, Any]]:
        return list(self.payload.get("subscriptions") or [])

    def subscription(self, subscription: str) -> dict[str, Any]:
        """Find a subscription by ID or display name."""
        for entry in self.subscriptions:
            if subscription in (entry.get("id"), entry.get("name")):
                return entry
        raise ServiceRequestError(404, f"Subscription '{subscription}' not found")

    def section(self, subscription: str, name: str) -> dict[str, Any]:
        return self.subscription(subscription).get(name) or {}


class _InventoryView:
    def __init__(self, inventory: Inventory) -> None:
        self.inventory = inventory


class InventorySubscriptionService(_InventoryView):
    async def list_subscriptions(
        self,
        *,
        tenant: str | None = None,
        retry_policy: RetryPolicyArguments | None = None,
    ) -> list[ArgumentOption]:
        return [
            ArgumentOption(id=str(entry["id"]), name=str(entry.get("name", entry["id"])))
            for entry in self.inventory.subscriptions
        ]


class InventoryResourceGroupService(_InventoryView):
    async def list_resource_groups(
        self,
        subscription: str,
        *,
        tenant: str | None = None,
        retry_policy: RetryPolicyArguments | None = None,
    ) -> list[dict[str, Any]]:
        sub = self.inventory.subscription(subscription)
        return [
            {"id": f"/subscriptions/{sub['id']}/resourceGroups/{name}", "name": name}
            for name in sub.get("resource_groups") or []
        ]


class InventoryStorageService(_InventoryView):
    def _account(self, account: str, subscription: str) -> dict[str, Any]:
        return _lookup(self.inventory.section(subscription, "storage"), account, "Storage account")

    def _container(self, account: str, container: str, subscription: str) -> dict[str, Any]:
        containers = self._account(account, subscription).get("containers")
        return _lookup(containers, container, "Container")

    async def list_accounts(self, subscription: str, **_: Any) -> list[str]:
        return sorted(self.inventory.section(subscription, "storage"))

    async def list_tables(self, account: str, subscription: str, **_: Any) -> list[str]:
        return list(self._account(account, subscription).get("tables") or [])

    async def list_containers(self, account: str, subscription: str, **_: Any) -> list[str]:
        return sorted(self._account(account, subscription).get("containers") or {})

    async def get_container_details(
        self, account: str, container: str, subscription: str, **_: Any
    ) -> dict[str, Any]:
        return dict(self._container(account, container, subscription).get("properties") or {})

    async def list_blobs(
        self, account: str, container: str, subscription: str, **_: Any
    ) -> list[str]:
        return list(self._container(account, container, subscription).get("blobs") or [])


class InventoryCosmosService(_InventoryView):
    def _account(self, account: str, subscription: str) -> dict[str, Any]:
        return _lookup(self.inventory.section(subscription, "cosmos"), account, "Cosmos DB account")

    def _database(self, account: str, database: str, subscription: str) -> dict[str, Any]:
        return _lookup(self._account(account, subscription).get("databases"), database, "Database")

    async def list_accounts(self, subscription: str, **_: Any) -> list[str]:
        return sorted(self.inventory.section(subscription, "cosmos"))

    async def list_databases(self, account: str, subscription: str, **_: Any) -> list[str]:
        return sorted(self._account(account, subscription).get("databases") or {})

    async def list_containers(
        self, account: str, database: str, subscription: str, **_: Any
    ) -> list[str]:
        return sorted(self._database(account, database, subscription).get("containers") or {})

    async def query_items(
        self,
        account: str,
        database: str,
        container: str,
        query: str,
        subscription: str,
        **_: Any,
    ) -> list[dict[str, Any]]:
        containers = self._database(account, database, subscription).get("containers")
        return list(_lookup(containers, container, "Container").get("items") or [])


class InventoryMonitorService(_InventoryView):
    def _workspaces(self, subscription: str) -> dict[str, Any]:
        return self.inventory.section(subscription, "monitor").get("workspaces") or {}

    async def list_workspaces(self, subscription: str, **_: Any) -> list[dict[str, Any]]:
        return [
            {
                "name": name,
                "resourceGroup": (details or {}).get("resource_group"),
                "customerId": (details or {}).get("customer_id"),
            }
            for name, details in sorted(self._workspaces(subscription).items())
        ]

    async def list_tables(
        self,
        subscription: str,
        resource_group: str,
        workspace: str,
        table_type: str,
        **_: Any,
    ) -> list[str]:
        details = _lookup(self._workspaces(subscription), workspace, "Workspace")
        if details.get("resource_group") not in (None, resource_group):
            raise ServiceRequestError(
                404, f"Workspace '{workspace}' not found in resource group '{resource_group}'"
            )
        return list((details.get("tables") or {}).get(table_type) or [])

    async def query_logs(
        self,
        subscription: str,
        workspace: str,
        query: str,
        table: str,
        hours: int,
        limit: int,
        **_: Any,
    ) -> list[dict[str, Any]]:
        details = _lookup(self._workspaces(subscription), workspace, "Workspace")
        rows = (details.get("logs") or {}).get(table) or []
        return list(rows[:limit])


class InventoryAppConfigService(_InventoryView):
    def _store(self, account: str, subscription: str) -> dict[str, Any]:
        return _lookup(
            self.inventory.section(subscription, "appconfig"), account, "App Configuration store"
        )

    def _find(
        self, account: str, key: str, label: str | None, subscription: str
    ) -> dict[str, Any]:
        for entry in self._store(account, subscription).get("key_values") or []:
            if entry.get("key") == key and entry.get("label") == label:
                return entry
        raise ServiceRequestError(404, f"Key '{key}' with label '{label}' not found")

    async def list_accounts(self, subscription: str, **_: Any) -> list[dict[str, Any]]:
        return [
            {"name": name, "endpoint": f"https://{name}.azconfig.io"}
            for name in sorted(self.inventory.section(subscription, "appconfig"))
        ]

    async def list_key_values(
        self,
        account: str,
        subscription: str,
        *,
        key: str | None = None,
        label: str | None = None,
        **_: Any,
    ) -> list[dict[str, Any]]:
        return [
            dict(entry)
            for entry in self._store(account, subscription).get("key_values") or []
            if (key is None or entry.get("key") == key)
            and (label is None or entry.get("label") == label)
        ]

    async def get_key_value(
        self, account: str, key: str, subscription: str, *, label: str | None = None, **_: Any
    ) -> dict[str, Any]:
        return dict(self._find(account, key, label, subscription))

    async def set_key_value(
        self,
        account: str,
        key: str,
        value: str,
        subscription: str,
        *,
        label: str | None = None,
        **_: Any,
    ) -> dict[str, Any]:
        entries = self._store(account, subscription).setdefault("key_values", [])
        for entry in entries:
            if entry.get("key") == key and entry.get("label") == label:
                if entry.get("locked"):
                    raise ServiceRequestError(409, f"Key '{key}' is read-only")
                entry["value"] = value
                return dict(entry)
        entry = {"key": key, "value": value, "label": label, "locked": False}
        entries.append(entry)
        return dict(entry)

    async def delete_key_value(
        self, account: str, key: str, subscription: str, *, label: str | None = None, **_: Any
    ) -> None:
        entry = self._find(account, key, label, subscription)
        if entry.get("locked"):
            raise ServiceRequestError(409, f"Key '{key}' is read-only")
        self._store(account, subscription)["key_values"].remove(entry)

    async def set_key_value_read_only(
        self,
        account: str,
        key: str,
        read_only: bool,
        subscription: str,
        *,
        label: str | None = None,
        **_: Any,
    ) -> dict[str, Any]:
        entry = self._find(account, key, label, subscription)
        entry["locked"] = read_only
        return dict(entry)


def register_inventory_services(provider: ServiceProvider, inventory: Inventory) -> ServiceProvider:
    """Register an inventory view for every collaborator interface."""
    return (
        provider.register(SubscriptionService, InventorySubscriptionService(inventory))
        .register(ResourceGroupService, InventoryResourceGroupService(inventory))
        .register(StorageService, InventoryStorageService(inventory))
        .register(CosmosService, InventoryCosmosService(inventory))
        .register(MonitorService, InventoryMonitorService(inventory))
        .register(AppConfigService, InventoryAppConfigService(inventory))
    )
