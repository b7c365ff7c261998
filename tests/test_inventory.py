"""Tests for the inventory-backed service collaborators."""

from __future__ import annotations

from pathlib import Path

import pytest

from cloudmcp.core.context import ServiceProvider
from cloudmcp.errors import ServiceNotRegisteredError, ServiceRequestError
from cloudmcp.services import (
    AppConfigService,
    CosmosService,
    Inventory,
    MonitorService,
    ResourceGroupService,
    StorageService,
    SubscriptionService,
    register_inventory_services,
)
from cloudmcp.services.inventory import (
    InventoryAppConfigService,
    InventoryMonitorService,
    InventoryStorageService,
)


class TestInventory:
    """Tests for the inventory snapshot."""

    def test_from_path(self, inventory_file: Path) -> None:
        inventory = Inventory.from_path(inventory_file)

        assert [sub["id"] for sub in inventory.subscriptions] == ["sub-1", "sub-2"]

    def test_from_path_rejects_non_mapping(self, tmp_path: Path) -> None:
        path = tmp_path / "inventory.yaml"
        path.write_text("- just\n- a list\n")

        with pytest.raises(ValueError):
            Inventory.from_path(path)

    def test_lookup_by_display_name(self, inventory: Inventory) -> None:
        assert inventory.subscription("Production")["id"] == "sub-2"

    def test_payload_is_copied(self, inventory_payload: dict) -> None:
        inventory = Inventory(inventory_payload)
        inventory_payload["subscriptions"].clear()

        assert len(inventory.subscriptions) == 2


class TestRegistration:
    """Every collaborator interface is answered."""

    @pytest.mark.parametrize(
        "interface",
        [
            SubscriptionService,
            ResourceGroupService,
            StorageService,
            CosmosService,
            MonitorService,
            AppConfigService,
        ],
    )
    def test_interfaces_registered(self, inventory: Inventory, interface: type) -> None:
        provider = register_inventory_services(ServiceProvider(), inventory)

        assert isinstance(provider.get(interface), interface)

    def test_unregistered_service(self) -> None:
        with pytest.raises(ServiceNotRegisteredError):
            ServiceProvider().get(StorageService)


class TestServices:
    """Behaviour of the individual inventory views."""

    @pytest.mark.asyncio
    async def test_missing_container(self, inventory: Inventory) -> None:
        storage = InventoryStorageService(inventory)

        with pytest.raises(ServiceRequestError) as exc_info:
            await storage.list_blobs("stacct", "nope", "sub-1")

        assert exc_info.value.status == 404

    @pytest.mark.asyncio
    async def test_workspace_resource_group_mismatch(self, inventory: Inventory) -> None:
        monitor = InventoryMonitorService(inventory)

        with pytest.raises(ServiceRequestError):
            await monitor.list_tables("sub-1", "rg-data", "ws-main", "CustomLog")

    @pytest.mark.asyncio
    async def test_unknown_table_type_is_empty(self, inventory: Inventory) -> None:
        monitor = InventoryMonitorService(inventory)

        assert await monitor.list_tables("sub-1", "rg-app", "ws-main", "Nothing") == []

    @pytest.mark.asyncio
    async def test_key_value_filters(self, inventory: Inventory) -> None:
        appconfig = InventoryAppConfigService(inventory)

        live = await appconfig.list_key_values("cfgstore", "sub-1", label="live")

        assert [entry["key"] for entry in live] == ["mode"]

    @pytest.mark.asyncio
    async def test_locked_key_cannot_be_deleted(self, inventory: Inventory) -> None:
        appconfig = InventoryAppConfigService(inventory)

        with pytest.raises(ServiceRequestError) as exc_info:
            await appconfig.delete_key_value("cfgstore", "mode", "sub-1", label="live")

        assert exc_info.value.status == 409

    @pytest.mark.asyncio
    async def test_set_creates_missing_key(self, inventory: Inventory) -> None:
        appconfig = InventoryAppConfigService(inventory)

        await appconfig.set_key_value("cfgstore", "size", "large", "sub-1", label="dev")
        shown = await appconfig.get_key_value("cfgstore", "size", "sub-1", label="dev")

        assert shown == {"key": "size", "value": "large", "label": "dev", "locked": False}
