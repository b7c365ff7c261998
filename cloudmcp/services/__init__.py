"""Service collaborators consumed by commands and suggestion loaders."""

from cloudmcp.services.interfaces import (
    AppConfigService,
    CosmosService,
    MonitorService,
    ResourceGroupService,
    StorageService,
    SubscriptionService,
)
from cloudmcp.services.inventory import Inventory, register_inventory_services

__all__ = [
    "AppConfigService",
    "CosmosService",
    "Inventory",
    "MonitorService",
    "ResourceGroupService",
    "StorageService",
    "SubscriptionService",
    "register_inventory_services",
]
