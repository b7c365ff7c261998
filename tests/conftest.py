"""Shared test fixtures for the cloudmcp test suite."""

from __future__ import annotations

import copy
from pathlib import Path
from typing import Any

import pytest
import yaml

from cloudmcp.core.context import CommandContext, ServiceProvider
from cloudmcp.core.factory import CommandFactory
from cloudmcp.services import Inventory, register_inventory_services
from cloudmcp.utils.settings import Settings
from tests.helpers import SAMPLE_INVENTORY


@pytest.fixture
def inventory_payload() -> dict[str, Any]:
    """A fresh copy of the sample inventory."""
    return copy.deepcopy(SAMPLE_INVENTORY)


@pytest.fixture
def inventory(inventory_payload: dict[str, Any]) -> Inventory:
    return Inventory(inventory_payload)


@pytest.fixture
def inventory_file(inventory_payload: dict[str, Any], tmp_path: Path) -> Path:
    """Write the sample inventory to a temporary YAML file."""
    path = tmp_path / "inventory.yaml"
    with open(path, "w") as f:
        yaml.safe_dump(inventory_payload, f)
    return path


@pytest.fixture
def factory() -> CommandFactory:
    """The full command registry."""
    return CommandFactory()


@pytest.fixture
def settings() -> Settings:
    return Settings(loader_timeout_seconds=2.0)


@pytest.fixture
def services(
    inventory: Inventory,
    factory: CommandFactory,
    settings: Settings,
) -> ServiceProvider:
    provider = register_inventory_services(ServiceProvider(), inventory)
    provider.register(CommandFactory, factory)
    provider.register(Settings, settings)
    return provider


@pytest.fixture
def context(services: ServiceProvider, settings: Settings) -> CommandContext:
    return CommandContext(services, loader_timeout=settings.loader_timeout_seconds)


