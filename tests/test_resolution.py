"""Tests for argument chain resolution."""

from __future__ import annotations

import asyncio
from typing import Any
from unittest.mock import AsyncMock

import pytest

from cloudmcp.core.arguments import ArgumentChain
from cloudmcp.core.command import BaseCommand, execute_command
from cloudmcp.core.context import CommandContext, ServiceProvider
from cloudmcp.core.resolution import process_argument_chain
from cloudmcp.models.argument import ArgumentOption
from cloudmcp.models.arguments import SubscriptionArguments
from cloudmcp.services.interfaces import ResourceGroupService
from tests.helpers import argument_named


class _WidgetArguments(SubscriptionArguments):
    region: str | None = None
    size: str | None = None
    color: str | None = None


class _FrozenArguments:
    """Argument object that refuses attribute writes."""

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(name)

    region = None


def _options(*names: str) -> list[ArgumentOption]:
    return [ArgumentOption(id=name, name=name.title()) for name in names]


def _chain(name: str, **kwargs: Any) -> ArgumentChain[Any]:
    attribute = name.replace("-", "_")
    entry: ArgumentChain[Any] = ArgumentChain.create(name, f"The {name}.")
    entry = entry.with_value_accessor(lambda args: getattr(args, attribute))
    if "required" in kwargs:
        entry = entry.with_is_required(kwargs["required"])
    if "default" in kwargs:
        entry = entry.with_default_value(kwargs["default"])
    if "loader" in kwargs:
        entry = entry.with_value_loader(kwargs["loader"])
    return entry


@pytest.fixture
def bare_context() -> CommandContext:
    return CommandContext(ServiceProvider(), loader_timeout=0.5)


class TestDefaults:
    """Tests for default application."""

    @pytest.mark.asyncio
    async def test_required_argument_with_default_is_ready(
        self, bare_context: CommandContext
    ) -> None:
        args = _WidgetArguments()
        chain = [_chain("region", required=True, default="westus")]

        ready = await process_argument_chain(bare_context, chain, args)

        assert ready is True
        assert args.region == "westus"
        record = argument_named(bare_context.response.arguments, "region")
        assert record.value == "westus"
        assert record.default is None

    @pytest.mark.asyncio
    async def test_bound_value_wins_over_default(self, bare_context: CommandContext) -> None:
        args = _WidgetArguments(region="eastus")
        chain = [_chain("region", required=True, default="westus")]

        assert await process_argument_chain(bare_context, chain, args) is True
        assert args.region == "eastus"

    @pytest.mark.asyncio
    async def test_failed_default_write_is_not_fatal(self, bare_context: CommandContext) -> None:
        chain = [_chain("region", required=True, default="westus")]

        ready = await process_argument_chain(bare_context, chain, _FrozenArguments())

        assert ready is True
        assert argument_named(bare_context.response.arguments, "region").value == "westus"

    @pytest.mark.asyncio
    async def test_every_argument_is_recorded(self, bare_context: CommandContext) -> None:
        chain = [
            _chain("region"),
            _chain("size", required=True, default="small"),
            _chain("color", required=True),
        ]

        await process_argument_chain(bare_context, chain, _WidgetArguments(region="eu"))

        names = [info.name for info in bare_context.response.arguments]
        # Required first, then by name.
        assert names == ["color", "size", "region"]

    @pytest.mark.asyncio
    async def test_empty_chain_is_ready(self, bare_context: CommandContext) -> None:
        assert await process_argument_chain(bare_context, [], _WidgetArguments()) is True
        assert bare_context.response.arguments == []


class TestMissingArguments:
    """Tests for suggestion loading on missing required arguments."""

    @pytest.mark.asyncio
    async def test_all_missing_arguments_get_suggestions(
        self, bare_context: CommandContext
    ) -> None:
        async def regions(_context: CommandContext, _args: Any) -> list[ArgumentOption]:
            return _options("eastus", "westus")

        async def sizes(_context: CommandContext, _args: Any) -> list[ArgumentOption]:
            return _options("small", "large")

        chain = [
            _chain("region", required=True, loader=regions),
            _chain("size", required=True, loader=sizes),
        ]

        ready = await process_argument_chain(bare_context, chain, _WidgetArguments())

        assert ready is False
        arguments = bare_context.response.arguments
        assert [o.id for o in argument_named(arguments, "region").values] == ["eastus", "westus"]
        assert [o.id for o in argument_named(arguments, "size").values] == ["small", "large"]
        assert bare_context.response.status == 200
        assert bare_context.response.results is None

    @pytest.mark.asyncio
    async def test_loaders_run_concurrently(self, bare_context: CommandContext) -> None:
        started: list[str] = []
        both_started = asyncio.Event()

        def loader(name: str) -> Any:
            async def load(_context: CommandContext, _args: Any) -> list[ArgumentOption]:
                started.append(name)
                if len(started) == 2:
                    both_started.set()
                await asyncio.wait_for(both_started.wait(), timeout=0.4)
                return _options(name)

            return load

        chain = [
            _chain("region", required=True, loader=loader("region")),
            _chain("size", required=True, loader=loader("size")),
        ]

        await process_argument_chain(bare_context, chain, _WidgetArguments())

        assert argument_named(bare_context.response.arguments, "region").values
        assert argument_named(bare_context.response.arguments, "size").values

    @pytest.mark.asyncio
    async def test_optional_arguments_do_not_load(self, bare_context: CommandContext) -> None:
        async def explode(_context: CommandContext, _args: Any) -> list[ArgumentOption]:
            raise AssertionError("optional loader should not run")

        chain = [_chain("color", loader=explode)]

        assert await process_argument_chain(bare_context, chain, _WidgetArguments()) is True

    @pytest.mark.asyncio
    async def test_failing_loader_is_isolated(self, bare_context: CommandContext) -> None:
        async def broken(_context: CommandContext, _args: Any) -> list[ArgumentOption]:
            raise RuntimeError("upstream unavailable")

        async def sizes(_context: CommandContext, _args: Any) -> list[ArgumentOption]:
            return _options("small")

        chain = [
            _chain("region", required=True, loader=broken),
            _chain("size", required=True, loader=sizes),
        ]

        ready = await process_argument_chain(bare_context, chain, _WidgetArguments())

        assert ready is False
        arguments = bare_context.response.arguments
        assert argument_named(arguments, "region").values is None
        assert [o.id for o in argument_named(arguments, "size").values] == ["small"]

    @pytest.mark.asyncio
    async def test_slow_loader_times_out(self, bare_context: CommandContext) -> None:
        async def slow(_context: CommandContext, _args: Any) -> list[ArgumentOption]:
            await asyncio.sleep(5)
            return _options("never")

        async def sizes(_context: CommandContext, _args: Any) -> list[ArgumentOption]:
            return _options("small")

        chain = [
            _chain("region", required=True, loader=slow),
            _chain("size", required=True, loader=sizes),
        ]

        ready = await process_argument_chain(bare_context, chain, _WidgetArguments())

        assert ready is False
        arguments = bare_context.response.arguments
        assert argument_named(arguments, "region").values is None
        assert argument_named(arguments, "size").values is not None

    @pytest.mark.asyncio
    async def test_loader_reads_bound_arguments(self, bare_context: CommandContext) -> None:
        seen: list[str | None] = []

        async def sizes(_context: CommandContext, args: Any) -> list[ArgumentOption]:
            seen.append(args.region)
            return _options("small")

        chain = [
            _chain("region", required=True),
            _chain("size", required=True, loader=sizes),
        ]

        await process_argument_chain(bare_context, chain, _WidgetArguments(region="eastus"))

        assert seen == ["eastus"]


class _ResourceGroupArguments(SubscriptionArguments):
    resource_group: str | None = None


class _ResourceGroupShowCommand(BaseCommand[_ResourceGroupArguments]):
    name = "show"
    description = "Show a resource group."
    arguments_model = _ResourceGroupArguments

    def argument_chain(self) -> list[ArgumentChain[_ResourceGroupArguments]]:
        return [self.create_resource_group_argument()]

    async def execute_async(
        self, context: CommandContext, args: _ResourceGroupArguments
    ) -> Any:
        return {"resourceGroup": args.resource_group, "subscription": args.subscription_id}


class TestDependentArguments:
    """A loader that depends on another, already bound argument."""

    @pytest.mark.asyncio
    async def test_negotiation_then_execution(self, services: ServiceProvider) -> None:
        command = _ResourceGroupShowCommand()

        first = await execute_command(
            command,
            CommandContext(services),
            params={"subscription_id": "sub-1"},
        )

        assert first.status == 200
        assert first.results is None
        record = argument_named(first.arguments, "resource-group")
        assert [option.name for option in record.values] == ["rg-app", "rg-data"]
        assert record.values[0].id == "/subscriptions/sub-1/resourceGroups/rg-app"

        second = await execute_command(
            command,
            CommandContext(services),
            params={"subscription_id": "sub-1", "resource_group": "rg-app"},
        )

        assert second.status == 200
        assert second.results == {"resourceGroup": "rg-app", "subscription": "sub-1"}
        assert argument_named(second.arguments, "resource-group").values is None

    @pytest.mark.asyncio
    async def test_loader_receives_bound_subscription(self) -> None:
        service = AsyncMock()
        service.list_resource_groups.return_value = [{"id": "rg-id", "name": "rg"}]
        services = ServiceProvider().register(ResourceGroupService, service)

        response = await execute_command(
            _ResourceGroupShowCommand(),
            CommandContext(services),
            params={"subscription_id": "sub-1", "tenant_id": "tenant-1"},
        )

        service.list_resource_groups.assert_awaited_once_with(
            "sub-1", tenant="tenant-1", retry_policy=None
        )
        assert argument_named(response.arguments, "resource-group").values[0].id == "rg-id"
