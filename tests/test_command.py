"""Tests for the command base class: binding and the error boundary."""

from __future__ import annotations

from typing import Any

import click
import pytest

from cloudmcp.core.arguments import ArgumentChain, ArgumentDefinitions
from cloudmcp.core.command import BaseCommand, bind_retry_policy, execute_command
from cloudmcp.core.context import CommandContext, ServiceProvider
from cloudmcp.errors import AuthenticationError, ServiceRequestError
from cloudmcp.models.argument import RetryMode
from cloudmcp.models.arguments import LogQueryArguments, SubscriptionArguments


class _RaisingCommand(BaseCommand[SubscriptionArguments]):
    name = "fail"
    description = "Raises whatever it was given."
    arguments_model = SubscriptionArguments

    def __init__(self, exc: Exception) -> None:
        super().__init__()
        self.exc = exc

    async def execute_async(self, context: CommandContext, args: SubscriptionArguments) -> Any:
        raise self.exc


class _EchoCommand(BaseCommand[LogQueryArguments]):
    name = "echo"
    description = "Returns its bound arguments."
    arguments_model = LogQueryArguments

    def argument_chain(self) -> list[ArgumentChain[LogQueryArguments]]:
        return [
            ArgumentChain.from_definition(ArgumentDefinitions.LOG_QUERY).with_value_accessor(
                lambda args: args.query
            ),
            ArgumentChain.from_definition(ArgumentDefinitions.HOURS).with_value_accessor(
                lambda args: args.hours
            ),
        ]

    async def execute_async(self, context: CommandContext, args: LogQueryArguments) -> Any:
        return {
            "query": args.query,
            "hours": args.hours,
            "retry": args.retry_policy.model_dump(mode="json") if args.retry_policy else None,
        }


@pytest.fixture
def empty_context() -> CommandContext:
    return CommandContext(ServiceProvider())


class TestStatusMapping:
    """Exceptions raised by execute_async become response fields."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("exc", "status"),
        [
            (ServiceRequestError(404, "Storage account 'x' not found"), 404),
            (ServiceRequestError(429, "Too many requests"), 429),
            (AuthenticationError("no credential"), 401),
            (TimeoutError("slow"), 503),
            (ConnectionError("refused"), 503),
            (RuntimeError("boom"), 500),
        ],
    )
    async def test_status_codes(
        self, empty_context: CommandContext, exc: Exception, status: int
    ) -> None:
        response = await execute_command(
            _RaisingCommand(exc), empty_context, params={"subscription_id": "sub-1"}
        )

        assert response.status == status
        assert response.results is None

    @pytest.mark.asyncio
    async def test_service_message_passes_through(self, empty_context: CommandContext) -> None:
        response = await execute_command(
            _RaisingCommand(ServiceRequestError(404, "Storage account 'x' not found")),
            empty_context,
            params={"subscription_id": "sub-1"},
        )

        assert response.message == "Storage account 'x' not found"

    @pytest.mark.asyncio
    async def test_authentication_message_has_hint(self, empty_context: CommandContext) -> None:
        response = await execute_command(
            _RaisingCommand(AuthenticationError("no credential")),
            empty_context,
            params={"subscription_id": "sub-1"},
        )

        assert response.message.startswith("Authentication failed.")
        assert "no credential" in response.message

    @pytest.mark.asyncio
    async def test_bad_flag_value_is_a_caller_error(self, empty_context: CommandContext) -> None:
        response = await execute_command(
            _EchoCommand(),
            empty_context,
            tokens=["--query", "x", "--hours", "soon"],
        )

        assert response.status == 400
        assert "soon" in response.message

    @pytest.mark.asyncio
    async def test_unknown_flag_is_a_caller_error(self, empty_context: CommandContext) -> None:
        response = await execute_command(_EchoCommand(), empty_context, tokens=["--nope", "x"])

        assert response.status == 400

    @pytest.mark.asyncio
    async def test_duration_is_stamped(self, empty_context: CommandContext) -> None:
        response = await execute_command(
            _RaisingCommand(RuntimeError("boom")),
            empty_context,
            params={"subscription_id": "sub-1"},
        )

        assert response.duration_ms >= 0
        assert "durationMs" in response.to_payload()


class TestBinding:
    """Tests for parsing tokens and binding typed arguments."""

    def test_parse_uses_command_options(self) -> None:
        params = _EchoCommand().parse(["--query", "Heartbeat | take 5", "--hours", "3"])

        assert params["query"] == "Heartbeat | take 5"
        assert params["hours"] == 3
        assert params["subscription_id"] is None

    def test_parse_has_no_help_option(self) -> None:
        with pytest.raises(click.NoSuchOption):
            _EchoCommand().parse(["--help"])

    def test_auth_method_choice_is_case_insensitive(self) -> None:
        params = _EchoCommand().parse(["--auth-method", "KEY"])

        assert params["auth_method"] == "key"

    def test_chain_starts_with_common_arguments(self) -> None:
        names = [entry.name for entry in _EchoCommand().get_argument_chain()]

        assert names == ["auth-method", "tenant-id", "subscription-id", "query", "hours"]

    def test_options_include_retry_flags(self) -> None:
        flags = {option.opts[0] for option in _EchoCommand().options()}

        assert {"--retry-delay", "--retry-mode", "--retry-network-timeout"} <= flags

    def test_retry_policy_absent_without_flags(self) -> None:
        assert bind_retry_policy({"retry_delay": None}) is None

    def test_retry_policy_bound_from_any_flag(self) -> None:
        policy = bind_retry_policy({"retry_max_retries": 7, "retry_mode": "fixed"})

        assert policy is not None
        assert policy.max_retries == 7
        assert policy.mode is RetryMode.FIXED
        assert policy.delay_seconds == 2.0

    @pytest.mark.asyncio
    async def test_defaults_reach_execute(self, empty_context: CommandContext) -> None:
        response = await execute_command(
            _EchoCommand(),
            empty_context,
            tokens=["--subscription-id", "sub-1", "--query", "x", "--retry-delay", "0.5"],
        )

        assert response.status == 200
        assert response.results["hours"] == 24
        assert response.results["retry"]["delay_seconds"] == 0.5
