"""Command base classes: argument chain, binder, and error boundary."""

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from typing import Any, ClassVar, Generic, TypeVar

import click

from cloudmcp import CLI_NAME
from cloudmcp.core.arguments import ArgumentChain, ArgumentDefinitions
from cloudmcp.core.context import CommandContext
from cloudmcp.core.resolution import process_argument_chain
from cloudmcp.errors import AuthenticationError, ServiceRequestError
from cloudmcp.models.argument import ArgumentOption, AuthMethod, sort_arguments
from cloudmcp.models.arguments import (
    BaseArguments,
    RetryPolicyArguments,
    SubscriptionArguments,
)
from cloudmcp.models.response import CommandResponse
from cloudmcp.services.interfaces import ResourceGroupService, SubscriptionService

logger = logging.getLogger(__name__)

TArgs = TypeVar("TArgs", bound=BaseArguments)

_RETRY_FIELDS = {
    "retry_delay": "delay_seconds",
    "retry_max_delay": "max_delay_seconds",
    "retry_max_retries": "max_retries",
    "retry_mode": "mode",
    "retry_network_timeout": "network_timeout_seconds",
}


def bind_retry_policy(params: Mapping[str, Any]) -> RetryPolicyArguments | None:
    """Build a retry policy only when at least one retry flag was given."""
    given = {
        field: params[param]
        for param, field in _RETRY_FIELDS.items()
        if params.get(param) is not None
    }
    if not given:
        return None
    return RetryPolicyArguments(**given)


async def auth_method_options(_context: CommandContext, _args: Any) -> list[ArgumentOption]:
    return [ArgumentOption(id=method.value, name=method.display_name) for method in AuthMethod]


async def subscription_options(context: CommandContext, args: Any) -> list[ArgumentOption]:
    service = context.get_service(SubscriptionService)
    return await service.list_subscriptions(
        tenant=args.tenant_id,
        retry_policy=args.retry_policy,
    )


async def resource_group_options(context: CommandContext, args: Any) -> list[ArgumentOption]:
    if not getattr(args, "subscription_id", None):
        return []
    service = context.get_service(ResourceGroupService)
    groups = await service.list_resource_groups(
        args.subscription_id,
        tenant=args.tenant_id,
        retry_policy=args.retry_policy,
    )
    return [ArgumentOption(id=group["id"], name=group["name"]) for group in groups]


class BaseCommand(ABC, Generic[TArgs]):
    """A leaf operation.

    Subclasses declare ``name``, ``description`` and ``arguments_model``,
    list their own chain entries in :meth:`argument_chain`, and implement
    :meth:`execute_async`. The common entries (auth method, tenant, and the
    subscription when the argument model carries one) are prepended here.
    """

    name: ClassVar[str]
    description: ClassVar[str]
    arguments_model: ClassVar[type[BaseArguments]] = BaseArguments
    hidden: ClassVar[bool] = False
    read_only: ClassVar[bool] = True

    def __init__(self) -> None:
        self.command_path = f"{CLI_NAME} {self.name}"
        self._declared_chain = self.build_chain()
        self._chain = self._render_examples(self._declared_chain)

    # -- chain -------------------------------------------------------------

    def build_chain(self) -> list[ArgumentChain[TArgs]]:
        chain: list[ArgumentChain[TArgs]] = [
            self.create_auth_method_argument(),
            self.create_tenant_argument(),
        ]
        if issubclass(self.arguments_model, SubscriptionArguments):
            chain.append(self.create_subscription_argument())
        chain.extend(self.argument_chain())
        return chain

    def argument_chain(self) -> list[ArgumentChain[TArgs]]:
        """Command-specific chain entries, in display order."""
        return []

    def create_auth_method_argument(self) -> ArgumentChain[TArgs]:
        return (
            ArgumentChain.from_definition(ArgumentDefinitions.AUTH_METHOD)
            .with_value_accessor(lambda args: args.auth_method)
            .with_value_loader(auth_method_options)
        )

    def create_tenant_argument(self) -> ArgumentChain[TArgs]:
        return ArgumentChain.from_definition(ArgumentDefinitions.TENANT_ID).with_value_accessor(
            lambda args: args.tenant_id
        )

    def create_subscription_argument(self) -> ArgumentChain[TArgs]:
        return (
            ArgumentChain.from_definition(ArgumentDefinitions.SUBSCRIPTION_ID)
            .with_value_accessor(lambda args: args.subscription_id)
            .with_value_loader(subscription_options)
        )

    def create_resource_group_argument(self) -> ArgumentChain[TArgs]:
        return (
            ArgumentChain.from_definition(ArgumentDefinitions.RESOURCE_GROUP)
            .with_value_accessor(lambda args: args.resource_group)
            .with_value_loader(resource_group_options)
        )

    def _render_examples(
        self, chain: Sequence[ArgumentChain[TArgs]]
    ) -> list[ArgumentChain[TArgs]]:
        return [
            entry.with_command_example(entry.command_example(self.command_path))
            for entry in chain
        ]

    def set_command_path(self, command_path: str) -> None:
        """Record the space-joined path once the registry knows it."""
        self.command_path = command_path
        self._chain = self._render_examples(self._declared_chain)

    def get_argument_chain(self) -> list[ArgumentChain[TArgs]]:
        return list(self._chain)

    # -- binding -----------------------------------------------------------

    def options(self) -> list[click.Option]:
        options = [entry.to_option() for entry in self._chain]
        options.extend(definition.to_option() for definition in ArgumentDefinitions.RETRY_POLICY)
        return options

    def get_command(self, callback: Any = None, *, add_help_option: bool = True) -> click.Command:
        return click.Command(
            self.name,
            help=self.description,
            params=self.options(),
            callback=callback,
            add_help_option=add_help_option,
        )

    def parse(self, tokens: Sequence[str]) -> dict[str, Any]:
        """Parse CLI-style tokens with this command's own option definitions.

        There is no ``--help`` here: usage text would land on stdout, which
        carries the MCP transport.
        """
        command = self.get_command(add_help_option=False)
        with command.make_context(self.name, list(tokens)) as ctx:
            return dict(ctx.params)

    def bind(self, params: Mapping[str, Any]) -> TArgs:
        fields = self.arguments_model.model_fields
        values = {
            key: value
            for key, value in params.items()
            if key in fields and key != "retry_policy" and value is not None
        }
        args = self.arguments_model(**values)
        args.retry_policy = bind_retry_policy(params)
        return args  # type: ignore[return-value]

    # -- execution ---------------------------------------------------------

    async def execute(
        self,
        context: CommandContext,
        params: Mapping[str, Any],
    ) -> CommandResponse:
        """Bind, resolve, and run; every raise is converted into the response."""
        try:
            args = self.bind(params)
            if not await process_argument_chain(context, self._chain, args):
                return context.response
            context.response.results = await self.execute_async(context, args)
        except Exception as exc:
            self.handle_exception(context.response, exc)
        return context.response

    async def execute_tokens(
        self,
        context: CommandContext,
        tokens: Sequence[str],
    ) -> CommandResponse:
        try:
            params = self.parse(tokens)
        except click.ClickException as exc:
            self.handle_exception(context.response, exc)
            return context.response
        return await self.execute(context, params)

    @abstractmethod
    async def execute_async(self, context: CommandContext, args: TArgs) -> Any:
        """Perform the operation; the return value becomes ``results``."""

    # -- errors ------------------------------------------------------------

    def handle_exception(self, response: CommandResponse, exc: Exception) -> None:
        status = self.get_status_code(exc)
        if status >= 500:
            logger.exception("Error executing %s", self.command_path)
        else:
            logger.info("%s failed with status %s: %s", self.command_path, status, exc)
        if response.arguments is None:
            response.arguments = []
        response.status = status
        response.message = self.get_error_message(exc)
        response.results = None
        sort_arguments(response.arguments)

    def get_error_message(self, exc: Exception) -> str:
        if isinstance(exc, AuthenticationError):
            return f"Authentication failed. Please sign in and retry. Details: {exc}"
        if isinstance(exc, click.ClickException):
            return exc.format_message()
        if isinstance(exc, (TimeoutError, ConnectionError)):
            return f"Service unavailable or network connectivity issues. Details: {exc}"
        return str(exc)

    def get_status_code(self, exc: Exception) -> int:
        if isinstance(exc, ServiceRequestError):
            return exc.status
        if isinstance(exc, AuthenticationError):
            return 401
        if isinstance(exc, click.ClickException):
            return 400
        if isinstance(exc, (TimeoutError, ConnectionError)):
            return 503
        return 500


class BaseCommandWithoutArgs(BaseCommand[BaseArguments]):
    """A command with an empty chain and no common flags."""

    def build_chain(self) -> list[ArgumentChain[BaseArguments]]:
        return []

    def options(self) -> list[click.Option]:
        return []

    def bind(self, params: Mapping[str, Any]) -> BaseArguments:
        return BaseArguments()


async def execute_command(
    command: BaseCommand[Any],
    context: CommandContext,
    *,
    params: Mapping[str, Any] | None = None,
    tokens: Sequence[str] | None = None,
) -> CommandResponse:
    """Run one invocation and stamp its duration on the response."""
    started = time.perf_counter()
    if tokens is not None:
        response = await command.execute_tokens(context, tokens)
    else:
        response = await command.execute(context, params or {})
    response.duration_ms = int((time.perf_counter() - started) * 1000)
    return response
