"""Argument descriptors and resolvable argument chain entries."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field, replace
from typing import Any, Generic, TypeVar

import click

from cloudmcp.models.argument import ArgumentOption, AuthMethod, RetryMode

TArgs = TypeVar("TArgs")

ValueAccessor = Callable[[TArgs], Any]
ValueLoader = Callable[[Any, TArgs], Awaitable[list[ArgumentOption]]]

_CLICK_TYPES: dict[str, click.ParamType] = {
    "string": click.STRING,
    "integer": click.INT,
    "number": click.FLOAT,
    "boolean": click.BOOL,
}


def is_empty(value: Any) -> bool:
    return value is None or str(value) == ""


@dataclass(frozen=True)
class ArgumentDefinition:
    """Immutable declaration of one input.

    ``name`` doubles as the CLI flag (``--name``) and the tool-call
    parameter key, so it must be unique within one command.
    """

    name: str
    description: str
    required: bool = False
    default_value: Any = None
    value_type: str = "string"
    choices: tuple[str, ...] | None = None

    @property
    def attribute(self) -> str:
        """Field name on the bound argument object."""
        return self.name.replace("-", "_")

    def click_type(self) -> click.ParamType:
        if self.choices:
            return click.Choice(list(self.choices), case_sensitive=False)
        return _CLICK_TYPES[self.value_type]

    def to_option(self) -> click.Option:
        # Defaults are applied by the resolution engine, not by click, so an
        # unset flag stays distinguishable from an explicit value.
        return click.Option(
            [f"--{self.name}", self.attribute],
            type=self.click_type(),
            default=None,
            help=self.description,
        )

    def command_example(self, command_path: str) -> str:
        return f"{command_path} --{self.name} <{self.name}>"


@dataclass(frozen=True)
class ArgumentChain(ArgumentDefinition, Generic[TArgs]):
    """An argument descriptor bound to one command's argument type.

    The accessor reads the current value off the bound arguments; the
    optional loader suggests legal values given the partially bound
    arguments. Builder methods return new instances.
    """

    value_accessor: ValueAccessor[TArgs] = field(default=lambda _args: "")
    value_loader: ValueLoader[TArgs] | None = None
    command: str = ""

    @classmethod
    def create(cls, name: str, description: str) -> ArgumentChain[TArgs]:
        return cls(name=name, description=description)

    @classmethod
    def from_definition(cls, definition: ArgumentDefinition) -> ArgumentChain[TArgs]:
        return cls(
            name=definition.name,
            description=definition.description,
            required=definition.required,
            default_value=definition.default_value,
            value_type=definition.value_type,
            choices=definition.choices,
        )

    def with_command_example(self, command: str) -> ArgumentChain[TArgs]:
        return replace(self, command=command)

    def with_is_required(self, required: bool) -> ArgumentChain[TArgs]:
        return replace(self, required=required)

    def with_value_accessor(self, accessor: ValueAccessor[TArgs]) -> ArgumentChain[TArgs]:
        return replace(self, value_accessor=accessor)

    def with_value_loader(self, loader: ValueLoader[TArgs]) -> ArgumentChain[TArgs]:
        return replace(self, value_loader=loader)

    def with_default_value(self, default_value: Any) -> ArgumentChain[TArgs]:
        return replace(self, default_value=default_value)

    @property
    def has_default(self) -> bool:
        return not is_empty(self.default_value)

    @property
    def default_text(self) -> str | None:
        return str(self.default_value) if self.has_default else None

    def read(self, args: TArgs) -> str:
        value = self.value_accessor(args)
        return "" if is_empty(value) else str(value)


class ArgumentDefinitions:
    """Catalog of argument declarations shared across commands."""

    # Common
    TENANT_ID = ArgumentDefinition(
        "tenant-id",
        "The tenant ID. This is the unique identifier of your directory tenant.",
    )
    SUBSCRIPTION_ID = ArgumentDefinition(
        "subscription-id",
        "The subscription ID. This is the GUID identifier for the subscription to use.",
        required=True,
    )
    AUTH_METHOD = ArgumentDefinition(
        "auth-method",
        "Authentication method to use. Options: 'credential' (CLI/managed identity), "
        "'key' (access key), or 'connectionString'.",
        default_value=AuthMethod.default().value,
        choices=tuple(method.value for method in AuthMethod),
    )
    RESOURCE_GROUP = ArgumentDefinition(
        "resource-group",
        "The name of the resource group. This is a logical container for resources.",
        required=True,
    )

    # Retry policy
    RETRY_DELAY = ArgumentDefinition(
        "retry-delay",
        "Initial delay in seconds between retry attempts. For exponential backoff, "
        "this value is used as the base.",
        default_value=2.0,
        value_type="number",
    )
    RETRY_MAX_DELAY = ArgumentDefinition(
        "retry-max-delay",
        "Maximum delay in seconds between retries, regardless of the retry strategy.",
        default_value=10.0,
        value_type="number",
    )
    RETRY_MAX_RETRIES = ArgumentDefinition(
        "retry-max-retries",
        "Maximum number of retry attempts for failed operations before giving up.",
        default_value=3,
        value_type="integer",
    )
    RETRY_MODE = ArgumentDefinition(
        "retry-mode",
        "Retry strategy to use. 'fixed' uses consistent delays, 'exponential' "
        "increases delay between attempts.",
        default_value=RetryMode.EXPONENTIAL.value,
        choices=tuple(mode.value for mode in RetryMode),
    )
    RETRY_NETWORK_TIMEOUT = ArgumentDefinition(
        "retry-network-timeout",
        "Network operation timeout in seconds. Operations taking longer than this "
        "will be cancelled.",
        default_value=100.0,
        value_type="number",
    )
    RETRY_POLICY = (
        RETRY_DELAY,
        RETRY_MAX_DELAY,
        RETRY_MAX_RETRIES,
        RETRY_MODE,
        RETRY_NETWORK_TIMEOUT,
    )

    # Storage
    STORAGE_ACCOUNT = ArgumentDefinition(
        "account-name",
        "The name of the Storage account (e.g., 'mystorageaccount').",
        required=True,
    )
    STORAGE_CONTAINER = ArgumentDefinition(
        "container-name",
        "The name of the container to access within the storage account.",
        required=True,
    )

    # Cosmos
    COSMOS_ACCOUNT = ArgumentDefinition(
        "account-name",
        "The name of the Cosmos DB account to query (e.g., my-cosmos-account).",
        required=True,
    )
    COSMOS_DATABASE = ArgumentDefinition(
        "database-name",
        "The name of the database to query (e.g., my-database).",
        required=True,
    )
    COSMOS_CONTAINER = ArgumentDefinition(
        "container-name",
        "The name of the container to query (e.g., my-container).",
        required=True,
    )
    COSMOS_QUERY = ArgumentDefinition(
        "query",
        "SQL query to execute against the container. Uses Cosmos DB SQL syntax.",
        default_value="SELECT * FROM c",
    )

    # Monitor
    WORKSPACE_NAME = ArgumentDefinition(
        "workspace-name",
        "The name of the Log Analytics workspace to query.",
        required=True,
    )
    TABLE_TYPE = ArgumentDefinition(
        "table-type",
        "The type of table to query. Options: 'CustomLog', 'AzureMetrics', etc.",
        required=True,
        default_value="CustomLog",
    )
    TABLE_NAME = ArgumentDefinition(
        "table-name",
        "The name of the table to query.",
        required=True,
    )
    LOG_QUERY = ArgumentDefinition(
        "query",
        "The KQL query to execute against the Log Analytics workspace.",
        required=True,
    )
    HOURS = ArgumentDefinition(
        "hours",
        "The number of hours to query back from now.",
        required=True,
        default_value=24,
        value_type="integer",
    )
    LIMIT = ArgumentDefinition(
        "limit",
        "The maximum number of results to return.",
        required=True,
        default_value=20,
        value_type="integer",
    )

    # App Configuration
    APPCONFIG_ACCOUNT = ArgumentDefinition(
        "account-name",
        "The name of the App Configuration store (e.g., my-appconfig).",
        required=True,
    )
    KEY = ArgumentDefinition(
        "key",
        "The name of the key to access within the App Configuration store.",
        required=True,
    )
    LABEL = ArgumentDefinition(
        "label",
        "The label to apply to the key-value. Leave empty for the null label.",
    )
    VALUE = ArgumentDefinition(
        "value",
        "The value to set for the configuration key.",
        required=True,
    )
