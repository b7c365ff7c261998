"""Argument reporting models shared by the CLI and MCP surfaces."""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel


class AuthMethod(StrEnum):
    """Authentication method forwarded to service collaborators."""

    CREDENTIAL = "credential"
    KEY = "key"
    CONNECTION_STRING = "connectionString"

    @property
    def display_name(self) -> str:
        if self is AuthMethod.CONNECTION_STRING:
            return "Connection String"
        return self.value.capitalize()

    @classmethod
    def default(cls) -> AuthMethod:
        return cls.CREDENTIAL


class RetryMode(StrEnum):
    """Retry strategy forwarded to service collaborators."""

    EXPONENTIAL = "exponential"
    FIXED = "fixed"


class ArgumentOption(BaseModel):
    """A legal value for an argument together with its display label."""

    id: str
    name: str


class ArgumentInfo(BaseModel):
    """Observability record for one argument of one invocation."""

    name: str
    description: str
    value: str = ""
    command: str = ""
    default: str | None = None
    values: list[ArgumentOption] | None = None
    required: bool = False

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "name": self.name,
            "description": self.description,
            "value": self.value,
            "command": self.command,
        }
        if self.default is not None:
            payload["default"] = self.default
        if self.values:
            payload["values"] = [option.model_dump() for option in self.values]
        if self.required:
            payload["required"] = True
        return payload


def sort_arguments(arguments: list[ArgumentInfo]) -> None:
    """Sort in place: required arguments first, then by name."""
    arguments.sort(key=lambda info: (not info.required, info.name))
