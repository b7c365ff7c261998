"""Exception hierarchy for CloudMCP."""

from __future__ import annotations


class CloudMCPError(Exception):
    """Base class for all CloudMCP errors."""


class SubgroupNotFoundError(CloudMCPError):
    """Raised when a command path names a group that was never registered."""

    def __init__(self, group_name: str, path: str) -> None:
        super().__init__(
            f"Subgroup '{group_name}' not found while resolving '{path}'. "
            "Groups must be registered before commands."
        )
        self.group_name = group_name
        self.path = path


class DuplicateCommandError(CloudMCPError):
    """Raised when two commands claim the same name."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Command '{name}' is already registered")
        self.name = name


class CommandRegistrationError(CloudMCPError):
    """Raised once at build time with every invalid registration."""

    def __init__(self, problems: list[str]) -> None:
        joined = "\n  - ".join(problems)
        super().__init__(f"Command registry is invalid:\n  - {joined}")
        self.problems = list(problems)


class CommandNotFoundError(CloudMCPError):
    """Raised when a command path does not resolve to a command."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Command not found: {path}")
        self.path = path


class ServiceNotRegisteredError(CloudMCPError):
    """Raised when a command asks for a collaborator nobody registered."""

    def __init__(self, service_type: type) -> None:
        super().__init__(f"No service registered for {service_type.__name__}")
        self.service_type = service_type


class ServiceRequestError(CloudMCPError):
    """Raised by service collaborators; carries the upstream status code."""

    def __init__(self, status: int, message: str) -> None:
        super().__init__(message)
        self.status = status
        self.message = message


class AuthenticationError(CloudMCPError):
    """Raised when a collaborator cannot obtain credentials."""
