"""Per-call context and the lifecycle-scoped service provider."""

from __future__ import annotations

from typing import Any, TypeVar

from cloudmcp.errors import ServiceNotRegisteredError
from cloudmcp.models.response import CommandResponse

T = TypeVar("T")

DEFAULT_LOADER_TIMEOUT_SECONDS = 10.0


class ServiceProvider:
    """Maps collaborator interfaces to the instances that implement them.

    Built once per process and shared read-only by every call.
    """

    def __init__(self) -> None:
        self._services: dict[type, Any] = {}

    def register(self, service_type: type[T], instance: T) -> ServiceProvider:
        self._services[service_type] = instance
        return self

    def get(self, service_type: type[T]) -> T:
        try:
            return self._services[service_type]  # type: ignore[no-any-return]
        except KeyError:
            raise ServiceNotRegisteredError(service_type) from None

    def __contains__(self, service_type: object) -> bool:
        return service_type in self._services


class CommandContext:
    """Handle through which a command or loader reaches collaborators.

    Owns the response being built for exactly one call.
    """

    def __init__(
        self,
        services: ServiceProvider,
        *,
        loader_timeout: float | None = DEFAULT_LOADER_TIMEOUT_SECONDS,
    ) -> None:
        self.services = services
        self.loader_timeout = loader_timeout
        self.response = CommandResponse()

    def get_service(self, service_type: type[T]) -> T:
        return self.services.get(service_type)
