from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any

from diregistry._internal.circular_deps import CircularDeps
from diregistry._internal.errors import is_circular_error, unwrap_foreign_cycle
from diregistry.exceptions import (
    DIRegistryAlreadyRegisteredError,
    DIRegistryCircularDependencyError,
    DIRegistryError,
    DIRegistryFatalError,
    DIRegistryServiceCreationError,
    DIRegistryServiceDecorationError,
    DIRegistryServiceNotFoundError,
)
from diregistry.types import Decorator, Scope, ServiceDefinition

logger = logging.getLogger(__name__)

_SERVICE_DOES_NOT_EXIST = "cannot {action} service `{service_id}`, because it does not exist"
_SERVICE_ERRORS = (DIRegistryServiceCreationError, DIRegistryServiceDecorationError)


@dataclass
class _ServiceEntry:
    definition: ServiceDefinition
    service: Any = None
    created: bool = False


class Container:
    """Build services from definitions and cache them according to their scope.

    Providers are zero-argument callables. A provider usually closes over the
    container and asks it for its own dependencies, so ``get`` is reentrant:
    the container tracks the chain of services under construction and raises
    ``DIRegistryCircularDependencyError`` when a service is requested while it
    is still being built. A cycle is reported once, prefixed with the service
    that started the outermost ``get``, even when the chain passes through
    another container.

    Every new instance is passed through the registered decorators, in
    registration order, before it is cached.

    The container holds no lock. Share it between threads through
    ``AtomicContainer``.

    Examples:
        .. code-block:: python

            container = Container()
            container.register(
                "db",
                ServiceDefinition(lambda: Database(dsn="sqlite://")),
            )
            container.register(
                "users",
                ServiceDefinition(
                    lambda: UserRepository(container.get("db")),
                    scope=Scope.NON_SHARED,
                ),
            )
            users = container.get("users")

    """

    def __init__(self, definitions: Mapping[str, ServiceDefinition] | None = None) -> None:
        self._services: dict[str, _ServiceEntry] = {
            service_id: _ServiceEntry(definition)
            for service_id, definition in (definitions or {}).items()
        }
        self._circular_deps = CircularDeps()
        self._decorators: list[Decorator] = []
        # Alive only while a top-level ``get`` is running.
        self._nested_shared: dict[str, Any] | None = None

    def register(self, service_id: str, definition: ServiceDefinition) -> None:
        """Register a new service.

        Raises:
            DIRegistryAlreadyRegisteredError: If ``service_id`` is already registered.

        """
        if self.has(service_id):
            msg = f"service `{service_id}` is already registered"
            raise DIRegistryAlreadyRegisteredError(msg)

        self._services[service_id] = _ServiceEntry(definition)
        logger.debug("Registered service %r with scope %s", service_id, definition.scope.value)

    def override(self, service_id: str, definition: ServiceDefinition) -> None:
        """Register a service or replace an existing one, dropping any cached instance."""
        self._services[service_id] = _ServiceEntry(definition)
        logger.debug("Overrode service %r with scope %s", service_id, definition.scope.value)

    def get(self, service_id: str) -> Any:
        """Return the service, building it when the scope requires it.

        Raises:
            DIRegistryCircularDependencyError: If the service is already under
                construction on the current call chain.
            DIRegistryServiceNotFoundError: If the service is not registered.
            DIRegistryServiceCreationError: If the provider raised.
            DIRegistryServiceDecorationError: If a decorator raised.

        """
        with self._circular_deps.track(service_id) as cycle:
            if cycle is not None:
                logger.debug("Circular dependency detected: %s", " -> ".join(cycle))
                raise DIRegistryCircularDependencyError(cycle)

            if self._nested_shared is not None and service_id in self._nested_shared:
                return self._nested_shared[service_id]

            entry = self._services.get(service_id)
            if entry is None:
                msg = f"service `{service_id}` does not exist"
                raise DIRegistryServiceNotFoundError(msg)

            if entry.created:
                return entry.service

            with self._nested_shared_cache():
                return self._create(service_id, entry)

    def must_get(self, service_id: str) -> Any:
        """Return the service or raise ``DIRegistryFatalError``."""
        try:
            return self.get(service_id)
        except DIRegistryError as exc:
            raise DIRegistryFatalError(exc) from exc

    def has(self, service_id: str) -> bool:
        return service_id in self._services

    def get_all_service_ids(self) -> list[str]:
        return sorted(self._services)

    def revoke(self, service_id: str) -> None:
        """Drop the cached instance of a service and keep its definition.

        Raises:
            DIRegistryServiceNotFoundError: If the service is not registered.

        """
        entry = self._services.get(service_id)
        if entry is None:
            raise DIRegistryServiceNotFoundError(
                _SERVICE_DOES_NOT_EXIST.format(action="revoke", service_id=service_id),
            )

        entry.service = None
        entry.created = False
        logger.debug("Revoked service %r", service_id)

    def must_revoke(self, service_id: str) -> None:
        try:
            self.revoke(service_id)
        except DIRegistryError as exc:
            raise DIRegistryFatalError(exc) from exc

    def remove(self, service_id: str) -> None:
        """Remove a service completely.

        Raises:
            DIRegistryServiceNotFoundError: If the service is not registered.

        """
        if not self.has(service_id):
            raise DIRegistryServiceNotFoundError(
                _SERVICE_DOES_NOT_EXIST.format(action="remove", service_id=service_id),
            )

        del self._services[service_id]
        logger.debug("Removed service %r", service_id)

    def must_remove(self, service_id: str) -> None:
        try:
            self.remove(service_id)
        except DIRegistryError as exc:
            raise DIRegistryFatalError(exc) from exc

    def register_decorator(self, decorator: Decorator) -> None:
        """Append a decorator applied to every service built from now on."""
        self._decorators.append(decorator)

    @contextmanager
    def _nested_shared_cache(self) -> Iterator[None]:
        if self._circular_deps.depth != 1:
            yield
            return

        self._nested_shared = {}
        try:
            yield
        finally:
            self._nested_shared = None

    def _create(self, service_id: str, entry: _ServiceEntry) -> Any:
        definition = entry.definition

        try:
            service = definition.provider()
        except Exception as exc:
            cause = unwrap_foreign_cycle(exc, _SERVICE_ERRORS)
            if self._is_nested_cycle(cause):
                raise cause from None
            raise DIRegistryServiceCreationError(service_id, cause) from exc

        try:
            service = self._decorate(service_id, service)
        except Exception as exc:
            cause = unwrap_foreign_cycle(exc, _SERVICE_ERRORS)
            if self._is_nested_cycle(cause):
                raise cause from None
            raise DIRegistryServiceDecorationError(service_id, cause) from exc

        if definition.scope is Scope.SHARED:
            entry.service = service
            entry.created = True
        elif definition.scope is Scope.NESTED_SHARED and self._nested_shared is not None:
            self._nested_shared[service_id] = service

        return service

    def _decorate(self, service_id: str, service: Any) -> Any:
        for decorator in self._decorators:
            service = decorator(service_id, service)
        return service

    def _is_nested_cycle(self, error: Exception) -> bool:
        # Only the outermost frame adds context to a cycle.
        return is_circular_error(error) and self._circular_deps.depth > 1
