from __future__ import annotations

import logging
from typing import Any, Protocol

from diregistry.exceptions import (
    DIRegistryAlreadyTaggedError,
    DIRegistryError,
    DIRegistryFatalError,
    DIRegistryTagResolutionError,
)

logger = logging.getLogger(__name__)


class ServiceGetter(Protocol):
    def get(self, service_id: str) -> Any: ...


class TaggedContainer:
    """Group services by tag and resolve a whole group at once.

    Services of a tag are returned by descending priority; services sharing a
    priority keep the order in which they were tagged. The tagged container
    only stores the index, services are resolved through ``container``.

    Examples:
        .. code-block:: python

            tagged = TaggedContainer(container)
            tagged.tag_service("console_handler", "log_handlers", 100)
            tagged.tag_service("file_handler", "log_handlers", 10)
            handlers = tagged.get_by_tag("log_handlers")

    """

    def __init__(self, container: ServiceGetter) -> None:
        self._container = container
        # mapping[tag][service_id] = priority, in tagging order
        self._mapping: dict[str, dict[str, int]] = {}

    def tag_service(self, service_id: str, tag: str, priority: int) -> None:
        """Add a service to a tag.

        Raises:
            DIRegistryAlreadyTaggedError: If the service is already tagged by ``tag``.

        """
        if self.is_tagged_by(service_id, tag):
            msg = f"service `{service_id}` is already tagged as `{tag}`"
            raise DIRegistryAlreadyTaggedError(msg)

        self._mapping.setdefault(tag, {})[service_id] = priority
        logger.debug("Tagged service %r as %r with priority %d", service_id, tag, priority)

    def override_tag_service(self, service_id: str, tag: str, priority: int) -> None:
        self._mapping.setdefault(tag, {})[service_id] = priority

    def is_tagged_by(self, service_id: str, tag: str) -> bool:
        return service_id in self._mapping.get(tag, {})

    def get_service_ids_by_tag(self, tag: str) -> list[str]:
        tag_mapping = self._mapping.get(tag, {})
        # sorted() is stable, equal priorities keep the tagging order.
        return sorted(tag_mapping, key=lambda service_id: tag_mapping[service_id], reverse=True)

    def get_by_tag(self, tag: str) -> list[Any]:
        """Resolve every service tagged by ``tag``.

        An unknown tag gives an empty list.

        Raises:
            DIRegistryTagResolutionError: If any service of the tag cannot be
                resolved. No partial result is returned.

        """
        services: list[Any] = []
        for service_id in self.get_service_ids_by_tag(tag):
            try:
                services.append(self._container.get(service_id))
            except Exception as exc:
                raise DIRegistryTagResolutionError(tag, exc) from exc
        return services

    def must_get_by_tag(self, tag: str) -> list[Any]:
        try:
            return self.get_by_tag(tag)
        except DIRegistryError as exc:
            raise DIRegistryFatalError(exc) from exc
