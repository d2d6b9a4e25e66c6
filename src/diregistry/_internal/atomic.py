from __future__ import annotations

import threading
from typing import Any, Protocol

from diregistry.types import Decorator, ParamDefinition, ServiceDefinition


class ServiceContainerProtocol(Protocol):
    def get(self, service_id: str) -> Any: ...

    def must_get(self, service_id: str) -> Any: ...

    def register(self, service_id: str, definition: ServiceDefinition) -> None: ...

    def override(self, service_id: str, definition: ServiceDefinition) -> None: ...

    def has(self, service_id: str) -> bool: ...

    def get_all_service_ids(self) -> list[str]: ...

    def register_decorator(self, decorator: Decorator) -> None: ...

    def revoke(self, service_id: str) -> None: ...

    def must_revoke(self, service_id: str) -> None: ...

    def remove(self, service_id: str) -> None: ...

    def must_remove(self, service_id: str) -> None: ...


class ParamContainerProtocol(Protocol):
    def get_param(self, param_id: str) -> Any: ...

    def must_get_param(self, param_id: str) -> Any: ...

    def register_param(self, param_id: str, definition: ParamDefinition) -> None: ...

    def override_param(self, param_id: str, definition: ParamDefinition) -> None: ...

    def has_param(self, param_id: str) -> bool: ...

    def get_all_param_ids(self) -> list[str]: ...


class TaggedContainerProtocol(Protocol):
    def get_by_tag(self, tag: str) -> list[Any]: ...

    def must_get_by_tag(self, tag: str) -> list[Any]: ...

    def tag_service(self, service_id: str, tag: str, priority: int) -> None: ...

    def override_tag_service(self, service_id: str, tag: str, priority: int) -> None: ...

    def is_tagged_by(self, service_id: str, tag: str) -> bool: ...

    def get_service_ids_by_tag(self, tag: str) -> list[str]: ...


class AtomicContainer:
    """Serialize every call to a service container behind one lock.

    The lock is not reentrant. A provider that calls back into the same
    ``AtomicContainer`` while it is being built blocks forever. Providers
    must look their dependencies up in the wrapped container instead:

    .. code-block:: python

        inner = Container()
        container = AtomicContainer(inner)
        inner.register("db", ServiceDefinition(Database))
        inner.register("users", ServiceDefinition(lambda: Users(inner.get("db"))))
        container.get("users")

    """

    def __init__(self, container: ServiceContainerProtocol) -> None:
        self._container = container
        self._lock = threading.Lock()

    def get(self, service_id: str) -> Any:
        with self._lock:
            return self._container.get(service_id)

    def must_get(self, service_id: str) -> Any:
        with self._lock:
            return self._container.must_get(service_id)

    def register(self, service_id: str, definition: ServiceDefinition) -> None:
        with self._lock:
            self._container.register(service_id, definition)

    def override(self, service_id: str, definition: ServiceDefinition) -> None:
        with self._lock:
            self._container.override(service_id, definition)

    def has(self, service_id: str) -> bool:
        with self._lock:
            return self._container.has(service_id)

    def get_all_service_ids(self) -> list[str]:
        with self._lock:
            return self._container.get_all_service_ids()

    def register_decorator(self, decorator: Decorator) -> None:
        with self._lock:
            self._container.register_decorator(decorator)

    def revoke(self, service_id: str) -> None:
        with self._lock:
            self._container.revoke(service_id)

    def must_revoke(self, service_id: str) -> None:
        with self._lock:
            self._container.must_revoke(service_id)

    def remove(self, service_id: str) -> None:
        with self._lock:
            self._container.remove(service_id)

    def must_remove(self, service_id: str) -> None:
        with self._lock:
            self._container.must_remove(service_id)


class AtomicParamContainer:
    """Serialize every call to a parameter container behind one lock.

    Same hazard as ``AtomicContainer``: providers must not call back into the
    wrapper.
    """

    def __init__(self, container: ParamContainerProtocol) -> None:
        self._container = container
        self._lock = threading.Lock()

    def get_param(self, param_id: str) -> Any:
        with self._lock:
            return self._container.get_param(param_id)

    def must_get_param(self, param_id: str) -> Any:
        with self._lock:
            return self._container.must_get_param(param_id)

    def register_param(self, param_id: str, definition: ParamDefinition) -> None:
        with self._lock:
            self._container.register_param(param_id, definition)

    def override_param(self, param_id: str, definition: ParamDefinition) -> None:
        with self._lock:
            self._container.override_param(param_id, definition)

    def has_param(self, param_id: str) -> bool:
        with self._lock:
            return self._container.has_param(param_id)

    def get_all_param_ids(self) -> list[str]:
        with self._lock:
            return self._container.get_all_param_ids()


class AtomicTaggedContainer:
    """Serialize every call to a tagged container behind one lock."""

    def __init__(self, container: TaggedContainerProtocol) -> None:
        self._container = container
        self._lock = threading.Lock()

    def get_by_tag(self, tag: str) -> list[Any]:
        with self._lock:
            return self._container.get_by_tag(tag)

    def must_get_by_tag(self, tag: str) -> list[Any]:
        with self._lock:
            return self._container.must_get_by_tag(tag)

    def tag_service(self, service_id: str, tag: str, priority: int) -> None:
        with self._lock:
            self._container.tag_service(service_id, tag, priority)

    def override_tag_service(self, service_id: str, tag: str, priority: int) -> None:
        with self._lock:
            self._container.override_tag_service(service_id, tag, priority)

    def is_tagged_by(self, service_id: str, tag: str) -> bool:
        with self._lock:
            return self._container.is_tagged_by(service_id, tag)

    def get_service_ids_by_tag(self, tag: str) -> list[str]:
        with self._lock:
            return self._container.get_service_ids_by_tag(tag)
