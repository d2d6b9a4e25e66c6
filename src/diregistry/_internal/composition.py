from __future__ import annotations

import inspect
from collections import Counter
from typing import Any

from typing_extensions import Self

from diregistry._internal.atomic import (
    AtomicContainer,
    AtomicParamContainer,
    AtomicTaggedContainer,
)
from diregistry._internal.container import Container
from diregistry._internal.param_container import ParamContainer
from diregistry._internal.tagged_container import TaggedContainer
from diregistry.exceptions import DIRegistryAmbiguousCompositionError


def public_method_names(component: object) -> list[str]:
    """Return the sorted names of the public methods a component exposes."""
    component_type = component if inspect.isclass(component) else type(component)
    return sorted(
        name
        for name, _member in inspect.getmembers(component_type, inspect.isfunction)
        if not name.startswith("_")
    )


def find_ambiguous_methods(*components: object) -> list[str]:
    """Return the method names exposed by more than one component."""
    counter = Counter(name for component in components for name in public_method_names(component))
    return sorted(name for name, count in counter.items() if count > 1)


class ComposedContainer:
    """Expose several registries as one object.

    Each public method of each component becomes a method of the composed
    container. Components must not share method names, nor shadow the
    attributes of the composed container itself (``components``, ``inner``
    and ``new``).

    The locks of an atomic composition are not reentrant. A provider
    registered through it must look its dependencies up through ``inner``,
    which exposes the same registries without the locks. Tag lookups through
    ``inner`` still take the service lock, so providers must not call
    ``get_by_tag`` either way.

    Examples:
        .. code-block:: python

            registry = ComposedContainer.new(atomic=True)
            registry.register_param("db.dsn", ParamDefinition(lambda: "sqlite://"))
            registry.register(
                "db",
                ServiceDefinition(lambda: Database(registry.inner.get_param("db.dsn"))),
            )
            registry.tag_service("db", "storages", 0)

    """

    def __init__(self, *components: object) -> None:
        ambiguous = find_ambiguous_methods(*components)
        if not ambiguous:
            facade_names = {name for name in dir(type(self)) if not name.startswith("_")}
            ambiguous = sorted(
                {name for component in components for name in public_method_names(component)}
                & facade_names,
            )
        if ambiguous:
            raise DIRegistryAmbiguousCompositionError(ambiguous)

        self._components = components
        self._inner: ComposedContainer | None = None
        self._methods: dict[str, Any] = {
            name: getattr(component, name)
            for component in components
            for name in public_method_names(component)
        }

    @classmethod
    def new(cls, *, atomic: bool = False) -> Self:
        """Compose a fresh service, parameter and tagged container."""
        if not atomic:
            container = Container()
            return cls(container, ParamContainer(), TaggedContainer(container))

        container = Container()
        params = ParamContainer()
        services = AtomicContainer(container)
        tagged = TaggedContainer(services)
        registry = cls(services, AtomicParamContainer(params), AtomicTaggedContainer(tagged))
        registry._inner = cls(container, params, tagged)
        return registry

    @property
    def components(self) -> tuple[object, ...]:
        return self._components

    @property
    def inner(self) -> ComposedContainer:
        """The same registries without their locks, or ``self`` when nothing is locked."""
        return self._inner if self._inner is not None else self

    def __getattr__(self, name: str) -> Any:
        try:
            return self.__dict__["_methods"][name]
        except KeyError:
            msg = f"{type(self).__name__!r} object has no attribute {name!r}"
            raise AttributeError(msg) from None

    def __dir__(self) -> list[str]:
        return sorted({*super().__dir__(), *self._methods})
