from __future__ import annotations

from collections.abc import Sequence


class DIRegistryError(Exception):
    """Represent a base class for all diregistry-specific failures.

    Catch this type when you want to handle any registry error path without
    matching each concrete exception class individually.
    """


class DIRegistryInvalidProviderError(DIRegistryError):
    """Signal a definition whose provider does not honor the provider contract.

    Raised when building a ``ServiceDefinition`` or ``ParamDefinition`` with a
    non-callable provider, and by ``register_settings`` when the supplied
    object is not a pydantic settings model.
    """


class DIRegistryAlreadyRegisteredError(DIRegistryError):
    """Signal a duplicate registration.

    Raised by ``Container.register`` and ``ParamContainer.register_param``
    when the identifier already exists. Use ``override``/``override_param``
    to replace an existing definition on purpose.
    """


class DIRegistryAlreadyTaggedError(DIRegistryError):
    """Signal a duplicate ``(tag, service_id)`` pair.

    Raised by ``TaggedContainer.tag_service``. Use ``override_tag_service`` to
    change the priority of an existing pair.
    """


class DIRegistryNotFoundError(DIRegistryError):
    """Represent a base class for unknown identifiers."""


class DIRegistryServiceNotFoundError(DIRegistryNotFoundError):
    """Signal that a service identifier has no definition.

    Raised by ``get``, ``revoke`` and ``remove``. The message names the
    attempted action for ``revoke`` and ``remove``.
    """


class DIRegistryParamNotFoundError(DIRegistryNotFoundError):
    """Signal that a parameter identifier has no definition."""


class DIRegistryCircularDependencyError(DIRegistryError):
    """Signal a construction cycle.

    ``chain`` holds every identifier under construction, with the repeated
    identifier at both ends of the cycle, for example
    ``["app", "db", "app"]``. The message renders the chain as
    ``circular dependency: app -> db -> app``.

    Typical fix is breaking the cycle by injecting a lazy accessor instead of
    the instance or by splitting one of the services.
    """

    def __init__(self, chain: Sequence[str]) -> None:
        self.chain = list(chain)
        super().__init__(f"circular dependency: {' -> '.join(self.chain)}")


class DIRegistryWrappedError(DIRegistryError):
    """Represent an error raised while materializing an identifier.

    ``error`` holds the original exception; it is also chained as
    ``__cause__``.
    """

    _template: str = "{identifier}: {error}"

    def __init__(self, identifier: str, error: Exception) -> None:
        self.identifier = identifier
        self.error = error
        super().__init__(self._template.format(identifier=identifier, error=error))


class DIRegistryServiceCreationError(DIRegistryWrappedError):
    """Signal that a service provider raised."""

    _template = "cannot create service `{identifier}`: {error}"

    @property
    def service_id(self) -> str:
        return self.identifier


class DIRegistryServiceDecorationError(DIRegistryWrappedError):
    """Signal that a decorator raised while decorating a service."""

    _template = "cannot decorate service `{identifier}`: {error}"

    @property
    def service_id(self) -> str:
        return self.identifier


class DIRegistryParamError(DIRegistryWrappedError):
    """Signal that a parameter provider raised."""

    _template = "cannot get parameter `{identifier}`: {error}"

    @property
    def param_id(self) -> str:
        return self.identifier


class DIRegistryTagResolutionError(DIRegistryWrappedError):
    """Signal that one member of a tag could not be resolved.

    Raised by ``TaggedContainer.get_by_tag``; no partial result is returned.
    """

    _template = "cannot get services by tag `{identifier}`: {error}"

    @property
    def tag(self) -> str:
        return self.identifier


class DIRegistryAmbiguousCompositionError(DIRegistryError):
    """Signal that composed components expose the same method name.

    Raised by ``ComposedContainer`` when a name could be delegated to more
    than one component.
    """

    def __init__(self, names: Sequence[str]) -> None:
        self.names = list(names)
        super().__init__(f"cannot compose containers: ambiguous methods {', '.join(self.names)}")


class DIRegistryFatalError(DIRegistryError):
    """Signal an unrecoverable failure raised by a ``must_*`` operation.

    The message is the message of the original error, kept as ``error``.
    Registries unwrap it when it surfaces from a provider or decorator, so a
    nested ``must_get`` reports the same way a nested ``get`` does.
    """

    def __init__(self, error: DIRegistryError) -> None:
        self.error = error
        super().__init__(str(error))
