from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any, TypeAlias

from diregistry.exceptions import DIRegistryInvalidProviderError

Provider: TypeAlias = Callable[[], Any]
"""A zero-argument callable building a service or a parameter, raising on failure."""

Decorator: TypeAlias = Callable[[str, Any], Any]
"""A callable receiving the service id and the service, returning the decorated service."""


class Scope(str, Enum):
    """Defines how many times a service provider runs."""

    SHARED = "shared"
    """The same instance is returned each time the service is requested from the container."""

    NESTED_SHARED = "nested_shared"
    """The same instance is shared only within one top-level ``get`` call."""

    NON_SHARED = "non_shared"
    """A new instance is created each time the service is requested."""


def _validate_provider(provider: object) -> None:
    if not callable(provider):
        msg = f"Provider must be callable, got {provider!r}."
        raise DIRegistryInvalidProviderError(msg)


@dataclass(frozen=True)
class ServiceDefinition:
    """Describe how to build a service and how long to keep it."""

    provider: Provider
    scope: Scope = Scope.SHARED

    def __post_init__(self) -> None:
        _validate_provider(self.provider)
        if not isinstance(self.scope, Scope):
            msg = f"Scope must be a Scope member, got {self.scope!r}."
            raise DIRegistryInvalidProviderError(msg)


@dataclass(frozen=True)
class ParamDefinition:
    """Describe how to build a parameter.

    Disposable parameters are rebuilt on every ``get_param`` call, the others
    are cached after the first successful build.
    """

    provider: Provider
    disposable: bool = False

    def __post_init__(self) -> None:
        _validate_provider(self.provider)
