from diregistry._internal.atomic import (
    AtomicContainer,
    AtomicParamContainer,
    AtomicTaggedContainer,
)
from diregistry._internal.composition import (
    ComposedContainer,
    find_ambiguous_methods,
    public_method_names,
)
from diregistry._internal.container import Container
from diregistry._internal.param_container import ParamContainer
from diregistry._internal.tagged_container import TaggedContainer
from diregistry.exceptions import (
    DIRegistryAlreadyRegisteredError,
    DIRegistryAlreadyTaggedError,
    DIRegistryAmbiguousCompositionError,
    DIRegistryCircularDependencyError,
    DIRegistryError,
    DIRegistryFatalError,
    DIRegistryInvalidProviderError,
    DIRegistryNotFoundError,
    DIRegistryParamError,
    DIRegistryParamNotFoundError,
    DIRegistryServiceCreationError,
    DIRegistryServiceDecorationError,
    DIRegistryServiceNotFoundError,
    DIRegistryTagResolutionError,
    DIRegistryWrappedError,
)
from diregistry.types import Decorator, ParamDefinition, Provider, Scope, ServiceDefinition

__all__ = [
    "AtomicContainer",
    "AtomicParamContainer",
    "AtomicTaggedContainer",
    "ComposedContainer",
    "Container",
    "DIRegistryAlreadyRegisteredError",
    "DIRegistryAlreadyTaggedError",
    "DIRegistryAmbiguousCompositionError",
    "DIRegistryCircularDependencyError",
    "DIRegistryError",
    "DIRegistryFatalError",
    "DIRegistryInvalidProviderError",
    "DIRegistryNotFoundError",
    "DIRegistryParamError",
    "DIRegistryParamNotFoundError",
    "DIRegistryServiceCreationError",
    "DIRegistryServiceDecorationError",
    "DIRegistryServiceNotFoundError",
    "DIRegistryTagResolutionError",
    "DIRegistryWrappedError",
    "Decorator",
    "ParamContainer",
    "ParamDefinition",
    "Provider",
    "Scope",
    "ServiceDefinition",
    "TaggedContainer",
    "find_ambiguous_methods",
    "public_method_names",
]
