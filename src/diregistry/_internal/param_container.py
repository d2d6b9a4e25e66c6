from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from diregistry._internal.circular_deps import CircularDeps
from diregistry._internal.errors import is_circular_error, unwrap_foreign_cycle
from diregistry.exceptions import (
    DIRegistryAlreadyRegisteredError,
    DIRegistryCircularDependencyError,
    DIRegistryError,
    DIRegistryFatalError,
    DIRegistryParamError,
    DIRegistryParamNotFoundError,
)
from diregistry.types import ParamDefinition

logger = logging.getLogger(__name__)


@dataclass
class _ParamEntry:
    definition: ParamDefinition
    param: Any = None
    created: bool = False


class ParamContainer:
    """Build configuration values from definitions.

    Works like ``Container`` without decorators and without scopes: a
    parameter is either cached after its first build or, when its definition
    is ``disposable``, rebuilt on every call.
    """

    def __init__(self, definitions: Mapping[str, ParamDefinition] | None = None) -> None:
        self._params: dict[str, _ParamEntry] = {
            param_id: _ParamEntry(definition)
            for param_id, definition in (definitions or {}).items()
        }
        self._circular_deps = CircularDeps()

    def register_param(self, param_id: str, definition: ParamDefinition) -> None:
        """Register a new parameter.

        Raises:
            DIRegistryAlreadyRegisteredError: If ``param_id`` already exists.

        """
        if self.has_param(param_id):
            msg = f"parameter `{param_id}` already exists"
            raise DIRegistryAlreadyRegisteredError(msg)

        self._params[param_id] = _ParamEntry(definition)
        logger.debug("Registered parameter %r", param_id)

    def override_param(self, param_id: str, definition: ParamDefinition) -> None:
        self._params[param_id] = _ParamEntry(definition)
        logger.debug("Overrode parameter %r", param_id)

    def get_param(self, param_id: str) -> Any:
        """Return the parameter, building it unless a cached value exists.

        A cycle is reported once, prefixed with the parameter that started the
        outermost ``get_param`` call.

        Raises:
            DIRegistryCircularDependencyError: If the parameter is already under
                construction on the current call chain.
            DIRegistryParamNotFoundError: If the parameter is not registered.
            DIRegistryParamError: If the provider raised.

        """
        with self._circular_deps.track(param_id) as cycle:
            if cycle is not None:
                logger.debug("Circular dependency detected: %s", " -> ".join(cycle))
                raise DIRegistryCircularDependencyError(cycle)

            entry = self._params.get(param_id)
            if entry is None:
                msg = f"parameter `{param_id}` does not exist"
                raise DIRegistryParamNotFoundError(msg)

            if entry.created:
                return entry.param

            try:
                param = entry.definition.provider()
            except Exception as exc:
                cause = unwrap_foreign_cycle(exc, (DIRegistryParamError,))
                if is_circular_error(cause) and self._circular_deps.depth > 1:
                    raise cause from None
                raise DIRegistryParamError(param_id, cause) from exc

            if not entry.definition.disposable:
                entry.param = param
                entry.created = True

            return param

    def must_get_param(self, param_id: str) -> Any:
        try:
            return self.get_param(param_id)
        except DIRegistryError as exc:
            raise DIRegistryFatalError(exc) from exc

    def has_param(self, param_id: str) -> bool:
        return param_id in self._params

    def get_all_param_ids(self) -> list[str]:
        return sorted(self._params)
