from __future__ import annotations

import logging
from typing import Any

from pydantic_settings import BaseSettings

from diregistry._internal.atomic import ParamContainerProtocol
from diregistry.exceptions import DIRegistryInvalidProviderError
from diregistry.types import ParamDefinition, Provider

logger = logging.getLogger(__name__)


def is_pydantic_settings_instance(candidate: object) -> bool:
    """Return whether ``candidate`` is an instance of a pydantic settings model."""
    return isinstance(candidate, BaseSettings)


def register_settings(
    params: ParamContainerProtocol,
    settings: BaseSettings,
    *,
    prefix: str = "",
    override: bool = False,
) -> list[str]:
    """Register every field of a settings model as a cached parameter.

    Each field ``name`` becomes the parameter ``prefix + name``. The provider
    reads the attribute from ``settings`` lazily, so values validated by
    pydantic are what ``get_param`` returns.

    Args:
        params: A ``ParamContainer`` or an ``AtomicParamContainer``.
        settings: The settings instance to read values from.
        prefix: Prefix prepended to every parameter id, for example ``"db."``.
        override: Replace existing parameters instead of raising
            ``DIRegistryAlreadyRegisteredError``.

    Returns:
        The registered parameter ids, in field declaration order.

    Raises:
        DIRegistryInvalidProviderError: If ``settings`` is not a settings model instance.

    Examples:
        .. code-block:: python

            class DatabaseSettings(BaseSettings):
                model_config = SettingsConfigDict(env_prefix="DB_")

                host: str = "localhost"
                port: int = 5432


            params = ParamContainer()
            register_settings(params, DatabaseSettings(), prefix="db.")
            params.get_param("db.port")

    """
    if not is_pydantic_settings_instance(settings):
        msg = f"Expected a pydantic settings instance, got {settings!r}."
        raise DIRegistryInvalidProviderError(msg)

    register = params.override_param if override else params.register_param
    param_ids: list[str] = []
    for field_name in type(settings).model_fields:
        param_id = f"{prefix}{field_name}"
        register(param_id, ParamDefinition(_field_reader(settings, field_name)))
        param_ids.append(param_id)

    logger.debug(
        "Registered %d parameters from %s",
        len(param_ids),
        type(settings).__qualname__,
    )
    return param_ids


def _field_reader(settings: BaseSettings, field_name: str) -> Provider:
    def read() -> Any:
        return getattr(settings, field_name)

    return read


__all__ = [
    "is_pydantic_settings_instance",
    "register_settings",
]
