from __future__ import annotations

import pytest
from pydantic import BaseModel
from pydantic_settings import BaseSettings, SettingsConfigDict

from diregistry import (
    AtomicParamContainer,
    DIRegistryAlreadyRegisteredError,
    DIRegistryInvalidProviderError,
    ParamContainer,
)
from diregistry.integrations.pydantic_settings import (
    is_pydantic_settings_instance,
    register_settings,
)


class _DatabaseSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="DIREGISTRY_TEST_DB_")

    host: str = "localhost"
    port: int = 5432


class _PlainModel(BaseModel):
    host: str = "localhost"


def test_fields_become_parameters(param_container: ParamContainer) -> None:
    param_ids = register_settings(param_container, _DatabaseSettings(), prefix="db.")

    assert param_ids == ["db.host", "db.port"]
    assert param_container.get_param("db.host") == "localhost"
    assert param_container.get_param("db.port") == 5432


def test_values_come_from_environment(
    param_container: ParamContainer,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("DIREGISTRY_TEST_DB_PORT", "6543")

    register_settings(param_container, _DatabaseSettings())

    assert param_container.get_param("port") == 6543


def test_duplicate_registration_raises(param_container: ParamContainer) -> None:
    register_settings(param_container, _DatabaseSettings())

    with pytest.raises(DIRegistryAlreadyRegisteredError, match="parameter `host` already exists"):
        register_settings(param_container, _DatabaseSettings())


def test_override_replaces_parameters(param_container: ParamContainer) -> None:
    register_settings(param_container, _DatabaseSettings())
    assert param_container.get_param("host") == "localhost"

    register_settings(param_container, _DatabaseSettings(host="db.internal"), override=True)

    assert param_container.get_param("host") == "db.internal"


def test_works_with_atomic_param_container() -> None:
    params = AtomicParamContainer(ParamContainer())

    register_settings(params, _DatabaseSettings(), prefix="db.")

    assert params.get_all_param_ids() == ["db.host", "db.port"]


def test_rejects_non_settings_objects(param_container: ParamContainer) -> None:
    assert not is_pydantic_settings_instance(_PlainModel())
    assert is_pydantic_settings_instance(_DatabaseSettings())

    with pytest.raises(DIRegistryInvalidProviderError, match="pydantic settings instance"):
        register_settings(param_container, _PlainModel())  # type: ignore[arg-type]
