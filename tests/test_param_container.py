"""Tests for the parameter container."""

from __future__ import annotations

import itertools

import pytest

from diregistry import (
    DIRegistryAlreadyRegisteredError,
    DIRegistryCircularDependencyError,
    DIRegistryFatalError,
    DIRegistryParamError,
    DIRegistryParamNotFoundError,
    ParamContainer,
    ParamDefinition,
)


def _failing_provider() -> object:
    msg = "connection refused"
    raise OSError(msg)


@pytest.fixture()
def circular_params() -> ParamContainer:
    params = ParamContainer()
    deps = {
        "username": "nickname",
        "nickname": "name",
        "name": "username",
    }
    for param_id, dependency in deps.items():
        params.override_param(
            param_id,
            ParamDefinition(lambda dependency=dependency: params.get_param(dependency)),
        )
    return params


class TestGetParam:
    def test_non_disposable_param_is_cached(self, param_container: ParamContainer) -> None:
        calls = itertools.count(1)
        param_container.register_param("build", ParamDefinition(lambda: next(calls)))

        assert param_container.get_param("build") == 1
        assert param_container.get_param("build") == 1

    def test_disposable_param_is_rebuilt(self, param_container: ParamContainer) -> None:
        calls = itertools.count(1)
        param_container.register_param(
            "build",
            ParamDefinition(lambda: next(calls), disposable=True),
        )

        assert param_container.get_param("build") == 1
        assert param_container.get_param("build") == 2

    def test_param_reads_other_params(self, param_container: ParamContainer) -> None:
        param_container.register_param("db.host", ParamDefinition(lambda: "localhost"))
        param_container.register_param("db.port", ParamDefinition(lambda: 5432))
        param_container.register_param(
            "db.dsn",
            ParamDefinition(
                lambda: (
                    f"postgres://{param_container.get_param('db.host')}"
                    f":{param_container.get_param('db.port')}"
                ),
            ),
        )

        assert param_container.get_param("db.dsn") == "postgres://localhost:5432"

    def test_initial_definitions(self) -> None:
        params = ParamContainer({"debug": ParamDefinition(lambda: True)})

        assert params.has_param("debug")
        assert params.get_param("debug") is True

    def test_must_get_param(self, param_container: ParamContainer) -> None:
        param_container.register_param("debug", ParamDefinition(lambda: False))

        assert param_container.must_get_param("debug") is False
        with pytest.raises(DIRegistryFatalError, match=r"^parameter `missing` does not exist$"):
            param_container.must_get_param("missing")


class TestGetParamErrors:
    def test_provider_error(self) -> None:
        params = ParamContainer({"db.host": ParamDefinition(_failing_provider)})

        with pytest.raises(
            DIRegistryParamError,
            match=r"^cannot get parameter `db.host`: connection refused$",
        ) as exc_info:
            params.get_param("db.host")

        assert exc_info.value.param_id == "db.host"
        assert isinstance(exc_info.value.__cause__, OSError)

    def test_provider_error_is_not_cached(self) -> None:
        params = ParamContainer({"db.host": ParamDefinition(_failing_provider)})

        for _ in range(2):
            with pytest.raises(DIRegistryParamError):
                params.get_param("db.host")

    def test_unknown_param(self, param_container: ParamContainer) -> None:
        with pytest.raises(
            DIRegistryParamNotFoundError,
            match=r"^parameter `db.host` does not exist$",
        ):
            param_container.get_param("db.host")

    def test_cycle_is_wrapped_by_outermost_param(self, circular_params: ParamContainer) -> None:
        with pytest.raises(DIRegistryParamError) as exc_info:
            circular_params.get_param("nickname")

        assert str(exc_info.value) == (
            "cannot get parameter `nickname`: "
            "circular dependency: nickname -> name -> username -> nickname"
        )
        assert isinstance(exc_info.value.error, DIRegistryCircularDependencyError)
        assert circular_params._circular_deps.chain == ()

    def test_cycle_from_another_container_is_prefixed_with_outermost_param(self) -> None:
        inner = ParamContainer()
        inner.override_param("a", ParamDefinition(lambda: inner.get_param("b")))
        inner.override_param("b", ParamDefinition(lambda: inner.get_param("a")))
        outer = ParamContainer()
        outer.override_param("config", ParamDefinition(lambda: inner.get_param("a")))

        with pytest.raises(DIRegistryParamError) as exc_info:
            outer.get_param("config")

        assert str(exc_info.value) == "cannot get parameter `config`: circular dependency: a -> b -> a"
        assert exc_info.value.param_id == "config"
        assert outer._circular_deps.chain == ()
        assert inner._circular_deps.chain == ()

    def test_cycle_through_another_container_is_wrapped_once(self) -> None:
        first = ParamContainer()
        second = ParamContainer()
        first.override_param("a", ParamDefinition(lambda: second.must_get_param("b")))
        second.override_param("b", ParamDefinition(lambda: first.get_param("a")))

        with pytest.raises(
            DIRegistryParamError,
            match=r"^cannot get parameter `a`: circular dependency: a -> a$",
        ):
            first.get_param("a")

    def test_nested_error_is_wrapped_by_every_frame(self, param_container: ParamContainer) -> None:
        param_container.register_param("inner", ParamDefinition(_failing_provider))
        param_container.register_param(
            "outer",
            ParamDefinition(lambda: param_container.get_param("inner")),
        )

        with pytest.raises(
            DIRegistryParamError,
            match=(
                r"^cannot get parameter `outer`: "
                r"cannot get parameter `inner`: connection refused$"
            ),
        ):
            param_container.get_param("outer")


class TestRegistration:
    def test_register_twice(self, param_container: ParamContainer) -> None:
        param_container.register_param("debug", ParamDefinition(lambda: True))

        with pytest.raises(
            DIRegistryAlreadyRegisteredError,
            match=r"^parameter `debug` already exists$",
        ):
            param_container.register_param("debug", ParamDefinition(lambda: False))

    def test_override_drops_cached_value(self, param_container: ParamContainer) -> None:
        param_container.register_param("debug", ParamDefinition(lambda: True))
        assert param_container.get_param("debug") is True

        param_container.override_param("debug", ParamDefinition(lambda: False))

        assert param_container.get_param("debug") is False

    def test_ids_are_sorted(self, param_container: ParamContainer) -> None:
        for param_id in ("db.port", "app.name", "db.host"):
            param_container.register_param(param_id, ParamDefinition(lambda: None))

        assert param_container.get_all_param_ids() == ["app.name", "db.host", "db.port"]
        assert param_container.has_param("db.host")
        assert not param_container.has_param("db.user")
