from __future__ import annotations

import pytest

from diregistry import Container, ParamContainer, ServiceDefinition, TaggedContainer

pytest_plugins = ["diregistry.integrations.pytest_plugin"]


def test_container_fixture_is_available(diregistry_container: Container) -> None:
    assert isinstance(diregistry_container, Container)
    assert diregistry_container.get_all_service_ids() == []


@pytest.mark.parametrize("run", [1, 2])
def test_container_fixture_is_isolated_per_test(diregistry_container: Container, run: int) -> None:
    diregistry_container.register("svc", ServiceDefinition(lambda: run))

    assert diregistry_container.get("svc") == run


def test_param_container_fixture_is_available(
    diregistry_param_container: ParamContainer,
) -> None:
    assert diregistry_param_container.get_all_param_ids() == []


def test_tagged_container_uses_container_fixture(
    diregistry_container: Container,
    diregistry_tagged_container: TaggedContainer,
) -> None:
    assert isinstance(diregistry_tagged_container, TaggedContainer)
    diregistry_container.register("svc", ServiceDefinition(lambda: "svc"))
    diregistry_tagged_container.tag_service("svc", "all", 0)

    assert diregistry_tagged_container.get_by_tag("all") == ["svc"]
