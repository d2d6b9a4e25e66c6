"""Shared pytest fixtures for diregistry tests."""

import pytest

from diregistry import Container, ParamContainer, TaggedContainer


@pytest.fixture()
def container() -> Container:
    """Empty service container."""
    return Container()


@pytest.fixture()
def param_container() -> ParamContainer:
    """Empty parameter container."""
    return ParamContainer()


@pytest.fixture()
def tagged_container(container: Container) -> TaggedContainer:
    """Tagged container over the ``container`` fixture."""
    return TaggedContainer(container)
