from __future__ import annotations

import pytest

from diregistry._internal.container import Container
from diregistry._internal.param_container import ParamContainer
from diregistry._internal.tagged_container import TaggedContainer


@pytest.fixture()
def diregistry_container() -> Container:
    """Give each test an empty service container of its own.

    A suite that needs the same services in every test can redefine this
    fixture in its conftest and register them there.
    """
    return Container()


@pytest.fixture()
def diregistry_param_container() -> ParamContainer:
    """Create a per-test parameter container."""
    return ParamContainer()


@pytest.fixture()
def diregistry_tagged_container(diregistry_container: Container) -> TaggedContainer:
    """Create a per-test tagged container over ``diregistry_container``."""
    return TaggedContainer(diregistry_container)
