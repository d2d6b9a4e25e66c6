"""Circular dependencies are reported with the full construction chain."""

from __future__ import annotations

from diregistry import Container, DIRegistryServiceCreationError, ServiceDefinition


def main() -> None:
    container = Container()
    container.register("company", ServiceDefinition(lambda: container.get("employer")))
    container.register("employer", ServiceDefinition(lambda: container.get("company")))

    try:
        container.get("company")
    except DIRegistryServiceCreationError as error:
        print(error)
        # => cannot create service `company`: circular dependency: company -> employer -> company


if __name__ == "__main__":
    main()
