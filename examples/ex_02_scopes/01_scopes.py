"""Scopes: how many times a provider runs.

1. ``Scope.SHARED`` builds once per container.
2. ``Scope.NESTED_SHARED`` builds once per top-level ``get``.
3. ``Scope.NON_SHARED`` builds on every request.
"""

from __future__ import annotations

import itertools

from diregistry import Container, Scope, ServiceDefinition


class Transaction:
    def __init__(self, number: int) -> None:
        self.number = number


def _build(scope: Scope) -> Container:
    numbers = itertools.count(1)
    container = Container()
    container.register(
        "transaction",
        ServiceDefinition(lambda: Transaction(next(numbers)), scope=scope),
    )
    container.register(
        "repositories",
        ServiceDefinition(
            lambda: (container.get("transaction"), container.get("transaction")),
            scope=Scope.NON_SHARED,
        ),
    )
    return container


def main() -> None:
    for scope in Scope:
        container = _build(scope)
        first = [t.number for t in container.get("repositories")]
        second = [t.number for t in container.get("repositories")]
        print(f"{scope.value}: first={first} second={second}")
    # => shared: first=[1, 1] second=[1, 1]
    # => nested_shared: first=[1, 1] second=[2, 2]
    # => non_shared: first=[1, 2] second=[3, 4]


if __name__ == "__main__":
    main()
