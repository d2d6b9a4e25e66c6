from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager


class CircularDeps:
    """Track identifiers under construction on the current call chain.

    The chain is an ordered list rather than a set because a detected cycle is
    rendered from it. Every ``start`` must be paired with exactly one ``stop``;
    use ``track`` to get the pairing for free.
    """

    def __init__(self) -> None:
        self._chain: list[str] = []

    @property
    def chain(self) -> tuple[str, ...]:
        return tuple(self._chain)

    @property
    def depth(self) -> int:
        return len(self._chain)

    def start(self, identifier: str) -> list[str] | None:
        """Push ``identifier`` and return the closed cycle if it was already on the chain.

        The identifier is pushed even when a cycle is found, so ``stop`` stays
        symmetrical on the error path.
        """
        cycle = [*self._chain, identifier] if identifier in self._chain else None
        self._chain.append(identifier)
        return cycle

    def stop(self) -> None:
        self._chain.pop()

    @contextmanager
    def track(self, identifier: str) -> Iterator[list[str] | None]:
        cycle = self.start(identifier)
        try:
            yield cycle
        finally:
            self.stop()
