from __future__ import annotations

from diregistry.exceptions import (
    DIRegistryCircularDependencyError,
    DIRegistryFatalError,
    DIRegistryWrappedError,
)


def unwrap_fatal_error(error: Exception) -> Exception:
    """Return the error a ``must_*`` call was raised for, or ``error`` itself."""
    if isinstance(error, DIRegistryFatalError):
        return error.error
    return error


def is_circular_error(error: Exception) -> bool:
    return isinstance(error, DIRegistryCircularDependencyError)


def wraps_circular_error(error: Exception) -> bool:
    """Return whether ``error`` is a registry error already carrying a cycle."""
    return isinstance(error, DIRegistryWrappedError) and is_circular_error(
        unwrap_fatal_error(error.error),
    )


def unwrap_foreign_cycle(
    error: Exception,
    wrapped_types: tuple[type[DIRegistryWrappedError], ...],
) -> Exception:
    """Return the raw cycle carried by an error another registry already prefixed.

    Any other error is returned after ``unwrap_fatal_error``.
    """
    error = unwrap_fatal_error(error)
    if isinstance(error, wrapped_types) and wraps_circular_error(error):
        return unwrap_fatal_error(error.error)
    return error
