"""Backend dispatcher for selecting and managing force backends."""

from __future__ import annotations

import logging
import os
from typing import Literal

from .backends.base import ParallelBackend
from .backends.cpu import CPUBackend

logger = logging.getLogger(__name__)

# Global default backend
_default_backend: ParallelBackend | None = None

# Available backend types
BackendType = Literal["cpu", "scatter_add"]

BACKEND_ENV_VAR = "MDFORCES_BACKEND"
NUM_THREADS_ENV_VAR = "MDFORCES_NUM_THREADS"


def default_n_threads() -> int:
    """
    Number of CPU backend threads taken from the environment.

    Reads ``MDFORCES_NUM_THREADS``; defaults to 1.
    """
    value = os.environ.get(NUM_THREADS_ENV_VAR)
    if value is None:
        return 1
    try:
        n_threads = int(value)
    except ValueError as e:
        raise ValueError(
            f"{NUM_THREADS_ENV_VAR} must be a positive integer, got {value!r}"
        ) from e
    if n_threads < 1:
        raise ValueError(f"{NUM_THREADS_ENV_VAR} must be a positive integer, got {value!r}")
    return n_threads


def get_backend(
    backend: BackendType | ParallelBackend | None = None,
    **kwargs,
) -> ParallelBackend:
    """
    Get a force backend instance.

    Args:
        backend: Backend specification. Can be:
            - None: Use default backend (from ``MDFORCES_BACKEND``, else cpu)
            - String: Create backend by name
            - ParallelBackend: Use provided instance directly
        **kwargs: Additional arguments for backend initialization.

    Returns:
        ParallelBackend instance.

    Examples:
        >>> backend = get_backend()  # Default (cpu)
        >>> backend = get_backend("scatter_add", n_workers=8)
    """
    global _default_backend

    # Use provided backend instance directly
    if isinstance(backend, ParallelBackend):
        return backend

    # Use default if None
    if backend is None:
        if _default_backend is None:
            _default_backend = create_backend(os.environ.get(BACKEND_ENV_VAR, "cpu"))
        return _default_backend

    # Create backend by name
    return create_backend(backend, **kwargs)


def create_backend(name: BackendType, **kwargs) -> ParallelBackend:
    """
    Create a force backend by name.

    Args:
        name: Backend name.
        **kwargs: Backend-specific arguments.

    Returns:
        ParallelBackend instance.

    Raises:
        ValueError: If backend name is unknown.
    """
    logger.debug(f"Creating {name} backend")

    if name == "cpu":
        kwargs.setdefault("n_threads", default_n_threads())
        return CPUBackend(**kwargs)

    elif name == "scatter_add":
        from .backends.scatter_add import ScatterAddBackend

        return ScatterAddBackend(**kwargs)

    else:
        raise ValueError(f"Unknown backend: {name}. Available: cpu, scatter_add")


def set_default_backend(
    backend: BackendType | ParallelBackend,
    **kwargs,
) -> ParallelBackend:
    """
    Set the default force backend.

    Args:
        backend: Backend specification (name or instance).
        **kwargs: Arguments for backend creation.

    Returns:
        The new default backend.
    """
    global _default_backend

    if isinstance(backend, ParallelBackend):
        _default_backend = backend
    else:
        _default_backend = create_backend(backend, **kwargs)

    return _default_backend


def reset_default_backend() -> None:
    """Reset default backend to None (re-read from the environment on next get)."""
    global _default_backend
    _default_backend = None
