"""Execution backends for pairwise and specific forces."""

from .backends.base import ParallelBackend, partition_range
from .backends.cpu import CPUBackend
from .backends.scatter_add import WORK_GROUP_SIZE, ScatterAddBackend
from .dispatcher import (
    create_backend,
    get_backend,
    reset_default_backend,
    set_default_backend,
)

__all__ = [
    "ParallelBackend",
    "CPUBackend",
    "ScatterAddBackend",
    "WORK_GROUP_SIZE",
    "partition_range",
    "create_backend",
    "get_backend",
    "reset_default_backend",
    "set_default_backend",
]
