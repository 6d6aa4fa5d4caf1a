"""Force backend implementations."""

from .base import ParallelBackend
from .cpu import CPUBackend
from .scatter_add import ScatterAddBackend

__all__ = [
    "ParallelBackend",
    "CPUBackend",
    "ScatterAddBackend",
]
