"""Neighbor list container."""

from .base import NeighborEntry, NeighborList

__all__ = ["NeighborEntry", "NeighborList"]
