"""General (system-wide) interactions."""

from .field import ExternalField

__all__ = ["ExternalField"]
