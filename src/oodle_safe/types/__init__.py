"""Reusable type definitions for the Oodle safety layer."""

from .base import NativeRecord
from .integers import BoundedInt, Int32, Uint32

__all__ = [
    "BoundedInt",
    "Int32",
    "NativeRecord",
    "Uint32",
]
