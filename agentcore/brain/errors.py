"""Exceptions raised by the brain and its memory stores."""

from __future__ import annotations


class MemoryBackendError(RuntimeError):
    """Raised when a memory store cannot complete an operation."""


class MemorySerializationError(MemoryBackendError):
    """Raised when a value cannot be encoded for, or decoded from, storage."""


class MemoryStoreClosedError(MemoryBackendError):
    """Raised when an operation is attempted on a closed store."""


class ModuleNotRegisteredError(LookupError):
    """Raised when a required extension module name is not registered."""


__all__ = [
    "MemoryBackendError",
    "MemorySerializationError",
    "MemoryStoreClosedError",
    "ModuleNotRegisteredError",
]
