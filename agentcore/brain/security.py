"""Access-control and encryption contract consumed by the brain.

Only the pass-through policy ships here; real ACLs and ciphers plug in by
implementing ``SecurityPolicy``.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class SecurityPolicy(Protocol):
    def can_access(self, user: str, resource: str) -> bool:
        ...

    def encrypt(self, data: bytes) -> bytes:
        ...

    def decrypt(self, data: bytes) -> bytes:
        ...


class PassThroughSecurity:
    """Allows every access and leaves bytes untouched."""

    def can_access(self, user: str, resource: str) -> bool:
        return True

    def encrypt(self, data: bytes) -> bytes:
        return bytes(data)

    def decrypt(self, data: bytes) -> bytes:
        return bytes(data)


__all__ = [
    "PassThroughSecurity",
    "SecurityPolicy",
]
