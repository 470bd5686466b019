"""Agent memory and cognition core."""

__all__ = [
    "brain",
]
