"""Broker-agnostic trading types."""

from enum import Enum


class Orientation(str, Enum):
    """Trading orientation of a setup.

    Generic concept representing position bias (LONG or SHORT).
    """
    LONG = "long"
    SHORT = "short"

    def opposite(self) -> "Orientation":
        """Return the opposite orientation."""
        return Orientation.SHORT if self is Orientation.LONG else Orientation.LONG

    @property
    def sign(self) -> float:
        """+1.0 for LONG, -1.0 for SHORT."""
        return 1.0 if self is Orientation.LONG else -1.0
