"""Enums for model fields and query options."""

from enum import Enum


class MicropostOrder(str, Enum):
    """Sort direction for micropost listings."""

    NEWEST_FIRST = "newest_first"
    OLDEST_FIRST = "oldest_first"

    @property
    def descending(self) -> bool:
        """Check if this order lists the most recent posts first."""
        return self == MicropostOrder.NEWEST_FIRST
