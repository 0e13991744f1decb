"""
OwnershipPeriod Value Object

Immutable representation of the window during which a vehicle is owned.
"""

from dataclasses import dataclass
from datetime import date
from typing import Optional

from exceptions import ValidationError


@dataclass(frozen=True)
class OwnershipPeriod:
    """
    Half-open ownership window [start, end).

    An absent end means the ownership is ongoing. When present, the end must
    be strictly after the start: a window that starts and ends on the same
    day is rejected.
    """

    start: date
    end: Optional[date] = None

    def __post_init__(self):
        """Validate the window."""
        if self.start is None:
            raise ValidationError(
                "Ownership start date is required",
                {"start_date": None},
            )
        if self.end is not None and not self.start < self.end:
            raise ValidationError(
                f"Ownership end date {self.end.isoformat()} must be after "
                f"start date {self.start.isoformat()}",
                {"start_date": self.start.isoformat(), "end_date": self.end.isoformat()},
            )

    @property
    def is_ongoing(self) -> bool:
        """True when no end date is recorded."""
        return self.end is None

    def covers(self, day: date) -> bool:
        """
        Check whether the given day falls inside the window.

        Args:
            day: Day to test

        Returns:
            True if start <= day and (no end or day < end)
        """
        if day < self.start:
            return False
        return self.end is None or day < self.end

    def __str__(self) -> str:
        end = self.end.isoformat() if self.end else "..."
        return f"{self.start.isoformat()} -> {end}"
