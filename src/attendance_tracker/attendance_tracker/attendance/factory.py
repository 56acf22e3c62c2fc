from __future__ import annotations

from dataclasses import dataclass

from .strategies.base import CheckInStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.present_strategy import PresentStrategy


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose the check-in strategy for a wall-clock time."""

    def for_checkin(self, *, time_in: str, threshold: str) -> CheckInStrategy:
        # Both are zero-padded HH:MM, so string order is time order.
        if time_in > threshold:
            return LateStrategy()
        return PresentStrategy()
