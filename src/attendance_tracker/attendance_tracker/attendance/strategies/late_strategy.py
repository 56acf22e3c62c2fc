from __future__ import annotations

from ...core.enums import Remarks
from .base import CheckInDecision, CheckInStrategy


class LateStrategy(CheckInStrategy):
    """Late check-in."""

    def decide_checkin(self, *, time_in: str, threshold: str) -> CheckInDecision:
        return CheckInDecision(remarks=Remarks.LATE, message="Marked as late arrival")
