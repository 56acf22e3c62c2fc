from __future__ import annotations

from ...core.enums import Remarks
from .base import CheckInDecision, CheckInStrategy


class PresentStrategy(CheckInStrategy):
    """Check-in at or before the late threshold."""

    def decide_checkin(self, *, time_in: str, threshold: str) -> CheckInDecision:
        return CheckInDecision(remarks=Remarks.PRESENT, message="Marked as present")
