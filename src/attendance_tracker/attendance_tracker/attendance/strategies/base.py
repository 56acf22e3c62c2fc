from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from ...core.enums import Remarks


@dataclass(frozen=True)
class CheckInDecision:
    remarks: Remarks
    message: str


class CheckInStrategy(ABC):
    """Strategy Pattern: encapsulate how a first scan of the day is classified."""

    @abstractmethod
    def decide_checkin(self, *, time_in: str, threshold: str) -> CheckInDecision:
        raise NotImplementedError
