from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Account role used for authorization."""

    ADMIN = "admin"
    TEACHER = "teacher"


class Remarks(str, Enum):
    """Classification stored on an attendance record."""

    PRESENT = "present"
    LATE = "late"
    ABSENT = "absent"


class ScanMethod(str, Enum):
    QR = "qr"
    FACE = "face"
    MANUAL = "manual"


class ScanOutcome(str, Enum):
    """Which ledger transition a scan event applied."""

    CHECKED_IN = "CHECKED_IN"
    CHECKED_OUT = "CHECKED_OUT"
    ALREADY_COMPLETE = "ALREADY_COMPLETE"


class Strand(str, Enum):
    HUMSS = "HUMSS"
    ABM = "ABM"
    CSS = "CSS"
    SMAW = "SMAW"
    AUTO = "AUTO"
    EIM = "EIM"
