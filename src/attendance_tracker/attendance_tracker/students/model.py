from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import Strand


@dataclass(frozen=True)
class Student:
    """Domain entity: a student. `qr_code` is the identifier printed on the badge."""

    student_id: int
    name: str
    strand: Strand
    qr_code: str
