from __future__ import annotations

from typing import Dict, Optional, Protocol

from ..core.enums import Strand
from .model import Student


class StudentRepository(Protocol):
    def get_by_id(self, student_id: int) -> Optional[Student]:
        raise NotImplementedError

    def get_by_qr_code(self, qr_code: str) -> Optional[Student]:
        raise NotImplementedError

    def count_by_strand(self) -> Dict[Strand, int]:
        """Number of enrolled students per strand; strands with none may be omitted."""

        raise NotImplementedError
