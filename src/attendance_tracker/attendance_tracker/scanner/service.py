from __future__ import annotations

import logging
from typing import Mapping, Optional

from ..core.enums import ScanMethod
from ..core.exceptions import NotFoundError, ValidationError
from ..students.model import Student
from ..students.repository import StudentRepository
from .recognizer import Recognizer

logger = logging.getLogger(__name__)


class ScannerService:
    """Use case: turn an uploaded image into a known student."""

    def __init__(self, students: StudentRepository, recognizers: Optional[Mapping[ScanMethod, Recognizer]] = None):
        self._students = students
        self._recognizers = dict(recognizers or {})

    def identify(self, method: ScanMethod, image: bytes) -> Student:
        recognizer = self._recognizers.get(method)
        if recognizer is None:
            raise ValidationError("Invalid scan type")
        if not image:
            raise ValidationError("Image and scan type required")

        identifier = recognizer.detect(image)
        if not identifier:
            raise NotFoundError(f"No {method.value} match detected in image")

        student = self._lookup(method, identifier)
        if student is None:
            logger.info("Recognized %s identifier %r matches no student", method.value, identifier)
            raise NotFoundError("Student not found")
        return student

    def _lookup(self, method: ScanMethod, identifier: str) -> Optional[Student]:
        if method == ScanMethod.QR:
            return self._students.get_by_qr_code(identifier)
        try:
            return self._students.get_by_id(int(identifier))
        except ValueError:
            return None
