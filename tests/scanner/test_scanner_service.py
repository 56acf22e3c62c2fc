from __future__ import annotations

import pytest

from src.attendance_tracker.attendance_tracker.core.enums import ScanMethod
from src.attendance_tracker.attendance_tracker.core.exceptions import NotFoundError, ValidationError
from src.attendance_tracker.attendance_tracker.scanner.service import ScannerService


class FixedRecognizer:
    def __init__(self, identifier):
        self.identifier = identifier
        self.calls = []

    def detect(self, image: bytes):
        self.calls.append(image)
        return self.identifier


def test_qr_recognizer_resolves_badge_code(students_repo):
    qr = FixedRecognizer("STU-1B84E0D7")
    svc = ScannerService(students_repo, {ScanMethod.QR: qr})

    student = svc.identify(ScanMethod.QR, b"\x89PNG...")

    assert student.student_id == 7
    assert qr.calls == [b"\x89PNG..."]


def test_face_recognizer_resolves_student_id(students_repo):
    svc = ScannerService(students_repo, {ScanMethod.FACE: FixedRecognizer("42")})

    assert svc.identify(ScanMethod.FACE, b"jpeg").name == "Juan Dela Cruz"


def test_method_without_recognizer_is_invalid(students_repo):
    svc = ScannerService(students_repo, {ScanMethod.QR: FixedRecognizer("STU-1B84E0D7")})

    with pytest.raises(ValidationError, match="Invalid scan type"):
        svc.identify(ScanMethod.FACE, b"jpeg")


def test_empty_image_is_rejected_before_detection(students_repo):
    qr = FixedRecognizer("STU-1B84E0D7")
    svc = ScannerService(students_repo, {ScanMethod.QR: qr})

    with pytest.raises(ValidationError):
        svc.identify(ScanMethod.QR, b"")
    assert qr.calls == []


@pytest.mark.parametrize(
    "method, identifier",
    [
        (ScanMethod.QR, None),
        (ScanMethod.QR, "STU-UNKNOWN"),
        (ScanMethod.FACE, "999"),
        (ScanMethod.FACE, "not-an-id"),
    ],
)
def test_unrecognized_or_unknown_student_is_not_found(students_repo, method, identifier):
    svc = ScannerService(students_repo, {method: FixedRecognizer(identifier)})

    with pytest.raises(NotFoundError):
        svc.identify(method, b"image")
