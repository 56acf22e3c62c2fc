from __future__ import annotations

from typing import Optional, Protocol


class Recognizer(Protocol):
    """External detection capability plugged in per scan method.

    `detect` returns the recognized identifier (a badge QR code for the qr
    method, a student id for face) or None when nothing was recognized. No
    accuracy is guaranteed.
    """

    def detect(self, image: bytes) -> Optional[str]:
        raise NotImplementedError
