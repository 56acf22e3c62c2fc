from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..core.enums import ScanMethod
from ..core.exceptions import NotFoundError, ValidationError
from ..container import Container
from ..sessions.guard import make_token_required

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    token_required = make_token_required(container.session_authority)

    @app.route("/api/scanner/process", methods=["POST"], endpoint="scanner_process")
    @token_required
    def scanner_process():
        """Identify the student in an uploaded image; recording is a separate call."""
        image = request.files.get("image")
        scan_type = request.form.get("scanType", "")
        if image is None or not scan_type:
            return jsonify({"message": "Image and scan type required"}), 400

        try:
            try:
                method = ScanMethod(scan_type)
            except ValueError:
                raise ValidationError("Invalid scan type")
            student = container.scanner_service.identify(method, image.read())
        except ValidationError as e:
            return jsonify({"message": str(e)}), 400
        except NotFoundError as e:
            return jsonify({"message": str(e)}), 404
        except Exception:
            logger.exception("Scanner processing failed")
            return jsonify({"message": "Internal server error"}), 500

        return jsonify(
            {
                "studentId": student.student_id,
                "studentName": student.name,
                "message": f"{method.value.upper()} scan matched {student.name}",
            }
        )
