from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..common.http import json_object
from ..common.validators import require_int
from ..core.enums import ScanMethod
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from ..container import Container
from ..sessions.guard import make_token_required

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    token_required = make_token_required(container.session_authority)

    @app.route("/api/attendance/record", methods=["POST"], endpoint="record_scan")
    @token_required
    def record_scan():
        data = json_object()
        try:
            student_id = require_int(data.get("studentId"), "Student ID")
            try:
                method = ScanMethod(data.get("scanMethod") or ScanMethod.MANUAL.value)
            except (TypeError, ValueError):
                raise ValidationError("Invalid scan method")

            result = container.attendance_service.record_scan(student_id, method)
        except ValidationError as e:
            return jsonify({"message": str(e)}), 400
        except NotFoundError as e:
            return jsonify({"message": str(e)}), 404
        except ConflictError as e:
            return jsonify({"message": str(e)}), 409
        except Exception:
            logger.exception("Record attendance failed")
            return jsonify({"message": "Internal server error"}), 500

        return jsonify(
            {
                "message": result.message,
                "action": result.outcome.value,
                "studentName": result.student.name,
                "remarks": result.remarks.value,
                "time": result.time,
                "timeIn": result.record.time_in,
                "timeOut": result.record.time_out,
                "scanMethod": result.method.value,
            }
        )

    @app.route("/api/attendance", methods=["POST"], endpoint="manual_attendance")
    @token_required
    def manual_attendance():
        data = json_object()
        if not data.get("student_id") or not data.get("date"):
            return jsonify({"message": "Student ID and date are required"}), 400

        try:
            result = container.attendance_service.record_manual(
                student_id=data.get("student_id"),
                attendance_date=data.get("date"),
                time_in=data.get("time_in"),
                time_out=data.get("time_out"),
                remarks=data.get("remarks"),
            )
        except ValidationError as e:
            return jsonify({"message": str(e)}), 400
        except Exception:
            logger.exception("Manual attendance failed")
            return jsonify({"message": "Internal server error"}), 500

        if result.updated:
            return jsonify({"message": "Attendance updated successfully", "updated": True, "id": result.record_id})
        return jsonify({"message": "Attendance recorded successfully", "id": result.record_id})

    @app.route("/api/attendance", methods=["GET"], endpoint="list_attendance")
    @token_required
    def list_attendance():
        try:
            rows = container.attendance_service.list_records(attendance_date=request.args.get("date"))
        except ValidationError as e:
            return jsonify({"message": str(e)}), 400
        except Exception:
            logger.exception("List attendance failed")
            return jsonify({"message": "Internal server error"}), 500

        return jsonify(
            {
                "attendance": [
                    {
                        "id": r.record_id,
                        "student_id": r.student_id,
                        "student_name": r.student_name,
                        "strand": r.strand.value,
                        "date": r.attendance_date.isoformat(),
                        "time_in": r.time_in,
                        "time_out": r.time_out,
                        "remarks": r.remarks.value,
                    }
                    for r in rows
                ]
            }
        )

    @app.route("/api/dashboard/stats", methods=["GET"], endpoint="dashboard_stats")
    @token_required
    def dashboard_stats():
        try:
            stats = container.attendance_service.stats()
        except Exception:
            logger.exception("Dashboard stats failed")
            return jsonify({"message": "Internal server error"}), 500

        return jsonify(
            {
                "date": stats.stats_date.isoformat(),
                "totalStudents": stats.total_students,
                "totalAttendanceToday": stats.present_today,
                "strandCounts": {strand.value: n for strand, n in stats.strand_counts.items()},
                "absentStudents": [
                    {"id": a.student_id, "name": a.student_name, "absent_days": a.absent_days}
                    for a in stats.frequent_absentees
                ],
            }
        )
