from __future__ import annotations

import csv
import io
from datetime import timedelta

from flask import Flask, jsonify, request

from ..common.http import json_body, outcome_payload
from ..common.validators import optional_iso_date, parse_mode, require_iso_date, require_non_empty
from ..core.constants import DEFAULT_REPORT_DAYS
from ..core.enums import AttendanceMode
from ..core.exceptions import ValidationError
from ..container import Container
from .report import REPORT_FIELDS


def register(app: Flask, container: Container) -> None:
    service = container.attendance_service

    def _flag(value) -> bool:
        if isinstance(value, str):
            return value.strip().lower() in {"true", "1"}
        return value is True or value == 1

    def _enrollment_id(body: dict) -> int:
        raw = require_non_empty(body.get("enrollment_id"), "enrollment_id")
        try:
            return int(raw)
        except ValueError as e:
            raise ValidationError("enrollment_id invalide") from e

    @app.route("/api/attendance/record", methods=["POST"], endpoint="attendance_record")
    def attendance_record():
        """RPC entry point used by the QR scanner and the learner app."""

        body = json_body()
        learner_id = require_non_empty(body.get("profile_id") or body.get("learner_id"), "profile_id")
        outcome = service.record(
            learner_id,
            mode=parse_mode(body.get("mode")),
            attended_on=optional_iso_date(body.get("selected_date") or body.get("date"), "selected_date"),
        )
        return jsonify(outcome_payload(outcome)), 200

    @app.route("/api/attendance/scan", methods=["POST"], endpoint="attendance_scan")
    def attendance_scan():
        """The QR payload is the learner's profile id; scanning toggles arrival/departure."""

        body = json_body()
        learner_id = require_non_empty(body.get("qr_code"), "qr_code")
        outcome = service.record(
            learner_id,
            mode=AttendanceMode.TOGGLE,
            attended_on=optional_iso_date(body.get("selected_date"), "selected_date"),
        )
        return jsonify(outcome_payload(outcome)), 200

    @app.route("/api/attendance/enrollment", methods=["POST"], endpoint="attendance_enrollment")
    def attendance_enrollment():
        body = json_body()
        enrollment_id = _enrollment_id(body)
        attended_on = require_iso_date(body.get("attended_on"), "attended_on")
        action = parse_mode(body.get("action"))

        if action == AttendanceMode.CHECK_IN:
            outcome = service.check_in_enrollment(enrollment_id, attended_on)
        elif action == AttendanceMode.CHECK_OUT:
            outcome = service.check_out_enrollment(enrollment_id, attended_on)
        else:
            raise ValidationError("action doit être check-in ou check-out")
        return jsonify(outcome_payload(outcome)), 200

    @app.route("/api/attendance/mark-absent", methods=["POST"], endpoint="attendance_mark_absent")
    def attendance_mark_absent():
        body = json_body()
        enrollment_id = _enrollment_id(body)
        attended_on = require_iso_date(body.get("attended_on"), "attended_on")

        if _flag(body.get("undo")):
            outcome = service.undo_checkin(enrollment_id, attended_on)
        else:
            outcome = service.mark_absent(enrollment_id, attended_on)
        return jsonify(outcome_payload(outcome)), 200

    @app.route("/api/attendance/undo-checkin", methods=["POST"], endpoint="attendance_undo_checkin")
    def attendance_undo_checkin():
        body = json_body()
        outcome = service.undo_checkin(_enrollment_id(body), require_iso_date(body.get("attended_on"), "attended_on"))
        return jsonify(outcome_payload(outcome)), 200

    @app.route("/api/attendance/undo-checkout", methods=["POST"], endpoint="attendance_undo_checkout")
    def attendance_undo_checkout():
        body = json_body()
        outcome = service.undo_checkout(_enrollment_id(body), require_iso_date(body.get("attended_on"), "attended_on"))
        return jsonify(outcome_payload(outcome)), 200

    def _write_report_csv(*, data, filename: str):
        out = io.StringIO()
        writer = csv.DictWriter(out, fieldnames=REPORT_FIELDS)
        writer.writeheader()
        for row in data.rows:
            writer.writerow(row)

        csv_bytes = out.getvalue().encode("utf-8-sig")
        return app.response_class(
            csv_bytes,
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    @app.route("/api/attendance/report", methods=["GET"], endpoint="attendance_report")
    def attendance_report():
        end = optional_iso_date(request.args.get("end"), "end") or service.today()
        start = optional_iso_date(request.args.get("start"), "start") or end - timedelta(days=DEFAULT_REPORT_DAYS - 1)
        profile_id = (request.args.get("profile_id") or "").strip() or None

        data = container.report_service.build_report(start=start, end=end, profile_id=profile_id)

        if (request.args.get("format") or "").lower() == "csv":
            return _write_report_csv(data=data, filename=f"presences_{start.isoformat()}_{end.isoformat()}.csv")
        return jsonify({"start": start.isoformat(), "end": end.isoformat(), "rows": data.rows, "summary": data.summary})
