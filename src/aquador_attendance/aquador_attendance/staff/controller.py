from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import json_body, outcome_payload
from ..common.validators import optional_iso_date, parse_mode, require_non_empty
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/staff-attendance/record", methods=["POST"], endpoint="staff_attendance_record")
    def staff_attendance_record():
        body = json_body()
        outcome = container.staff_attendance_service.record(
            require_non_empty(body.get("profile_id"), "profile_id"),
            mode=parse_mode(body.get("mode")),
            attended_on=optional_iso_date(body.get("selected_date"), "selected_date"),
        )
        return jsonify(outcome_payload(outcome)), 200
