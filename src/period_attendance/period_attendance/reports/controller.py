from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import json_endpoint, optional_day
from ..core.enums import ReportPreset
from ..core.exceptions import ValidationError
from ..container import Container
from .statistics import SummaryStats


def summary_to_dict(s: SummaryStats) -> dict:
    return {
        "present_percentage": s.present_percentage,
        "total_minutes_late": s.total_minutes_late,
        "possible_minutes": s.possible_minutes,
        "attended_minutes": s.attended_minutes,
        "per_period": {
            period_id: {
                "possible_minutes": t.possible,
                "attended_minutes": t.attended,
                "percentage": t.percentage,
            }
            for period_id, t in s.per_period.items()
        },
    }


def register(app: Flask, container: Container) -> None:
    service = container.report_service

    def _preset() -> ReportPreset:
        try:
            return ReportPreset(request.args.get("preset") or ReportPreset.ALL.value)
        except ValueError:
            raise ValidationError("preset must be week, month or all")

    @app.route("/api/reports/people/<person_id>", methods=["GET"], endpoint="api_person_report")
    @json_endpoint
    def api_person_report(person_id):
        report = service.person_report(
            person_id=person_id,
            preset=_preset(),
            start=optional_day(request.args.get("start"), "start"),
            end=optional_day(request.args.get("end"), "end"),
        )
        return jsonify(
            {
                "person_id": report.person.person_id,
                "full_name": report.person.full_name,
                "start": report.start.isoformat() if report.start else None,
                "end": report.end.isoformat() if report.end else None,
                "summary": summary_to_dict(report.summary),
                "weekly": [{"week": w.week, "percentage": w.percentage} for w in report.weekly],
            }
        )

    @app.route("/api/reports/dashboard", methods=["GET"], endpoint="api_dashboard")
    @json_endpoint
    def api_dashboard():
        dashboard = service.dashboard(preset=_preset())

        def rows(items):
            return [
                {
                    "person_id": r.person.person_id,
                    "full_name": r.person.full_name,
                    "present_percentage": r.summary.present_percentage,
                    "total_minutes_late": r.summary.total_minutes_late,
                    "band": r.band,
                }
                for r in items
            ]

        return jsonify(
            {
                "start": dashboard.start.isoformat() if dashboard.start else None,
                "end": dashboard.end.isoformat() if dashboard.end else None,
                "students": rows(dashboard.students),
                "staff": rows(dashboard.staff),
            }
        )
