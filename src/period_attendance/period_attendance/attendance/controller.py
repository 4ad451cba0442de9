from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import body, json_endpoint, parse_day, text_field
from ..core.enums import AttendanceStatus
from ..core.exceptions import ValidationError
from ..container import Container
from .model import CellStatus


def cell_to_dict(cell: CellStatus) -> dict:
    return {
        "status": cell.status.value,
        "minutes_late": cell.minutes_late,
        "note": cell.note,
        "is_range_excuse": cell.is_range_excuse,
    }


def register(app: Flask, container: Container) -> None:
    service = container.attendance_service

    def _status(value) -> AttendanceStatus:
        try:
            return AttendanceStatus(value)
        except ValueError:
            raise ValidationError("Unknown attendance status")

    @app.route("/api/days/<day>/grid", methods=["GET"], endpoint="api_day_grid")
    @json_endpoint
    def api_day_grid(day):
        on = parse_day(day)
        grid = service.day_grid(on=on)
        return jsonify(
            {
                "date": on.isoformat(),
                "active_period_id": grid.active_period_id,
                "can_undo": grid.can_undo,
                "can_redo": grid.can_redo,
                "periods": [
                    {
                        "period_id": p.period_id,
                        "name": p.name,
                        "start_time": p.effective_start.strftime("%H:%M"),
                        "duration_minutes": p.duration_minutes,
                        "index": p.index,
                    }
                    for p in grid.periods
                ],
                "cells": [
                    {
                        "person_id": c.person_id,
                        "period_id": c.period_id,
                        "is_past": c.is_past,
                        "is_active": c.is_active,
                        **cell_to_dict(c.cell),
                    }
                    for c in grid.cells
                ],
            }
        )

    @app.route("/api/days/<day>/view", methods=["POST"], endpoint="api_day_view")
    @json_endpoint
    def api_day_view(day):
        service.view(parse_day(day))
        return jsonify({"success": True})

    @app.route("/api/days/<day>/cells", methods=["POST"], endpoint="api_mark_cell")
    @json_endpoint
    def api_mark_cell(day):
        on = parse_day(day)
        data = body()
        person_id = str(data.get("person_id") or "")
        period_id = str(data.get("period_id") or "")
        if not person_id or not period_id:
            raise ValidationError("person_id and period_id are required")

        status = _status(data.get("status"))
        if data.get("toggle"):
            result = service.toggle(on=on, person_id=person_id, period_id=period_id, status=status, note=text_field(data, "note"))
        else:
            try:
                minutes_late = int(data.get("minutes_late") or 0)
            except (TypeError, ValueError):
                raise ValidationError("minutes_late must be a number")
            result = service.mark(
                on=on,
                person_id=person_id,
                period_id=period_id,
                status=status,
                note=text_field(data, "note"),
                minutes_late=minutes_late,
            )

        if result is None:
            return jsonify({"success": False, "message": "Person is out on an absence for this period"}), 409
        return jsonify({"success": True, "cell": cell_to_dict(result)})

    @app.route("/api/days/<day>/periods/<period_id>/cells", methods=["DELETE"], endpoint="api_unmark_period")
    @json_endpoint
    def api_unmark_period(day, period_id):
        removed = service.unmark_period(on=parse_day(day), period_id=period_id)
        return jsonify({"success": True, "removed": removed})

    @app.route("/api/days/<day>/undo", methods=["POST"], endpoint="api_undo")
    @json_endpoint
    def api_undo(day):
        return jsonify({"success": service.undo(on=parse_day(day))})

    @app.route("/api/days/<day>/redo", methods=["POST"], endpoint="api_redo")
    @json_endpoint
    def api_redo(day):
        return jsonify({"success": service.redo(on=parse_day(day))})
