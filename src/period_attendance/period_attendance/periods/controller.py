from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import body, json_endpoint, optional_day, parse_day
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.period_service

    @app.route("/api/periods", methods=["GET"], endpoint="api_periods")
    @json_endpoint
    def api_periods():
        return jsonify(
            [
                {
                    "period_id": p.period_id,
                    "name": p.name,
                    "start_time": p.start_time.strftime("%H:%M"),
                    "duration_minutes": p.duration_minutes,
                    "index": i,
                }
                for i, p in enumerate(service.ordered())
            ]
        )

    @app.route("/api/periods", methods=["POST"], endpoint="api_period_add")
    @json_endpoint
    def api_period_add():
        data = body()
        period_id = service.add(name=data.get("name"), start_time=data.get("start_time"), duration=data.get("duration_minutes"))
        return jsonify({"success": True, "period_id": period_id}), 201

    @app.route("/api/periods/<period_id>", methods=["PUT"], endpoint="api_period_edit")
    @json_endpoint
    def api_period_edit(period_id):
        data = body()
        service.edit(
            period_id=period_id,
            name=data.get("name"),
            start_time=data.get("start_time"),
            duration=data.get("duration_minutes"),
        )
        return jsonify({"success": True})

    @app.route("/api/periods/<period_id>", methods=["DELETE"], endpoint="api_period_remove")
    @json_endpoint
    def api_period_remove(period_id):
        service.remove(period_id=period_id)
        return jsonify({"success": True})

    @app.route("/api/overrides", methods=["PUT"], endpoint="api_override_set")
    @json_endpoint
    def api_override_set():
        data = body()
        service.set_override(
            override_date=optional_day(data.get("date")),
            period_id=data.get("period_id"),
            new_time=data.get("new_time"),
        )
        return jsonify({"success": True})

    @app.route("/api/overrides/<day>/<period_id>", methods=["DELETE"], endpoint="api_override_remove")
    @json_endpoint
    def api_override_remove(day, period_id):
        service.remove_override(override_date=parse_day(day), period_id=period_id)
        return jsonify({"success": True})
