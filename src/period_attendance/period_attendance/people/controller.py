from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import body, json_endpoint, text_field
from ..core.constants import ALL_PERIODS
from ..core.enums import SortField
from ..core.exceptions import ValidationError
from ..container import Container
from .service import search_people, sort_people


def register(app: Flask, container: Container) -> None:
    roster = container.roster_service
    notes = container.note_service

    @app.route("/api/people", methods=["GET"], endpoint="api_people")
    @json_endpoint
    def api_people():
        try:
            sort_field = SortField(request.args.get("sort") or SortField.LAST_NAME.value)
        except ValueError:
            raise ValidationError("sort must be firstName, lastName or note")
        period_filter = request.args.get("period") or ALL_PERIODS

        all_notes = notes.all()
        people = search_people(roster.all(), request.args.get("q", ""))
        people = sort_people(people, sort_field=sort_field, notes=all_notes, period_filter=period_filter)
        return jsonify(
            [
                {
                    "person_id": p.person_id,
                    "first_name": p.first_name,
                    "last_name": p.last_name,
                    "role": p.role.value,
                    "email": p.email,
                    "note": all_notes.get((p.person_id, period_filter)) if period_filter != ALL_PERIODS else None,
                }
                for p in people
            ]
        )

    @app.route("/api/people", methods=["POST"], endpoint="api_person_add")
    @json_endpoint
    def api_person_add():
        data = body()
        person_id = roster.add(full_name=data.get("name"), role=text_field(data, "role") or "student", email=text_field(data, "email"))
        return jsonify({"success": True, "person_id": person_id}), 201

    @app.route("/api/people/<person_id>", methods=["PUT"], endpoint="api_person_edit")
    @json_endpoint
    def api_person_edit(person_id):
        data = body()
        roster.edit(person_id=person_id, full_name=data.get("name"), role=text_field(data, "role") or "student", email=text_field(data, "email"))
        return jsonify({"success": True})

    @app.route("/api/people/<person_id>", methods=["DELETE"], endpoint="api_person_remove")
    @json_endpoint
    def api_person_remove(person_id):
        roster.remove(person_id=person_id)
        return jsonify({"success": True})

    @app.route("/api/notes/<person_id>/<period_id>", methods=["PUT"], endpoint="api_note_save")
    @json_endpoint
    def api_note_save(person_id, period_id):
        notes.save(person_id=person_id, period_id=period_id, note=text_field(body(), "note"))
        return jsonify({"success": True})
