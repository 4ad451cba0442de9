from __future__ import annotations

from datetime import date

from flask import Flask, jsonify, request

from ..common.http import body, id_list, json_endpoint, optional_day, text_field
from ..container import Container
from .model import AbsenceDraft, AbsenceGroup, AbsenceRange


def _draft(data: dict) -> AbsenceDraft:
    return AbsenceDraft(
        start_date=optional_day(data.get("start_date"), "start_date"),
        end_date=optional_day(data.get("end_date"), "end_date"),
        start_period_id=str(data.get("start_period_id") or ""),
        end_period_id=str(data.get("end_period_id") or ""),
        note=text_field(data, "note") or "",
    )


def absence_to_dict(r: AbsenceRange) -> dict:
    return {
        "absence_id": r.absence_id,
        "person_id": r.person_id,
        "group_id": r.group_id,
        "start_date": r.start_date.isoformat(),
        "end_date": r.end_date.isoformat(),
        "start_period_id": r.start_period_id,
        "end_period_id": r.end_period_id,
        "note": r.note,
    }


def group_to_dict(g: AbsenceGroup) -> dict:
    return {
        "group_id": g.group_id,
        "start_date": g.start_date.isoformat(),
        "end_date": g.end_date.isoformat(),
        "start_period_id": g.start_period_id,
        "end_period_id": g.end_period_id,
        "note": g.note,
        "person_ids": list(g.person_ids),
    }


def register(app: Flask, container: Container) -> None:
    single = container.absence_service
    groups = container.group_absence_service

    @app.route("/api/absences", methods=["GET"], endpoint="api_absences")
    @json_endpoint
    def api_absences():
        person_id = request.args.get("person_id")
        records = single.for_person(person_id) if person_id else single.all()
        return jsonify([absence_to_dict(r) for r in records])

    @app.route("/api/absences", methods=["POST"], endpoint="api_absence_add")
    @json_endpoint
    def api_absence_add():
        data = body()
        absence_id = single.create(person_id=str(data.get("person_id") or ""), draft=_draft(data))
        return jsonify({"success": True, "absence_id": absence_id}), 201

    @app.route("/api/absences/<absence_id>", methods=["PUT"], endpoint="api_absence_edit")
    @json_endpoint
    def api_absence_edit(absence_id):
        single.update(absence_id=absence_id, draft=_draft(body()))
        return jsonify({"success": True})

    @app.route("/api/absences/<absence_id>", methods=["DELETE"], endpoint="api_absence_remove")
    @json_endpoint
    def api_absence_remove(absence_id):
        single.remove(absence_id=absence_id)
        return jsonify({"success": True})

    @app.route("/api/absence-groups", methods=["GET"], endpoint="api_absence_groups")
    @json_endpoint
    def api_absence_groups():
        listing = groups.listing(today=date.today())
        return jsonify(
            {
                "upcoming": [group_to_dict(g) for g in listing.upcoming],
                "past": [group_to_dict(g) for g in listing.past],
            }
        )

    @app.route("/api/absence-groups", methods=["POST"], endpoint="api_absence_group_add")
    @json_endpoint
    def api_absence_group_add():
        data = body()
        group_id = groups.create_group(person_ids=id_list(data, "person_ids"), draft=_draft(data))
        return jsonify({"success": True, "group_id": group_id}), 201

    @app.route("/api/absence-groups/<group_id>", methods=["PUT"], endpoint="api_absence_group_edit")
    @json_endpoint
    def api_absence_group_edit(group_id):
        data = body()
        groups.edit_group(group_id=group_id, person_ids=id_list(data, "person_ids"), draft=_draft(data))
        return jsonify({"success": True})

    @app.route("/api/absence-groups/<group_id>", methods=["DELETE"], endpoint="api_absence_group_remove")
    @json_endpoint
    def api_absence_group_remove(group_id):
        removed = groups.delete_group(group_id=group_id)
        return jsonify({"success": True, "removed": removed})
