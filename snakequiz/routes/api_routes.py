from flask import Blueprint, Response, jsonify, request

from snakequiz.models.timestamps import utc_iso
from snakequiz.services import event_service
from snakequiz.services.errors import EventNotFound, EventServiceError
from snakequiz.services.event_state import get_event_session
from snakequiz.services.export_service import export_event_csv
from snakequiz.services.log_service import recent_entries

api_bp = Blueprint("api", __name__)

ERROR_STATUS = {
    "no_name": 400,
    "no_id": 400,
    "no_event": 400,
    "already_played": 409,
    "db_error": 500,
    "error": 400,
}


def _error_response(err):
    return jsonify(err.to_reply()), ERROR_STATUS.get(err.code, 400)


@api_bp.route("/events", methods=["GET"])
def event_info():
    try:
        return jsonify(event_service.get_event_info(get_event_session()))
    except EventServiceError as e:
        return _error_response(e)


@api_bp.route("/events", methods=["POST"])
def create_event():
    data = request.get_json(silent=True) or {}
    try:
        return jsonify(event_service.create_event(get_event_session(), data.get("name")))
    except EventServiceError as e:
        return _error_response(e)


@api_bp.route("/events/<event_id>/activate", methods=["POST"])
def switch_event(event_id):
    try:
        return jsonify(event_service.switch_event(get_event_session(), event_id))
    except EventServiceError as e:
        return _error_response(e)


@api_bp.route("/events/<event_id>", methods=["DELETE"])
def delete_event(event_id):
    try:
        return jsonify(event_service.delete_event(get_event_session(), event_id))
    except EventServiceError as e:
        return _error_response(e)


@api_bp.route("/events/<event_id>/results", methods=["GET"])
def event_results(event_id):
    try:
        return jsonify(event_service.get_event_results(event_id))
    except EventServiceError as e:
        return _error_response(e)


# -------------------
# CSV EXPORT (Excel)
# -------------------
@api_bp.route("/events/<event_id>/export.csv", methods=["GET"])
def export_csv(event_id):
    try:
        event_id = event_service.parse_event_id(event_id)
    except EventServiceError:
        return "Invalid event id", 400

    try:
        filename, body = export_event_csv(event_id)
    except EventNotFound:
        return "Event not found", 404
    except EventServiceError:
        return "DB error", 500

    return Response(
        body,
        mimetype="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@api_bp.route("/logs", methods=["GET"])
def admin_logs():
    limit = request.args.get("limit", 200, type=int)
    return jsonify([
        {
            "id": entry.id,
            "created_at": utc_iso(entry.created_at),
            "source": entry.source,
            "message": entry.message,
        }
        for entry in recent_entries(limit)
    ])
