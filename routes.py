import logging

from flask import Blueprint, jsonify, request
from flask_login import current_user, login_required

from auth import admin_required
from errors import NotFoundError, ValidationError
from extensions import get_storage
from models import GUEST_USER_ID, to_timestamp, utcnow
from schemas import EventIn, EventPatch, RegistrationIn

logger = logging.getLogger(__name__)

api_bp = Blueprint("api", __name__, url_prefix="/api")


def parse_id(raw, label="event"):
    try:
        return int(raw)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid {label} ID")


def _json_body():
    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        raise ValidationError("Request body must be a JSON object")
    return body


def _require_event(storage, event_id):
    event = storage.get_event(event_id)
    if event is None:
        raise NotFoundError("Event not found")
    return event


# =====================
# EVENTS
# =====================
@api_bp.get("/events")
def list_events():
    storage = get_storage()
    category = request.args.get("category")
    search = request.args.get("search", "").strip()

    events = storage.list_events_by_category(category) if category else storage.list_events()

    if search:
        needle = search.lower()
        events = [
            e for e in events
            if needle in e.title.lower() or needle in e.description.lower()
        ]

    return jsonify([e.to_dict() for e in events])


@api_bp.get("/events/featured")
def featured_events():
    return jsonify([e.to_dict() for e in get_storage().list_featured_events()])


@api_bp.get("/events/<event_id>")
def get_event(event_id):
    event = _require_event(get_storage(), parse_id(event_id))
    return jsonify(event.to_dict())


@api_bp.post("/events")
@admin_required
def create_event():
    body = EventIn.model_validate(_json_body())
    event = get_storage().create_event(body.to_record())
    logger.info("Event %d created by %s", event.id, current_user.username)
    return jsonify(event.to_dict()), 201


@api_bp.route("/events/<event_id>", methods=["PUT", "PATCH"])
@admin_required
def update_event(event_id):
    storage = get_storage()
    event_id = parse_id(event_id)
    event = _require_event(storage, event_id)

    changes = EventPatch.model_validate(_json_body()).to_changes()

    start = to_timestamp(changes.get("date", event.date))
    end = changes["end_date"] if "end_date" in changes else event.end_date
    if end is not None and to_timestamp(end) < start:
        raise ValidationError("endDate must not be before date")

    updated = storage.update_event(event_id, changes)
    if updated is None:
        # Deleted between the lookup and the write.
        raise NotFoundError("Event not found")
    logger.info("Event %d updated by %s (%s)", event_id, current_user.username, ", ".join(sorted(changes)) or "no changes")
    return jsonify(updated.to_dict())


@api_bp.delete("/events/<event_id>")
@admin_required
def delete_event(event_id):
    storage = get_storage()
    event_id = parse_id(event_id)
    _require_event(storage, event_id)

    if not storage.delete_event(event_id):
        raise NotFoundError("Event not found")

    # also delete related registrations
    removed = storage.delete_registrations_by_event(event_id)
    logger.info("Event %d deleted by %s (%d registration(s) removed)", event_id, current_user.username, removed)
    return "", 204


# =====================
# REGISTRATIONS
# =====================
@api_bp.post("/registrations")
def create_registration():
    body = RegistrationIn.model_validate(_json_body())
    storage = get_storage()
    _require_event(storage, body.event_id)

    user_id = current_user.id if current_user.is_authenticated else GUEST_USER_ID
    registration = storage.create_registration({
        "user_id": user_id,
        "event_id": body.event_id,
        "full_name": body.full_name,
        "email": str(body.email),
        "phone": body.phone,
        "tickets": body.tickets,
        "registration_date": utcnow(),
    })
    logger.info(
        "Registration %d for event %d (%s, %d ticket(s))",
        registration.id, registration.event_id,
        "guest" if registration.is_guest else f"user {user_id}", registration.tickets,
    )
    return jsonify(registration.to_dict()), 201


@api_bp.get("/registrations/event/<event_id>")
@admin_required
def event_registrations(event_id):
    event_id = parse_id(event_id)
    return jsonify([r.to_dict() for r in get_storage().list_registrations_by_event(event_id)])


@api_bp.get("/registrations/user")
@login_required
def my_registrations():
    registrations = get_storage().list_registrations_by_user(current_user.id)
    return jsonify([r.to_dict() for r in registrations])
