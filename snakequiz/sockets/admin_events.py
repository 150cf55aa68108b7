import logging

from flask import request

from snakequiz.services import event_service
from snakequiz.services.errors import EventServiceError
from snakequiz.services.event_state import get_event_session

logger = logging.getLogger(__name__)


def register_admin_events(socketio):

    @socketio.on("connect")
    def handle_connect(auth=None):
        logger.info("Client connected: %s", request.sid)

    @socketio.on("disconnect")
    def handle_disconnect(reason=None):
        logger.info("Client disconnected: %s", request.sid)

    # ---------------------------
    # EVENT INFO (admin + player)
    # ---------------------------
    @socketio.on("getEventInfo")
    def handle_get_event_info(data=None):
        try:
            return event_service.get_event_info(get_event_session())
        except EventServiceError as e:
            return e.to_reply()

    # ---------------------------
    # CREATE / SWITCH / DELETE EVENT
    # ---------------------------
    @socketio.on("createEvent")
    def handle_create_event(data=None):
        try:
            return event_service.create_event(get_event_session(), (data or {}).get("name"))
        except EventServiceError as e:
            return e.to_reply()

    @socketio.on("switchEvent")
    def handle_switch_event(data=None):
        try:
            return event_service.switch_event(get_event_session(), (data or {}).get("eventId"))
        except EventServiceError as e:
            return e.to_reply()

    @socketio.on("deleteEvent")
    def handle_delete_event(data=None):
        try:
            return event_service.delete_event(get_event_session(), (data or {}).get("eventId"))
        except EventServiceError as e:
            return e.to_reply()

    # ---------------------------
    # HISTORY VIEWER
    # ---------------------------
    @socketio.on("getEventResults")
    def handle_get_event_results(data=None):
        try:
            return event_service.get_event_results((data or {}).get("eventId"))
        except EventServiceError as e:
            return e.to_reply()
