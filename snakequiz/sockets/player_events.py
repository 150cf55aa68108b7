from snakequiz.services import event_service
from snakequiz.services.errors import EventServiceError
from snakequiz.services.event_state import get_event_session


def register_player_events(socketio):

    # ---------------------------
    # PLAYER REGISTRATION
    # ---------------------------
    @socketio.on("registerPlayer")
    def handle_register(data=None):
        data = data or {}
        try:
            return event_service.register_player(
                get_event_session(),
                data.get("org"),
                data.get("name"),
                data.get("designation"),
            )
        except EventServiceError as e:
            return e.to_reply()

    # ---------------------------
    # ANSWER (one per snake hit)
    # ---------------------------
    @socketio.on("answerQuestion")
    def handle_answer(data=None):
        try:
            return event_service.submit_answer(get_event_session(), data)
        except EventServiceError as e:
            return e.to_reply()

    # ---------------------------
    # FINISH
    # ---------------------------
    @socketio.on("finishQuiz")
    def handle_finish(data=None):
        try:
            return event_service.finish_quiz(get_event_session(), data)
        except EventServiceError as e:
            return e.to_reply()
