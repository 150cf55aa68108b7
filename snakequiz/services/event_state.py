import datetime

from flask import current_app

EXTENSION_KEY = "snakequiz"


def epoch_ms(moment):
    """Milliseconds since the epoch for a naive UTC datetime."""
    return int(moment.replace(tzinfo=datetime.timezone.utc).timestamp() * 1000)


def make_session_record(player):
    return {
        "id": player.id,
        "event_id": player.event_id,
        "org": player.org,
        "name": player.name,
        "designation": player.designation,
        "score": player.score or 0,
        "finished": bool(player.finished),
        "finishTime": epoch_ms(player.finish_time) if player.finish_time else None,
        "answers": [],
    }


class EventSession:
    """
    Current-event pointer plus the live mirror of that event's players.

    Only the service layer mutates it. Changing the current event always
    goes through activate(), which drops every session record that belonged
    to the previous event.
    """

    def __init__(self):
        self.current_event_id = None
        self.current_event_name = None
        self._players = {}

    def activate(self, event_id, event_name, reset=False):
        if reset or event_id != self.current_event_id:
            self._players = {}
        self.current_event_id = event_id
        self.current_event_name = event_name

    def clear_pointer(self):
        self.activate(None, None)

    def add_player(self, record):
        self._players[record["id"]] = record

    def get_player(self, player_id):
        # Ints and digit strings only; bools and floats never name a player
        if isinstance(player_id, str) and player_id.strip().isdigit():
            player_id = int(player_id)
        if isinstance(player_id, bool) or not isinstance(player_id, int):
            return None
        return self._players.get(player_id)

    def drop_event_players(self, event_id):
        for pid in [pid for pid, p in self._players.items() if p["event_id"] == event_id]:
            del self._players[pid]

    def players(self):
        # insertion order == registration order
        return list(self._players.values())


def init_event_session(app):
    session = EventSession()
    app.extensions[EXTENSION_KEY] = session
    return session


def get_event_session(app=None):
    app = app or current_app
    return app.extensions[EXTENSION_KEY]
