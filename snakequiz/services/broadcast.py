import logging

from extensions import socketio

logger = logging.getLogger(__name__)

ADMIN_UPDATE_EVENT = "adminUpdate"

EVENT_CHANGED = "eventChanged"
PLAYER_REGISTERED = "playerRegistered"
ANSWER = "answer"
FINISHED = "finished"


def publish(update_type, leaderboard, **fields):
    """
    Fan out one update to every connected client.
    Called after the store change is committed. Best effort: nothing is
    queued or acknowledged, clients resync through getEventInfo.
    """
    payload = {"type": update_type}
    payload.update(fields)
    payload["leaderboard"] = leaderboard
    socketio.emit(ADMIN_UPDATE_EVENT, payload)
    logger.debug("Broadcast %s (%d leaderboard rows)", update_type, len(leaderboard))
    return payload
