import datetime
import logging

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from extensions import db
from snakequiz.models import Answer, Event, Player
from snakequiz.services import broadcast
from snakequiz.services.errors import EventServiceError, storage_guard
from snakequiz.services.event_state import epoch_ms, make_session_record
from snakequiz.services.leaderboard import build_leaderboard, find_rank
from snakequiz.services.log_service import record_admin_action

logger = logging.getLogger(__name__)


def parse_event_id(value):
    try:
        event_id = int(value)
    except (TypeError, ValueError):
        raise EventServiceError("no_id")
    if event_id <= 0:
        raise EventServiceError("no_id")
    return event_id


def _text(value):
    return "" if value is None else str(value)


def _latest_event():
    return Event.query.order_by(Event.id.desc()).first()


def _event_changed(session):
    leaderboard = build_leaderboard(session.players())
    broadcast.publish(
        broadcast.EVENT_CHANGED,
        leaderboard,
        currentEventId=session.current_event_id,
        currentEventName=session.current_event_name,
    )
    return leaderboard


# ---------------------------
# EVENTS
# ---------------------------

def ensure_current_event(session):
    """Startup: newest event becomes current, or the default event is created."""
    with storage_guard("load events"):
        event = _latest_event()
        if event is None:
            event = Event(name=current_app.config["DEFAULT_EVENT_NAME"])
            db.session.add(event)
            db.session.flush()
            record_admin_action("server", f"Created default event: {event.name} (ID {event.id})")
            db.session.commit()
            logger.info("Created default event: %s (ID %s)", event.name, event.id)

    session.activate(event.id, event.name, reset=True)
    logger.info("Current event: %s (ID %s)", event.name, event.id)
    return event


def get_event_info(session):
    with storage_guard("getEventInfo"):
        events = Event.query.order_by(Event.id.desc()).all()

    current = next((e for e in events if e.id == session.current_event_id), None)
    if current is not None:
        session.activate(current.id, current.name)
    elif events:
        # Pointer went stale (event removed elsewhere): fall back to the newest
        session.activate(events[0].id, events[0].name)
    else:
        session.clear_pointer()

    return {
        "currentEventId": session.current_event_id,
        "currentEventName": session.current_event_name,
        "events": [e.to_dict() for e in events],
        "leaderboard": build_leaderboard(session.players()),
    }


def create_event(session, name):
    name = _text(name).strip()
    if not name:
        raise EventServiceError("no_name")

    with storage_guard("createEvent"):
        event = Event(name=name)
        db.session.add(event)
        db.session.flush()
        record_admin_action("admin", f"Event created: {name} (ID {event.id})")
        db.session.commit()

    session.activate(event.id, event.name, reset=True)
    logger.info("New event created: %s (ID %s)", event.name, event.id)
    _event_changed(session)

    return {
        "ok": True,
        "currentEventId": session.current_event_id,
        "currentEventName": session.current_event_name,
    }


def switch_event(session, event_id):
    event_id = parse_event_id(event_id)

    with storage_guard("switchEvent"):
        event = db.session.get(Event, event_id)
        if event is None:
            raise EventServiceError("error")
        if event.id != session.current_event_id:
            record_admin_action("admin", f"Switched to event: {event.name} (ID {event.id})")
            db.session.commit()

    session.activate(event.id, event.name)
    logger.info("Current event: %s (ID %s)", event.name, event.id)
    _event_changed(session)

    return {
        "ok": True,
        "currentEventId": session.current_event_id,
        "currentEventName": session.current_event_name,
    }


def delete_event(session, event_id):
    """
    Removes answers, then players, then the event row.
    Session records of the event go too; a deleted current event hands the
    pointer to the newest remaining one.
    """
    event_id = parse_event_id(event_id)
    logger.info("Deleting event %s", event_id)

    with storage_guard("deleteEvent"):
        Answer.query.filter_by(event_id=event_id).delete(synchronize_session=False)
        Player.query.filter_by(event_id=event_id).delete(synchronize_session=False)
        Event.query.filter_by(id=event_id).delete(synchronize_session=False)
        record_admin_action("admin", f"Event deleted: ID {event_id}")
        db.session.commit()

    session.drop_event_players(event_id)

    if session.current_event_id in (event_id, None):
        try:
            latest = _latest_event()
        except SQLAlchemyError:
            db.session.rollback()
            logger.exception("select events after delete: database error")
            latest = None
        if latest is not None:
            session.activate(latest.id, latest.name)
        else:
            session.clear_pointer()

    _event_changed(session)
    return {"ok": True}


def get_event_results(event_id):
    """Store rows for any event, current or past; session state is not consulted."""
    event_id = parse_event_id(event_id)

    with storage_guard("getEventResults"):
        players = Player.query.filter_by(event_id=event_id).order_by(Player.id).all()
        answers = Answer.query.filter_by(event_id=event_id) \
            .order_by(Answer.player_id, Answer.q_index) \
            .all()

    return {
        "players": [p.to_dict() for p in players],
        "answers": [a.to_dict() for a in answers],
    }


# ---------------------------
# PLAYERS
# ---------------------------

def register_player(session, org, name, designation):
    # First attempt only. The lookup and the insert are separate steps, so two
    # identical registrations arriving together can both get through.
    event_id = session.current_event_id
    if not event_id:
        raise EventServiceError("no_event")

    org, name, designation = _text(org), _text(name), _text(designation)

    with storage_guard("registerPlayer"):
        existing = Player.query.filter_by(
            event_id=event_id,
            org=org,
            name=name,
            designation=designation,
        ).first()
        if existing:
            raise EventServiceError("already_played")

        player = Player(
            event_id=event_id,
            org=org,
            name=name,
            designation=designation,
            score=0,
            finished=False,
        )
        db.session.add(player)
        db.session.commit()

    record = make_session_record(player)
    session.add_player(record)
    logger.info("Player joined: %s (%s, %s)", name, designation, org)

    leaderboard = build_leaderboard(session.players())
    broadcast.publish(broadcast.PLAYER_REGISTERED, leaderboard, player=record)
    return {"playerId": player.id, "leaderboard": leaderboard}


def submit_answer(session, data):
    """
    Score and correctness come from the client as-is; nothing is recomputed.
    Unknown or finished players are ignored (returns None).
    """
    data = data or {}
    player = session.get_player(data.get("playerId"))
    if player is None or player["finished"]:
        return None

    try:
        new_score = int(data.get("newScore"))
        q_index = int(data.get("qIndex"))
    except (TypeError, ValueError):
        raise EventServiceError("error")

    last_answer = {
        "qIndex": q_index,
        "question": _text(data.get("question")),
        "chosenOption": _text(data.get("chosenOption")),
        "correct": bool(data.get("correct")),
    }
    player["score"] = new_score
    player["answers"].append(last_answer)

    stored = True
    try:
        db.session.add(Answer(
            event_id=player["event_id"],
            player_id=player["id"],
            q_index=q_index,
            question=last_answer["question"],
            chosen_option=last_answer["chosenOption"],
            correct=last_answer["correct"],
        ))
        Player.query.filter_by(id=player["id"]).update({Player.score: new_score})
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception("answerQuestion: database error (player %s)", player["id"])
        stored = False

    leaderboard = build_leaderboard(session.players())
    broadcast.publish(broadcast.ANSWER, leaderboard, player=player, lastAnswer=last_answer)

    if not stored:
        raise EventServiceError("db_error")
    return {"ok": True}


def finish_quiz(session, data):
    player = session.get_player((data or {}).get("playerId"))
    if player is None:
        return None

    if not player["finished"]:
        now = datetime.datetime.utcnow()
        # Latch the session only once the row is stored, so a retry can still persist it
        with storage_guard("finishQuiz"):
            Player.query.filter_by(id=player["id"]).update({
                Player.finished: True,
                Player.finish_time: now,
            })
            db.session.commit()
        player["finished"] = True
        player["finishTime"] = epoch_ms(now)
        logger.info("%s finished with score %s", player["name"], player["score"])

    leaderboard = build_leaderboard(session.players())
    rank = find_rank(leaderboard, player["name"], player["org"])
    broadcast.publish(broadcast.FINISHED, leaderboard, player=player)
    return {"rank": rank, "leaderboard": leaderboard}
