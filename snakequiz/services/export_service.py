from flask import current_app

from extensions import db
from snakequiz.models import Answer, Event, Player
from snakequiz.services.errors import EventNotFound, storage_guard

CSV_HEADER = [
    "event_id",
    "event_name",
    "player_id",
    "org",
    "name",
    "designation",
    "question_no",
    "question_text",
    "chosen_option",
    "correct(Yes/No)",
    "score_delta(+5/-2)",
    "cumulative_score",
]


def export_filename(event_id):
    return f"event_{event_id}_results.csv"


def build_rows(event_name, players, answers, correct_delta=5, wrong_delta=-2):
    """
    One row per (player, answer), answers in q_index order.
    cumulative_score is replayed from the answer log and can differ from the
    score the client last reported. Players with no answers get a single row
    carrying their stored score.
    """
    by_player = {}
    for a in answers:
        by_player.setdefault(a.player_id, []).append(a)

    rows = []
    for p in players:
        identity = [p.event_id, event_name, p.id, p.org, p.name, p.designation]
        player_answers = sorted(by_player.get(p.id, []), key=lambda a: a.q_index)

        if not player_answers:
            rows.append(identity + [None, None, None, None, None, p.score])
            continue

        cumulative = 0
        for a in player_answers:
            delta = correct_delta if a.correct else wrong_delta
            cumulative += delta
            rows.append(identity + [
                a.q_index + 1,
                a.question,
                a.chosen_option,
                "Yes" if a.correct else "No",
                delta,
                cumulative,
            ])
    return rows


def _field(value):
    # Missing cells stay bare; everything else is quoted with quotes doubled
    if value is None:
        return ""
    return '"' + str(value).replace('"', '""') + '"'


def render_csv(rows):
    """Header unquoted, CRLF between lines, no terminator after the last row."""
    lines = [",".join(CSV_HEADER)]
    lines.extend(",".join(_field(value) for value in row) for row in rows)
    return "\r\n".join(lines)


def export_event_csv(event_id):
    """Returns (filename, csv_text) for an event; EventNotFound if it is gone."""
    with storage_guard("export"):
        event = db.session.get(Event, event_id)
        if event is None:
            raise EventNotFound(event_id)
        players = Player.query.filter_by(event_id=event_id).order_by(Player.id).all()
        answers = Answer.query.filter_by(event_id=event_id) \
            .order_by(Answer.player_id, Answer.q_index) \
            .all()

    rows = build_rows(
        event.name,
        players,
        answers,
        correct_delta=current_app.config["SCORE_CORRECT_DELTA"],
        wrong_delta=current_app.config["SCORE_WRONG_DELTA"],
    )
    return export_filename(event_id), render_csv(rows)
