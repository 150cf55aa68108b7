from extensions import db
import datetime

from .timestamps import utc_iso


class Answer(db.Model):
    """
    Append-only answer log.
    q_index is the zero-based position in the question sequence the game
    client plays; correct is whatever the client reported.
    """
    __tablename__ = "answers"

    id = db.Column(db.Integer, primary_key=True)
    event_id = db.Column(db.Integer, db.ForeignKey("events.id"), nullable=False)
    player_id = db.Column(db.Integer, db.ForeignKey("players.id"), nullable=False)
    q_index = db.Column(db.Integer, default=0)
    question = db.Column(db.String(500), default="")
    chosen_option = db.Column(db.String(500), default="")
    correct = db.Column(db.Boolean, default=False)
    created_at = db.Column(db.DateTime, default=datetime.datetime.utcnow)

    __table_args__ = (
        db.Index("ix_answer_event", "event_id"),
        db.Index("ix_answer_player", "player_id"),
    )

    def to_dict(self):
        return {
            "id": self.id,
            "event_id": self.event_id,
            "player_id": self.player_id,
            "q_index": self.q_index,
            "question": self.question,
            "chosen_option": self.chosen_option,
            "correct": bool(self.correct),
            "created_at": utc_iso(self.created_at),
        }
