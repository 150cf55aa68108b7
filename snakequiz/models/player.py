from extensions import db
import datetime

from .timestamps import utc_iso


class Player(db.Model):
    """
    One attempt at an event's quiz.
    (event_id, org, name, designation) is unique per event, but that is only
    checked before insert; there is no constraint backing it.
    """
    __tablename__ = "players"

    id = db.Column(db.Integer, primary_key=True)
    event_id = db.Column(db.Integer, db.ForeignKey("events.id"), nullable=False)
    org = db.Column(db.String(200), default="")
    name = db.Column(db.String(200), default="")
    designation = db.Column(db.String(200), default="")
    score = db.Column(db.Integer, default=0)
    finished = db.Column(db.Boolean, default=False)
    finish_time = db.Column(db.DateTime, nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.datetime.utcnow)

    __table_args__ = (
        db.Index("ix_player_event_identity", "event_id", "org", "name", "designation"),
    )

    def to_dict(self):
        return {
            "id": self.id,
            "event_id": self.event_id,
            "org": self.org,
            "name": self.name,
            "designation": self.designation,
            "score": self.score,
            "finished": bool(self.finished),
            "finish_time": utc_iso(self.finish_time),
            "created_at": utc_iso(self.created_at),
        }
