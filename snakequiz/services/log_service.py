from extensions import db
from snakequiz.models import LogEntry


def record_admin_action(source, message):
    """Adds an audit row to the caller's transaction; the caller commits."""
    if not message:
        return None
    entry = LogEntry(source=source, message=str(message))
    db.session.add(entry)
    return entry


def recent_entries(limit=200):
    return LogEntry.query.order_by(LogEntry.id.desc()).limit(limit).all()
