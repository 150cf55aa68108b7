import logging
from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError

from extensions import db

logger = logging.getLogger(__name__)

# Codes the clients know how to display
ERROR_CODES = ("no_name", "no_id", "no_event", "already_played", "db_error", "error")


class EventServiceError(Exception):
    def __init__(self, code):
        if code not in ERROR_CODES:
            code = "error"
        super().__init__(code)
        self.code = code

    def to_reply(self):
        return {"error": self.code}


class EventNotFound(LookupError):
    pass


@contextmanager
def storage_guard(action):
    """Roll back and report a storage failure as ``db_error``. Never retries."""
    try:
        yield
    except SQLAlchemyError as exc:
        db.session.rollback()
        logger.exception("%s: database error", action)
        raise EventServiceError("db_error") from exc
