import logging

from flask import Flask

from config import Config
from extensions import db, socketio

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level):
    logging.basicConfig(level=getattr(logging, str(level).upper(), logging.INFO), format=LOG_FORMAT)


def create_app(config_class=Config):
    app = Flask(__name__)
    app.config.from_object(config_class)
    configure_logging(app.config.get("LOG_LEVEL", "INFO"))

    db.init_app(app)
    socketio.init_app(app, cors_allowed_origins="*", async_mode="threading")

    from snakequiz import models  # noqa: F401  (tables must be known before create_all)
    from snakequiz.routes import register_routes
    from snakequiz.sockets import register_sockets
    from snakequiz.services.errors import EventServiceError
    from snakequiz.services.event_service import ensure_current_event
    from snakequiz.services.event_state import init_event_session

    register_routes(app)
    register_sockets(socketio)
    session = init_event_session(app)

    with app.app_context():
        db.create_all()
        try:
            ensure_current_event(session)
        except EventServiceError:
            logger.error("Starting without a current event")

    return app


if __name__ == "__main__":
    app = create_app()
    host, port = app.config["APP_HOST"], app.config["APP_PORT"]
    logger.info("Server running on port %s", port)
    socketio.run(app, host=host, port=port, allow_unsafe_werkzeug=True)
