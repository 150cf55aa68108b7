"""Pytest configuration and fixtures for the snake quiz server."""

import pytest

from app import create_app
from config import TestingConfig
from extensions import db, socketio


@pytest.fixture
def app():
    """Fresh app on an in-memory database; boot creates the default event."""
    app = create_app(TestingConfig)
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def app_ctx(app):
    with app.app_context():
        yield app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def event_session(app):
    from snakequiz.services.event_state import get_event_session

    return get_event_session(app)


@pytest.fixture
def admin_socket(app):
    sock = socketio.test_client(app)
    yield sock
    if sock.is_connected():
        sock.disconnect()


@pytest.fixture
def player_socket(app):
    sock = socketio.test_client(app)
    yield sock
    if sock.is_connected():
        sock.disconnect()

