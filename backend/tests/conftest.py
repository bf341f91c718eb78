import os
import sys
import pytest

# Ensure the backend root (containing the `xox` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from xox import create_app, socketio
from xox.registry import SessionRegistry


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    CLIENT_URL = '*'
    MIN_BOARD_SIZE = 3
    MAX_BOARD_SIZE = 10
    CLEAR_WINNING_CELLS_AFTER_MS = None
    REJECT_INACTIVE_MOVES = True


class ClearingConfig(TestConfig):
    CLEAR_WINNING_CELLS_AFTER_MS = 20


@pytest.fixture()
def registry():
    return SessionRegistry()


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        yield application


@pytest.fixture()
def clearing_app():
    application = create_app(ClearingConfig)
    with application.app_context():
        yield application


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def make_sio_client():
    """Factory for Socket.IO test clients; all are disconnected on teardown."""
    created = []

    def _make(app):
        test_client = socketio.test_client(app, flask_test_client=app.test_client())
        created.append(test_client)
        return test_client

    yield _make
    for test_client in created:
        try:
            if test_client.is_connected():
                test_client.disconnect()
        except Exception:
            pass
