"""
Project: Cafe POS
Date: October 2026

Description:
Shared fixtures: a fresh in-memory app per test with the demo catalog,
Flask and Socket.IO test clients, and an httpx-based API client that talks
to the app in-process.
"""

import os
import sys

import httpx
import pytest

# --- Make sure project root is importable ---
TESTS_DIR = os.path.dirname(__file__)
PROJECT_ROOT = os.path.abspath(os.path.join(TESTS_DIR, os.pardir, os.pardir))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

import app as app_module  # noqa: E402
from api_client import ApiClient  # noqa: E402
from local_storage import LocalStorage  # noqa: E402
from models import db  # noqa: E402
from seed import seed  # noqa: E402

ADMIN = {"username": "admin", "password": "admin123"}
STAFF = {"username": "staff", "password": "staff123"}


@pytest.fixture
def app():
    app = app_module.create_app(testing=True)
    with app.app_context():
        db.drop_all()
        db.create_all()
        seed()
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin_client(client):
    resp = client.post("/api/login", json=ADMIN)
    assert resp.status_code == 200
    return client


@pytest.fixture
def staff_client(client):
    resp = client.post("/api/login", json=STAFF)
    assert resp.status_code == 200
    return client


@pytest.fixture
def socket_client(app):
    sc = app_module.socketio.test_client(app)
    yield sc
    if sc.is_connected():
        sc.disconnect()


@pytest.fixture
def api(app):
    api = ApiClient("http://testserver", transport=httpx.WSGITransport(app=app))
    yield api
    api.close()


@pytest.fixture
def storage(tmp_path):
    return LocalStorage(str(tmp_path / "storage.json"))


def received(socket_client, event):
    """Payloads of `event` received by a Socket.IO test client so far."""
    return [m["args"][0] for m in socket_client.get_received() if m["name"] == event]


class SocketBridge:
    """
    Presents a Flask-SocketIO test client through the subset of the
    `socketio.Client` API the client code uses (`on`, `call`,
    `start_background_task`). `pump()` delivers queued server events.
    """

    def __init__(self, test_client):
        self.test_client = test_client
        self.handlers = {}

    def on(self, event, handler):
        self.handlers[event] = handler

    def call(self, event, data=None, timeout=60):
        return self.test_client.emit(event, data, callback=True)

    def start_background_task(self, target, *args, **kwargs):
        return target(*args, **kwargs)

    def pump(self):
        for msg in self.test_client.get_received():
            handler = self.handlers.get(msg["name"])
            if handler:
                handler(*msg["args"])


@pytest.fixture
def sio_bridge(socket_client):
    socket_client.get_received()
    return SocketBridge(socket_client)
