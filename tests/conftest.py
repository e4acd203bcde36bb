from datetime import datetime, timezone

import pytest

from medtrack import create_app
from medtrack.extensions import db
from medtrack.services.notifications import Notifier
from medtrack.utils import timeutils

TEST_SECRET = "medtrack-test-secret-key-that-is-long-enough-for-hs256"


class RecordingNotifier(Notifier):
    def __init__(self):
        self.sent = []

    def patient_linked(self, patient, caretaker):
        self.sent.append(("patient_linked", patient.id, caretaker.id))


@pytest.fixture
def app_factory(tmp_path):
    created = []

    def _make(**overrides):
        config = {
            "TESTING": True,
            "SQLALCHEMY_DATABASE_URI": f"sqlite:///{tmp_path / f'medtrack-{len(created)}.db'}",
            "JWT_SECRET_KEY": TEST_SECRET,
            "APP_TIMEZONE": "UTC",
            "NOTIFIER": RecordingNotifier(),
        }
        config.update(overrides)
        app = create_app(config)
        with app.app_context():
            db.create_all()
        created.append(app)
        return app

    yield _make

    for app in created:
        with app.app_context():
            db.session.remove()
            db.drop_all()


@pytest.fixture
def app(app_factory):
    return app_factory()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def clock(monkeypatch):
    """Pin ``timeutils.utcnow``; move it with ``clock.set(datetime(...))``."""

    class _Clock:
        now = datetime(2026, 10, 19, 9, 0, tzinfo=timezone.utc)

        def set(self, value):
            self.now = value

    c = _Clock()
    monkeypatch.setattr(timeutils, "utcnow", lambda: c.now)
    return c


def auth(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def register(client):
    def _register(username, role="patient", password="secret123", email=None):
        resp = client.post("/api/v1/auth/register", json={
            "username": username,
            "password": password,
            "email": email or f"{username}@example.com",
            "role": role,
        })
        assert resp.status_code == 201, resp.get_json()
        body = resp.get_json()
        return body["access_token"], body["user"]

    return _register


@pytest.fixture
def add_medication(client):
    def _add(token, name="Aspirin", dosage="100 mg", frequency="daily", time="08:00"):
        resp = client.post("/api/v1/medications", headers=auth(token), json={
            "name": name, "dosage": dosage, "frequency": frequency, "time": time,
        })
        assert resp.status_code == 201, resp.get_json()
        return resp.get_json()["medication"]

    return _add
