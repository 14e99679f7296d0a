import os
import sys

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import pytest

from hiring import create_app
from hiring.extensions import db
from hiring.models import Role
from hiring.services import users as user_service

TEST_CONFIG = {
    "TESTING": True,
    "SQLALCHEMY_DATABASE_URI": "sqlite://",
    "REDIS_URL": "",
    "SENDGRID_API_KEY": None,
    "EMAIL_RETRY_DELAY": 0,
    "JWT_SECRET": "test-secret",
    "PASSING_SCORE_PERCENTAGE": 70,
    "INTERVIEW_ELIGIBLE_PERCENTAGE": 75,
}


@pytest.fixture
def app():
    app = create_app(TEST_CONFIG)
    with app.app_context():
        db.create_all()
    yield app
    with app.app_context():
        db.drop_all()


@pytest.fixture
def ctx(app):
    """App context for calling services directly (no test client requests inside)."""
    with app.app_context():
        yield app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def outbox(monkeypatch):
    sent = []

    def fake_send(to_email, subject, text, **kwargs):
        sent.append({"to": to_email, "subject": subject, "text": text})
        return 202, {"X-Message-Id": f"msg-{len(sent)}"}

    monkeypatch.setattr("hiring.jobs.notify.send_email", fake_send)
    monkeypatch.setattr("hiring.jobs.notify.send_email_with_retry", fake_send)
    return sent


def make_user(email, role=Role.APPLICANT, first_name="Maria", last_name="Santos"):
    return user_service.register_user(email, "password123", first_name, role=role, last_name=last_name)


@pytest.fixture
def login(app):
    """Create a user and return ``(user_id, headers)`` for test client calls."""
    def _login(email, role=Role.APPLICANT, **kwargs):
        with app.app_context():
            user = make_user(email, role=role, **kwargs)
            return user.id, {"Authorization": f"Bearer {user_service.issue_token(user)}"}
    return _login
