import pytest

from sis import create_app
from sis.config import TestingConfig
from sis.extensions import db, limiter
from sis.models import AuditLog


class RateLimitedConfig(TestingConfig):
    RATELIMIT_ENABLED = True
    RATELIMIT_STORAGE_URI = "memory://"


@pytest.fixture
def limited_app(tmp_path, monkeypatch):
    monkeypatch.setenv("AUDIT_LOG_FILE", str(tmp_path / "audit.log"))
    app = create_app(RateLimitedConfig)
    with app.app_context():
        limiter.reset()
        yield app
        db.session.remove()
        db.drop_all()


def test_forgot_password_is_limited_per_email(limited_app):
    client = limited_app.test_client()
    statuses = []
    for _ in range(4):
        resp = client.post("/api/auth/forgot-password", json={"email": "flood@school.test"})
        statuses.append(resp.status_code)

    assert statuses == [200, 200, 200, 429]
    assert resp.get_json() == {"success": False, "message": "Rate limit exceeded. Please slow down."}
    assert AuditLog.query.count() >= 1
    assert "forgot-password" in AuditLog.query.first().action

    # the limit is keyed by email, not by caller
    resp = client.post("/api/auth/forgot-password", json={"email": "other@school.test"})
    assert resp.status_code == 200
