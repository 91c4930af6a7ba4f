import pytest

from sis import create_app
from sis.auth import issue_token
from sis.config import TestingConfig
from sis.extensions import db
from sis.models import User
from sis.students import create_student


@pytest.fixture
def app(tmp_path, monkeypatch):
    monkeypatch.setenv("AUDIT_LOG_FILE", str(tmp_path / "audit.log"))
    app = create_app(TestingConfig)
    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


def _make_teacher(name, email, password="secret123"):
    user = User(name=name, email=email)
    user.set_password(password)
    db.session.add(user)
    db.session.commit()
    return user


@pytest.fixture
def teacher(app):
    return _make_teacher("Ms Naidoo", "naidoo@school.test")


@pytest.fixture
def other_teacher(app):
    return _make_teacher("Mr Botha", "botha@school.test")


@pytest.fixture
def auth_headers(teacher):
    return {"Authorization": f"Bearer {issue_token(teacher)}"}


@pytest.fixture
def make_student(teacher):
    def _make(username, owner=None, grade=None):
        data = {"username": username, "email": f"{username}@students.test", "password": "pupil123"}
        if grade:
            data["grade"] = grade
        return create_student((owner or teacher).id, data)
    return _make


@pytest.fixture
def student(make_student):
    return make_student("alice")
