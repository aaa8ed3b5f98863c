from datetime import timedelta

import pytest
from fastapi.testclient import TestClient

from simplylearn.core.clock import utcnow
from simplylearn.core.deps import get_db
from simplylearn.core.mailer import Mailer
from simplylearn.core.security import hash_password, pwd_context
from simplylearn.db.base import Base
from simplylearn.db.session import build_engine, build_session_factory
from simplylearn.main import create_app
from simplylearn.models.assignment import Assignment
from simplylearn.models.course import Course
from simplylearn.models.enrollment import Enrollment
from simplylearn.models.user import Role, User

PASSWORD = "password123"

# cheap hashes keep the suite fast
pwd_context.update(bcrypt__rounds=4)

engine = build_engine("sqlite://")
TestingSessionLocal = build_session_factory(engine)


class RecordingMailer(Mailer):
    def __init__(self):
        super().__init__()
        self.sent = []

    def send(self, to, subject, body):
        self.sent.append({"to": to, "subject": subject, "body": body})


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(scope="session")
def app(tmp_path_factory):
    application = create_app(
        database_url="sqlite://",
        upload_dir=str(tmp_path_factory.mktemp("uploads")),
        mailer=RecordingMailer(),
    )
    application.dependency_overrides[get_db] = override_get_db
    yield application
    application.dependency_overrides.clear()


@pytest.fixture()
def mailer(app):
    app.state.mailer.sent.clear()
    return app.state.mailer


@pytest.fixture()
def db():
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


def _user(email, name, role, verified=True):
    return User(
        email=email,
        name=name,
        role=role,
        is_verified=verified,
        failed_login_attempts=0,
        hashed_password=hash_password(PASSWORD),
    )


@pytest.fixture(autouse=True)
def seed_data():
    """Fresh schema and a minimal dataset for each test."""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)

    db = TestingSessionLocal()
    try:
        student = _user("student1@example.com", "Student One", Role.STUDENT)
        outsider = _user("student2@example.com", "Student Two", Role.STUDENT)
        tutor = _user("tutor1@example.com", "Tutor One", Role.TUTOR)
        other_tutor = _user("tutor2@example.com", "Tutor Two", Role.TUTOR)
        admin = _user("admin@example.com", "Admin", Role.ADMIN)
        db.add_all([student, outsider, tutor, other_tutor, admin])
        db.commit()

        course = Course(title="CS5004", description="Object-oriented design", tutor_id=tutor.id)
        db.add(course)
        db.commit()

        db.add(Enrollment(course_id=course.id, student_id=student.id))
        db.add(
            Assignment(
                course_id=course.id,
                title="HW1",
                instructions="Write a linked list",
                deadline=utcnow() + timedelta(days=1),
                max_points=100,
            )
        )
        db.commit()

        yield
    finally:
        db.close()


@pytest.fixture()
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def login_as(client):
    """Log in and return bearer headers; the session cookie is dropped."""

    def _login(email: str, password: str = PASSWORD) -> dict:
        r = client.post("/auth/login", json={"email": email, "password": password})
        assert r.status_code == 200, r.text
        client.cookies.clear()
        return {"Authorization": f"Bearer {r.json()['access_token']}"}

    return _login
