from simplylearn.models.enrollment import Enrollment
from simplylearn.models.submission import Submission
from simplylearn.models.user import User


def test_register_verify_submit_resubmit(client, db, mailer):
    creds = {"email": "ada@example.com", "password": "analytical"}
    r = client.post("/auth/register", json={"name": "Ada", "role": "Student", **creds})
    assert r.status_code == 201

    assert client.post("/auth/login", json=creds).status_code == 403

    code = db.query(User).filter(User.email == "ada@example.com").one().otp_code
    assert code in mailer.sent[-1]["body"]
    assert client.post("/auth/verify-email", json={"email": creds["email"], "otp": code}).status_code == 200

    client.cookies.clear()
    login = client.post("/auth/login", json=creds)
    assert login.status_code == 200
    ada_id = login.json()["id"]

    # the session cookie alone authenticates from here on
    assert client.post("/enrollments", json={"course_id": 1}).status_code == 201

    first = client.post("/submissions", data={"assignment_id": "1", "text_entry": "hello"})
    assert first.status_code == 201
    second = client.post("/submissions", data={"assignment_id": "1", "text_entry": "updated"})
    assert second.status_code == 200

    db.expire_all()
    subs = db.query(Submission).filter(Submission.student_id == ada_id).all()
    assert len(subs) == 1
    assert subs[0].text_entry == "updated"
    assert db.query(Enrollment).filter(Enrollment.student_id == ada_id).count() == 1
