from datetime import datetime, timedelta, timezone


def _deadline(days=3) -> str:
    return (datetime.now(timezone.utc) + timedelta(days=days)).isoformat()


def test_tutor_creates_assignment(client, login_as):
    tutor = login_as("tutor1@example.com")
    r = client.post(
        "/assignments",
        headers=tutor,
        json={"course_id": 1, "title": "HW2", "instructions": "Trees", "deadline": _deadline(), "max_points": 50},
    )
    assert r.status_code == 201, r.text
    body = r.json()
    assert body["title"] == "HW2"
    assert body["max_points"] == 50
    assert body["course_title"] == "CS5004"


def test_assignment_creation_permissions_and_validation(client, login_as):
    payload = {"course_id": 1, "title": "HW2", "deadline": _deadline()}

    other = login_as("tutor2@example.com")
    assert client.post("/assignments", headers=other, json=payload).status_code == 403

    student = login_as("student1@example.com")
    assert client.post("/assignments", headers=student, json=payload).status_code == 403

    tutor = login_as("tutor1@example.com")
    missing_deadline = {"course_id": 1, "title": "HW2"}
    assert client.post("/assignments", headers=tutor, json=missing_deadline).status_code == 400
    assert client.post("/assignments", headers=tutor, json={**payload, "course_id": 9}).status_code == 404
    assert client.post("/assignments", headers=tutor, json={**payload, "max_points": -5}).status_code == 400


def test_course_assignments_need_membership(client, login_as):
    student = login_as("student1@example.com")
    r = client.get("/assignments/course/1", headers=student)
    assert r.status_code == 200
    assert [a["title"] for a in r.json()] == ["HW1"]
    assert client.get("/assignments/1", headers=student).json()["title"] == "HW1"

    outsider = login_as("student2@example.com")
    assert client.get("/assignments/course/1", headers=outsider).status_code == 403
    assert client.get("/assignments/1", headers=outsider).status_code == 403
    assert client.get("/assignments/404", headers=outsider).status_code == 404


def test_student_assignment_statuses(client, login_as):
    student = login_as("student1@example.com")
    rows = client.get("/assignments/student/my", headers=student).json()
    assert [(r["title"], r["status"], r["submission"]) for r in rows] == [("HW1", "missing", None)]

    sub = client.post("/submissions", headers=student, data={"assignment_id": "1", "text_entry": "done"})
    rows = client.get("/assignments/student/my", headers=student).json()
    assert rows[0]["status"] == "submitted"
    assert rows[0]["is_late"] is False
    assert rows[0]["submission"]["grade"] is None

    tutor = login_as("tutor1@example.com")
    client.put(f"/submissions/{sub.json()['id']}/grade", headers=tutor, json={"grade": 90})

    rows = client.get("/assignments/student/my", headers=student).json()
    assert rows[0]["status"] == "graded"
    assert rows[0]["submission"]["grade"] == 90

    outsider = login_as("student2@example.com")
    assert client.get("/assignments/student/my", headers=outsider).json() == []
    assert client.get("/assignments/student/my", headers=tutor).status_code == 403


def test_tutor_assignment_stats(client, login_as):
    tutor = login_as("tutor1@example.com")
    rows = client.get("/assignments/tutor/my", headers=tutor).json()
    assert rows[0]["submission_stats"] == {"total": 0, "pending": 0}

    student = login_as("student1@example.com")
    sub = client.post("/submissions", headers=student, data={"assignment_id": "1", "text_entry": "done"})

    rows = client.get("/assignments/tutor/my", headers=tutor).json()
    assert rows[0]["submission_stats"] == {"total": 1, "pending": 1}

    client.put(f"/submissions/{sub.json()['id']}/grade", headers=tutor, json={"grade": 70})
    rows = client.get("/assignments/tutor/my", headers=tutor).json()
    assert rows[0]["submission_stats"] == {"total": 1, "pending": 0}

    other = login_as("tutor2@example.com")
    assert client.get("/assignments/tutor/my", headers=other).json() == []

    admin = login_as("admin@example.com")
    assert len(client.get("/assignments/tutor/my", headers=admin).json()) == 1
