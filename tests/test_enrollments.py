from simplylearn.models.enrollment import Enrollment


def test_enroll_and_list(client, login_as):
    student = login_as("student2@example.com")
    r = client.post("/enrollments", headers=student, json={"course_id": 1})
    assert r.status_code == 201, r.text
    assert r.json()["status"] == "Active"
    assert r.json()["student_id"] == 2

    r = client.get("/enrollments/my", headers=student)
    assert r.status_code == 200
    assert [(e["course_id"], e["course"]["title"]) for e in r.json()] == [(1, "CS5004")]


def test_duplicate_enrollment_is_rejected(client, db, login_as):
    student = login_as("student1@example.com")
    r = client.post("/enrollments", headers=student, json={"course_id": 1})
    assert r.status_code == 400
    assert r.json()["detail"] == "Already enrolled"

    assert db.query(Enrollment).filter(Enrollment.student_id == 1).count() == 1


def test_enroll_unknown_course_and_non_student(client, login_as):
    student = login_as("student2@example.com")
    assert client.post("/enrollments", headers=student, json={"course_id": 77}).status_code == 404

    tutor = login_as("tutor2@example.com")
    assert client.post("/enrollments", headers=tutor, json={"course_id": 1}).status_code == 403


def test_check_enrollment(client, login_as):
    enrolled = login_as("student1@example.com")
    assert client.get("/enrollments/check/1", headers=enrolled).json() == {"enrolled": True}

    outsider = login_as("student2@example.com")
    assert client.get("/enrollments/check/1", headers=outsider).json() == {"enrolled": False}


def test_status_update_permissions(client, login_as):
    outsider = login_as("student2@example.com")
    r = client.patch("/enrollments/1", headers=outsider, json={"status": "Dropped"})
    assert r.status_code == 403

    student = login_as("student1@example.com")
    r = client.patch("/enrollments/1", headers=student, json={"status": "Dropped"})
    assert r.status_code == 200
    assert r.json()["status"] == "Dropped"

    tutor = login_as("tutor1@example.com")
    r = client.patch("/enrollments/1", headers=tutor, json={"status": "Completed"})
    assert r.status_code == 200
    assert r.json()["status"] == "Completed"

    assert client.patch("/enrollments/1", headers=tutor, json={"status": "Paused"}).status_code == 400
    assert client.patch("/enrollments/99", headers=tutor, json={"status": "Active"}).status_code == 404
