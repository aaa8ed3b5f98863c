def _cards(body) -> dict:
    return {c["title"]: c["value"] for c in body["cards"]}


def test_student_dashboard(client, login_as):
    student = login_as("student1@example.com")
    body = client.get("/dashboard", headers=student).json()
    assert body["title"] == "Student Dashboard"
    assert _cards(body) == {
        "Enrolled Courses": 1,
        "Upcoming Assignments": 1,
        "Completed Submissions": 0,
    }
    assert [c["title"] for c in body["enrolled_courses"]] == ["CS5004"]

    client.post("/submissions", headers=student, data={"assignment_id": "1", "text_entry": "done"})
    body = client.get("/dashboard", headers=student).json()
    assert _cards(body)["Completed Submissions"] == 1


def test_tutor_dashboard(client, login_as):
    student = login_as("student1@example.com")
    client.post("/submissions", headers=student, data={"assignment_id": "1", "text_entry": "done"})

    tutor = login_as("tutor1@example.com")
    body = client.get("/dashboard", headers=tutor).json()
    assert body["title"] == "Instructor Dashboard"
    assert _cards(body) == {"My Courses": 1, "Total Students": 1, "Pending Grading": 1}
    assert [c["title"] for c in body["recent_courses"]] == ["CS5004"]

    other = login_as("tutor2@example.com")
    assert _cards(client.get("/dashboard", headers=other).json()) == {
        "My Courses": 0,
        "Total Students": 0,
        "Pending Grading": 0,
    }


def test_admin_dashboard(client, login_as):
    admin = login_as("admin@example.com")
    body = client.get("/dashboard", headers=admin).json()
    assert body["title"] == "System Overview"
    assert _cards(body) == {
        "Total Users": 5,
        "Total Courses": 1,
        "Total Assignments": 1,
        "Submissions": 0,
    }


def test_dashboard_requires_login(client):
    assert client.get("/dashboard").status_code == 401
