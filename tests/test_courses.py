def test_list_and_get_courses(client, login_as):
    student = login_as("student2@example.com")
    r = client.get("/courses", headers=student)
    assert r.status_code == 200
    assert [c["title"] for c in r.json()] == ["CS5004"]

    r = client.get("/courses/1", headers=student)
    assert r.status_code == 200
    assert r.json()["tutor_name"] == "Tutor One"
    assert r.json()["materials"] == []

    assert client.get("/courses/42", headers=student).status_code == 404


def test_courses_require_login(client):
    assert client.get("/courses").status_code == 401


def test_tutor_creates_course_student_cannot(client, login_as):
    tutor = login_as("tutor2@example.com")
    r = client.post(
        "/courses",
        headers=tutor,
        json={"title": " Databases ", "description": "Relational modelling"},
    )
    assert r.status_code == 201, r.text
    assert r.json()["title"] == "Databases"
    assert r.json()["tutor_id"] == 4

    student = login_as("student1@example.com")
    r = client.post("/courses", headers=student, json={"title": "X", "description": "Y"})
    assert r.status_code == 403


def test_blank_course_fields_are_rejected(client, login_as):
    tutor = login_as("tutor1@example.com")
    r = client.post("/courses", headers=tutor, json={"title": "   ", "description": "d"})
    assert r.status_code == 400
    r = client.post("/courses", headers=tutor, json={"title": "t"})
    assert r.status_code == 400


def test_update_appends_materials(client, login_as):
    tutor = login_as("tutor1@example.com")
    r = client.put(
        "/courses/1",
        headers=tutor,
        json={
            "title": "CS5004 Fall",
            "materials": {"title": "Syllabus", "type": "PDF", "url": "/uploads/syllabus.pdf"},
        },
    )
    assert r.status_code == 200, r.text
    assert r.json()["title"] == "CS5004 Fall"
    assert r.json()["description"] == "Object-oriented design"
    assert [m["title"] for m in r.json()["materials"]] == ["Syllabus"]

    r = client.put(
        "/courses/1",
        headers=tutor,
        json={
            "materials": [
                {"title": "Lecture 1", "type": "Video", "url": "https://videos.example.com/1"},
                {"title": "Reading", "type": "Link", "url": "https://example.com/read"},
            ]
        },
    )
    assert r.status_code == 200
    assert [m["title"] for m in r.json()["materials"]] == ["Syllabus", "Lecture 1", "Reading"]


def test_unknown_material_type_is_rejected(client, login_as):
    tutor = login_as("tutor1@example.com")
    r = client.put(
        "/courses/1",
        headers=tutor,
        json={"materials": {"title": "Slides", "type": "Slideshow", "url": "x"}},
    )
    assert r.status_code == 400


def test_only_owner_or_admin_updates(client, login_as):
    other = login_as("tutor2@example.com")
    assert client.put("/courses/1", headers=other, json={"title": "Hijacked"}).status_code == 403

    student = login_as("student1@example.com")
    assert client.put("/courses/1", headers=student, json={"title": "Hijacked"}).status_code == 403

    admin = login_as("admin@example.com")
    r = client.put("/courses/1", headers=admin, json={"description": "Updated by admin"})
    assert r.status_code == 200
    assert r.json()["description"] == "Updated by admin"
    assert r.json()["title"] == "CS5004"
