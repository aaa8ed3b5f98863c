def _post(client, headers, content, course_id=1, parent=None):
    return client.post(
        "/forum",
        headers=headers,
        json={"course_id": course_id, "content": content, "parent_post_id": parent},
    )


def test_members_post_plain_text(client, login_as):
    student = login_as("student1@example.com")
    r = _post(client, student, "<script>alert(1)</script><b>Question</b> about HW1")
    assert r.status_code == 201, r.text
    body = r.json()
    assert "<" not in body["content"]
    assert "Question about HW1" in body["content"]
    assert body["author_name"] == "Student One"
    assert body["author_role"] == "Student"

    tutor = login_as("tutor1@example.com")
    reply = _post(client, tutor, "Answer", parent=body["id"])
    assert reply.status_code == 201
    assert reply.json()["parent_post_id"] == body["id"]


def test_markup_only_content_is_rejected(client, login_as):
    student = login_as("student1@example.com")
    assert _post(client, student, "<p></p>").status_code == 400
    assert _post(client, student, "").status_code == 400


def test_non_members_cannot_read_or_post(client, login_as):
    outsider = login_as("student2@example.com")
    assert _post(client, outsider, "hi").status_code == 403
    assert client.get("/forum/course/1", headers=outsider).status_code == 403

    other_tutor = login_as("tutor2@example.com")
    assert client.get("/forum/course/1", headers=other_tutor).status_code == 403

    admin = login_as("admin@example.com")
    assert client.get("/forum/course/1", headers=admin).status_code == 200


def test_parent_must_exist_in_same_course(client, login_as):
    other_tutor = login_as("tutor2@example.com")
    course = client.post("/courses", headers=other_tutor, json={"title": "Other", "description": "d"}).json()
    foreign = _post(client, other_tutor, "elsewhere", course_id=course["id"]).json()

    student = login_as("student1@example.com")
    assert _post(client, student, "reply", parent=999).status_code == 404
    assert _post(client, student, "reply", parent=foreign["id"]).status_code == 400


def test_listing_order(client, login_as):
    student = login_as("student1@example.com")
    for text in ("first", "second", "third"):
        _post(client, student, text)

    newest = client.get("/forum/course/1", headers=student).json()
    assert [p["content"] for p in newest] == ["third", "second", "first"]

    oldest = client.get("/forum/course/1?order=asc", headers=student).json()
    assert [p["content"] for p in oldest] == ["first", "second", "third"]

    assert client.get("/forum/course/1?order=sideways", headers=student).status_code == 400
    assert client.get("/forum/course/5", headers=student).status_code == 404
