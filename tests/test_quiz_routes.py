from __future__ import annotations

from datetime import datetime
from types import SimpleNamespace

from conftest import headers
from tryout.api.routes import quiz
from tryout.models.quiz_session import QuizSession
from tryout.models.user import User


def _start(client, user_id, package):
    res = client.post(
        "/api/quiz/sessions",
        json={"package_id": package.id, "subtest_id": package.subtests[0].id},
        headers=headers(user_id),
    )
    assert res.status_code == 200
    return res.json()["data"]


def test_requests_without_identity_are_rejected(client, open_package):
    res = client.get(f"/api/quiz/packages/{open_package.id}")
    body = res.json()
    assert res.status_code == 401
    assert body["data"] is None
    assert body["error"]["code"] == "HTTP_ERROR"


def test_malformed_input_is_a_validation_error(client, student):
    res = client.put("/api/quiz/answers", json={"quiz_session_id": "abc"}, headers=headers(student.id))
    body = res.json()
    assert res.status_code == 422
    assert body["error"]["code"] == "VALIDATION_ERROR"
    assert body["data"] is None


def test_missing_answer_message_is_surfaced_verbatim(client, student, open_package):
    session = _start(client, student.id, open_package)
    res = client.put(
        "/api/quiz/answers",
        json={
            "package_id": open_package.id,
            "quiz_session_id": session["id"],
            "question_id": open_package.subtests[0].questions[0].id,
            "answer_choice": None,
            "essay_answer": None,
        },
        headers=headers(student.id),
    )
    assert res.status_code == 400
    assert res.json()["error"]["message"] == "Either answer_choice or essay_answer must be provided."


def test_answer_for_unknown_question_is_not_found(client, student, closed_package):
    session = _start(client, student.id, closed_package)
    res = client.put(
        "/api/quiz/answers",
        json={"package_id": closed_package.id, "quiz_session_id": session["id"], "question_id": 9999, "answer_choice": 1},
        headers=headers(student.id),
    )
    assert res.status_code == 404

    res = client.get(f"/api/quiz/packages/{closed_package.id}", headers=headers(student.id))
    assert res.status_code == 200
    assert res.json()["data"]["total_score"] == 0


def test_take_and_score_a_closed_package(client, student, closed_package):
    session = _start(client, student.id, closed_package)
    choice, essay = closed_package.subtests[0].questions

    for question_id, body in ((choice.id, {"answer_choice": 1}), (essay.id, {"essay_answer": "jakarta"})):
        res = client.put(
            "/api/quiz/answers",
            json={"package_id": closed_package.id, "quiz_session_id": session["id"], "question_id": question_id, **body},
            headers=headers(student.id),
        )
        assert res.status_code == 200

    res = client.get(f"/api/quiz/packages/{closed_package.id}", headers=headers(student.id))
    data = res.json()["data"]
    assert data["total_score"] == 15
    assert data["subtests"][0]["score"] == 15


def test_questions_are_redacted_while_window_is_open(client, student, open_package):
    sid = open_package.subtests[0].id
    res = client.get(f"/api/quiz/subtests/{sid}/questions", headers=headers(student.id))
    assert res.json()["data"] is None

    _start(client, student.id, open_package)
    res = client.get(f"/api/quiz/subtests/{sid}/questions", headers=headers(student.id))
    questions = res.json()["data"]
    assert len(questions) == 2
    assert all(q["correct_answer_choice"] is None and q["score"] is None for q in questions)


def test_session_lookup_and_details_are_scoped_to_the_owner(client, student, other_student, open_package):
    session = _start(client, student.id, open_package)
    sid = open_package.subtests[0].id

    res = client.get("/api/quiz/sessions/lookup", params={"subtest_id": sid}, headers=headers(student.id))
    assert res.json()["data"]["id"] == session["id"]

    # a student cannot look up someone else's session
    res = client.get(
        "/api/quiz/sessions/lookup",
        params={"subtest_id": sid, "user_id": student.id},
        headers=headers(other_student.id),
    )
    assert res.json()["data"] is None

    res = client.get(f"/api/quiz/sessions/{session['id']}", headers=headers(other_student.id))
    assert res.status_code == 200
    assert res.json()["data"] is None

    res = client.get(f"/api/quiz/sessions/{session['id']}", headers=headers(1, "admin"))
    assert res.json()["data"]["user_id"] == student.id


def test_submit_quiz_ends_the_attempt(client, student, open_package):
    session = _start(client, student.id, open_package)
    res = client.post(f"/api/quiz/sessions/{session['id']}/submit", headers=headers(student.id))
    data = res.json()["data"]
    assert data["id"] == session["id"]
    assert datetime.fromisoformat(data["end_time"]) < datetime.fromisoformat(session["end_time"])


def test_announcement_requires_teacher_to_change(client, student):
    res = client.put("/api/quiz/announcement", json={"title": "Hi"}, headers=headers(student.id))
    assert res.status_code == 403

    res = client.put(
        "/api/quiz/announcement",
        json={"title": "Tryout 2", "content": "Saturday", "url": "https://example.com"},
        headers=headers(1, "teacher"),
    )
    assert res.status_code == 200

    res = client.get("/api/quiz/announcement", headers=headers(student.id))
    assert res.json()["data"]["title"] == "Tryout 2"


def test_drill_subtests_validate_subtest_type(client, student):
    res = client.get("/api/quiz/drill-subtests", params={"subtest": "unknown"}, headers=headers(student.id))
    assert res.status_code == 422

    res = client.get("/api/quiz/drill-subtests", params={"subtest": "pu"}, headers=headers(student.id))
    assert res.json()["data"] == []


def test_answer_choices_route(client, student, open_package):
    choice = open_package.subtests[0].questions[0]
    res = client.get("/api/answers", params={"question_id": choice.id}, headers=headers(student.id))
    assert [a["content"] for a in res.json()["data"]] == ["3", "4", "5"]


def test_get_package_with_subtest_wraps_payload(monkeypatch):
    captured = {}

    def _fake(db, package_id, user):
        captured.update({"package_id": package_id, "user_id": user.id})
        return {"total_score": 7, "subtests": []}

    monkeypatch.setattr(quiz, "get_package_with_scores", _fake)

    req = SimpleNamespace(state=SimpleNamespace(request_id="rid-1"))
    out = quiz.quiz_get_package_with_subtest(request=req, package_id=9, db=object(), user=SimpleNamespace(id=3))

    assert captured == {"package_id": 9, "user_id": 3}
    assert out["request_id"] == "rid-1"
    assert out["error"] is None
    assert out["data"]["total_score"] == 7


def test_admin_creating_a_session_for_a_teacher_keeps_their_role(client, db, open_package):
    db.add(User(id=7, email="teacher7@demo.local", full_name="Teacher 7", role="teacher", is_active=True))
    db.commit()

    res = client.post(
        "/api/quiz/sessions",
        json={"package_id": open_package.id, "subtest_id": open_package.subtests[0].id, "user_id": 7},
        headers=headers(1, "admin"),
    )
    assert res.status_code == 200
    assert res.json()["data"]["user_id"] == 7

    db.expire_all()
    assert db.get(User, 7).role == "teacher"
    assert db.query(QuizSession).filter(QuizSession.user_id == 7).count() == 1


def test_admin_creating_a_session_for_an_unseen_user_creates_a_student(client, db, open_package):
    res = client.post(
        "/api/quiz/sessions",
        json={"package_id": open_package.id, "subtest_id": open_package.subtests[0].id, "user_id": 8},
        headers=headers(1, "admin"),
    )
    assert res.status_code == 200
    assert db.get(User, 8).role == "student"
