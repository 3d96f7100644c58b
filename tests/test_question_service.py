from __future__ import annotations

from datetime import timedelta

from conftest import FixedDateTime, build_package
from tryout.services import question_service, session_service, timing


def _start(db, user, package):
    return session_service.create_session(
        db, user_id=user.id, package_id=package.id, subtest_id=package.subtests[0].id
    )


def test_no_session_means_no_questions(db, student, open_package):
    assert question_service.get_questions_by_subtest(db, open_package.subtests[0].id, student) is None


def test_open_window_hides_answer_keys(db, student, open_package):
    _start(db, student, open_package)

    questions = question_service.get_questions_by_subtest(db, open_package.subtests[0].id, student)

    assert [q["index"] for q in questions] == [1, 2]
    for q in questions:
        assert q["correct_answer_choice"] is None
        assert q["explanation"] is None
        assert q["score"] is None
    assert [a["content"] for a in questions[0]["answers"]] == ["3", "4", "5"]


def test_open_window_does_not_touch_stored_keys(db, student, open_package):
    _start(db, student, open_package)
    question_service.get_questions_by_subtest(db, open_package.subtests[0].id, student)

    db.expire_all()
    choice = open_package.subtests[0].questions[0]
    assert choice.correct_answer_choice == 1
    assert choice.score == 10


def test_closed_window_reveals_everything(db, student, closed_package):
    _start(db, student, closed_package)

    questions = question_service.get_questions_by_subtest(db, closed_package.subtests[0].id, student)

    choice, essay = questions
    assert choice["correct_answer_choice"] == 1
    assert choice["score"] == 10
    assert choice["explanation"] == "Basic arithmetic"
    assert essay["correct_answer_choice"] is None
    assert essay["score"] == 5


def test_window_end_equal_to_now_counts_as_closed(db, student, monkeypatch):
    monkeypatch.setattr(timing, "datetime", FixedDateTime)
    package = build_package(db, to_end_delta=timedelta(0), now=FixedDateTime.fixed_now)
    _start(db, student, package)

    questions = question_service.get_questions_by_subtest(db, package.subtests[0].id, student)

    assert questions is not None
    assert questions[0]["correct_answer_choice"] == 1


def test_admin_can_view_through_another_users_session(db, student, admin, other_student, open_package):
    _start(db, student, open_package)
    sid = open_package.subtests[0].id

    assert question_service.get_questions_by_subtest(db, sid, admin) is None
    assert len(question_service.get_questions_by_subtest(db, sid, admin, target_user_id=student.id)) == 2
    # target user is ignored for non-admins
    assert question_service.get_questions_by_subtest(db, sid, other_student, target_user_id=student.id) is None


def test_get_answers_ordered_by_index(db, open_package):
    choice = open_package.subtests[0].questions[0]
    answers = question_service.get_answers(db, choice.id)
    assert [a.index for a in answers] == [0, 1, 2]
    assert question_service.get_answers(db, 9999) == []
