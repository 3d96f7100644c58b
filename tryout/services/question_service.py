from __future__ import annotations

from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session, selectinload

from tryout.models.package import Package
from tryout.models.question import Answer, Question
from tryout.models.user import User
from tryout.schemas.quiz import QuestionOut
from tryout.services.session_service import get_session
from tryout.services.timing import is_window_closed
from tryout.services.user_service import is_admin


# Fields that would give the answer away during an open window
_REDACTED_FIELDS = ("correct_answer_choice", "explanation", "score")


def _question_out(q: Question, *, reveal: bool) -> Dict[str, Any]:
    out = QuestionOut.model_validate(q).model_dump()
    if not reveal:
        for field in _REDACTED_FIELDS:
            out[field] = None
    return out


def get_questions_by_subtest(
    db: Session,
    subtest_id: int,
    acting_user: User,
    target_user_id: Optional[int] = None,
) -> Optional[List[Dict[str, Any]]]:
    """Questions of a subtest for someone who has a session on it.

    Admins may look at the subtest through another user's session by passing
    ``target_user_id``; for everyone else it is ignored. Returns None when
    there is no session yet.
    """
    user_id = int(acting_user.id)
    if target_user_id is not None and is_admin(acting_user):
        user_id = int(target_user_id)

    session = get_session(db, user_id, subtest_id)
    if not session:
        return None

    package = db.query(Package).filter(Package.id == int(session.package_id)).first()
    reveal = is_window_closed(package.to_end)

    questions = (
        db.query(Question)
        .options(selectinload(Question.answers))
        .filter(Question.subtest_id == int(subtest_id))
        .order_by(Question.index.asc(), Question.id.asc())
        .all()
    )
    return [_question_out(q, reveal=reveal) for q in questions]


def get_answers(db: Session, question_id: int) -> List[Answer]:
    return (
        db.query(Answer)
        .filter(Answer.question_id == int(question_id))
        .order_by(Answer.index.asc())
        .all()
    )
