from __future__ import annotations

import logging
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from tryout.core.config import settings
from tryout.models.question import Question
from tryout.models.quiz_session import QuizSession
from tryout.models.user_answer import UserAnswer
from tryout.services.timing import has_expired


logger = logging.getLogger(__name__)

MISSING_ANSWER_MESSAGE = "Either answer_choice or essay_answer must be provided."


def _find_answer(db: Session, user_id: int, quiz_session_id: int, question_id: int) -> Optional[UserAnswer]:
    return (
        db.query(UserAnswer)
        .filter(
            UserAnswer.user_id == int(user_id),
            UserAnswer.quiz_session_id == int(quiz_session_id),
            UserAnswer.question_id == int(question_id),
        )
        .first()
    )


def save_answer(
    db: Session,
    *,
    user_id: int,
    package_id: int,
    quiz_session_id: int,
    question_id: int,
    answer_choice: Optional[int] = None,
    essay_answer: Optional[str] = None,
) -> UserAnswer:
    """Create or overwrite the user's answer to one question in one session.

    Keyed by (user_id, quiz_session_id, question_id); no history is kept.
    Whether ``answer_choice`` points at a real answer of the question is not
    checked.
    """
    if answer_choice is None and essay_answer is None:
        raise HTTPException(status_code=400, detail=MISSING_ANSWER_MESSAGE)

    session = db.query(QuizSession).filter(QuizSession.id == int(quiz_session_id)).first()
    if not session or int(session.user_id) != int(user_id):
        raise HTTPException(status_code=404, detail="Quiz session not found")
    if int(session.package_id) != int(package_id):
        raise HTTPException(status_code=400, detail="Quiz session does not belong to this package")
    question = db.query(Question).filter(Question.id == int(question_id)).first()
    if not question or int(question.subtest_id) != int(session.subtest_id):
        raise HTTPException(status_code=404, detail="Question not found in this session's subtest")
    if settings.REJECT_LATE_ANSWERS and has_expired(session.end_time):
        raise HTTPException(status_code=409, detail="Quiz session has ended")

    row = _find_answer(db, user_id, quiz_session_id, question_id)
    if row is None:
        row = UserAnswer(
            user_id=int(user_id),
            package_id=int(package_id),
            quiz_session_id=int(quiz_session_id),
            question_id=int(question_id),
            answer_choice=answer_choice,
            essay_answer=essay_answer,
        )
        db.add(row)
        try:
            db.commit()
        except IntegrityError:
            # Another request inserted the same key first; last writer wins.
            db.rollback()
            logger.warning(
                "Answer upsert conflict user=%s session=%s question=%s, retrying as update",
                user_id,
                quiz_session_id,
                question_id,
            )
            row = _find_answer(db, user_id, quiz_session_id, question_id)
            if row is None:
                raise
            row.answer_choice = answer_choice
            row.essay_answer = essay_answer
            db.commit()
    else:
        row.answer_choice = answer_choice
        row.essay_answer = essay_answer
        db.commit()

    db.refresh(row)
    logger.debug("Saved answer id=%s session=%s question=%s", row.id, quiz_session_id, question_id)
    return row
