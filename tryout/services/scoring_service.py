"""Per-subtest and package scores for one user.

Scores are never stored. They are recomputed from the stored answers and the
current answer keys on every read, so editing a key after the fact is
reflected immediately.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session, selectinload

from tryout.core.config import settings
from tryout.models.package import Package
from tryout.models.question import Question
from tryout.models.user import User
from tryout.models.user_answer import UserAnswer
from tryout.schemas.quiz import ScoredPackageOut, ScoredSubtestOut
from tryout.services.grading import EssayStrategy, get_essay_strategy
from tryout.services.session_service import get_session
from tryout.services.timing import is_window_closed


def expected_essay_text(question: Question) -> Optional[str]:
    # The first listed answer holds the canonical essay answer
    if not question.answers:
        return None
    return question.answers[0].content


def score_answer(answer: UserAnswer, strategy: EssayStrategy) -> int:
    q = answer.question
    if q is None:
        return 0
    if q.correct_answer_choice is not None:
        return int(q.score) if answer.answer_choice == q.correct_answer_choice else 0
    if answer.essay_answer is not None:
        return int(q.score) if strategy(answer.essay_answer, expected_essay_text(q)) else 0
    return 0


def score_answers(answers: Iterable[UserAnswer], strategy: EssayStrategy) -> int:
    return sum(score_answer(a, strategy) for a in answers)


def get_package_with_scores(db: Session, package_id: int, acting_user: User) -> Dict[str, Any]:
    package = (
        db.query(Package)
        .options(selectinload(Package.subtests))
        .filter(Package.id == int(package_id))
        .first()
    )
    if not package:
        raise HTTPException(status_code=404, detail="Package not found")

    strategy = get_essay_strategy(settings.ESSAY_GRADING_STRATEGY)
    closed = is_window_closed(package.to_end)

    total_score = 0
    subtests = []
    for subtest in package.subtests:
        session = get_session(db, acting_user.id, subtest.id)
        score = None
        if session is not None and closed:
            answers = (
                db.query(UserAnswer)
                .options(selectinload(UserAnswer.question).selectinload(Question.answers))
                .filter(
                    UserAnswer.quiz_session_id == int(session.id),
                    UserAnswer.package_id == int(package.id),
                )
                .all()
            )
            score = score_answers(answers, strategy)
            total_score += score

        subtests.append(
            ScoredSubtestOut(
                id=subtest.id,
                type=subtest.type,
                duration=subtest.duration,
                quiz_session=session.end_time if session is not None else None,
                score=score,
            )
        )

    out = ScoredPackageOut(
        name=package.name,
        type=package.type,
        to_start=package.to_start,
        to_end=package.to_end,
        total_score=total_score,
        subtests=subtests,
    )
    return out.model_dump()
