"""Quiz session lifecycle: create, look up, inspect, submit.

A session's deadline is a stored ``end_time``; nothing runs when it passes.
Readers compare it (and the package's ``to_end``) against the current time.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from tryout.core.config import settings
from tryout.models.package import Package, Subtest
from tryout.models.quiz_session import QuizSession
from tryout.models.user import User
from tryout.models.user_answer import UserAnswer
from tryout.schemas.quiz import QuizSessionOut, SessionDetailsOut, SubtestBrief, UserAnswerOut
from tryout.services.timing import as_utc, deadline_after, utcnow
from tryout.services.user_service import is_admin


logger = logging.getLogger(__name__)


def session_out(row: QuizSession) -> Dict[str, Any]:
    return QuizSessionOut.model_validate(row).model_dump()


def get_session(db: Session, user_id: int, subtest_id: int) -> Optional[QuizSession]:
    """Latest session of a user for a subtest, or None (caller starts a new one)."""
    return (
        db.query(QuizSession)
        .filter(QuizSession.user_id == int(user_id), QuizSession.subtest_id == int(subtest_id))
        .order_by(QuizSession.id.desc())
        .first()
    )


def create_session(
    db: Session,
    *,
    user_id: int,
    package_id: int,
    subtest_id: int,
    duration: Optional[int] = None,
) -> QuizSession:
    subtest = db.query(Subtest).filter(Subtest.id == int(subtest_id)).first()
    if not subtest or int(subtest.package_id) != int(package_id):
        raise HTTPException(status_code=404, detail="Subtest not found in package")

    if not settings.ALLOW_MULTIPLE_ATTEMPTS:
        existing = get_session(db, user_id, subtest_id)
        if existing:
            logger.info("Resuming session id=%s user=%s subtest=%s", existing.id, user_id, subtest_id)
            return existing

    minutes = int(duration or subtest.duration or settings.DEFAULT_SESSION_DURATION_MINUTES)
    row = QuizSession(
        user_id=int(user_id),
        package_id=int(package_id),
        subtest_id=int(subtest_id),
        duration=minutes,
        end_time=deadline_after(minutes),
    )
    db.add(row)
    db.commit()
    db.refresh(row)
    logger.info("Created session id=%s user=%s subtest=%s duration=%smin", row.id, user_id, subtest_id, minutes)
    return row


def get_session_details(db: Session, session_id: int, requesting_user: User) -> Optional[Dict[str, Any]]:
    """Session with subtest, package deadline and answers.

    Returns None both when the session does not exist and when the requester
    is neither its owner nor an admin.
    """
    row = db.query(QuizSession).filter(QuizSession.id == int(session_id)).first()
    if not row:
        return None
    if int(row.user_id) != int(requesting_user.id) and not is_admin(requesting_user):
        return None

    subtest = db.query(Subtest).filter(Subtest.id == int(row.subtest_id)).first()
    package = db.query(Package).filter(Package.id == int(row.package_id)).first()
    answers = (
        db.query(UserAnswer)
        .filter(UserAnswer.quiz_session_id == int(row.id))
        .order_by(UserAnswer.question_id.asc())
        .all()
    )

    out = SessionDetailsOut(
        **QuizSessionOut.model_validate(row).model_dump(),
        subtest=SubtestBrief.model_validate(subtest),
        package_end=package.to_end,
        user_answers=[UserAnswerOut.model_validate(a) for a in answers],
    )
    return out.model_dump()


def submit_session(db: Session, session_id: int, requesting_user: User) -> Optional[QuizSession]:
    """End an attempt now. The deadline only ever moves earlier."""
    row = db.query(QuizSession).filter(QuizSession.id == int(session_id)).first()
    if not row:
        return None
    if int(row.user_id) != int(requesting_user.id) and not is_admin(requesting_user):
        logger.warning("User %s tried to submit session %s of user %s", requesting_user.id, row.id, row.user_id)
        return None

    now = utcnow()
    if as_utc(row.end_time) > now:
        row.end_time = now
        db.commit()
        db.refresh(row)
    logger.info("Submitted session id=%s end_time=%s", row.id, row.end_time)
    return row
